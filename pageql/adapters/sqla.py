"""SQLAlchemy (async) implementation of the query backend.

Both queries run on the caller's ``AsyncSession``; this module never opens,
commits or closes sessions.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence, Tuple

from sqlalchemy import and_, func, inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import RelationshipProperty, aliased, selectinload

from ..core.plan import HINT_FETCH_SIZE, HINT_PASS_DISTINCT_THROUGH, HINT_READ_ONLY
from ..errors import BackendError, PredicateError
from ..naming import camel_to_snake
from . import get_dialect
from .base import BaseDialect, ContentQuery, CountQuery, QueryBackend, QueryContext

logger = logging.getLogger(__name__)


def relationship_property(entity: Any, name: str) -> Optional[RelationshipProperty]:
    """Return the relationship ``name`` (or its snake_case form) of a mapped class or alias."""
    try:
        mapper = inspect(entity).mapper
    except Exception:
        return None
    for key in (name, camel_to_snake(name)):
        prop = mapper.relationships.get(key)
        if prop is not None:
            return prop
    return None


class SQLAlchemyQueryContext(QueryContext):
    """Tracks the joins predicate compilers ask for, one aliased join per relation path."""

    def __init__(self, root: Any):
        super().__init__(root)
        self.joins: Dict[Tuple[str, ...], Tuple[Any, Any]] = {}

    def join(self, entity: Any, relation: str, path: Tuple[str, ...]) -> Any:
        existing = self.joins.get(path)
        if existing is not None:
            return existing[0]
        prop = relationship_property(entity, relation)
        if prop is None:
            raise PredicateError(f"Unknown where relation: {relation}", argument=relation)
        target = aliased(prop.mapper.class_)
        onclause = getattr(entity, prop.key).of_type(target)
        self.joins[path] = (target, onclause)
        logger.debug(f"Joined {'.'.join(path)} -> {prop.mapper.class_.__name__}")
        return target

    def apply(self, stmt):
        for _target, onclause in self.joins.values():
            stmt = stmt.join(onclause)
        return stmt


class SQLAlchemyContentQuery(ContentQuery):
    supported_hints = frozenset({HINT_READ_ONLY, HINT_FETCH_SIZE, HINT_PASS_DISTINCT_THROUGH})

    def __init__(self, session: AsyncSession, entity: Any, dialect: BaseDialect):
        super().__init__(SQLAlchemyQueryContext(entity))
        self.session = session
        self.entity = entity
        self.dialect = dialect

    def statement(self):
        ctx = self.context
        stmt = ctx.apply(select(self.entity))
        if self.predicates:
            stmt = stmt.where(and_(*self.predicates))
        if self.distinct and self.hints.get(HINT_PASS_DISTINCT_THROUGH) is not False:
            stmt = stmt.distinct()
        if self.offset is not None or self.limit is not None:
            if self.dialect.requires_order_for_offset:
                stmt = stmt.order_by(*_primary_key(self.entity))
            if self.offset is not None:
                stmt = stmt.offset(self.offset)
            if self.limit is not None:
                stmt = stmt.limit(self.limit)
        for path in self.fetch:
            loader = self._loader(path)
            if loader is not None:
                stmt = stmt.options(loader)
        return stmt

    def execution_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {}
        if self.hints.get(HINT_READ_ONLY):
            # a read-only fetch must not flush pending changes first
            options['autoflush'] = False
        return options

    async def execute(self) -> Sequence[Any]:
        stmt = self.statement()
        options = self.execution_options()
        fetch_size = self.hints.get(HINT_FETCH_SIZE)
        try:
            if fetch_size and self.dialect.supports_streaming:
                options['yield_per'] = int(fetch_size)
                result = await self.session.stream_scalars(stmt, execution_options=options)
                rows = await result.all()
            else:
                result = await self.session.scalars(stmt, execution_options=options)
                rows = result.all()
        except SQLAlchemyError as e:
            logger.debug(f"Content query for {self.entity.__name__} failed: {e}")
            raise BackendError(f"Content query for {self.entity.__name__} failed: {e}") from e
        return list(rows)

    def _loader(self, path: Tuple[str, ...]):
        entity = self.entity
        loader = None
        for name in path:
            prop = relationship_property(entity, name)
            if prop is None:
                logger.debug(f"Skipping fetch path {'.'.join(path)}: '{name}' is not a relationship")
                return None
            attr = getattr(entity, prop.key)
            loader = selectinload(attr) if loader is None else loader.selectinload(attr)
            entity = prop.mapper.class_
        return loader


class SQLAlchemyCountQuery(CountQuery):
    def __init__(self, session: AsyncSession, entity: Any):
        super().__init__(SQLAlchemyQueryContext(entity))
        self.session = session
        self.entity = entity

    def statement(self):
        pk = _primary_key(self.entity)
        stmt = select(func.count(pk[0])).select_from(self.entity)
        stmt = self.context.apply(stmt)
        if self.predicates:
            stmt = stmt.where(and_(*self.predicates))
        return stmt

    async def execute_scalar(self) -> int:
        try:
            total = await self.session.scalar(self.statement())
        except SQLAlchemyError as e:
            logger.debug(f"Count query for {self.entity.__name__} failed: {e}")
            raise BackendError(f"Count query for {self.entity.__name__} failed: {e}") from e
        return int(total or 0)


class SQLAlchemyBackend(QueryBackend):
    name = 'sqlalchemy'

    def __init__(self, session: AsyncSession, dialect: Optional[BaseDialect] = None):
        self.session = session
        if dialect is None:
            dialect = get_dialect(session.get_bind().dialect.name)
        self.dialect = dialect

    def content_query(self, entity: Any) -> SQLAlchemyContentQuery:
        return SQLAlchemyContentQuery(self.session, entity, self.dialect)

    def count_query(self, entity: Any) -> SQLAlchemyCountQuery:
        return SQLAlchemyCountQuery(self.session, entity)


def _primary_key(entity: Any) -> list:
    mapper = inspect(entity).mapper
    return [getattr(entity, mapper.get_property_by_column(col).key) for col in mapper.primary_key]
