"""Page query resolution.

``PageQueryResolver`` answers one page request for one entity type::

    resolver = PageQueryResolver(User)
    result = await resolver.resolve_session(
        Request.of('users', {'page': {'start': 1, 'limit': 2}}, ['records', 'total', 'pages']),
        session,
    )
    # {'records': [<User 1>, <User 2>], 'total': 3, 'pages': 2}

Flow: analyze the selection, fetch records (if selected) and dedupe them,
count (if total or pages were selected), then assemble the result mapping.
At most two sequential round-trips are issued on the caller's backend.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .config import ResolverConfig
from .core.analyzer import SelectionAnalyzer
from .core.builders import ContentQueryBuilder, CountQueryBuilder
from .core.distinct import DistinctResolver
from .core.predicates import PredicateCompiler, PredicateResolver
from .core.request import Request
from .core.result import ResultAssembler

logger = logging.getLogger(__name__)


class PageQueryResolver:
    def __init__(
        self,
        entity: Any,
        *,
        config: Optional[ResolverConfig] = None,
        where_compiler: Optional[PredicateCompiler] = None,
        field_compiler: Optional[PredicateCompiler] = None,
    ):
        if where_compiler is None or field_compiler is None:
            from .sql.filters import FieldEqualityCompiler, WhereCompiler
            where_compiler = where_compiler or WhereCompiler()
            field_compiler = field_compiler or FieldEqualityCompiler()
        self.entity = entity
        self.config = config or ResolverConfig()
        self.predicates = PredicateResolver(where_compiler, field_compiler, self.config.names)
        self.content = ContentQueryBuilder(entity, self.predicates, fetch_size=self.config.fetch_size)
        self.counter = CountQueryBuilder(entity, self.predicates)
        self.distinct = DistinctResolver()
        self.assembler = ResultAssembler(self.config.names)

    @property
    def default_distinct(self) -> bool:
        return self.config.default_distinct

    @default_distinct.setter
    def default_distinct(self, value: bool) -> None:
        self.config = self.config.with_default_distinct(value)

    def analyzer(self) -> SelectionAnalyzer:
        return SelectionAnalyzer(self.config.names, default_distinct=self.config.default_distinct)

    async def resolve(self, request: Request, backend) -> Dict[str, Any]:
        analysis = self.analyzer().analyze(request)
        names = self.config.names

        records = None
        records_request: Optional[Request] = None
        if analysis.wants_records:
            records_request = analysis.request.for_selection(analysis.request.selection(names.records))
            rows = await self.content.fetch(backend, records_request, analysis.distinct, analysis.window)
            records = self.distinct.apply(rows, analysis.distinct)

        total = None
        if analysis.wants_count:
            # without records the count ignores filters
            total = await self.counter.count(backend, records_request)

        result = self.assembler.assemble(analysis, records=records, total=total)
        logger.debug(f"Resolved '{request.name}' for {getattr(self.entity, '__name__', self.entity)}: keys={list(result)}")
        return result

    async def resolve_session(self, request: Request, session) -> Dict[str, Any]:
        from .adapters.sqla import SQLAlchemyBackend
        return await self.resolve(request, SQLAlchemyBackend(session))
