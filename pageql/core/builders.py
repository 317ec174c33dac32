from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Tuple

from .plan import ExecutionHints, PageWindow, QueryPlan
from .predicates import PredicateContext, PredicateResolver
from .request import Request, Selection

logger = logging.getLogger(__name__)


def fetch_paths(selections: Sequence[Selection], prefix: Tuple[str, ...] = ()) -> List[Tuple[str, ...]]:
    """Relation paths under the records selection (every selection with children)."""
    paths: List[Tuple[str, ...]] = []
    for sel in selections:
        if not sel.children or sel.name.startswith('__'):
            continue
        path = prefix + (sel.name,)
        paths.append(path)
        paths.extend(fetch_paths(sel.children, path))
    return paths


class ContentQueryBuilder:
    """Builds and runs the query fetching one page of root entities."""

    def __init__(self, entity: Any, predicates: PredicateResolver, fetch_size: int = 1000):
        self.entity = entity
        self.predicates = predicates
        self.fetch_size = fetch_size

    def hints(self, distinct: bool) -> ExecutionHints:
        return ExecutionHints(
            read_only=True,
            fetch_size=self.fetch_size,
            cacheable=False,
            # rows are deduplicated as objects by DistinctResolver instead
            pass_distinct_through=False if distinct else None,
        )

    def prepare(self, backend, request: Request, distinct: bool, window: PageWindow) -> Tuple[Any, QueryPlan]:
        query = backend.content_query(self.entity)
        context = PredicateContext(query=query.context, entity=self.entity)
        plan = QueryPlan(
            predicates=tuple(self.predicates.resolve_all(context, request.arguments)),
            window=window if window.explicit else None,
            distinct=distinct,
            hints=self.hints(distinct),
            fetch=tuple(fetch_paths(request.selections)),
        )
        logger.debug(f"Content plan for {_entity_name(self.entity)}: {plan}")
        for predicate in plan.predicates:
            query.add_predicate(predicate)
        if plan.window is not None:
            query.set_offset(plan.window.offset)
            query.set_limit(plan.window.limit)
        query.set_distinct(distinct)
        for name, value in plan.hints.items():
            query.set_hint(name, value)
        for path in plan.fetch:
            query.add_fetch(path)
        return query, plan

    async def fetch(self, backend, request: Request, distinct: bool, window: PageWindow) -> Sequence[Any]:
        query, _plan = self.prepare(backend, request, distinct, window)
        return await query.execute()


class CountQueryBuilder:
    """Builds and runs the count of root entities.

    Filters apply only when the records section was requested too; a count-only
    request counts the whole entity set.
    """

    def __init__(self, entity: Any, predicates: PredicateResolver):
        self.entity = entity
        self.predicates = predicates

    def prepare(self, backend, request: Optional[Request]) -> Tuple[Any, QueryPlan]:
        query = backend.count_query(self.entity)
        context = PredicateContext(query=query.context, entity=self.entity)
        arguments = request.arguments if request is not None else ()
        plan = QueryPlan.for_count(self.predicates.resolve_all(context, arguments))
        logger.debug(f"Count plan for {_entity_name(self.entity)}: {plan}")
        for predicate in plan.predicates:
            query.add_predicate(predicate)
        return query, plan

    async def count(self, backend, request: Optional[Request]) -> int:
        query, _plan = self.prepare(backend, request)
        return await query.execute_scalar()


def _entity_name(entity: Any) -> str:
    return getattr(entity, '__name__', None) or str(entity)
