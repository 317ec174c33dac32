from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Iterable, List, Optional, Protocol, Tuple, runtime_checkable

from ..naming import ArgumentKind, ReservedNames
from .request import Argument

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PredicateContext:
    """Evaluation context handed to predicate compilers.

    ``query`` is the backend query context (it owns joins), ``entity`` is the
    entity field names resolve against, ``path`` the relation path from the
    root entity to ``entity``.
    """
    query: Any
    entity: Any
    argument: Optional[Argument] = None
    path: Tuple[str, ...] = ()

    def scoped(self, argument: Argument) -> "PredicateContext":
        return replace(self, argument=argument)

    def descend(self, relation: str) -> "PredicateContext":
        path = self.path + (relation,)
        target = self.query.join(self.entity, relation, path)
        return replace(self, entity=target, path=path)


@runtime_checkable
class PredicateCompiler(Protocol):
    def compile_predicate(self, context: PredicateContext, argument: Argument) -> Any:
        """Return a backend predicate for ``argument`` or ``None`` when it contributes nothing."""
        ...


class PredicateResolver:
    """Maps request arguments to backend predicates.

    Classification happens once per argument against the reserved names:
    logical and distinct arguments are structural and resolve to ``None``,
    the where argument goes to ``where_compiler`` with a context re-scoped to
    it, and every other argument goes to ``field_compiler``.
    """

    def __init__(self, where_compiler: PredicateCompiler, field_compiler: PredicateCompiler, names: ReservedNames):
        self.where_compiler = where_compiler
        self.field_compiler = field_compiler
        self.names = names

    def resolve(self, context: PredicateContext, argument: Argument) -> Any:
        if argument.name == self.names.page:
            # stripped upstream; never a filter
            return None
        kind = self.names.classify(argument.name)
        if kind in (ArgumentKind.LOGICAL, ArgumentKind.DISTINCT):
            return None
        if kind is ArgumentKind.WHERE:
            return self.where_compiler.compile_predicate(context.scoped(argument), argument)
        return self.field_compiler.compile_predicate(context, argument)

    def resolve_all(self, context: PredicateContext, arguments: Iterable[Argument]) -> List[Any]:
        arguments = list(arguments)
        predicates: List[Any] = []
        for argument in arguments:
            predicate = self.resolve(context, argument)
            if predicate is None:
                continue
            predicates.append(predicate)
        logger.debug(f"Resolved {len(predicates)} predicate(s) from arguments {[a.name for a in arguments]}")
        return predicates
