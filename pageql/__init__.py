"""pageql public API and lazy exports.

Resolves a GraphQL page request (records / total / pages, ``page`` window,
``distinct`` flag, filter arguments) into a content query and a count query
on an async SQLAlchemy session.

Heavy submodules (SQLAlchemy backend, Strawberry glue) load on first access.

Exposes:
- PageQueryResolver, ResolverConfig, ReservedNames
- Request, Argument, Selection, PageWindow, ExecutionHints, QueryPlan
- ArgumentError, PredicateError, BackendError
- Lazy: SQLAlchemyBackend, WhereCompiler, FieldEqualityCompiler, request_from_info, resolve_page
"""
from __future__ import annotations

from .config import ResolverConfig
from .core.plan import ExecutionHints, PageWindow, QueryPlan
from .core.request import Argument, Request, Selection
from .errors import ArgumentError, BackendError, PageQLError, PredicateError
from .naming import ArgumentKind, ReservedNames
from .resolver import PageQueryResolver

_LAZY = {
    'SQLAlchemyBackend': ('.adapters.sqla', 'SQLAlchemyBackend'),
    'WhereCompiler': ('.sql.filters', 'WhereCompiler'),
    'FieldEqualityCompiler': ('.sql.filters', 'FieldEqualityCompiler'),
    'request_from_info': ('.integration', 'request_from_info'),
    'resolve_page': ('.integration', 'resolve_page'),
    'get_db_session': ('.integration', 'get_db_session'),
}


def __getattr__(name: str):  # PEP 562 lazy exports
    import importlib as _importlib
    target = _LAZY.get(name)
    if target is None:
        raise AttributeError(name)
    module = _importlib.import_module(target[0], __name__)
    return getattr(module, target[1])


__all__ = [
    'PageQueryResolver', 'ResolverConfig', 'ReservedNames', 'ArgumentKind',
    'Request', 'Argument', 'Selection', 'PageWindow', 'ExecutionHints', 'QueryPlan',
    'PageQLError', 'ArgumentError', 'PredicateError', 'BackendError',
    'SQLAlchemyBackend', 'WhereCompiler', 'FieldEqualityCompiler',
    'request_from_info', 'resolve_page', 'get_db_session',
]
