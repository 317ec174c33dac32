"""Strawberry integration.

Turns the field being resolved into a ``Request`` and runs a
``PageQueryResolver`` against the session found in the GraphQL context::

    @strawberry.type
    class Query:
        @strawberry.field
        async def users(self, info: Info, page: Optional[PageInput] = None,
                        where: Optional[JSON] = None) -> UserPage:
            return UserPage(**await resolve_page(user_pages, info))
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from graphql import FieldNode, FragmentSpreadNode, InlineFragmentNode
from graphql.pyutils import Undefined
from graphql.utilities import value_from_ast_untyped

from .core.request import Argument, Request, Selection
from .errors import BackendError

logger = logging.getLogger(__name__)

_SESSION_KEYS = ('db_session', 'db', 'session', 'async_session')


def get_db_session(info_or_ctx: Any) -> Any | None:
    """Find an AsyncSession-like object in a Strawberry ``Info`` or plain context.

    Tries ``db_session``, ``db``, ``session``, ``async_session`` as mapping keys
    first, then as attributes. Returns ``None`` when nothing is found.
    """
    if info_or_ctx is None:
        return None
    ctx = getattr(info_or_ctx, 'context', info_or_ctx)
    if ctx is None:
        return None
    if isinstance(ctx, Mapping):
        for key in _SESSION_KEYS:
            session = ctx.get(key)
            if session is not None:
                return session
        return None
    for key in _SESSION_KEYS:
        session = getattr(ctx, key, None)
        if session is not None:
            return session
    return None


def request_from_info(info: Any) -> Request:
    raw = getattr(info, '_raw_info', None) or info
    field_nodes = list(getattr(raw, 'field_nodes', None) or [])
    if not field_nodes:
        raise ValueError("Resolve info carries no field node")
    node: FieldNode = field_nodes[0]
    variables = getattr(raw, 'variable_values', None) or {}
    fragments = getattr(raw, 'fragments', None) or {}
    arguments: List[Argument] = []
    for arg in node.arguments or ():
        value = value_from_ast_untyped(arg.value, variables)
        # null literals and unset variables mean "not supplied"
        if value is None or value is Undefined:
            continue
        arguments.append(Argument(arg.name.value, value))
    return Request(
        name=node.name.value,
        arguments=tuple(arguments),
        selections=_selections(node.selection_set, fragments),
    )


def _selections(selection_set: Any, fragments: Mapping[str, Any]) -> Tuple[Selection, ...]:
    if selection_set is None:
        return ()
    merged: Dict[str, List[Selection]] = {}
    for sel in selection_set.selections:
        if isinstance(sel, FieldNode):
            name = sel.name.value
            if name.startswith('__'):
                continue
            merged.setdefault(name, []).append(Selection(name, _selections(sel.selection_set, fragments)))
        elif isinstance(sel, InlineFragmentNode):
            for child in _selections(sel.selection_set, fragments):
                merged.setdefault(child.name, []).append(child)
        elif isinstance(sel, FragmentSpreadNode):
            fragment = fragments.get(sel.name.value)
            if fragment is None:
                continue
            for child in _selections(fragment.selection_set, fragments):
                merged.setdefault(child.name, []).append(child)
    return tuple(_merge(name, parts) for name, parts in merged.items())


def _merge(name: str, parts: List[Selection]) -> Selection:
    if len(parts) == 1:
        return parts[0]
    children: Dict[str, List[Selection]] = {}
    for part in parts:
        for child in part.children:
            children.setdefault(child.name, []).append(child)
    return Selection(name, tuple(_merge(n, p) for n, p in children.items()))


async def resolve_page(resolver: Any, info: Any, session: Optional[Any] = None) -> Dict[str, Any]:
    """Resolve the current Strawberry field as a page of ``resolver.entity``."""
    session = session if session is not None else get_db_session(info)
    if session is None:
        raise BackendError("No database session found in GraphQL context (expected 'db_session')")
    request = request_from_info(info)
    logger.debug(f"Page request from GraphQL: {request}")
    return await resolver.resolve_session(request, session)
