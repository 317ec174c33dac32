"""Default SQLAlchemy predicate compilers.

``WhereCompiler`` handles the structured ``where`` argument::

    {"name": {"like": "A%"}, "OR": [{"id": 1}, {"id": {"gt": 10}}],
     "posts": {"title": {"eq": "Hello"}}}

Column keys map to operator objects (or a bare value meaning ``eq``), ``AND``/
``OR`` take lists of where objects, ``NOT`` takes one, and relation keys take a
where object evaluated against the related entity (joined through the query
context). ``FieldEqualityCompiler`` handles plain field arguments
(``name: "Alice"``) as equality, or ``IN`` for lists.
"""
from __future__ import annotations

import json
import logging
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy import and_, func, inspect, not_, or_
from sqlalchemy.sql.sqltypes import Boolean, Date, DateTime, Float, Integer, Numeric

from ..core.predicates import PredicateContext
from ..core.request import Argument
from ..errors import PredicateError
from ..naming import camel_to_snake

logger = logging.getLogger(__name__)

LOGICAL_AND = 'AND'
LOGICAL_OR = 'OR'
LOGICAL_NOT = 'NOT'

# operators comparing against a single value
SCALAR_OPERATORS = frozenset({
    'eq', 'ne', 'lt', 'lte', 'gt', 'gte',
    'like', 'ilike', 'contains', 'starts_with', 'ends_with',
})

# Global operator registry (extensible)
OPERATOR_REGISTRY: Dict[str, Callable[[Any, Any], Any]] = {
    'eq': lambda col, v: col == v,
    'ne': lambda col, v: col != v,
    'lt': lambda col, v: col < v,
    'lte': lambda col, v: col <= v,
    'gt': lambda col, v: col > v,
    'gte': lambda col, v: col >= v,
    'like': lambda col, v: col.like(v),
    'ilike': lambda col, v: func.lower(col).like(func.lower(v)),
    'in': lambda col, v: col.in_(v if isinstance(v, (list, tuple, set)) else [v]),
    'not_in': lambda col, v: ~col.in_(v if isinstance(v, (list, tuple, set)) else [v]),
    'between': lambda col, v: col.between(v[0], v[1]),
    'is_null': lambda col, v: col.is_(None) if v else col.is_not(None),
    'contains': lambda col, v: col.contains(v),
    'starts_with': lambda col, v: col.like(f"{v}%"),
    'ends_with': lambda col, v: col.like(f"%{v}"),
}


def register_operator(name: str, fn: Callable[[Any, Any], Any]) -> None:  # pragma: no cover - simple
    OPERATOR_REGISTRY[name] = fn


def coerce_value(col: Any, val: Any, argument: Optional[str] = None) -> Any:
    """Best-effort coercion of JSON-ish values to the column's Python type."""
    if isinstance(val, (list, tuple)):
        return [coerce_value(col, v, argument) for v in val]
    if val is None or not isinstance(val, str):
        return val
    ctype = getattr(col, 'type', None)
    if ctype is None:
        return val
    try:
        if isinstance(ctype, DateTime):
            dv = datetime.fromisoformat(val.replace('Z', '+00:00'))
            if not getattr(ctype, 'timezone', False) and dv.tzinfo is not None:
                dv = dv.replace(tzinfo=None)
            return dv
        if isinstance(ctype, Date):
            return date.fromisoformat(val)
        if isinstance(ctype, Integer):
            return int(val)
        if isinstance(ctype, (Float, Numeric)):
            return float(val)
        if isinstance(ctype, Boolean):
            lv = val.strip().lower()
            if lv in ('true', 't', '1', 'yes', 'y'):
                return True
            if lv in ('false', 'f', '0', 'no', 'n'):
                return False
    except ValueError as e:
        raise PredicateError(f"Cannot use {val!r} for column {getattr(col, 'key', col)}: {e}", argument=argument) from e
    return val


def column_for(entity: Any, name: str) -> Optional[Any]:
    """Column attribute ``name`` (or its snake_case form) on a mapped class or alias."""
    mapper = inspect(entity).mapper
    for key in (name, camel_to_snake(name)):
        if key in mapper.column_attrs:
            return getattr(entity, key)
    return None


def relation_for(entity: Any, name: str) -> Optional[str]:
    mapper = inspect(entity).mapper
    for key in (name, camel_to_snake(name)):
        if key in mapper.relationships:
            return key
    return None


def parse_where(value: Any, argument_name: str = 'where') -> Dict[str, Any]:
    if isinstance(value, (bytes, bytearray)):
        value = value.decode('utf-8')
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return {}
        try:
            value = json.loads(s)
        except json.JSONDecodeError as e:
            raise PredicateError(f"Invalid where JSON: {e}", argument=argument_name) from e
    if not isinstance(value, dict):
        raise PredicateError("where must be a JSON object", argument=argument_name)
    return value


class WhereCompiler:
    def compile_predicate(self, context: PredicateContext, argument: Argument) -> Any:
        where = parse_where(argument.value, argument.name)
        logger.debug(f"Compiling {argument.name} on {context.path or 'root'}: {where}")
        return self._compile(context, where, argument.name)

    def _compile(self, context: PredicateContext, where: Dict[str, Any], argument_name: str) -> Any:
        parts: List[Any] = []
        for key, value in where.items():
            expr = self._compile_entry(context, key, value, argument_name)
            if expr is not None:
                parts.append(expr)
        if not parts:
            return None
        return parts[0] if len(parts) == 1 else and_(*parts)

    def _compile_entry(self, context: PredicateContext, key: str, value: Any, argument_name: str) -> Any:
        if key in (LOGICAL_AND, LOGICAL_OR):
            items = value if isinstance(value, (list, tuple)) else [value]
            subs = [self._compile(context, parse_where(item, argument_name), argument_name) for item in items]
            subs = [s for s in subs if s is not None]
            if not subs:
                return None
            return and_(*subs) if key == LOGICAL_AND else or_(*subs)
        if key == LOGICAL_NOT:
            sub = self._compile(context, parse_where(value, argument_name), argument_name)
            return not_(sub) if sub is not None else None
        col = column_for(context.entity, key)
        if col is not None:
            return self._compile_column(col, value, argument_name)
        relation = relation_for(context.entity, key)
        if relation is not None:
            return self._compile(context.descend(relation), parse_where(value, argument_name), argument_name)
        raise PredicateError(f"Unknown where column: {key}", argument=argument_name)

    def _compile_column(self, col: Any, value: Any, argument_name: str) -> Any:
        if isinstance(value, (list, tuple)):
            return OPERATOR_REGISTRY['in'](col, coerce_value(col, value, argument_name))
        if not isinstance(value, dict):
            return OPERATOR_REGISTRY['eq'](col, coerce_value(col, value, argument_name))
        exprs: List[Any] = []
        for op_name, val in value.items():
            op_fn = OPERATOR_REGISTRY.get(op_name)
            if op_fn is None:
                raise PredicateError(f"Unknown where operator: {op_name}", argument=argument_name)
            if op_name == 'between' and not (isinstance(val, (list, tuple)) and len(val) == 2):
                raise PredicateError("between expects a [low, high] pair", argument=argument_name)
            if op_name in SCALAR_OPERATORS and isinstance(val, (dict, list, tuple)):
                raise PredicateError(
                    f"Operator '{op_name}' on {col.key} expects a single value, got {type(val).__name__}",
                    argument=argument_name,
                )
            if op_name != 'is_null':
                val = coerce_value(col, val, argument_name)
            exprs.append(op_fn(col, val))
        if not exprs:
            return None
        return exprs[0] if len(exprs) == 1 else and_(*exprs)


class FieldEqualityCompiler:
    def compile_predicate(self, context: PredicateContext, argument: Argument) -> Any:
        if argument.value is None:
            return None
        col = column_for(context.entity, argument.name)
        if col is None:
            raise PredicateError(f"Unknown filter argument: {argument.name}", argument=argument.name)
        if isinstance(argument.value, dict):
            raise PredicateError(
                f"Filter argument '{argument.name}' expects a value or a list of values",
                argument=argument.name,
            )
        value = coerce_value(col, argument.value, argument.name)
        if isinstance(value, (list, tuple, set)):
            return col.in_(list(value))
        return col == value
