from __future__ import annotations

from .filters import (
    OPERATOR_REGISTRY,
    FieldEqualityCompiler,
    WhereCompiler,
    coerce_value,
    parse_where,
    register_operator,
)

__all__ = [
    'OPERATOR_REGISTRY',
    'FieldEqualityCompiler',
    'WhereCompiler',
    'coerce_value',
    'parse_where',
    'register_operator',
]
