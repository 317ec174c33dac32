from __future__ import annotations

from .base import BaseDialect, ContentQuery, CountQuery, QueryBackend, QueryContext
from .sqlite import SQLiteDialect
from .postgres import PostgresDialect
from .mssql import MSSQLDialect


def get_dialect(dialect_name: str) -> BaseDialect:
    dn = (dialect_name or '').lower()
    if dn.startswith('postgres'):
        return PostgresDialect()
    if dn.startswith('mssql') or 'pyodbc' in dn:
        return MSSQLDialect()
    if dn.startswith('sqlite'):
        return SQLiteDialect()
    return BaseDialect()


__all__ = [
    'BaseDialect',
    'ContentQuery',
    'CountQuery',
    'QueryBackend',
    'QueryContext',
    'SQLiteDialect',
    'PostgresDialect',
    'MSSQLDialect',
    'get_dialect',
]
