from __future__ import annotations

from .base import BaseDialect


class PostgresDialect(BaseDialect):
    name = 'postgres'
    supports_streaming = True
