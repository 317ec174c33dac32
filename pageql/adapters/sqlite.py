from __future__ import annotations

from .base import BaseDialect


class SQLiteDialect(BaseDialect):
    name = 'sqlite'
    # aiosqlite buffers in a worker thread; streaming buys nothing
    supports_streaming = False
