from __future__ import annotations

from .base import BaseDialect


class MSSQLDialect(BaseDialect):
    name = 'mssql'
    # aioodbc has no server-side cursor support
    supports_streaming = False
    # MSSQL renders LIMIT/OFFSET as OFFSET ... FETCH NEXT, which needs ORDER BY
    requires_order_for_offset = True
