from __future__ import annotations

import math
from typing import Any, Dict, Optional, Sequence

from ..naming import ReservedNames
from .analyzer import SelectionAnalysis
from .plan import PageWindow


def page_count(total: int, window: PageWindow) -> int:
    """Number of pages of ``window.page_size`` needed for ``total`` rows.

    Without an explicit window everything fits on a single page: 1 when any
    row exists, 0 otherwise.
    """
    if not window.explicit:
        return 1 if total > 0 else 0
    return int(math.ceil(total / float(window.page_size)))


class ResultAssembler:
    def __init__(self, names: ReservedNames):
        self.names = names

    def assemble(
        self,
        analysis: SelectionAnalysis,
        records: Optional[Sequence[Any]] = None,
        total: Optional[int] = None,
    ) -> Dict[str, Any]:
        names = self.names
        result: Dict[str, Any] = {}
        if analysis.wants_records:
            result[names.records] = list(records or [])
        if analysis.wants_total:
            result[names.total] = total
        if analysis.wants_pages:
            result[names.pages] = page_count(total or 0, analysis.window)
        return result
