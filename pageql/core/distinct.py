from __future__ import annotations

import logging
from typing import Any, List, Sequence

logger = logging.getLogger(__name__)


class DistinctResolver:
    """Object-level de-duplication of a fetched page.

    Runs after the page window limited the rows, so a page holding duplicate
    root rows comes back shorter than the requested size while total/pages
    still reflect the backend count.
    """

    def apply(self, rows: Sequence[Any], distinct: bool) -> Sequence[Any]:
        if not distinct:
            return rows
        unique: List[Any] = []
        seen_hashable: set = set()
        unhashable: List[Any] = []
        for row in rows:
            try:
                if row in seen_hashable:
                    continue
                # a kept unhashable row may still equal this one
                if any(row == kept for kept in unhashable):
                    continue
                seen_hashable.add(row)
            except TypeError:
                # unhashable row: fall back to an equality scan
                if any(row == kept for kept in unique):
                    continue
                unhashable.append(row)
            unique.append(row)
        if len(unique) != len(rows):
            logger.debug(f"Distinct removed {len(rows) - len(unique)} duplicate row(s) of {len(rows)}")
        return unique
