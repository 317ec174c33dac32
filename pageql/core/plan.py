from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Tuple

HINT_READ_ONLY = "read_only"
HINT_FETCH_SIZE = "fetch_size"
HINT_CACHEABLE = "cacheable"
HINT_PASS_DISTINCT_THROUGH = "pass_distinct_through"


@dataclass(frozen=True)
class PageWindow:
    """1-based page window.

    ``page_size=None`` is the unbounded default used when no page argument was
    supplied; such a window is never pushed to the backend.
    """
    page_number: int = 1
    page_size: Optional[int] = None

    @property
    def explicit(self) -> bool:
        return self.page_size is not None

    @property
    def offset(self) -> int:
        if self.page_size is None:
            return 0
        return (self.page_number - 1) * self.page_size

    @property
    def limit(self) -> Optional[int]:
        return self.page_size


@dataclass(frozen=True)
class ExecutionHints:
    """Backend tuning keys. Only ``pass_distinct_through`` interacts with results."""
    read_only: Optional[bool] = None
    fetch_size: Optional[int] = None
    cacheable: Optional[bool] = None
    pass_distinct_through: Optional[bool] = None

    def items(self) -> Iterator[Tuple[str, Any]]:
        for name, value in (
            (HINT_READ_ONLY, self.read_only),
            (HINT_FETCH_SIZE, self.fetch_size),
            (HINT_CACHEABLE, self.cacheable),
            (HINT_PASS_DISTINCT_THROUGH, self.pass_distinct_through),
        ):
            if value is not None:
                yield name, value


@dataclass(frozen=True)
class QueryPlan:
    predicates: Tuple[Any, ...] = ()
    window: Optional[PageWindow] = None
    distinct: bool = False
    hints: ExecutionHints = field(default_factory=ExecutionHints)
    fetch: Tuple[Tuple[str, ...], ...] = ()

    @classmethod
    def for_count(cls, predicates) -> "QueryPlan":
        return cls(predicates=tuple(predicates))
