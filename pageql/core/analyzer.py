from __future__ import annotations

import logging
from dataclasses import dataclass, fields, is_dataclass
from typing import Any, Mapping, Optional

from ..errors import ArgumentError
from ..naming import ReservedNames
from .plan import PageWindow
from .request import Request

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionAnalysis:
    wants_records: bool
    wants_total: bool
    wants_pages: bool
    window: PageWindow
    request: Request
    distinct: bool

    @property
    def wants_count(self) -> bool:
        return self.wants_total or self.wants_pages


class SelectionAnalyzer:
    """Reads the requested page field into a compact analysis.

    Responsibilities:
      - Detect which of records / total / pages were selected (direct children only)
      - Parse and strip the page argument so it never reaches predicate resolution
      - Resolve the distinct flag: explicit argument wins over the configured default
    """

    def __init__(self, names: ReservedNames, default_distinct: bool = True):
        self.names = names
        self.default_distinct = default_distinct

    def analyze(self, request: Request) -> SelectionAnalysis:
        names = self.names
        page_arg = request.argument(names.page)
        window = self.page_window(page_arg.value if page_arg is not None else None)
        stripped = request.without_argument(names.page)
        distinct = self.resolve_distinct(stripped)
        analysis = SelectionAnalysis(
            wants_records=request.selection(names.records) is not None,
            wants_total=request.selection(names.total) is not None,
            wants_pages=request.selection(names.pages) is not None,
            window=window,
            request=stripped,
            distinct=distinct,
        )
        logger.debug(
            f"Analyzed '{request.name}': records={analysis.wants_records} total={analysis.wants_total} "
            f"pages={analysis.wants_pages} window={window} distinct={distinct}"
        )
        return analysis

    def page_window(self, value: Any) -> PageWindow:
        if value is None:
            return PageWindow()
        names = self.names
        if not isinstance(value, Mapping):
            value = _as_mapping(value)
            if value is None:
                raise ArgumentError(
                    f"Argument '{names.page}' must be an object with '{names.page_start}' and '{names.page_limit}'",
                    argument=names.page,
                )
        start = self._page_int(value, names.page_start)
        limit = self._page_int(value, names.page_limit)
        return PageWindow(page_number=start, page_size=limit)

    def _page_int(self, value: Mapping[str, Any], key: str) -> int:
        page = self.names.page
        if key not in value or value[key] is None:
            raise ArgumentError(f"Argument '{page}' is missing '{key}'", argument=page, key=key)
        raw = value[key]
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise ArgumentError(f"'{page}.{key}' must be an integer, got {raw!r}", argument=page, key=key)
        if raw < 1:
            raise ArgumentError(f"'{page}.{key}' must be >= 1, got {raw}", argument=page, key=key)
        return raw

    def resolve_distinct(self, request: Request) -> bool:
        arg = request.argument(self.names.distinct)
        if arg is None or arg.value is None:
            return self.default_distinct
        if not isinstance(arg.value, bool):
            raise ArgumentError(
                f"Argument '{self.names.distinct}' must be a boolean, got {arg.value!r}",
                argument=self.names.distinct,
            )
        return arg.value


def _as_mapping(value: Any) -> Optional[Mapping[str, Any]]:
    # Strawberry input instances are dataclasses
    if not is_dataclass(value) or isinstance(value, type):
        return None
    return {f.name: getattr(value, f.name) for f in fields(value)}
