"""Reserved argument/selection names and identifier conversion helpers."""
from __future__ import annotations

import enum
import re
from dataclasses import dataclass

__all__ = ["ArgumentKind", "ReservedNames", "camel_to_snake"]


class ArgumentKind(enum.Enum):
    LOGICAL = "logical"
    DISTINCT = "distinct"
    WHERE = "where"
    FIELD_FILTER = "field_filter"


@dataclass(frozen=True)
class ReservedNames:
    """Names the resolver depends on; injected per schema, never hardcoded.

    ``records``/``total``/``pages`` are the selection names inspected on the
    requested field and double as the keys of the result mapping.
    """
    page: str = "page"
    page_start: str = "start"
    page_limit: str = "limit"
    distinct: str = "distinct"
    where: str = "where"
    logical: str = "logical"
    records: str = "records"
    total: str = "total"
    pages: str = "pages"

    def classify(self, argument_name: str) -> ArgumentKind:
        if argument_name == self.logical:
            return ArgumentKind.LOGICAL
        if argument_name == self.distinct:
            return ArgumentKind.DISTINCT
        if argument_name == self.where:
            return ArgumentKind.WHERE
        return ArgumentKind.FIELD_FILTER

    def structural(self) -> frozenset[str]:
        """Argument names that never compile into a predicate."""
        return frozenset({self.page, self.distinct, self.logical})


def camel_to_snake(name: str) -> str:
    """Convert camelCase or PascalCase identifier to snake_case.

    Idempotent for already snake_case input.
    """
    if not isinstance(name, str) or not name:
        return name  # type: ignore
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", name)
    s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
    return s2.lower()
