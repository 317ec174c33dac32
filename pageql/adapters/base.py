from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Sequence, Tuple

logger = logging.getLogger(__name__)


class QueryContext(ABC):
    """Per-query state shared with predicate compilers (root entity, joins)."""

    def __init__(self, root: Any):
        self.root = root

    @abstractmethod
    def join(self, entity: Any, relation: str, path: Tuple[str, ...]) -> Any:
        """Join ``relation`` of ``entity`` once per ``path`` and return the joined target."""
        raise NotImplementedError


class ContentQuery(ABC):
    """Query fetching entity rows. Hints a backend does not know are no-ops."""

    supported_hints: frozenset = frozenset()

    def __init__(self, context: QueryContext):
        self.context = context
        self.predicates: list = []
        self.offset: int | None = None
        self.limit: int | None = None
        self.distinct = False
        self.hints: Dict[str, Any] = {}
        self.fetch: list = []

    def add_predicate(self, predicate: Any) -> None:
        self.predicates.append(predicate)

    def set_offset(self, offset: int) -> None:
        self.offset = offset

    def set_limit(self, limit: int) -> None:
        self.limit = limit

    def set_distinct(self, distinct: bool) -> None:
        self.distinct = bool(distinct)

    def set_hint(self, name: str, value: Any) -> None:
        if name not in self.supported_hints:
            logger.debug(f"{type(self).__name__} ignores hint {name}={value!r}")
        self.hints[name] = value

    def add_fetch(self, path: Tuple[str, ...]) -> None:
        self.fetch.append(tuple(path))

    @abstractmethod
    async def execute(self) -> Sequence[Any]:
        raise NotImplementedError


class CountQuery(ABC):
    """Query counting root entities; never windowed."""

    def __init__(self, context: QueryContext):
        self.context = context
        self.predicates: list = []

    def add_predicate(self, predicate: Any) -> None:
        self.predicates.append(predicate)

    @abstractmethod
    async def execute_scalar(self) -> int:
        raise NotImplementedError


class QueryBackend(ABC):
    """A connected backend confined to one logical request.

    The caller owns the underlying session/connection; the backend only
    issues queries on it.
    """

    name = 'base'

    @abstractmethod
    def content_query(self, entity: Any) -> ContentQuery:
        raise NotImplementedError

    @abstractmethod
    def count_query(self, entity: Any) -> CountQuery:
        raise NotImplementedError


class BaseDialect:
    """Capabilities of a database dialect that change how queries are issued."""

    name = 'base'
    # Server-side cursors available through the async driver
    supports_streaming = False
    # OFFSET/FETCH is only valid with an ORDER BY
    requires_order_for_offset = False
