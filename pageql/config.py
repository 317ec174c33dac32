"""Resolver configuration.

A ``ResolverConfig`` is created once per resolver and never mutated by a
resolve call. ``from_env`` lets deployments flip the distinct default or the
streaming batch size without code changes.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace

from .naming import ReservedNames

logger = logging.getLogger(__name__)

DEFAULT_FETCH_SIZE = 1000

_TRUE = {"1", "true", "t", "yes", "y", "on"}
_FALSE = {"0", "false", "f", "no", "n", "off"}


@dataclass(frozen=True)
class ResolverConfig:
    names: ReservedNames = field(default_factory=ReservedNames)
    default_distinct: bool = True
    fetch_size: int = DEFAULT_FETCH_SIZE

    def with_default_distinct(self, value: bool) -> "ResolverConfig":
        return replace(self, default_distinct=bool(value))

    @classmethod
    def from_env(cls, prefix: str = "PAGEQL_", **overrides) -> "ResolverConfig":
        """Build a config from ``<prefix>DEFAULT_DISTINCT`` and ``<prefix>FETCH_SIZE``.

        Unset variables keep the defaults; explicit keyword overrides win over both.
        """
        values = {}
        raw_distinct = os.getenv(f"{prefix}DEFAULT_DISTINCT")
        if raw_distinct is not None:
            lowered = raw_distinct.strip().lower()
            if lowered in _TRUE:
                values["default_distinct"] = True
            elif lowered in _FALSE:
                values["default_distinct"] = False
            else:
                raise ValueError(f"{prefix}DEFAULT_DISTINCT must be a boolean, got {raw_distinct!r}")
        raw_fetch = os.getenv(f"{prefix}FETCH_SIZE")
        if raw_fetch is not None:
            try:
                fetch_size = int(raw_fetch)
            except ValueError:
                raise ValueError(f"{prefix}FETCH_SIZE must be an integer, got {raw_fetch!r}") from None
            if fetch_size <= 0:
                raise ValueError(f"{prefix}FETCH_SIZE must be positive, got {fetch_size}")
            values["fetch_size"] = fetch_size
        values.update(overrides)
        logger.debug(f"Resolver config from env: {values}")
        return cls(**values)
