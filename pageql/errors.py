"""Error types raised while resolving a page query.

Every failure kind is a distinct class so callers (GraphQL layers, HTTP
handlers) can render a proper error instead of an empty page.
"""
from __future__ import annotations

from typing import Optional


class PageQLError(Exception):
    """Base class for all pageql errors."""


class ArgumentError(PageQLError, ValueError):
    """Raised when a reserved argument (page window, distinct flag) is malformed."""

    def __init__(self, message: str, *, argument: Optional[str] = None, key: Optional[str] = None):
        super().__init__(message)
        self.argument = argument
        self.key = key


class PredicateError(PageQLError, ValueError):
    """Raised when a filter argument cannot be compiled into a predicate."""

    def __init__(self, message: str, *, argument: Optional[str] = None):
        super().__init__(message)
        self.argument = argument


class BackendError(PageQLError, RuntimeError):
    """Raised when the query backend fails to execute a content or count query."""
