"""
Result types and error hierarchy for alfred-zed.

This module provides:
1. Result[T, E] type for per-record outcomes
2. The closed error taxonomy surfaced by the sources
3. Helpers for collecting successes out of a stream of Results

Usage:
    from alfredzed.core.result import Ok, Err, Result, collect_ok

    def decode(row) -> Result[Workspace, RowDecodeError]:
        if broken:
            return Err(RowDecodeError("Bad row"))
        return Ok(workspace)

    workspaces = collect_ok(decode(row) for row in rows)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", bound=Exception)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Represents a successful result containing a value."""

    value: T

    def map(self, fn: Callable[[T], U]) -> Ok[U]:
        """Apply a function to the contained value."""
        return Ok(fn(self.value))


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Represents a failed result containing an error."""

    error: E

    def map(self, fn: Callable[[T], U]) -> Err[E]:
        """No-op for Err - returns self unchanged."""
        return self


# Type alias for Result
Result = Ok[T] | Err[E]


# ---------------------------------------------------------------------------
# Error hierarchy
# ---------------------------------------------------------------------------


class AlfredZedError(Exception):
    """Base exception for all alfred-zed errors.

    Carries a human-readable message plus optional context that is
    appended when the error is rendered.
    """

    def __init__(self, message: str, *, context: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} [{ctx_str}]"
        return self.message


class ConfigUnavailableError(AlfredZedError):
    """Raised when the user configuration directory cannot be resolved."""


class StorageUnavailableError(AlfredZedError):
    """Raised when the workspace history database cannot be opened or queried.

    Examples:
    - Database file missing
    - Permission denied
    - File is not a SQLite database or lacks the workspaces table
    """


class RowDecodeError(AlfredZedError):
    """A single history row could not be decoded. Skipped by the caller."""


class EntryReadError(AlfredZedError):
    """A single directory entry could not be inspected or decoded. Skipped by the caller."""


class SerializationError(AlfredZedError):
    """Raised when the response cannot be encoded or written to stdout."""


# ---------------------------------------------------------------------------
# Helper functions
# ---------------------------------------------------------------------------


def collect_ok(results: Iterable[Result[T, E]]) -> list[T]:
    """Keep the values of every Ok, dropping each Err.

    Dropped errors are logged at DEBUG level only.
    """
    values: list[T] = []
    for result in results:
        match result:
            case Ok(value):
                values.append(value)
            case Err(error):
                logger.debug("Skipping record: %s", error)
    return values


__all__ = [
    # Result types
    "Ok",
    "Err",
    "Result",
    # Error hierarchy
    "AlfredZedError",
    "ConfigUnavailableError",
    "StorageUnavailableError",
    "RowDecodeError",
    "EntryReadError",
    "SerializationError",
    # Helpers
    "collect_ok",
]
