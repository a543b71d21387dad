"""Shared exception classes and expected-error tuple for services/core."""

from __future__ import annotations

from typing import Any, TypeAlias


class AppError(Exception):
    """Base class for expected application-layer failures."""


class AppRuntimeError(RuntimeError, AppError):
    """Raised for runtime operation failures with user-facing context."""


class InvalidPathError(AppError, ValueError):
    """Raised when a path segment is neither a key string nor a non-negative index."""

    def __init__(self, segment: Any, position: int) -> None:
        self.segment = segment
        self.position = int(position)
        super().__init__(
            f"Invalid path segment at position {self.position}: {segment!r} "
            "(expected str key or non-negative int index)."
        )


class PathTypeConflictError(AppError, TypeError):
    """Raised when a path walks into a value that cannot hold the next segment."""

    def __init__(self, path: tuple, index: int, found: Any) -> None:
        self.path = tuple(path)
        self.index = int(index)
        self.found_type = type(found).__name__
        segment = self.path[self.index]
        kind = "array index" if isinstance(segment, int) else "object key"
        super().__init__(
            f"Cannot apply {kind} {segment!r} at position {self.index}: "
            f"found {self.found_type}."
        )


class MalformedInputError(AppError, ValueError):
    """Raised when editor text is not acceptable JSON input."""

    def __init__(self, message: str, line: int | None = None, column: int | None = None) -> None:
        self.line = line
        self.column = column
        super().__init__(message)


class StaleDocumentError(AppRuntimeError):
    """Raised when a compare-and-swap publish sees a newer document version."""

    def __init__(self, expected_version: int, actual_version: int) -> None:
        self.expected_version = int(expected_version)
        self.actual_version = int(actual_version)
        super().__init__(
            f"Document changed (expected version {self.expected_version}, "
            f"current {self.actual_version})."
        )


EXPECTED_ERRORS: TypeAlias = (
    OSError,
    ValueError,
    TypeError,
    RuntimeError,
    AttributeError,
    KeyError,
    IndexError,
    ImportError,
)
