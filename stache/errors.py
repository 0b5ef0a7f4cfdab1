"""
Base exceptions for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from StacheError.

Programming errors and bugs should NOT inherit from StacheError:
they will propagate with full tracebacks.

Malformed template markup is not an error at all: the parser
degrades it to dropped content.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class StacheError(Exception):
    """
    Base class for all user-facing errors in stache.

    These errors indicate problems that the user can fix:
    broken data files, unreadable templates, mismatched data shapes.
    """
    pass


class DataFormatError(StacheError):
    """Malformed external data: invalid JSON/YAML or unsupported value types."""
    pass


class ResourceAccessError(StacheError):
    """A template, partial, data or config file could not be read."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class RenderTypeError(StacheError):
    """
    Data shape does not fit the node that consumes it.

    Raised when a scalar-output tag resolves to a list, map or lambda,
    and when two lambdas are compared for equality.
    """

    def __init__(self, message: str, key: str = ""):
        super().__init__(message)
        self.key = key


__all__ = ["StacheError", "DataFormatError", "ResourceAccessError", "RenderTypeError"]
