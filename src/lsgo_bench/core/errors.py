"""
Error Types

Every failure in the benchmark library surfaces to the caller as one of
these exceptions. Nothing is retried or replaced by a default value.
"""

from typing import Optional


class LSGOError(Exception):
    """Base class for all benchmark library errors."""


class DataLoadError(LSGOError):
    """
    Auxiliary data file missing, unreadable or inconsistent.

    Attributes:
        path: File that failed to load (None when the failure spans files)
    """

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class DimensionMismatchError(LSGOError, ValueError):
    """Vector length does not match the expected dimension."""

    def __init__(self, expected: int, actual: int, what: str = "vector"):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{what} has length {actual}, expected {expected}"
        )


class UnknownFunctionError(LSGOError, ValueError):
    """Function ID outside the suite's range."""

    def __init__(self, function_id):
        self.function_id = function_id
        super().__init__(
            f"Unknown function ID {function_id!r}; valid IDs are 1-15"
        )
