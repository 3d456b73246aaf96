"""
Error handling for dfmkit.

Every fatal condition raised by the library is a ``DfmError`` subclass that
also derives from the matching builtin exception, so callers can catch either
``dfmkit.error.InvalidArgumentError`` or a plain ``ValueError``.
"""

from __future__ import annotations

from typing import Optional


# =============================================================================
# Error Codes
# =============================================================================

DFM_OK = 0

# General errors (1-9)
DFM_ERROR_UNKNOWN = 1

# Argument errors (10-19)
DFM_ERROR_INVALID_ARGUMENT = 10
DFM_ERROR_DIMENSION_MISMATCH = 11

# Result errors (20-29)
DFM_ERROR_EMPTY_RESULT = 20

# Feature errors (40-49)
DFM_ERROR_NOT_IMPLEMENTED = 40


_ERROR_MESSAGES = {
    DFM_OK: "Success",
    DFM_ERROR_UNKNOWN: "Unknown error",
    DFM_ERROR_INVALID_ARGUMENT: "Invalid argument",
    DFM_ERROR_DIMENSION_MISMATCH: "Dimension mismatch",
    DFM_ERROR_EMPTY_RESULT: "Empty result",
    DFM_ERROR_NOT_IMPLEMENTED: "Not implemented",
}


# =============================================================================
# Exception Classes
# =============================================================================

class DfmError(Exception):
    """
    Base exception for all dfmkit errors.
    """

    OK = DFM_OK
    ERROR_UNKNOWN = DFM_ERROR_UNKNOWN
    ERROR_INVALID_ARGUMENT = DFM_ERROR_INVALID_ARGUMENT
    ERROR_DIMENSION_MISMATCH = DFM_ERROR_DIMENSION_MISMATCH
    ERROR_EMPTY_RESULT = DFM_ERROR_EMPTY_RESULT
    ERROR_NOT_IMPLEMENTED = DFM_ERROR_NOT_IMPLEMENTED

    default_code = DFM_ERROR_UNKNOWN

    def __init__(self, message: Optional[str] = None, code: Optional[int] = None):
        """
        Create a dfmkit exception.

        Args:
            message: Detailed message. Falls back to the generic text for the code.
            code: Error code. Defaults to the class's ``default_code``.
        """
        if code is None:
            code = self.default_code
        self.code = code
        if message is None:
            message = _ERROR_MESSAGES.get(code, f"Unknown error (code={code})")
        self.message = message
        super().__init__(f"DFM Error {code}: {message}")

    @classmethod
    def from_code(cls, code: int, context: str = "") -> "DfmError":
        """Create exception from error code with optional context."""
        base_msg = _ERROR_MESSAGES.get(code, "Unknown error")
        msg = f"{context}: {base_msg}" if context else base_msg
        return cls(msg, code=code)


class InvalidArgumentError(DfmError, ValueError):
    """An argument is out of range, inconsistent, or not a recognized option."""

    default_code = DFM_ERROR_INVALID_ARGUMENT


class EmptyResultError(DfmError, ValueError):
    """An operation would leave nothing behind (e.g. trimming every feature)."""

    default_code = DFM_ERROR_EMPTY_RESULT


class NotImplementedFeatureError(DfmError, NotImplementedError):
    """The operation is not defined for the type it was called on."""

    default_code = DFM_ERROR_NOT_IMPLEMENTED


# =============================================================================
# Warnings
# =============================================================================

class DfmWarning(UserWarning):
    """Base class for non-fatal dfmkit warnings."""


class UnusedArgumentWarning(DfmWarning):
    """Keyword arguments were passed that the operation does not use."""


class SampleSizeWarning(DfmWarning):
    """A requested sample size was larger than the population and was clamped."""


__all__ = [
    "DFM_OK",
    "DFM_ERROR_UNKNOWN",
    "DFM_ERROR_INVALID_ARGUMENT",
    "DFM_ERROR_DIMENSION_MISMATCH",
    "DFM_ERROR_EMPTY_RESULT",
    "DFM_ERROR_NOT_IMPLEMENTED",
    "DfmError",
    "InvalidArgumentError",
    "EmptyResultError",
    "NotImplementedFeatureError",
    "DfmWarning",
    "UnusedArgumentWarning",
    "SampleSizeWarning",
]
