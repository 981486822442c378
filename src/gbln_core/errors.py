"""Exception hierarchy for GBLN Core."""

from __future__ import annotations

from enum import IntEnum


class ErrorCode(IntEnum):
    """Error codes shared with the GBLN C FFI layer."""

    OK = 0
    UNEXPECTED_CHAR = 1
    UNTERMINATED_STRING = 2
    UNEXPECTED_TOKEN = 3
    UNEXPECTED_EOF = 4
    INVALID_SYNTAX = 5
    INT_OUT_OF_RANGE = 6
    STRING_TOO_LONG = 7
    TYPE_MISMATCH = 8
    INVALID_TYPE_HINT = 9
    DUPLICATE_KEY = 10
    NULL_POINTER = 11
    IO = 12


class GblnError(Exception):
    """Base class for every error raised by gbln_core."""

    def __init__(self, message: str, code: ErrorCode | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class ParseError(GblnError):
    """Raised by the decode entry points when the text cannot be decoded."""


class ValidationError(GblnError):
    """Raised when a tagged value would violate its variant's invariants.

    Examples: integer out of range, string too long, type mismatch::

        VI8(999)  → ValidationError: 999 out of range [-128, 127]
    """


class CodecError(GblnError):
    """Raised by the text codec, with the 1-based position of the failure."""

    def __init__(
        self,
        message: str,
        code: ErrorCode | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        super().__init__(message, code)
        self.line = line
        self.column = column

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.message} at line {self.line}, column {self.column}"


class SerialiseError(GblnError):
    """Raised when a dynamic value cannot be serialised."""


class UnsupportedTypeError(SerialiseError):
    """The dynamic value is not one of the recognised kinds."""


class InvalidKeyError(SerialiseError):
    """A mapping key is not a string."""


class CircularReferenceError(SerialiseError):
    """A container contains itself."""


class AssignmentError(GblnError):
    """The target mapping rejected a property assignment."""
