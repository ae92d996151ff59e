"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by pipeline stage:
        1000-1999: Syntax errors (parser failures)
        2000-2999: Model errors (validation against the enum and parameters)
        3000-3999: Binding errors (attaching accessors to the enum class)
    """

    # Syntax errors (1000-1999)
    UNEXPECTED_CHARACTER = 1001
    UNEXPECTED_EOF = 1002
    INVALID_ESCAPE = 1003
    UNTERMINATED_STRING = 1004
    MISSING_HEADER = 1005
    EMPTY_PARAMETER_LIST = 1006
    SOURCE_TOO_LARGE = 1007
    IDENTIFIER_TOO_LONG = 1008
    DUPLICATE_VARIANT_ENTRY = 1101
    DUPLICATE_PARAMETER = 1102

    # Model errors (2000-2999)
    UNKNOWN_VARIANT = 2001
    MIXED_PARAMETER_TYPING = 2002
    MALFORMED_PLACEHOLDER = 2003
    DUPLICATE_FIELD = 2004
    ENUM_MISMATCH = 2005

    # Binding errors (3000-3999)
    BINDING_CONFLICT = 3001


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Note:
        Python strings measure positions in characters (Unicode code points),
        not bytes.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or line or
                column is less than 1.
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Source location (None when the error has no position)
        hint: Suggestion for fixing the error
        field_name: Field the error belongs to (model and binding errors)
        expected: Tokens or names that would have been accepted
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    field_name: str | None = None
    expected: tuple[str, ...] = ()
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[UNKNOWN_VARIANT]: Variant 'German' is not a member of enum 'Language'
              --> line 3, column 5
              = field: greeting
              = expected: English, Spanish, French
              = help: Declare the variant on the enum or remove the entry

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
