"""Diagnostic system for atlas generation errors.

Provides structured error diagnostics with codes, spans, and hints.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    AtlasError,
    AtlasModelError,
    AtlasSyntaxError,
    BindingConflictError,
    DuplicateFieldError,
    DuplicateParameterError,
    DuplicateVariantEntryError,
    EnumMismatchError,
    MalformedPlaceholderError,
    MixedParameterTypingError,
    UnknownVariantError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "AtlasError",
    "AtlasModelError",
    "AtlasSyntaxError",
    "BindingConflictError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "DuplicateFieldError",
    "DuplicateParameterError",
    "DuplicateVariantEntryError",
    "EnumMismatchError",
    "ErrorTemplate",
    "MalformedPlaceholderError",
    "MixedParameterTypingError",
    "OutputFormat",
    "SourceSpan",
    "UnknownVariantError",
]
