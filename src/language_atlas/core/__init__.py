"""Core utilities shared across the syntax, model, and codegen layers.

Exports:
    is_valid_identifier: Identifier rule shared by parser and renderer
    require_babel: Fail-fast check for the optional Babel dependency

Python 3.13+.
"""

from .babel_compat import BabelImportError, is_babel_available, require_babel
from .identifier_validation import is_valid_identifier

__all__ = [
    "BabelImportError",
    "is_babel_available",
    "is_valid_identifier",
    "require_babel",
]
