"""Shared constants for language-atlas.

Centralized configuration constants used across the syntax, model, and
codegen packages. Placing constants here avoids circular imports and
provides a single source of truth.

Constants are grouped by domain:
- Grammar: keywords and identifier limits for atlas source
- Input limits: DoS prevention via size constraints
- Stubs: sentinel and note used for fields without language strings

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Grammar
    "HEADER_KEYWORD",
    "MAX_IDENTIFIER_LENGTH",
    # Input limits
    "MAX_SOURCE_SIZE",
    # Stubs
    "STUB_SENTINEL",
    "STUB_NOTE",
    # Codegen
    "GENERATED_HEADER",
]

# ============================================================================
# GRAMMAR
# ============================================================================

# Keyword introducing the target enum at the top of every atlas source.
HEADER_KEYWORD: str = "LanguageEnum"

# Identifiers become Python attribute names; 256 characters is far beyond any
# legitimate field or variant name.
MAX_IDENTIFIER_LENGTH: int = 256

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Maximum atlas source size in characters (1 MB).
# Atlas sources are hand-written definition files; anything larger is
# almost certainly not a definition file.
MAX_SOURCE_SIZE: int = 1024 * 1024

# ============================================================================
# STUBS
# ============================================================================

# Value returned by accessors whose field declares no language strings.
STUB_SENTINEL: str = "ToDo!"

# Deprecation note attached to stub accessors.
STUB_NOTE: str = "No language string provided for this field. Defaulting to 'ToDo!'"

# ============================================================================
# CODEGEN
# ============================================================================

GENERATED_HEADER: str = "Generated by language-atlas. Do not edit by hand."
