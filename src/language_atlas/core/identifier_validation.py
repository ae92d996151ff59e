"""Unified identifier validation for atlas syntax.

Field names, parameter names, and variant names all end up as Python names:
accessor methods, function parameters, and enum member names. This module is
the single source of truth for what the parser accepts, and the source
renderer relies on the same rules.

Atlas Identifier Grammar:
    Python identifier (PEP 3131) that is not a hard keyword and that NFKC
    normalization leaves unchanged.

    - Start: character with the XID_Start property, or underscore
    - Continue: character with the XID_Continue property
    - Normalization: Python NFKC-normalizes names in source code, so a name
      written in fullwidth letters such as 'ｆｉｅｌｄ' would be defined by a
      generated ``def`` as 'field' while ``setattr`` keeps the original.
      Such names are rejected.
    - Length: Maximum 256 characters (DoS prevention)

Thread Safety:
    All functions in this module are pure functions with no shared state.

Python 3.13+.
"""

from __future__ import annotations

import keyword
import unicodedata

from language_atlas.constants import MAX_IDENTIFIER_LENGTH

__all__ = [
    "is_identifier_char",
    "is_identifier_start",
    "is_valid_identifier",
]


def is_identifier_start(ch: str) -> bool:
    """Check if character can start an identifier.

    Example:
        >>> is_identifier_start('a')
        True
        >>> is_identifier_start('_')
        True
        >>> is_identifier_start('1')
        False
        >>> is_identifier_start('²')
        False
    """
    return len(ch) == 1 and ch.isidentifier()


def is_identifier_char(ch: str) -> bool:
    """Check if character can continue an identifier.

    Example:
        >>> is_identifier_char('5')
        True
        >>> is_identifier_char('-')
        False
        >>> is_identifier_char('²')
        False
    """
    return len(ch) == 1 and f"_{ch}".isidentifier()


def is_valid_identifier(name: str) -> bool:
    """Validate complete identifier.

    Validation Rules:
        - Must be a valid Python identifier (str.isidentifier)
        - Must not be a hard keyword ('class', 'def', ...)
        - Must be unchanged by NFKC normalization
        - Length must not exceed MAX_IDENTIFIER_LENGTH

    Example:
        >>> is_valid_identifier("greeting")
        True
        >>> is_valid_identifier("año")
        True
        >>> is_valid_identifier("class")
        False
        >>> is_valid_identifier("1st")
        False
        >>> is_valid_identifier("x²")
        False
    """
    if not name or len(name) > MAX_IDENTIFIER_LENGTH:
        return False
    if not name.isidentifier() or keyword.iskeyword(name):
        return False
    return unicodedata.normalize("NFKC", name) == name
