"""Primitive parsing utilities for the atlas parser.

This module provides low-level parsers for identifiers, string literals,
and type annotations, plus the single failure helper every rule uses.

Error Handling:
    The atlas parser stops at the first error. Primitives raise
    AtlasSyntaxError through fail(), which attaches a diagnostic with
    line:column and a rendered source excerpt.
"""

import keyword
import re
import unicodedata
from typing import NoReturn

from language_atlas.constants import MAX_IDENTIFIER_LENGTH
from language_atlas.core.identifier_validation import (
    is_identifier_char,
    is_identifier_start,
    is_valid_identifier,
)
from language_atlas.diagnostics import (
    AtlasSyntaxError,
    Diagnostic,
    DiagnosticCode,
    ErrorTemplate,
)
from language_atlas.syntax.cursor import Cursor, ParseError, ParseResult
from language_atlas.syntax.parser.whitespace import skip_comment

# \u{X} .. \u{XXXXXX}: 1 to 6 hex digits between braces.
_UNICODE_ESCAPE_MAX_DIGITS: int = 6

# Maximum valid Unicode code point per Unicode Standard.
_MAX_UNICODE_CODE_POINT: int = 0x10FFFF

# UTF-16 surrogate code point range (D800-DFFF), invalid in isolation.
_SURROGATE_RANGE_START: int = 0xD800
_SURROGATE_RANGE_END: int = 0xDFFF

_HEX_DIGITS: str = "0123456789abcdefABCDEF"

_SIMPLE_ESCAPES: dict[str, str] = {
    '"': '"',
    "'": "'",
    "\\": "\\",
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
}

_OPENING_BRACKETS: dict[str, str] = {"(": ")", "[": "]", "{": "}"}
_CLOSING_BRACKETS: frozenset[str] = frozenset(")]}")

# Whitespace around a line break inside a bracketed annotation.
_LINE_BREAK_RUN: re.Pattern[str] = re.compile(r"\s*[\r\n]\s*")


def fail(
    cursor: Cursor,
    message: str,
    expected: tuple[str, ...] = (),
    code: DiagnosticCode = DiagnosticCode.UNEXPECTED_CHARACTER,
    error_type: type[AtlasSyntaxError] = AtlasSyntaxError,
) -> NoReturn:
    """Raise a syntax error located at cursor.

    Args:
        cursor: Position of the offending character
        message: Description of what went wrong
        expected: Tokens that would have been accepted
        code: Diagnostic code
        error_type: AtlasSyntaxError subclass to raise

    Raises:
        AtlasSyntaxError: Always
    """
    diagnostic = ErrorTemplate.syntax_error(message, cursor.source_span(), expected, code)
    raise_at(cursor, diagnostic, error_type)


def raise_at(
    cursor: Cursor,
    diagnostic: Diagnostic,
    error_type: type[AtlasSyntaxError] = AtlasSyntaxError,
) -> NoReturn:
    """Raise error_type for a prepared diagnostic, with source context at cursor."""
    error = ParseError(diagnostic.message, cursor, diagnostic.expected)
    raise error_type(diagnostic, source_context=error.format_with_context())


def describe(cursor: Cursor) -> str:
    """Human-readable name of the character at cursor (for messages)."""
    if cursor.is_eof:
        return "end of input"
    ch = cursor.current
    if ch == "\n":
        return "line break"
    return f"'{ch}'"


def parse_identifier(cursor: Cursor, what: str = "identifier") -> ParseResult[str]:
    """Parse identifier: Python identifier that is not a hard keyword.

    Examples:
        greeting → "greeting"
        English → "English"
        day_of_week → "day_of_week"

    Args:
        cursor: Current position in source
        what: Noun used in the error message ("field name", "variant", ...)

    Returns:
        ParseResult(identifier, new_cursor)

    Raises:
        AtlasSyntaxError: If no identifier starts at cursor, if it is a
            keyword, if it is too long, or if NFKC normalization (which
            Python applies to names in source) would change it
    """
    if cursor.is_eof or not is_identifier_start(cursor.current):
        code = (
            DiagnosticCode.UNEXPECTED_EOF if cursor.is_eof else DiagnosticCode.UNEXPECTED_CHARACTER
        )
        fail(cursor, f"Expected {what}, found {describe(cursor)}", (what,), code)

    start_cursor = cursor
    cursor = cursor.advance()
    while not cursor.is_eof and is_identifier_char(cursor.current):
        cursor = cursor.advance()

    identifier = start_cursor.slice_to(cursor.pos)
    if len(identifier) > MAX_IDENTIFIER_LENGTH:
        raise_at(
            start_cursor,
            ErrorTemplate.identifier_too_long(
                len(identifier), MAX_IDENTIFIER_LENGTH, start_cursor.source_span(cursor.pos)
            ),
        )
    if keyword.iskeyword(identifier):
        fail(start_cursor, f"'{identifier}' is a reserved word and cannot be used as {what}")
    if not is_valid_identifier(identifier):
        fail(
            start_cursor,
            f"'{identifier}' is not usable as {what}: Python would read it as "
            f"'{unicodedata.normalize('NFKC', identifier)}'",
        )
    return ParseResult(identifier, cursor)


def parse_unicode_escape(cursor: Cursor) -> ParseResult[str]:
    """Parse the braced part of a \\u{...} escape.

    Args:
        cursor: Position AFTER the 'u'

    Returns:
        ParseResult(character, cursor after the closing brace)
    """
    opened = cursor.expect("{")
    if opened is None:
        fail(
            cursor,
            "Invalid Unicode escape (expected '{' after \\u)",
            ("{",),
            DiagnosticCode.INVALID_ESCAPE,
        )
    cursor = opened
    start_cursor = cursor
    while not cursor.is_eof and cursor.current in _HEX_DIGITS:
        cursor = cursor.advance()
    hex_digits = start_cursor.slice_to(cursor.pos)

    if not hex_digits or len(hex_digits) > _UNICODE_ESCAPE_MAX_DIGITS:
        fail(
            start_cursor,
            f"Invalid Unicode escape (expected 1 to {_UNICODE_ESCAPE_MAX_DIGITS} hex digits)",
            ("0-9", "a-f", "A-F"),
            DiagnosticCode.INVALID_ESCAPE,
        )
    closed = cursor.expect("}")
    if closed is None:
        fail(cursor, "Unterminated Unicode escape", ("}",), DiagnosticCode.INVALID_ESCAPE)

    code_point = int(hex_digits, 16)
    if code_point > _MAX_UNICODE_CODE_POINT:
        fail(
            start_cursor,
            f"Invalid Unicode code point: U+{hex_digits.upper()} (max U+10FFFF)",
            code=DiagnosticCode.INVALID_ESCAPE,
        )
    if _SURROGATE_RANGE_START <= code_point <= _SURROGATE_RANGE_END:
        fail(
            start_cursor,
            f"Invalid surrogate code point: U+{hex_digits.upper()} (surrogates not allowed)",
            code=DiagnosticCode.INVALID_ESCAPE,
        )
    return ParseResult(chr(code_point), closed)


def parse_string_literal(cursor: Cursor) -> ParseResult[str]:
    """Parse string literal: "text"

    Supports escape sequences:
        \\" \\' \\\\ → quote, apostrophe, backslash
        \\n \\t \\r \\0 → newline, tab, carriage return, NUL
        \\u{XXXX} → Unicode character (1 to 6 hex digits)

    Line breaks inside the quotes are kept as-is. Braces are not escapes at
    this level: "{{" stays two characters and is interpreted by the template
    compiler.

    Args:
        cursor: Current position in source

    Returns:
        ParseResult(decoded_value, new_cursor)
    """
    if cursor.is_eof or cursor.current != '"':
        fail(cursor, f"Expected string literal, found {describe(cursor)}", ('"',))

    opening = cursor
    cursor = cursor.advance()
    chunks: list[str] = []

    while not cursor.is_eof:
        ch = cursor.current

        if ch == '"':
            return ParseResult("".join(chunks), cursor.advance())

        if ch == "\\":
            cursor = cursor.advance()
            if cursor.is_eof:
                break
            escape_ch = cursor.current
            if escape_ch == "u":
                result = parse_unicode_escape(cursor.advance())
                chunks.append(result.value)
                cursor = result.cursor
            elif escape_ch in _SIMPLE_ESCAPES:
                chunks.append(_SIMPLE_ESCAPES[escape_ch])
                cursor = cursor.advance()
            else:
                fail(
                    cursor,
                    f"Invalid escape sequence: \\{escape_ch}",
                    code=DiagnosticCode.INVALID_ESCAPE,
                )
        else:
            chunks.append(ch)
            cursor = cursor.advance()

    fail(opening, "Unterminated string literal", ('"',), DiagnosticCode.UNTERMINATED_STRING)


def parse_type_annotation(cursor: Cursor) -> ParseResult[str]:
    """Parse a type annotation up to the next top-level ',' or ')'.

    The annotation is kept verbatim (surrounding whitespace stripped) so the
    generated signature shows exactly what the author wrote. Brackets are
    balanced and quoted strings are skipped, so annotations such as
    ``dict[str, int]`` or ``Literal["a", "b"]`` are read whole.

    Comments ('#' or '//' to end of line) are trivia here as everywhere
    else: they are dropped from the annotation text, and a line break left
    inside brackets collapses to a single space.

    Args:
        cursor: Position right after the ':' separator

    Returns:
        ParseResult(annotation_text, cursor at the terminating ',' or ')')
    """
    start_cursor = cursor
    segment_start = cursor
    pieces: list[str] = []
    closers: list[str] = []

    while not cursor.is_eof:
        ch = cursor.current
        if not closers and ch in (",", ")"):
            break
        after_comment = skip_comment(cursor)
        if after_comment.pos != cursor.pos:
            pieces.append(segment_start.slice_to(cursor.pos))
            cursor = segment_start = after_comment
            continue
        if ch in _OPENING_BRACKETS:
            closers.append(_OPENING_BRACKETS[ch])
        elif ch in _CLOSING_BRACKETS:
            if not closers or closers[-1] != ch:
                fail(cursor, f"Unbalanced '{ch}' in type annotation")
            closers.pop()
        elif ch in ('"', "'"):
            cursor = _skip_quoted(cursor)
            continue
        cursor = cursor.advance()

    if cursor.is_eof:
        fail(cursor, "Unterminated parameter list", (")",), DiagnosticCode.UNEXPECTED_EOF)

    pieces.append(segment_start.slice_to(cursor.pos))
    annotation = _LINE_BREAK_RUN.sub(" ", "".join(pieces)).strip()
    if not annotation:
        fail(start_cursor, "Expected type annotation after ':'", ("type",))
    return ParseResult(annotation, cursor)


def _skip_quoted(cursor: Cursor) -> Cursor:
    quote = cursor.current
    opening = cursor
    cursor = cursor.advance()
    while not cursor.is_eof:
        ch = cursor.current
        if ch == "\\":
            cursor = cursor.advance(2)
            continue
        cursor = cursor.advance()
        if ch == quote:
            return cursor
    fail(
        opening,
        "Unterminated string in type annotation",
        (quote,),
        DiagnosticCode.UNTERMINATED_STRING,
    )
