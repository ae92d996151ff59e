"""Grammar rules for the atlas parser.

This module provides the parsing rules for every atlas construct:
- Header (LanguageEnum: <EnumName>)
- Parameter lists with optional type annotations
- Entries (variant: "template")
- Field blocks

All grammar rules are co-located in a single module so rules can call each
other directly without function-local imports.

Lookahead:
    After a field name the parser looks at one character: '(' starts a
    parameter list, '{' starts the entry block. Inside a block '}' closes it
    and anything else must start an entry.
"""

from language_atlas.constants import HEADER_KEYWORD
from language_atlas.core.identifier_validation import is_identifier_char
from language_atlas.diagnostics import (
    DiagnosticCode,
    DuplicateParameterError,
    DuplicateVariantEntryError,
    ErrorTemplate,
)
from language_atlas.syntax.ast import (
    EntryDecl,
    FieldBlock,
    Identifier,
    ParameterDecl,
    Span,
)
from language_atlas.syntax.cursor import Cursor, ParseResult
from language_atlas.syntax.parser.primitives import (
    describe,
    fail,
    parse_identifier,
    parse_string_literal,
    parse_type_annotation,
    raise_at,
)
from language_atlas.syntax.parser.whitespace import skip_trivia

__all__ = [
    "parse_entry",
    "parse_field_block",
    "parse_header",
    "parse_parameters",
]


def _expect(cursor: Cursor, char: str, context: str) -> Cursor:
    """Consume char or fail with a message naming the construct being parsed."""
    after = cursor.expect(char)
    if after is None:
        code = (
            DiagnosticCode.UNEXPECTED_EOF if cursor.is_eof else DiagnosticCode.UNEXPECTED_CHARACTER
        )
        fail(cursor, f"Expected '{char}' {context}, found {describe(cursor)}", (char,), code)
    return after


def _identifier(cursor: Cursor, what: str) -> ParseResult[Identifier]:
    result = parse_identifier(cursor, what)
    span = Span(start=cursor.pos, end=result.cursor.pos)
    return ParseResult(Identifier(result.value, span), result.cursor)


def parse_header(cursor: Cursor) -> ParseResult[Identifier]:
    """Parse header: "LanguageEnum" ":" identifier

    Args:
        cursor: Position of the header keyword (leading trivia already skipped)

    Returns:
        ParseResult(enum_name_identifier, cursor after the enum name)
    """
    if cursor.is_eof or cursor.slice_to(cursor.pos + len(HEADER_KEYWORD)) != HEADER_KEYWORD:
        raise_at(cursor, ErrorTemplate.missing_header(cursor.source_span()))

    keyword_end = cursor.advance(len(HEADER_KEYWORD))
    # "LanguageEnumX" is an identifier, not the keyword
    if not keyword_end.is_eof and is_identifier_char(keyword_end.current):
        raise_at(cursor, ErrorTemplate.missing_header(cursor.source_span()))

    cursor = skip_trivia(keyword_end)
    cursor = _expect(cursor, ":", "after 'LanguageEnum'")
    cursor = skip_trivia(cursor)
    return _identifier(cursor, "enum name")


def parse_parameters(
    cursor: Cursor, field_name: str
) -> ParseResult[tuple[ParameterDecl, ...]]:
    """Parse parameter list: "(" param ("," param)* ","? ")"

    Each param is ``name`` or ``name: annotation``. At least one parameter is
    required; drop the parentheses entirely for a parameterless field.

    Args:
        cursor: Position of the opening '('
        field_name: Owning field (for diagnostics)

    Returns:
        ParseResult(parameters, cursor after the closing ')')
    """
    open_cursor = cursor
    cursor = skip_trivia(_expect(cursor, "(", "to open parameter list"))

    if not cursor.is_eof and cursor.current == ")":
        raise_at(
            open_cursor,
            ErrorTemplate.empty_parameter_list(field_name, open_cursor.source_span()),
        )

    parameters: list[ParameterDecl] = []
    seen: set[str] = set()

    while True:
        start = cursor
        name_result = _identifier(cursor, "parameter name")
        name = name_result.value
        if name.name == "self":
            fail(start, "Parameter name 'self' is reserved for the enum member", ("parameter name",))
        cursor = skip_trivia(name_result.cursor)

        annotation: str | None = None
        if not cursor.is_eof and cursor.current == ":":
            type_result = parse_type_annotation(cursor.advance())
            annotation = type_result.value
            cursor = type_result.cursor

        if name.name in seen:
            raise_at(
                start,
                ErrorTemplate.duplicate_parameter(field_name, name.name, start.source_span()),
                DuplicateParameterError,
            )
        seen.add(name.name)
        parameters.append(
            ParameterDecl(id=name, annotation=annotation, span=Span(start.pos, cursor.pos))
        )

        cursor = skip_trivia(cursor)
        if cursor.is_eof:
            fail(cursor, "Unterminated parameter list", (",", ")"), DiagnosticCode.UNEXPECTED_EOF)
        if cursor.current == ",":
            cursor = skip_trivia(cursor.advance())
            if not cursor.is_eof and cursor.current == ")":
                break
            continue
        if cursor.current == ")":
            break
        fail(cursor, f"Expected ',' or ')' in parameter list, found {describe(cursor)}", (",", ")"))

    return ParseResult(tuple(parameters), cursor.advance())


def parse_entry(cursor: Cursor) -> ParseResult[EntryDecl]:
    """Parse entry: identifier ":" string_literal

    Args:
        cursor: Position of the variant identifier

    Returns:
        ParseResult(entry, cursor after the closing quote)
    """
    start = cursor
    variant_result = _identifier(cursor, "variant name")
    cursor = skip_trivia(variant_result.cursor)
    cursor = _expect(cursor, ":", f"after variant '{variant_result.value.name}'")
    cursor = skip_trivia(cursor)

    literal_start = cursor.pos
    literal = parse_string_literal(cursor)
    entry = EntryDecl(
        variant=variant_result.value,
        template=literal.value,
        span=Span(start.pos, literal.cursor.pos),
        template_span=Span(literal_start, literal.cursor.pos),
    )
    return ParseResult(entry, literal.cursor)


def parse_field_block(cursor: Cursor) -> ParseResult[FieldBlock]:
    """Parse field block: identifier parameters? "{" (entry ","?)* "}"

    Entries may be separated by whitespace, commas, or both; a trailing comma
    is allowed and an empty block is valid (the field becomes a stub).

    Args:
        cursor: Position of the field name

    Returns:
        ParseResult(field_block, cursor after the closing '}')

    Raises:
        DuplicateVariantEntryError: If a variant appears twice in the block
    """
    start = cursor
    name_result = _identifier(cursor, "field name")
    field_name = name_result.value.name
    cursor = skip_trivia(name_result.cursor)

    parameters: tuple[ParameterDecl, ...] | None = None
    if not cursor.is_eof and cursor.current == "(":
        params_result = parse_parameters(cursor, field_name)
        parameters = params_result.value
        cursor = skip_trivia(params_result.cursor)

    cursor = _expect(cursor, "{", f"to open field '{field_name}'")

    entries: list[EntryDecl] = []
    seen: set[str] = set()

    while True:
        cursor = skip_trivia(cursor)
        if cursor.is_eof:
            fail(
                cursor,
                f"Unterminated field block '{field_name}'",
                ("}",),
                DiagnosticCode.UNEXPECTED_EOF,
            )
        if cursor.current == "}":
            break

        entry_cursor = cursor
        entry_result = parse_entry(cursor)
        variant = entry_result.value.variant.name
        if variant in seen:
            raise_at(
                entry_cursor,
                ErrorTemplate.duplicate_variant_entry(
                    field_name, variant, entry_cursor.source_span(entry_result.cursor.pos)
                ),
                DuplicateVariantEntryError,
            )
        seen.add(variant)
        entries.append(entry_result.value)

        cursor = skip_trivia(entry_result.cursor)
        if not cursor.is_eof and cursor.current == ",":
            cursor = cursor.advance()

    end_cursor = cursor.advance()
    block = FieldBlock(
        id=name_result.value,
        parameters=parameters,
        entries=tuple(entries),
        span=Span(start.pos, end_cursor.pos),
    )
    return ParseResult(block, end_cursor)
