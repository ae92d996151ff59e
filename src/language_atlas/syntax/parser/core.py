"""Core atlas parser implementation.

This module provides the AtlasParser class that turns atlas source into the
AST structures defined in :mod:`language_atlas.syntax.ast`.

Architecture:
    The parser uses an immutable cursor pattern
    (:class:`~language_atlas.syntax.cursor.Cursor`) to traverse source text.
    Each rule in :mod:`~language_atlas.syntax.parser.rules` returns a
    :class:`~language_atlas.syntax.cursor.ParseResult` containing the parsed
    node and updated cursor position, or raises AtlasSyntaxError.

Grammar:
    document ::= trivia header trivia (field trivia)* EOF

Security:
    Includes configurable input size limit to prevent unbounded memory
    allocation from extremely large inputs.
"""

import logging

from language_atlas.constants import MAX_SOURCE_SIZE
from language_atlas.diagnostics import AtlasSyntaxError, ErrorTemplate
from language_atlas.syntax.ast import Document, FieldBlock
from language_atlas.syntax.cursor import Cursor
from language_atlas.syntax.parser.rules import parse_field_block, parse_header
from language_atlas.syntax.parser.whitespace import skip_trivia

__all__ = ["AtlasParser"]

logger = logging.getLogger(__name__)

_BYTE_ORDER_MARK = "\ufeff"


class AtlasParser:
    """Atlas source parser using immutable cursor pattern.

    Design:
    - Immutable cursor prevents infinite loops (no manual guards needed)
    - Fails fast: the first syntax error aborts the parse
    - Error messages include line:column with source context

    Does not check entries against the enum: the enum may live elsewhere and
    is only known to the model builder.

    Attributes:
        max_source_size: Maximum allowed source size in characters (default: 1 MB)
    """

    __slots__ = ("_max_source_size",)

    def __init__(self, *, max_source_size: int | None = None) -> None:
        """Initialize parser with optional size limit.

        Args:
            max_source_size: Maximum source size in characters (default: 1 MB).
                            Set to 0 to disable the limit.
        """
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )

    @property
    def max_source_size(self) -> int:
        """Maximum allowed source size in characters."""
        return self._max_source_size

    def parse(self, source: str) -> Document:
        """Parse atlas source into a Document.

        Args:
            source: Atlas source text

        Returns:
            :class:`~language_atlas.syntax.ast.Document` with the header enum
            name and field blocks in source order

        Raises:
            AtlasSyntaxError: On malformed grammar or oversized input
            DuplicateVariantEntryError: If a variant repeats within a field
            DuplicateParameterError: If a parameter repeats within a field
        """
        if self._max_source_size and len(source) > self._max_source_size:
            raise AtlasSyntaxError(
                ErrorTemplate.source_too_large(len(source), self._max_source_size)
            )

        # Line endings are normalized so CRLF sources produce the same
        # templates and positions as LF sources.
        source = source.removeprefix(_BYTE_ORDER_MARK).replace("\r\n", "\n")

        cursor = skip_trivia(Cursor(source, 0))
        header = parse_header(cursor)
        cursor = skip_trivia(header.cursor)

        fields: list[FieldBlock] = []
        while not cursor.is_eof:
            block = parse_field_block(cursor)
            fields.append(block.value)
            logger.debug(
                "Parsed field '%s' (%d entries)", block.value.id.name, len(block.value.entries)
            )
            cursor = skip_trivia(block.cursor)

        logger.debug("Parsed atlas for enum '%s': %d fields", header.value.name, len(fields))
        return Document(enum_name=header.value, fields=tuple(fields), source=source)
