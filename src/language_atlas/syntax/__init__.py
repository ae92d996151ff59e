"""Atlas syntax: AST, cursor, and parser.

Public API:
    parse: Parse atlas source to a Document
    AtlasParser: Parser class with configurable limits
"""

from .ast import Document, EntryDecl, FieldBlock, Identifier, ParameterDecl, Span
from .parser import AtlasParser

__all__ = [
    "AtlasParser",
    "Document",
    "EntryDecl",
    "FieldBlock",
    "Identifier",
    "ParameterDecl",
    "Span",
    "parse",
]


def parse(source: str, *, max_source_size: int | None = None) -> Document:
    """Parse atlas source into a Document.

    Args:
        source: Atlas source text
        max_source_size: Optional size limit override (0 disables it)

    Returns:
        Parsed Document

    Raises:
        AtlasSyntaxError: On malformed input (see AtlasParser.parse)

    Example:
        >>> doc = parse('LanguageEnum: Language\\ngreeting { English: "Hello" }')
        >>> doc.enum_name.name
        'Language'
        >>> [f.id.name for f in doc.fields]
        ['greeting']
    """
    return AtlasParser(max_source_size=max_source_size).parse(source)
