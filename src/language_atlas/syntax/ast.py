"""Atlas AST (Abstract Syntax Tree) node definitions.

The parser produces a Document: the header naming the target enum followed
by the field blocks in source order. Nodes are frozen and carry source spans
so later stages can point diagnostics at the offending text.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass, field

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Base types
    "Span",
    "Identifier",
    # Document structure
    "Document",
    "FieldBlock",
    "ParameterDecl",
    "EntryDecl",
]

# ============================================================================
# BASE TYPES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Span:
    """Source position span.

    Attributes:
        start: Starting character offset (inclusive)
        end: Ending character offset (exclusive)

    Example:
        Source: "greeting { English: \\"Hello\\" }"
        FieldBlock span: Span(start=0, end=30)
        Identifier "greeting" span: Span(start=0, end=8)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate span invariants."""
        if self.start < 0:
            msg = f"Span start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"Span end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Identifier:
    """Identifier: a Python identifier that is not a keyword."""

    name: str
    span: Span | None = None


# ============================================================================
# DOCUMENT STRUCTURE
# ============================================================================


@dataclass(frozen=True, slots=True)
class ParameterDecl:
    """Parameter in a field's parameter list.

    Attributes:
        id: Parameter name
        annotation: Type text written after ':' (verbatim, stripped), or None
        span: Location of the whole declaration
    """

    id: Identifier
    annotation: str | None = None
    span: Span | None = None

    @property
    def is_typed(self) -> bool:
        """True if the parameter carries an explicit type."""
        return self.annotation is not None


@dataclass(frozen=True, slots=True)
class EntryDecl:
    """Entry mapping one variant to its template.

    Attributes:
        variant: Variant identifier
        template: Decoded string literal (escapes already applied)
        span: Location of the whole entry
        template_span: Location of the string literal
    """

    variant: Identifier
    template: str
    span: Span | None = None
    template_span: Span | None = None


@dataclass(frozen=True, slots=True)
class FieldBlock:
    """One field definition.

    Attributes:
        id: Field name
        parameters: Declared parameters in order; None when the field has no
            parameter list at all
        entries: Entries in declaration order (first entry is the default)
        span: Location of the whole block
    """

    id: Identifier
    parameters: tuple[ParameterDecl, ...] | None
    entries: tuple[EntryDecl, ...]
    span: Span | None = None

    @property
    def has_parameter_list(self) -> bool:
        """True if the block declares a parenthesized parameter list."""
        return self.parameters is not None


@dataclass(frozen=True, slots=True)
class Document:
    """Root node: header plus field blocks.

    Attributes:
        enum_name: Identifier named by the 'LanguageEnum:' header
        fields: Field blocks in source order
        source: Original text, kept for diagnostics (excluded from equality)
    """

    enum_name: Identifier
    fields: tuple[FieldBlock, ...]
    source: str = field(default="", repr=False, compare=False)
