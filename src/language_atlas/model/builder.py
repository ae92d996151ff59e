"""Model builder: resolve a parsed Document against the target enum.

Validation happens here and only here. A model that builds successfully
backs accessors that return a string for every variant and every argument
combination.

Per field, checks run in this order:
    1. Every entry names a variant of the enum (UnknownVariantError)
    2. Parameters are all typed or all untyped (MixedParameterTypingError)
    3. Every placeholder names a declared parameter (MalformedPlaceholderError)

Python 3.13+.
"""

from __future__ import annotations

import logging
from enum import Enum

from language_atlas.diagnostics import (
    DuplicateFieldError,
    EnumMismatchError,
    ErrorTemplate,
    MalformedPlaceholderError,
    MixedParameterTypingError,
    SourceSpan,
    UnknownVariantError,
)
from language_atlas.model.template import (
    PlaceholderSyntaxError,
    Template,
    compile_template,
)
from language_atlas.model.types import AtlasModel, EnumSpec, FieldSpec, Parameter
from language_atlas.syntax.ast import Document, EntryDecl, FieldBlock, Span
from language_atlas.syntax.cursor import LineOffsetCache

__all__ = ["ModelBuilder", "build_model"]

logger = logging.getLogger(__name__)


class ModelBuilder:
    """Builds an AtlasModel from one Document and one EnumSpec.

    Holds the line index of the document source so every diagnostic points
    at the offending text. Single use: create one builder per document.
    """

    __slots__ = ("_document", "_enum", "_lines")

    def __init__(self, document: Document, enum: EnumSpec) -> None:
        self._document = document
        self._enum = enum
        self._lines = LineOffsetCache(document.source) if document.source else None

    def _span(self, span: Span | None) -> SourceSpan | None:
        if span is None or self._lines is None:
            return None
        return self._lines.source_span(span.start, span.end)

    def build(self) -> AtlasModel:
        """Validate every field and assemble the model.

        Raises:
            EnumMismatchError: Header names a different enum
            DuplicateFieldError: Two blocks share a name
            UnknownVariantError: Entry names a variant the enum lacks
            MixedParameterTypingError: Typed and untyped parameters mixed
            MalformedPlaceholderError: Placeholder malformed or undeclared
        """
        header = self._document.enum_name
        if header.name != self._enum.name:
            raise EnumMismatchError(
                ErrorTemplate.enum_mismatch(header.name, self._enum.name, self._span(header.span))
            )

        fields: list[FieldSpec] = []
        seen: set[str] = set()
        for block in self._document.fields:
            if block.id.name in seen:
                raise DuplicateFieldError(
                    ErrorTemplate.duplicate_field(block.id.name, self._span(block.span))
                )
            seen.add(block.id.name)
            spec = self._build_field(block)
            logger.debug(
                "Field '%s': kind=%s default=%s entries=%d",
                spec.name,
                spec.kind,
                spec.default_variant,
                len(spec.entries),
            )
            fields.append(spec)

        model = AtlasModel(enum=self._enum, fields=tuple(fields))
        logger.info(
            "Built atlas model for %s: %d fields, %d variants",
            self._enum.name,
            len(model),
            len(self._enum.variants),
        )
        return model

    def _build_field(self, block: FieldBlock) -> FieldSpec:
        name = block.id.name

        for entry in block.entries:
            if entry.variant.name not in self._enum:
                raise UnknownVariantError(
                    ErrorTemplate.unknown_variant(
                        name,
                        entry.variant.name,
                        self._enum.name,
                        self._enum.variants,
                        self._span(entry.variant.span),
                    )
                )

        declared = block.parameters or ()
        typed = tuple(p.id.name for p in declared if p.is_typed)
        untyped = tuple(p.id.name for p in declared if not p.is_typed)
        if typed and untyped:
            raise MixedParameterTypingError(
                ErrorTemplate.mixed_parameter_typing(name, typed, untyped, self._span(block.span))
            )
        parameters = tuple(Parameter(p.id.name, p.annotation) for p in declared)

        parameter_names = tuple(p.name for p in parameters)
        entries = {
            entry.variant.name: self._compile(name, entry, parameter_names)
            for entry in block.entries
        }
        return FieldSpec.create(name, parameters, entries)

    def _compile(
        self, field_name: str, entry: EntryDecl, parameter_names: tuple[str, ...]
    ) -> Template:
        span = self._span(entry.template_span)
        try:
            template = compile_template(entry.template)
        except PlaceholderSyntaxError as e:
            raise MalformedPlaceholderError(
                ErrorTemplate.malformed_placeholder(
                    field_name, entry.variant.name, e.detail, span
                )
            ) from e

        for placeholder in template.placeholders:
            if placeholder not in parameter_names:
                raise MalformedPlaceholderError(
                    ErrorTemplate.unknown_placeholder(
                        field_name, entry.variant.name, placeholder, parameter_names, span
                    )
                )
        return template


def build_model(document: Document, enum: EnumSpec | type[Enum]) -> AtlasModel:
    """Resolve a parsed Document against the enum's variant set.

    Args:
        document: Parsed atlas source
        enum: EnumSpec, or the Enum class itself

    Returns:
        Immutable AtlasModel

    Raises:
        AtlasModelError: Subclass describing the first violation found

    Example:
        >>> from language_atlas.syntax import parse
        >>> doc = parse('LanguageEnum: Language\\ngreeting { French: "Salut" English: "Hi" }')
        >>> model = build_model(doc, EnumSpec("Language", ("English", "Spanish", "French")))
        >>> model.field("greeting").default_variant
        'French'
    """
    spec = enum if isinstance(enum, EnumSpec) else EnumSpec.from_enum(enum)
    return ModelBuilder(document, spec).build()
