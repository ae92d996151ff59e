"""Tests for model building: validation of a Document against an enum.

Python 3.13+.
"""

from __future__ import annotations

from enum import Enum, auto

import pytest
from hypothesis import given

from language_atlas.diagnostics import (
    AtlasModelError,
    DiagnosticCode,
    DuplicateFieldError,
    EnumMismatchError,
    MalformedPlaceholderError,
    MixedParameterTypingError,
    UnknownVariantError,
)
from language_atlas.enums import FieldKind, ParameterTyping
from language_atlas.model import AtlasModel, EnumSpec, FieldSpec, build_model
from language_atlas.syntax import parse
from tests.strategies import AtlasCase, atlas_cases

LANGUAGE = EnumSpec("Language", ("English", "Spanish", "French"))


def _build(body: str, enum: EnumSpec = LANGUAGE) -> AtlasModel:
    return build_model(parse(f"LanguageEnum: {enum.name}\n{body}"), enum)


# ============================================================================
# ENUM SPEC
# ============================================================================


class TestEnumSpec:
    """Test EnumSpec construction."""

    def test_from_enum(self) -> None:
        """Reads class name and member names in definition order."""

        class Language(Enum):
            English = auto()
            Spanish = auto()

        assert EnumSpec.from_enum(Language) == EnumSpec("Language", ("English", "Spanish"))

    def test_from_enum_skips_aliases(self) -> None:
        """Aliases are not separate variants."""

        class Language(Enum):
            English = 1
            Inglés = 1  # noqa: PIE796
            Spanish = 2

        assert EnumSpec.from_enum(Language).variants == ("English", "Spanish")

    def test_invalid_names_rejected(self) -> None:
        """Enum and variant names must be identifiers."""
        with pytest.raises(ValueError, match="Invalid enum name"):
            EnumSpec("not valid", ("A",))
        with pytest.raises(ValueError, match="Invalid variant name"):
            EnumSpec("Language", ("A-B",))

    def test_repeated_variant_rejected(self) -> None:
        """A variant may appear once."""
        with pytest.raises(ValueError, match="declared twice"):
            EnumSpec("Language", ("A", "A"))

    def test_contains(self) -> None:
        """Membership checks variant names."""
        assert "Spanish" in LANGUAGE
        assert "German" not in LANGUAGE


# ============================================================================
# FIELD KINDS AND DEFAULTS
# ============================================================================


class TestFieldSpec:
    """Test derived field properties."""

    def test_static(self) -> None:
        """No parameters plus entries is a static field."""
        spec = _build('greeting { English: "Hello" Spanish: "Hola" }').field("greeting")

        assert spec.kind == FieldKind.STATIC
        assert spec.typing == ParameterTyping.NONE
        assert spec.default_variant == "English"

    def test_dynamic_untyped(self) -> None:
        """Parameters plus entries is a dynamic field."""
        spec = _build('farewell(name) { English: "Bye, {name}" }').field("farewell")

        assert spec.kind == FieldKind.DYNAMIC
        assert spec.typing == ParameterTyping.UNTYPED
        assert spec.parameter_names == ("name",)

    def test_dynamic_typed(self) -> None:
        """All-annotated parameters are typed."""
        spec = _build('date(day: int, month: int) { English: "{month}/{day}" }').field("date")

        assert spec.typing == ParameterTyping.TYPED
        assert [p.annotation for p in spec.parameters] == ["int", "int"]

    def test_stub(self) -> None:
        """No entries is a stub; it has no default."""
        spec = _build("dummy { }").field("dummy")

        assert spec.kind == FieldKind.STUB
        assert spec.default_variant is None
        assert spec.default_template is None
        assert spec.template_for("English") is None

    def test_dynamic_stub(self) -> None:
        """Parameters without entries is a dynamic stub."""
        spec = _build("later(name) { }").field("later")

        assert spec.kind == FieldKind.DYNAMIC_STUB
        assert spec.kind.is_stub
        assert spec.kind.has_parameters

    def test_default_is_first_listed_entry(self) -> None:
        """The first entry in the block is the default, whatever the enum order."""
        spec = _build('greeting { French: "Salut" English: "Hi" }').field("greeting")

        assert spec.default_variant == "French"
        assert spec.template_for("Spanish") is spec.entries["French"]
        assert spec.falls_back("Spanish")
        assert not spec.falls_back("English")

    def test_entries_are_read_only(self) -> None:
        """The entries mapping cannot be mutated."""
        spec = _build('greeting { English: "Hi" }').field("greeting")

        with pytest.raises(TypeError):
            spec.entries["Spanish"] = spec.entries["English"]  # type: ignore[index]

    def test_create_copies_entries(self) -> None:
        """Later changes to the input mapping do not leak into the FieldSpec."""
        template = _build('greeting { English: "Hi" }').field("greeting").entries["English"]
        entries = {"English": template}
        spec = FieldSpec.create("greeting", (), entries)
        entries["Spanish"] = template

        assert list(spec.entries) == ["English"]


# ============================================================================
# MODEL
# ============================================================================


class TestAtlasModel:
    """Test the assembled model."""

    def test_fields_in_order(self, language_source: str) -> None:
        """Fields keep definition order."""
        model = build_model(parse(language_source), LANGUAGE)

        assert model.field_names == ("greeting", "farewell", "date", "dummy")
        assert len(model) == 4
        assert [spec.name for spec in model] == list(model.field_names)

    def test_build_from_enum_class(self, language_source: str, language_enum: type[Enum]) -> None:
        """An Enum class is accepted in place of an EnumSpec."""
        model = build_model(parse(language_source), language_enum)

        assert model.enum == LANGUAGE

    def test_field_lookup_missing(self) -> None:
        """Unknown field names raise KeyError."""
        with pytest.raises(KeyError):
            _build('greeting { English: "Hi" }').field("farewell")

    def test_empty_definition(self) -> None:
        """A header alone builds an empty model."""
        assert len(_build("")) == 0


# ============================================================================
# VALIDATION ERRORS
# ============================================================================


class TestValidationErrors:
    """Each model error and its diagnostic."""

    def test_unknown_variant(self) -> None:
        """Entries must name enum members."""
        with pytest.raises(UnknownVariantError) as exc_info:
            _build('greeting {\n  English: "Hi"\n  German: "Hallo"\n}')

        diagnostic = exc_info.value.diagnostic
        assert diagnostic is not None
        assert diagnostic.code == DiagnosticCode.UNKNOWN_VARIANT
        assert diagnostic.field_name == "greeting"
        assert diagnostic.expected == LANGUAGE.variants
        assert diagnostic.span is not None
        assert (diagnostic.span.line, diagnostic.span.column) == (4, 3)

    def test_mixed_parameter_typing(self) -> None:
        """Typed and untyped parameters cannot be mixed."""
        with pytest.raises(MixedParameterTypingError) as exc_info:
            _build('f(a: int, b) { English: "{a}{b}" }')

        assert "'a'" in str(exc_info.value)
        assert "'b'" in str(exc_info.value)

    def test_mixed_typing_checked_for_stubs(self) -> None:
        """Mixed typing is rejected even without entries."""
        with pytest.raises(MixedParameterTypingError):
            _build("f(a, b: int) { }")

    def test_undeclared_placeholder(self) -> None:
        """Placeholders must name declared parameters."""
        with pytest.raises(MalformedPlaceholderError) as exc_info:
            _build('farewell(name) { English: "Bye, {nme}" }')

        diagnostic = exc_info.value.diagnostic
        assert diagnostic is not None
        assert diagnostic.code == DiagnosticCode.MALFORMED_PLACEHOLDER
        assert diagnostic.expected == ("name",)

    def test_placeholder_in_static_field(self) -> None:
        """A static field cannot reference parameters at all."""
        with pytest.raises(MalformedPlaceholderError, match="parameter list"):
            _build('greeting { English: "Hi {name}" }')

    def test_malformed_placeholder_chains_cause(self) -> None:
        """Syntax problems inside templates keep the original exception."""
        with pytest.raises(MalformedPlaceholderError) as exc_info:
            _build('f(a) { English: "{a" }')

        assert exc_info.value.__cause__ is not None

    def test_unused_parameter_is_allowed(self) -> None:
        """A template may ignore some parameters."""
        spec = _build('f(a, b) { English: "{a}" Spanish: "{b}" }').field("f")

        assert spec.kind == FieldKind.DYNAMIC

    def test_duplicate_field(self) -> None:
        """Field names are unique across the definition."""
        with pytest.raises(DuplicateFieldError):
            _build('greeting { English: "Hi" }\ngreeting { Spanish: "Hola" }')

    def test_enum_mismatch(self) -> None:
        """The header must name the target enum."""
        with pytest.raises(EnumMismatchError) as exc_info:
            build_model(parse("LanguageEnum: Locale"), LANGUAGE)

        assert "Locale" in str(exc_info.value)
        assert "Language" in str(exc_info.value)

    def test_model_errors_share_base(self) -> None:
        """All model errors derive from AtlasModelError."""
        for error_type in (
            UnknownVariantError,
            MixedParameterTypingError,
            MalformedPlaceholderError,
            DuplicateFieldError,
            EnumMismatchError,
        ):
            assert issubclass(error_type, AtlasModelError)


# ============================================================================
# PROPERTIES
# ============================================================================


class TestModelProperties:
    """Generated definitions build and keep their structure."""

    @given(case=atlas_cases())
    def test_generated_definitions_build(self, case: AtlasCase) -> None:
        """Every generated definition builds; kinds follow parameters/entries."""
        model = build_model(parse(case.source), EnumSpec(case.enum_name, case.variants))

        for spec, field_case in zip(model, case.fields, strict=True):
            assert spec.parameter_names == field_case.parameters
            assert spec.kind.has_parameters == bool(field_case.parameters)
            assert spec.kind.is_stub == (not field_case.entries)
            if field_case.entries:
                assert spec.default_variant == field_case.entries[0][0]
