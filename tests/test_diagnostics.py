"""Tests for diagnostics: codes, spans, templates, formatter, and errors.

Python 3.13+.
"""

from __future__ import annotations

import json

import pytest

from language_atlas.diagnostics import (
    AtlasError,
    AtlasModelError,
    AtlasSyntaxError,
    BindingConflictError,
    Diagnostic,
    DiagnosticCode,
    DiagnosticFormatter,
    DuplicateParameterError,
    DuplicateVariantEntryError,
    ErrorTemplate,
    OutputFormat,
    SourceSpan,
)

SPAN = SourceSpan(start=10, end=16, line=3, column=5)
VARIANTS = ("English", "Spanish", "French")


class TestDiagnosticCode:
    """Code numbering by pipeline stage."""

    def test_codes_unique(self) -> None:
        """No two codes share a value."""
        values = [code.value for code in DiagnosticCode]
        assert len(values) == len(set(values))

    @pytest.mark.parametrize(
        ("code", "low", "high"),
        [
            (DiagnosticCode.DUPLICATE_VARIANT_ENTRY, 1000, 1999),
            (DiagnosticCode.UNKNOWN_VARIANT, 2000, 2999),
            (DiagnosticCode.BINDING_CONFLICT, 3000, 3999),
        ],
    )
    def test_code_ranges(self, code: DiagnosticCode, low: int, high: int) -> None:
        """Syntax, model and binding codes live in separate ranges."""
        assert low <= code.value <= high


class TestSourceSpan:
    """SourceSpan validation."""

    @pytest.mark.parametrize(
        ("start", "end", "line", "column"),
        [(-1, 0, 1, 1), (5, 4, 1, 1), (0, 0, 0, 1), (0, 0, 1, 0)],
    )
    def test_invalid_spans(self, start: int, end: int, line: int, column: int) -> None:
        """Negative offsets, reversed ranges and zero positions are rejected."""
        with pytest.raises(ValueError, match="SourceSpan"):
            SourceSpan(start=start, end=end, line=line, column=column)

    def test_empty_span_allowed(self) -> None:
        """A zero-width span marks a position."""
        assert SourceSpan(start=4, end=4, line=1, column=5).end == 4


class TestErrorTemplate:
    """Message templates."""

    def test_unknown_variant(self) -> None:
        """Names the field, variant and enum; lists the members."""
        diagnostic = ErrorTemplate.unknown_variant("greeting", "German", "Language", VARIANTS, SPAN)

        assert diagnostic.code == DiagnosticCode.UNKNOWN_VARIANT
        assert "'German'" in diagnostic.message
        assert "'greeting'" in diagnostic.message
        assert diagnostic.expected == VARIANTS
        assert diagnostic.field_name == "greeting"

    def test_duplicate_variant_entry(self) -> None:
        """Points at the repeated variant."""
        diagnostic = ErrorTemplate.duplicate_variant_entry("greeting", "English", SPAN)

        assert diagnostic.code == DiagnosticCode.DUPLICATE_VARIANT_ENTRY
        assert diagnostic.span == SPAN
        assert "more than once" in diagnostic.message

    def test_mixed_parameter_typing(self) -> None:
        """Lists typed and untyped parameters separately."""
        diagnostic = ErrorTemplate.mixed_parameter_typing("date", ("day",), ("month",), SPAN)

        assert "('day')" in diagnostic.message
        assert "('month')" in diagnostic.message

    def test_unknown_placeholder_hint_without_parameters(self) -> None:
        """Static fields are told to add a parameter list."""
        diagnostic = ErrorTemplate.unknown_placeholder("greeting", "English", "name", (), SPAN)

        assert diagnostic.code == DiagnosticCode.MALFORMED_PLACEHOLDER
        assert diagnostic.hint == "Add a parameter list such as 'greeting(name)'"

    def test_unknown_placeholder_hint_with_parameters(self) -> None:
        """Dynamic fields are told to declare the missing name."""
        diagnostic = ErrorTemplate.unknown_placeholder("f", "English", "b", ("a",), SPAN)

        assert diagnostic.hint == "Declare 'b' in the parameter list of 'f'"
        assert diagnostic.expected == ("a",)

    def test_enum_mismatch(self) -> None:
        """Suggests the corrected header."""
        diagnostic = ErrorTemplate.enum_mismatch("Locale", "Language", SPAN)

        assert diagnostic.hint == "Change the header to 'LanguageEnum: Language'"

    def test_binding_conflict(self) -> None:
        """Mentions allow_override."""
        diagnostic = ErrorTemplate.binding_conflict("greeting", "Language", "already defined")

        assert diagnostic.code == DiagnosticCode.BINDING_CONFLICT
        assert diagnostic.hint is not None
        assert "allow_override" in diagnostic.hint

    def test_source_too_large(self) -> None:
        """Reports size and limit."""
        diagnostic = ErrorTemplate.source_too_large(200, 100)

        assert "200" in diagnostic.message
        assert "100" in diagnostic.message
        assert diagnostic.span is None


class TestDiagnosticFormatter:
    """Output formats."""

    diagnostic = ErrorTemplate.unknown_variant("greeting", "German", "Language", VARIANTS, SPAN)

    def test_rust_format(self) -> None:
        """Header line plus location, field, expected and help lines."""
        output = DiagnosticFormatter().format(self.diagnostic)
        lines = output.splitlines()

        assert lines[0].startswith("error[UNKNOWN_VARIANT]: Variant 'German'")
        assert "  --> line 3, column 5" in lines
        assert "  = field: greeting" in lines
        assert "  = expected: English, Spanish, French" in lines
        assert lines[-1].startswith("  = help: ")

    def test_rust_format_with_color(self) -> None:
        """Color wraps the severity in ANSI codes."""
        output = DiagnosticFormatter(color=True).format(self.diagnostic)

        assert output.startswith("\033[1;31merror\033[0m[UNKNOWN_VARIANT]")

    def test_warning_severity(self) -> None:
        """Warnings are labelled as such."""
        warning = Diagnostic(
            code=DiagnosticCode.UNKNOWN_VARIANT, message="careful", severity="warning"
        )

        assert DiagnosticFormatter().format(warning) == "warning[UNKNOWN_VARIANT]: careful"

    def test_simple_format(self) -> None:
        """One line, prefixed by the position when known."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)

        assert formatter.format(self.diagnostic).startswith("3:5: UNKNOWN_VARIANT: ")
        assert formatter.format(ErrorTemplate.source_too_large(2, 1)).startswith(
            "SOURCE_TOO_LARGE: "
        )

    def test_json_format(self) -> None:
        """JSON output carries every populated field."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)
        data = json.loads(formatter.format(self.diagnostic))

        assert data["code"] == "UNKNOWN_VARIANT"
        assert data["code_value"] == 2001
        assert data["line"] == 3
        assert data["column"] == 5
        assert data["field"] == "greeting"
        assert data["expected"] == list(VARIANTS)
        assert "hint" in data

    def test_json_omits_missing_fields(self) -> None:
        """Absent span, field and hint are left out."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)
        data = json.loads(
            formatter.format(Diagnostic(code=DiagnosticCode.UNEXPECTED_EOF, message="eof"))
        )

        assert set(data) == {"code", "code_value", "message", "severity"}

    def test_format_all(self) -> None:
        """Multiple diagnostics are separated by a blank line."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        eof = Diagnostic(code=DiagnosticCode.UNEXPECTED_EOF, message="eof")

        assert formatter.format_all([eof, eof]) == "UNEXPECTED_EOF: eof\n\nUNEXPECTED_EOF: eof"

    def test_format_error_matches_rust(self) -> None:
        """Diagnostic.format_error() is the default formatter output."""
        assert self.diagnostic.format_error() == DiagnosticFormatter().format(self.diagnostic)


class TestErrors:
    """Exception hierarchy."""

    def test_diagnostic_message(self) -> None:
        """Errors built from a Diagnostic keep it and format it."""
        diagnostic = ErrorTemplate.duplicate_field("greeting", SPAN)
        error = AtlasModelError(diagnostic)

        assert error.diagnostic is diagnostic
        assert str(error) == diagnostic.format_error()

    def test_plain_message(self) -> None:
        """Errors built from a string have no diagnostic."""
        error = AtlasError("plain")

        assert error.diagnostic is None
        assert str(error) == "plain"

    def test_syntax_error_context(self) -> None:
        """Syntax errors carry rendered source context."""
        error = AtlasSyntaxError("bad", source_context="1 | x\n  | ^")

        assert error.source_context == "1 | x\n  | ^"
        assert AtlasSyntaxError("bad").source_context == ""

    @pytest.mark.parametrize(
        "error_type", [DuplicateVariantEntryError, DuplicateParameterError]
    )
    def test_duplicates_are_syntax_errors(self, error_type: type[AtlasError]) -> None:
        """Duplicates within one block are detected while parsing."""
        assert issubclass(error_type, AtlasSyntaxError)

    def test_binding_conflict_is_not_model_error(self) -> None:
        """Binding conflicts are their own branch of the hierarchy."""
        assert issubclass(BindingConflictError, AtlasError)
        assert not issubclass(BindingConflictError, AtlasModelError)
