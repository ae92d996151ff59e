"""Tests for gettext catalog export.

Python 3.13+.
"""

from __future__ import annotations

from io import BytesIO
from pathlib import Path
from unittest.mock import patch

import pytest
from babel.core import UnknownLocaleError
from babel.messages.pofile import read_po

from language_atlas.catalog import export_catalog, write_catalog
from language_atlas.core import BabelImportError
from language_atlas.diagnostics import DiagnosticCode, UnknownVariantError
from language_atlas.model import AtlasModel, EnumSpec, build_model
from language_atlas.syntax import parse

LANGUAGE = EnumSpec("Language", ("English", "Spanish", "French"))


@pytest.fixture
def language_model(language_source: str) -> AtlasModel:
    """Model of the shared sample definition."""
    return build_model(parse(language_source), LANGUAGE)


class TestExportCatalog:
    """Building catalogs from a model."""

    def test_messages_for_variant(self, language_model: AtlasModel) -> None:
        """Each non-stub field becomes one message in the enum's context."""
        catalog = export_catalog(language_model, "Spanish")

        assert len(catalog) == 3
        greeting = catalog.get("greeting", context="Language")
        assert greeting is not None
        assert greeting.string == "Hola"
        assert not greeting.fuzzy

    def test_stubs_skipped(self, language_model: AtlasModel) -> None:
        """Fields without entries have nothing to translate."""
        catalog = export_catalog(language_model, "English")

        assert catalog.get("dummy", context="Language") is None

    def test_placeholders_flagged(self, language_model: AtlasModel) -> None:
        """Templates with placeholders are python-brace-format."""
        catalog = export_catalog(language_model, "Spanish")
        farewell = catalog.get("farewell", context="Language")

        assert farewell is not None
        assert farewell.string == "Adiós, {name}"
        assert "python-brace-format" in farewell.flags
        assert "Parameters: name" in farewell.auto_comments

    def test_static_text_not_flagged(self, language_model: AtlasModel) -> None:
        """Templates without placeholders carry no format flag."""
        greeting = export_catalog(language_model, "English").get("greeting", context="Language")

        assert greeting is not None
        assert "python-brace-format" not in greeting.flags

    def test_fallback_is_fuzzy(self, language_model: AtlasModel) -> None:
        """Variants without an entry get the default text, flagged fuzzy."""
        catalog = export_catalog(language_model, "French")
        farewell = catalog.get("farewell", context="Language")

        assert farewell is not None
        assert farewell.string == "Goodbye, {name}"
        assert farewell.fuzzy
        assert "No French entry; text copied from English" in farewell.auto_comments

    def test_escaped_braces_exported_as_written(self) -> None:
        """Translators see the template text, escapes included."""
        model = build_model(
            parse('LanguageEnum: Language\nbraces(n) { English: "{{{n}}}" }'), LANGUAGE
        )
        message = export_catalog(model, "English").get("braces", context="Language")

        assert message is not None
        assert message.string == "{{{n}}}"

    def test_header_metadata(self, language_model: AtlasModel) -> None:
        """Project defaults to the enum name; locale and version are passed through."""
        default = export_catalog(language_model, "English")
        custom = export_catalog(
            language_model, "Spanish", locale="es", project="demo", version="1.2"
        )

        assert default.project == "Language"
        assert default.locale is None
        assert custom.project == "demo"
        assert custom.version == "1.2"
        assert str(custom.locale) == "es"

    def test_unknown_variant(self, language_model: AtlasModel) -> None:
        """Exporting a non-member is an error listing the members."""
        with pytest.raises(UnknownVariantError, match="German") as exc_info:
            export_catalog(language_model, "German")

        diagnostic = exc_info.value.diagnostic
        assert diagnostic is not None
        assert diagnostic.code == DiagnosticCode.UNKNOWN_VARIANT
        assert diagnostic.hint is not None
        assert "English" in diagnostic.hint

    def test_unknown_locale(self, language_model: AtlasModel) -> None:
        """Babel rejects locales it does not know."""
        with pytest.raises(UnknownLocaleError):
            export_catalog(language_model, "Spanish", locale="xx_YY")

    def test_requires_babel(self, language_model: AtlasModel) -> None:
        """A missing Babel installation is reported by feature name."""
        with (
            patch(
                "language_atlas.core.babel_compat._check_babel_available",
                return_value=False,
            ),
            pytest.raises(BabelImportError, match="export_catalog"),
        ):
            export_catalog(language_model, "Spanish")


class TestWriteCatalog:
    """Writing catalogs as PO files."""

    def test_write_to_file_object(self, language_model: AtlasModel) -> None:
        """PO output reads back with the same messages and flags."""
        buffer = BytesIO()
        write_catalog(export_catalog(language_model, "French", locale="fr"), buffer)

        data = buffer.getvalue()
        assert b'msgctxt "Language"' in data
        assert b"#:" not in data

        buffer.seek(0)
        catalog = read_po(buffer)
        farewell = catalog.get("farewell", context="Language")
        assert farewell is not None
        assert farewell.fuzzy
        assert farewell.string == "Goodbye, {name}"
        greeting = catalog.get("greeting", context="Language")
        assert greeting is not None
        assert greeting.string == "Bonjour"

    def test_write_to_path(self, tmp_path: Path, language_model: AtlasModel) -> None:
        """Paths (str or Path) are opened and written."""
        target = tmp_path / "es.po"
        write_catalog(export_catalog(language_model, "Spanish", locale="es"), str(target))

        with target.open("rb") as fileobj:
            catalog = read_po(fileobj)
        message = catalog.get("date", context="Language")
        assert message is not None
        assert message.string == "{day}/{month}/{year}"
