"""Gettext catalog export for translators.

Exports the strings of one enum variant as a Babel message catalog, so an
atlas definition can be handed to the usual PO-file translation workflow.

Each field becomes one message:
    - msgid is the field name (msgctxt is the enum name)
    - msgstr is the variant's template text, or the default entry's text
      flagged ``fuzzy`` when the variant falls back
    - templates with placeholders are flagged ``python-brace-format``
    - stub fields are skipped; they have nothing to translate

Requires Babel: ``pip install language-atlas[babel]``.

Python 3.13+.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO

from language_atlas.core.babel_compat import require_babel
from language_atlas.diagnostics import ErrorTemplate, UnknownVariantError

if TYPE_CHECKING:
    from babel.messages.catalog import Catalog

    from language_atlas.model import AtlasModel

__all__ = ["export_catalog", "write_catalog"]

logger = logging.getLogger(__name__)


def export_catalog(
    model: AtlasModel,
    variant: str,
    *,
    locale: str | None = None,
    project: str | None = None,
    version: str | None = None,
) -> Catalog:
    """Build a message catalog holding the strings of one variant.

    Args:
        model: Validated atlas model
        variant: Enum variant to export
        locale: Catalog locale identifier such as "es" or "pt_BR"
            (default: no locale)
        project: Project name for the catalog header (default: enum name)
        version: Project version for the catalog header

    Returns:
        babel.messages.catalog.Catalog

    Raises:
        BabelImportError: If Babel is not installed
        UnknownVariantError: If variant is not a member of the model's enum
        babel.core.UnknownLocaleError: If locale is not a known locale
    """
    require_babel("export_catalog")
    from babel.messages.catalog import Catalog  # noqa: PLC0415

    enum = model.enum
    if variant not in enum:
        raise UnknownVariantError(
            ErrorTemplate.unknown_export_variant(variant, enum.name, enum.variants)
        )

    catalog = Catalog(
        locale=locale,
        project=project or enum.name,
        version=version,
        fuzzy=False,
    )

    fallbacks = 0
    for spec in model:
        template = spec.template_for(variant)
        if template is None:
            continue

        flags: list[str] = []
        comments: list[str] = []
        if template.placeholders:
            flags.append("python-brace-format")
        if spec.parameters:
            comments.append(f"Parameters: {', '.join(spec.parameter_names)}")
        if spec.falls_back(variant):
            flags.append("fuzzy")
            comments.append(f"No {variant} entry; text copied from {spec.default_variant}")
            fallbacks += 1

        catalog.add(
            spec.name,
            string=template.source,
            flags=flags,
            auto_comments=comments,
            context=enum.name,
        )

    logger.info(
        "Exported %d messages for %s.%s (%d fuzzy)",
        len(catalog),
        enum.name,
        variant,
        fallbacks,
    )
    return catalog


def write_catalog(catalog: Catalog, target: str | Path | BinaryIO) -> None:
    """Write catalog in PO format.

    Args:
        catalog: Catalog from export_catalog()
        target: File path, or a binary file object

    Raises:
        BabelImportError: If Babel is not installed
    """
    require_babel("write_catalog")
    from babel.messages.pofile import write_po  # noqa: PLC0415

    if isinstance(target, (str, Path)):
        with Path(target).open("wb") as fileobj:
            write_po(fileobj, catalog, omit_header=False, no_location=True)
    else:
        write_po(target, catalog, omit_header=False, no_location=True)
