"""Hypothesis strategies for language-atlas property-based testing.

Usage:
    from tests.strategies import atlas_cases, field_names
"""

from .atlas import (
    ANNOTATION_POOL,
    COMMENT_POOL,
    PARAMETER_POOL,
    VARIANT_POOL,
    AtlasCase,
    FieldCase,
    atlas_cases,
    atlas_literal,
    field_cases,
    field_names,
    template_text,
)

__all__ = [
    "ANNOTATION_POOL",
    "COMMENT_POOL",
    "PARAMETER_POOL",
    "VARIANT_POOL",
    "AtlasCase",
    "FieldCase",
    "atlas_cases",
    "atlas_literal",
    "field_cases",
    "field_names",
    "template_text",
]
