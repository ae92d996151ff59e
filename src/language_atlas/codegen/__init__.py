"""Accessor generation.

Exports:
    emit_field, emit_model: Build accessor functions at runtime
    render_module: Render a standalone Python module defining the accessors
    Stringable: Annotation used for untyped parameters
"""

from .emitter import (
    ATLAS_FIELD_ATTR,
    EmittedField,
    Stringable,
    build_signature,
    describe_field,
    emit_field,
    emit_model,
)
from .source import RESERVED_NAMES, render_module

__all__ = [
    "ATLAS_FIELD_ATTR",
    "RESERVED_NAMES",
    "EmittedField",
    "Stringable",
    "build_signature",
    "describe_field",
    "emit_field",
    "emit_model",
    "render_module",
]
