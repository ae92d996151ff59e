"""Validated atlas model.

Exports:
    build_model: Resolve a parsed Document against an enum
    AtlasModel, EnumSpec, FieldSpec, Parameter: Immutable model types
    Template, compile_template: Compiled templates
"""

from .builder import ModelBuilder, build_model
from .template import Placeholder, Template, TextSegment, compile_template
from .types import AtlasModel, EnumSpec, FieldSpec, Parameter

__all__ = [
    "AtlasModel",
    "EnumSpec",
    "FieldSpec",
    "ModelBuilder",
    "Parameter",
    "Placeholder",
    "Template",
    "TextSegment",
    "build_model",
    "compile_template",
]
