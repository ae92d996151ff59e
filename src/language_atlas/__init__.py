"""language-atlas - per-variant language strings as enum methods.

Reads a small definition language that assigns one string template per enum
variant to each named field, and turns every field into a method on the
enum. Variants without an entry of their own fall back to the first entry
listed for the field.

Public API:
    language_functions - Class decorator binding accessors to an Enum
    generate_language_functions - Same, as a plain function
    render_module - Render the accessors as a standalone Python module
    parse_atlas - Parse definition source to a Document
    build_model - Validate a Document against an enum
    GeneratorConfig - Generation options (stub sentinel, overrides, limits)
    Stringable - Annotation of untyped accessor parameters

Exceptions:
    AtlasError - Base exception class
    AtlasSyntaxError - Malformed definition source
    AtlasModelError - Definition does not fit the enum
    BindingConflictError - Accessor name cannot be attached to the enum

Submodules:
    language_atlas.syntax - Cursor, AST and parser
    language_atlas.model - Validated model and templates
    language_atlas.codegen - Accessor emission and source rendering
    language_atlas.diagnostics - Error types, codes and formatting
    language_atlas.catalog - Gettext catalog export (requires Babel)
"""

from .binding import bind, generate_language_functions, language_functions
from .codegen import Stringable, render_module
from .config import GeneratorConfig
from .diagnostics import (
    AtlasError,
    AtlasModelError,
    AtlasSyntaxError,
    BindingConflictError,
    DuplicateVariantEntryError,
    MalformedPlaceholderError,
    MixedParameterTypingError,
    UnknownVariantError,
)
from .model import build_model
from .syntax import parse as parse_atlas

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as _get_version
except ImportError as e:
    raise RuntimeError("importlib.metadata unavailable - Python version too old? " + str(e)) from e

try:
    __version__ = _get_version("language-atlas")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "AtlasError",
    "AtlasModelError",
    "AtlasSyntaxError",
    "BindingConflictError",
    "DuplicateVariantEntryError",
    "GeneratorConfig",
    "MalformedPlaceholderError",
    "MixedParameterTypingError",
    "Stringable",
    "UnknownVariantError",
    "__version__",
    "bind",
    "build_model",
    "generate_language_functions",
    "language_functions",
    "parse_atlas",
    "render_module",
]
