"""Attach generated accessors to an enum class.

This is the Python counterpart of a build-time macro: the definition is
parsed and validated once, when the enum class is created, and every call
afterwards is a plain method call.

Usage:
    >>> from enum import Enum, auto
    >>> @language_functions('''
    ... LanguageEnum: Language
    ... greeting { English: "Hello" Spanish: "Hola" }
    ... farewell(name) { English: "Goodbye, {name}" }
    ... ''')
    ... class Language(Enum):
    ...     English = auto()
    ...     Spanish = auto()
    ...     French = auto()
    >>> Language.Spanish.greeting()
    'Hola'
    >>> Language.French.farewell("John")
    'Goodbye, John'

Binding is all or nothing: every conflict is checked before the first
attribute is set.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import TypeVar

from language_atlas.codegen.emitter import ATLAS_FIELD_ATTR, emit_model
from language_atlas.config import DEFAULT_CONFIG, GeneratorConfig
from language_atlas.diagnostics import (
    BindingConflictError,
    EnumMismatchError,
    ErrorTemplate,
    UnknownVariantError,
)
from language_atlas.model import AtlasModel, EnumSpec, build_model
from language_atlas.syntax import parse

__all__ = [
    "bind",
    "generate_language_functions",
    "language_functions",
]

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=type[Enum])

_MISSING = object()


def _lookup(enum_cls: type[Enum], name: str) -> tuple[type, object]:
    """Find name in the class dictionaries along the MRO.

    Enum properties such as ``name`` raise AttributeError when read from the
    class, so hasattr() cannot be used here.
    """
    for klass in enum_cls.__mro__:
        if name in klass.__dict__:
            return klass, klass.__dict__[name]
    return object, _MISSING


def _conflict(enum_cls: type[Enum], name: str, config: GeneratorConfig) -> str | None:
    """Reason name cannot be bound on enum_cls, or None if it can."""
    if name in enum_cls.__members__:
        return "the name is a member of the enum"

    owner, existing = _lookup(enum_cls, name)
    if existing is _MISSING:
        return None
    if getattr(existing, ATLAS_FIELD_ATTR, None) == name:
        return None
    if owner is object or owner.__module__ == "enum":
        return f"'{name}' is defined by {owner.__name__} itself"
    if not config.allow_override:
        return f"'{name}' is already defined on {owner.__name__}"
    return None


def _check_variants(enum_cls: type[Enum], model: AtlasModel) -> None:
    if enum_cls.__name__ != model.enum.name:
        raise EnumMismatchError(
            ErrorTemplate.enum_mismatch(model.enum.name, enum_cls.__name__, None)
        )
    actual = EnumSpec.from_enum(enum_cls)
    for spec in model:
        for variant in spec.entries:
            if variant not in actual:
                raise UnknownVariantError(
                    ErrorTemplate.unknown_variant(
                        spec.name, variant, actual.name, actual.variants, None
                    )
                )


def bind(
    enum_cls: E, model: AtlasModel, config: GeneratorConfig = DEFAULT_CONFIG
) -> E:
    """Attach one accessor per field of model to enum_cls.

    Accessors bound earlier by language-atlas may be replaced freely, so a
    regenerated model can be bound again.

    Args:
        enum_cls: Target enum class
        model: Validated model built for this enum
        config: Generator configuration

    Returns:
        enum_cls, for chaining

    Raises:
        EnumMismatchError: model was built for an enum of another name
        UnknownVariantError: model names a variant enum_cls lacks
        BindingConflictError: An accessor name collides with a member, an
            Enum attribute, or (without allow_override) any other attribute
    """
    _check_variants(enum_cls, model)

    for spec in model:
        reason = _conflict(enum_cls, spec.name, config)
        if reason is not None:
            raise BindingConflictError(
                ErrorTemplate.binding_conflict(spec.name, enum_cls.__name__, reason)
            )

    for emitted in emit_model(model, config):
        setattr(enum_cls, emitted.name, emitted.function)

    logger.info("Bound %d accessors to %s", len(model), enum_cls.__name__)
    return enum_cls


def generate_language_functions(
    source: str, enum_cls: E, config: GeneratorConfig | None = None
) -> E:
    """Parse source, validate it against enum_cls, and bind the accessors.

    Args:
        source: Atlas definition text
        enum_cls: Target enum class
        config: Generator configuration (default: GeneratorConfig())

    Returns:
        enum_cls, for chaining

    Raises:
        AtlasSyntaxError: Malformed source (or a subclass)
        AtlasModelError: Source does not fit enum_cls (or a subclass)
        BindingConflictError: An accessor name cannot be attached
    """
    config = config or DEFAULT_CONFIG
    document = parse(source, max_source_size=config.max_source_size)
    model = build_model(document, enum_cls)
    return bind(enum_cls, model, config)


def language_functions(
    source: str, config: GeneratorConfig | None = None
) -> Callable[[E], E]:
    """Class decorator form of generate_language_functions().

    Errors surface when the class statement executes, i.e. at import time
    of the module defining the enum.
    """

    def decorator(enum_cls: E) -> E:
        return generate_language_functions(source, enum_cls, config)

    return decorator
