"""Runtime accessor emission.

Turns each FieldSpec into a plain function taking the enum member as its
first argument, ready to be attached to the enum class as a method.

Dispatch is decided once, at emission time:
    - Static fields close over a variant -> str table; a call is one dict
      lookup with the default text as fallback. No string is built per call.
    - Dynamic fields close over a variant -> Template table; a call binds
      the arguments against the field's signature and renders.
    - Stub fields return the configured sentinel and are marked incomplete.

Emitted functions expose an ``inspect.Signature`` matching the declared
parameters, so help(), IDEs and ``inspect.signature`` show the real
parameter list. Typed parameters carry their annotation text verbatim;
untyped parameters are annotated with Stringable.

Emitted functions hold no mutable state and are safe to call from any
number of threads.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from language_atlas.config import DEFAULT_CONFIG, GeneratorConfig
from language_atlas.deprecation import incomplete
from language_atlas.enums import FieldKind

if TYPE_CHECKING:
    from language_atlas.model import AtlasModel, FieldSpec

__all__ = [
    "ATLAS_FIELD_ATTR",
    "EmittedField",
    "Stringable",
    "build_signature",
    "describe_field",
    "emit_field",
    "emit_model",
]

logger = logging.getLogger(__name__)

# Attribute set on every emitted function; holds the field name.
ATLAS_FIELD_ATTR = "__atlas_field__"


@runtime_checkable
class Stringable(Protocol):
    """Anything that can be rendered with ``str()``.

    Untyped parameters accept any such value; every Python object qualifies.
    """

    def __str__(self) -> str: ...


@dataclass(frozen=True, slots=True)
class EmittedField:
    """One emitted accessor.

    Attributes:
        name: Accessor (and field) name
        kind: Field kind the accessor was emitted for
        function: Function taking the enum member first
        signature: Public signature, ``self`` included
    """

    name: str
    kind: FieldKind
    function: Callable[..., str]
    signature: inspect.Signature

    @property
    def is_incomplete(self) -> bool:
        """True for stub accessors (no language strings defined)."""
        return self.kind.is_stub


def build_signature(spec: FieldSpec) -> inspect.Signature:
    """Signature of the accessor for spec: ``self`` then declared parameters."""
    parameters = [inspect.Parameter("self", inspect.Parameter.POSITIONAL_OR_KEYWORD)]
    parameters.extend(
        inspect.Parameter(
            p.name,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
            annotation=p.annotation if p.annotation is not None else Stringable,
        )
        for p in spec.parameters
    )
    return inspect.Signature(parameters, return_annotation=str)


def describe_field(spec: FieldSpec, enum_name: str) -> str:
    """Docstring for the accessor of spec."""
    if spec.kind.is_stub:
        return f"Placeholder for '{spec.name}': no language strings are defined yet."

    lines = [f"Return the '{spec.name}' text for this {enum_name} member.", ""]
    if spec.parameters:
        lines.append(f"Arguments: {', '.join(spec.parameter_names)}.")
    lines.append(
        f"Defined for: {', '.join(spec.entries)}. "
        f"Other members use the {spec.default_variant} text."
    )
    return "\n".join(lines)


def _static_accessor(spec: FieldSpec) -> Callable[..., str]:
    table = {variant: template.literal for variant, template in spec.entries.items()}
    default = table[spec.default_variant]

    def accessor(self: Enum) -> str:
        return table.get(self.name, default)

    return accessor


def _dynamic_accessor(spec: FieldSpec, signature: inspect.Signature) -> Callable[..., str]:
    templates = dict(spec.entries)
    default = spec.default_template

    def accessor(self: Enum, /, *args: object, **kwargs: object) -> str:
        arguments = signature.bind(self, *args, **kwargs).arguments
        return templates.get(self.name, default).render(arguments)

    return accessor


def _stub_accessor(
    spec: FieldSpec, signature: inspect.Signature, config: GeneratorConfig
) -> Callable[..., str]:
    sentinel = config.stub_sentinel

    if spec.parameters:

        def accessor(self: Enum, /, *args: object, **kwargs: object) -> str:
            # Same argument checking as a dynamic accessor.
            signature.bind(self, *args, **kwargs)
            return sentinel

    else:

        def accessor(self: Enum) -> str:  # type: ignore[misc]
            return sentinel

    return accessor


def emit_field(
    spec: FieldSpec,
    config: GeneratorConfig = DEFAULT_CONFIG,
    *,
    owner: str | None = None,
) -> EmittedField:
    """Emit the accessor for one field.

    Args:
        spec: Validated field
        config: Generator configuration (stub sentinel, warning behavior)
        owner: Enum class name, used for ``__qualname__`` and the docstring

    Returns:
        EmittedField wrapping the accessor function
    """
    signature = build_signature(spec)

    match spec.kind:
        case FieldKind.STATIC:
            accessor = _static_accessor(spec)
        case FieldKind.DYNAMIC:
            accessor = _dynamic_accessor(spec, signature)
        case FieldKind.STUB | FieldKind.DYNAMIC_STUB:
            accessor = _stub_accessor(spec, signature, config)

    accessor.__name__ = spec.name
    accessor.__qualname__ = f"{owner}.{spec.name}" if owner else spec.name
    accessor.__doc__ = describe_field(spec, owner or "enum")
    accessor.__signature__ = signature  # type: ignore[attr-defined]
    accessor.__annotations__ = {
        name: param.annotation
        for name, param in signature.parameters.items()
        if param.annotation is not inspect.Parameter.empty
    } | {"return": str}
    setattr(accessor, ATLAS_FIELD_ATTR, spec.name)

    if spec.kind.is_stub:
        accessor = incomplete(config.stub_note, warn=config.warn_on_stub)(accessor)

    return EmittedField(name=spec.name, kind=spec.kind, function=accessor, signature=signature)


def emit_model(
    model: AtlasModel, config: GeneratorConfig = DEFAULT_CONFIG
) -> tuple[EmittedField, ...]:
    """Emit one accessor per field, in definition order."""
    emitted = tuple(emit_field(spec, config, owner=model.enum.name) for spec in model)
    stubs = sum(1 for e in emitted if e.is_incomplete)
    logger.debug(
        "Emitted %d accessors for %s (%d incomplete)", len(emitted), model.enum.name, stubs
    )
    return emitted
