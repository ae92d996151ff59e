"""Validated data model backing the generated accessors.

The model is built once from a parsed Document and an EnumSpec, and is
immutable afterwards: regenerating from a changed definition produces a new
model rather than updating this one.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from language_atlas.core.identifier_validation import is_valid_identifier
from language_atlas.enums import FieldKind, ParameterTyping
from language_atlas.model.template import Template

__all__ = [
    "AtlasModel",
    "EnumSpec",
    "FieldSpec",
    "Parameter",
]


@dataclass(frozen=True, slots=True)
class EnumSpec:
    """Name and ordered variant identifiers of the host program's enum.

    Example:
        >>> from enum import Enum, auto
        >>> class Language(Enum):
        ...     English = auto()
        ...     Spanish = auto()
        >>> EnumSpec.from_enum(Language)
        EnumSpec(name='Language', variants=('English', 'Spanish'))
    """

    name: str
    variants: tuple[str, ...]

    def __post_init__(self) -> None:
        """Validate that names are usable identifiers and variants are unique.

        Raises:
            ValueError: On an invalid name or repeated variant.
        """
        if not is_valid_identifier(self.name):
            msg = f"Invalid enum name: {self.name!r}"
            raise ValueError(msg)
        seen: set[str] = set()
        for variant in self.variants:
            if not is_valid_identifier(variant):
                msg = f"Invalid variant name in enum {self.name}: {variant!r}"
                raise ValueError(msg)
            if variant in seen:
                msg = f"Variant {variant!r} is declared twice in enum {self.name}"
                raise ValueError(msg)
            seen.add(variant)

    @classmethod
    def from_enum(cls, enum_cls: type[Enum]) -> EnumSpec:
        """Read name and canonical member names (aliases excluded)."""
        variants = tuple(
            name for name, member in enum_cls.__members__.items() if member.name == name
        )
        return cls(name=enum_cls.__name__, variants=variants)

    def __contains__(self, variant: object) -> bool:
        return variant in self.variants


@dataclass(frozen=True, slots=True)
class Parameter:
    """Accessor parameter.

    Attributes:
        name: Parameter name
        annotation: Type text as written, or None for an untyped parameter
    """

    name: str
    annotation: str | None = None

    @property
    def is_typed(self) -> bool:
        """True if the parameter carries an explicit type."""
        return self.annotation is not None


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """One validated field.

    Attributes:
        name: Accessor name
        parameters: Parameters in declared order
        entries: Read-only mapping variant -> Template in declaration order
        kind: Stub, static, dynamic, or dynamic stub
        typing: Whether parameters are typed, untyped, or absent
    """

    name: str
    parameters: tuple[Parameter, ...]
    entries: Mapping[str, Template] = field(hash=False)
    kind: FieldKind
    typing: ParameterTyping

    @classmethod
    def create(
        cls,
        name: str,
        parameters: tuple[Parameter, ...],
        entries: Mapping[str, Template],
    ) -> FieldSpec:
        """Build a FieldSpec, deriving kind and typing.

        The entries mapping is copied, so later changes to the argument do
        not leak into the model.
        """
        frozen_entries = MappingProxyType(dict(entries))
        if parameters:
            kind = FieldKind.DYNAMIC if frozen_entries else FieldKind.DYNAMIC_STUB
            typing = (
                ParameterTyping.TYPED if parameters[0].is_typed else ParameterTyping.UNTYPED
            )
        else:
            kind = FieldKind.STATIC if frozen_entries else FieldKind.STUB
            typing = ParameterTyping.NONE
        return cls(
            name=name,
            parameters=parameters,
            entries=frozen_entries,
            kind=kind,
            typing=typing,
        )

    @property
    def parameter_names(self) -> tuple[str, ...]:
        """Parameter names in declared order."""
        return tuple(p.name for p in self.parameters)

    @property
    def default_variant(self) -> str | None:
        """Variant of the first-declared entry, or None for stubs."""
        return next(iter(self.entries), None)

    @property
    def default_template(self) -> Template | None:
        """Template of the first-declared entry, or None for stubs."""
        variant = self.default_variant
        return None if variant is None else self.entries[variant]

    def template_for(self, variant: str) -> Template | None:
        """Template used for variant, falling back to the default entry.

        Returns None only for stub fields.
        """
        template = self.entries.get(variant)
        return template if template is not None else self.default_template

    def falls_back(self, variant: str) -> bool:
        """True if variant has no entry of its own."""
        return variant not in self.entries


@dataclass(frozen=True, slots=True)
class AtlasModel:
    """Validated definition: the target enum plus its fields in order."""

    enum: EnumSpec
    fields: tuple[FieldSpec, ...]

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    @property
    def field_names(self) -> tuple[str, ...]:
        """Field names in definition order."""
        return tuple(f.name for f in self.fields)

    def field(self, name: str) -> FieldSpec:
        """Look up a field by name.

        Raises:
            KeyError: If no field has that name
        """
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)
