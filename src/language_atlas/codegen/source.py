"""Python source rendering for build-time generation.

render_module() turns an AtlasModel into the text of a standalone Python
module: one function per field plus a ``bind()`` helper that attaches them
to the enum class. The module has no runtime dependency on language-atlas;
Stringable is imported for type checkers only.

Output is deterministic: the same model and configuration always render
byte-identical text, so generated files can be committed and diffed.

Rendering rules:
    - Static fields dispatch with ``match self.name`` over string literals.
    - Dynamic fields render f-strings with ``!s`` conversions, which is
      exactly ``str()`` of each argument.
    - Stub fields are decorated with ``warnings.deprecated`` (PEP 702).
    - Typed annotations are emitted verbatim when they parse as Python
      expressions, and as string annotations otherwise.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import ast
from typing import TYPE_CHECKING

from language_atlas.config import DEFAULT_CONFIG, GeneratorConfig
from language_atlas.constants import GENERATED_HEADER
from language_atlas.diagnostics import BindingConflictError, ErrorTemplate
from language_atlas.enums import FieldKind
from language_atlas.model.template import Placeholder, Template, TextSegment

from .emitter import describe_field

if TYPE_CHECKING:
    from language_atlas.model import AtlasModel, FieldSpec

__all__ = ["RESERVED_NAMES", "render_module"]

# Module-level names the rendered code looks up at runtime. A field with one
# of these names would shadow it.
RESERVED_NAMES: frozenset[str] = frozenset(
    {"ENUM_NAME", "FIELDS", "TypeError", "bind", "setattr", "warnings"}
)

_INDENT = "    "


def _string(text: str) -> str:
    """Python string literal for text, double-quoted where possible."""
    literal = repr(text)
    if literal[0] == "'" and '"' not in text:
        # repr picked single quotes, so text holds no quote characters at all
        literal = f'"{literal[1:-1]}"'
    return literal


def _annotation(text: str) -> str:
    try:
        ast.parse(text, mode="eval")
    except SyntaxError:
        return _string(text)
    return text


def _expression(template: Template) -> str:
    literal = template.literal
    if literal is not None:
        return _string(literal)

    parts: list[str] = []
    for segment in template.segments:
        match segment:
            case TextSegment(text=text):
                parts.append(text.replace("{", "{{").replace("}", "}}"))
            case Placeholder(name=name):
                parts.append(f"{{{name}!s}}")
    return "f" + _string("".join(parts))


def _docstring(text: str, indent: str) -> list[str]:
    lines = text.splitlines()
    if len(lines) == 1:
        return [f'{indent}"""{lines[0]}"""']
    body = [f"{indent}{line}" if line else "" for line in lines[1:]]
    return [f'{indent}"""{lines[0]}', *body, f'{indent}"""']


def _parameters(spec: FieldSpec) -> str:
    params = ["self"]
    for p in spec.parameters:
        annotation = "Stringable" if p.annotation is None else _annotation(p.annotation)
        params.append(f"{p.name}: {annotation}")
    return ", ".join(params)


def _render_field(spec: FieldSpec, enum_name: str, config: GeneratorConfig) -> list[str]:
    lines: list[str] = []
    if spec.kind.is_stub:
        category = "" if config.warn_on_stub else ", category=None"
        lines.append(f"@warnings.deprecated({_string(config.stub_note)}{category})")
    lines.append(f"def {spec.name}({_parameters(spec)}) -> str:")
    lines.extend(_docstring(describe_field(spec, enum_name), _INDENT))

    if spec.kind.is_stub:
        lines.append(f"{_INDENT}return {_string(config.stub_sentinel)}")
        return lines

    default = spec.default_template
    if len(spec.entries) == 1:
        lines.append(f"{_INDENT}return {_expression(default)}")
        return lines

    lines.append(f"{_INDENT}match self.name:")
    for variant, template in spec.entries.items():
        if variant == spec.default_variant:
            continue
        lines.append(f"{_INDENT * 2}case {_string(variant)}:")
        lines.append(f"{_INDENT * 3}return {_expression(template)}")
    lines.append(f"{_INDENT * 2}case _:")
    lines.append(f"{_INDENT * 3}return {_expression(default)}")
    return lines


def _check_names(model: AtlasModel) -> None:
    for spec in model:
        if spec.name in RESERVED_NAMES:
            reason = "the name is used by the generated module itself"
        elif spec.name in model.enum:
            reason = "the name is a member of the enum"
        else:
            continue
        raise BindingConflictError(
            ErrorTemplate.binding_conflict(spec.name, model.enum.name, reason)
        )


def render_module(model: AtlasModel, config: GeneratorConfig = DEFAULT_CONFIG) -> str:
    """Render the Python source of a module defining every accessor.

    Args:
        model: Validated atlas model
        config: Generator configuration (stub sentinel, note, and warning)

    Returns:
        Module source text, newline-terminated

    Raises:
        BindingConflictError: A field name is a member of the enum or is
            reserved by the generated module

    Example:
        >>> from language_atlas.model import EnumSpec, build_model
        >>> from language_atlas.syntax import parse
        >>> doc = parse('LanguageEnum: Language\\ngreeting { English: "Hello" }')
        >>> source = render_module(build_model(doc, EnumSpec("Language", ("English",))))
        >>> 'return "Hello"' in source
        True
    """
    _check_names(model)
    enum_name = model.enum.name
    has_stubs = any(spec.kind.is_stub for spec in model)
    has_untyped = any(
        spec.kind.has_parameters and not spec.parameters[0].is_typed for spec in model
    )

    lines = [
        f'"""Accessors for the {enum_name} enum.',
        "",
        GENERATED_HEADER,
        '"""',
        "",
        "from __future__ import annotations",
        "",
    ]
    if has_stubs:
        lines.append("import warnings")
    lines.extend(["from typing import TYPE_CHECKING", "", "if TYPE_CHECKING:"])
    lines.append(f"{_INDENT}from enum import Enum")
    if has_untyped:
        lines.extend(["", f"{_INDENT}from language_atlas import Stringable"])

    names = sorted(["ENUM_NAME", "FIELDS", "bind", *model.field_names])
    lines.extend(["", "__all__ = ["])
    lines.extend(f"{_INDENT}{_string(name)}," for name in names)
    lines.append("]")

    lines.extend(["", f"ENUM_NAME = {_string(enum_name)}"])
    fields = ", ".join(_string(name) for name in model.field_names)
    trailing = "," if len(model) == 1 else ""
    lines.append(f"FIELDS = ({fields}{trailing})")

    for spec in model:
        lines.extend(["", ""])
        lines.extend(_render_field(spec, enum_name, config))

    lines.extend(
        [
            "",
            "",
            "def bind(enum_cls: type[Enum]) -> type[Enum]:",
            f'{_INDENT}"""Attach every accessor to enum_cls as a method."""',
            f"{_INDENT}if enum_cls.__name__ != ENUM_NAME:",
            f'{_INDENT * 2}msg = f"Accessors were generated for {{ENUM_NAME}}, '
            'not {enum_cls.__name__}"',
            f"{_INDENT * 2}raise TypeError(msg)",
        ]
    )
    for name in model.field_names:
        lines.append(f"{_INDENT}setattr(enum_cls, {_string(name)}, {name})")
    lines.append(f"{_INDENT}return enum_cls")

    return "\n".join(lines) + "\n"
