"""Template compilation and rendering.

A template is literal text with ``{name}`` placeholders. ``{{`` and ``}}``
stand for literal braces. Compilation splits the text into segments once;
rendering only joins them, so a compiled template can never fail at call
time as long as every placeholder name is supplied.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from language_atlas.core.identifier_validation import is_valid_identifier

__all__ = [
    "Placeholder",
    "PlaceholderSyntaxError",
    "Segment",
    "Template",
    "TextSegment",
    "compile_template",
]


class PlaceholderSyntaxError(ValueError):
    """Template text contains a placeholder that cannot be compiled.

    Carries no field context; the model builder converts it into
    MalformedPlaceholderError.

    Attributes:
        detail: What is wrong
        offset: Character offset inside the template text
    """

    def __init__(self, detail: str, offset: int) -> None:
        super().__init__(detail)
        self.detail = detail
        self.offset = offset


@dataclass(frozen=True, slots=True)
class TextSegment:
    """Literal run of template text (brace escapes already resolved)."""

    text: str


@dataclass(frozen=True, slots=True)
class Placeholder:
    """Reference to a parameter by name."""

    name: str


type Segment = TextSegment | Placeholder


@dataclass(frozen=True, slots=True)
class Template:
    """Compiled template.

    Attributes:
        source: Template text as written (after string-literal escapes)
        segments: Alternating literal and placeholder segments

    Example:
        >>> template = compile_template("Goodbye, {name}")
        >>> template.placeholders
        ('name',)
        >>> template.render({"name": "John"})
        'Goodbye, John'
    """

    source: str
    segments: tuple[Segment, ...]

    @property
    def placeholders(self) -> tuple[str, ...]:
        """Placeholder names in first-occurrence order, without repeats."""
        names = (seg.name for seg in self.segments if isinstance(seg, Placeholder))
        return tuple(dict.fromkeys(names))

    @property
    def literal(self) -> str | None:
        """The fixed text if the template has no placeholders, else None."""
        if any(isinstance(seg, Placeholder) for seg in self.segments):
            return None
        return "".join(seg.text for seg in self.segments if isinstance(seg, TextSegment))

    def render(self, arguments: Mapping[str, object]) -> str:
        """Substitute each placeholder with ``str()`` of its argument.

        Arguments not referenced by the template are ignored.

        Raises:
            KeyError: If a placeholder has no argument. The model builder
                guarantees this cannot happen for generated accessors.
        """
        return "".join(
            seg.text if isinstance(seg, TextSegment) else str(arguments[seg.name])
            for seg in self.segments
        )


def compile_template(text: str) -> Template:
    """Split template text into literal and placeholder segments.

    Args:
        text: Template text

    Returns:
        Compiled Template

    Raises:
        PlaceholderSyntaxError: On empty placeholders, non-identifier
            placeholder contents, unclosed '{' or unmatched '}'

    Example:
        >>> compile_template("{{literal}} {value}").segments
        (TextSegment(text='{literal} '), Placeholder(name='value'))
    """
    segments: list[Segment] = []
    buffer: list[str] = []
    i = 0
    length = len(text)

    while i < length:
        ch = text[i]
        if ch == "{":
            if i + 1 < length and text[i + 1] == "{":
                buffer.append("{")
                i += 2
                continue
            close = text.find("}", i + 1)
            if close == -1:
                msg = f"unclosed '{{' at offset {i}"
                raise PlaceholderSyntaxError(msg, i)
            name = text[i + 1 : close]
            if not name:
                msg = "empty placeholder '{}'"
                raise PlaceholderSyntaxError(msg, i)
            if not is_valid_identifier(name):
                msg = f"'{{{name}}}' is not a parameter name"
                raise PlaceholderSyntaxError(msg, i)
            if buffer:
                segments.append(TextSegment("".join(buffer)))
                buffer.clear()
            segments.append(Placeholder(name))
            i = close + 1
            continue
        if ch == "}":
            if i + 1 < length and text[i + 1] == "}":
                buffer.append("}")
                i += 2
                continue
            msg = f"unmatched '}}' at offset {i}"
            raise PlaceholderSyntaxError(msg, i)
        buffer.append(ch)
        i += 1

    if buffer:
        segments.append(TextSegment("".join(buffer)))
    return Template(source=text, segments=tuple(segments))
