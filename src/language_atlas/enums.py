"""Enumerations for language-atlas type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class FieldKind(StrEnum):
    """Shape of a field, decided by its parameters and entries.

    StrEnum provides automatic string conversion: str(FieldKind.STATIC) == "static"
    """

    STUB = "stub"
    """No parameters, no entries: dummy { }"""

    STATIC = "static"
    """No parameters, at least one entry: greeting { English: "Hello" }"""

    DYNAMIC = "dynamic"
    """Parameters and at least one entry: farewell(name) { English: "Bye, {name}" }"""

    DYNAMIC_STUB = "dynamic_stub"
    """Parameters, no entries: later(name) { }"""

    @property
    def is_stub(self) -> bool:
        """True for kinds that have no language strings."""
        return self in (FieldKind.STUB, FieldKind.DYNAMIC_STUB)

    @property
    def has_parameters(self) -> bool:
        """True for kinds whose accessor takes arguments."""
        return self in (FieldKind.DYNAMIC, FieldKind.DYNAMIC_STUB)


class ParameterTyping(StrEnum):
    """How a field declares its parameter types.

    StrEnum provides automatic string conversion: str(ParameterTyping.TYPED) == "typed"
    """

    NONE = "none"
    """Field has no parameters"""

    TYPED = "typed"
    """Every parameter carries an annotation: date(day: int, month: int)"""

    UNTYPED = "untyped"
    """No parameter carries an annotation: farewell(name)"""


__all__ = [
    "FieldKind",
    "ParameterTyping",
]
