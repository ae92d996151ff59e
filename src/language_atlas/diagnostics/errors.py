"""Atlas exception hierarchy with structured diagnostics.

Every error is raised while generating accessors; none can escape from a
generated accessor at call time. All exceptions store Diagnostic objects for
rich error information.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class AtlasError(Exception):
    """Base exception for all language-atlas errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize AtlasError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class AtlasSyntaxError(AtlasError):
    """Malformed atlas source.

    Unlike a recovering parser, the atlas parser stops at the first syntax
    error: a half-parsed definition would silently drop accessors.

    Attributes:
        source_context: Offending source lines with a caret under the error
            position (empty when unavailable)
    """

    def __init__(self, message: str | Diagnostic, *, source_context: str = "") -> None:
        """Initialize AtlasSyntaxError.

        Args:
            message: Error message string OR Diagnostic object
            source_context: Pre-rendered source excerpt for display
        """
        super().__init__(message)
        self.source_context = source_context


class DuplicateVariantEntryError(AtlasSyntaxError):
    """A variant is listed twice inside one field block.

    Example:
        greeting {
            English: "Hello"
            English: "Hi"    <- duplicate
        }
    """


class DuplicateParameterError(AtlasSyntaxError):
    """A parameter name is declared twice in one field's parameter list."""


class AtlasModelError(AtlasError):
    """Parsed definition is inconsistent with the enum or with itself."""


class UnknownVariantError(AtlasModelError):
    """An entry names a variant that the target enum does not declare."""


class MixedParameterTypingError(AtlasModelError):
    """A field mixes typed and untyped parameters.

    Example:
        date(day: int, month, year: int) { ... }    <- month is untyped
    """


class MalformedPlaceholderError(AtlasModelError):
    """A template placeholder is malformed or names an undeclared parameter.

    Covers unknown names ({nme} with parameter name), empty placeholders ({}),
    non-identifier contents ({0}, {a b}) and unbalanced braces.
    """


class DuplicateFieldError(AtlasModelError):
    """Two field blocks share one name."""


class EnumMismatchError(AtlasModelError):
    """The header names a different enum than the one being bound."""


class BindingConflictError(AtlasError):
    """A field name collides with an enum member or existing attribute."""
