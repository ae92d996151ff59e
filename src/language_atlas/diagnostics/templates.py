"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable

from .codes import Diagnostic, DiagnosticCode, SourceSpan


def _quoted(names: Iterable[str]) -> str:
    return ", ".join(f"'{name}'" for name in names)


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This keeps every error case documented in one place and makes messages
    testable without raising.
    """

    # ------------------------------------------------------------------
    # Syntax
    # ------------------------------------------------------------------

    @staticmethod
    def syntax_error(
        message: str,
        span: SourceSpan | None,
        expected: tuple[str, ...] = (),
        code: DiagnosticCode = DiagnosticCode.UNEXPECTED_CHARACTER,
    ) -> Diagnostic:
        """Generic grammar violation detected by the parser.

        Args:
            message: Description of what went wrong
            span: Location of the offending character
            expected: Tokens that would have been accepted
            code: Specific syntax code (default: UNEXPECTED_CHARACTER)

        Returns:
            Diagnostic for the syntax error
        """
        return Diagnostic(
            code=code,
            message=message,
            span=span,
            expected=expected,
        )

    @staticmethod
    def unexpected_eof(position: int) -> Diagnostic:
        """Cursor read past the end of input.

        Args:
            position: Character offset where EOF was hit

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        msg = f"Unexpected EOF at position {position}"
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message=msg,
            span=None,
            hint="Check for an unclosed '{', '(' or string literal",
        )

    @staticmethod
    def missing_header(span: SourceSpan | None) -> Diagnostic:
        """Source does not start with the LanguageEnum header.

        Args:
            span: Location where the header was expected

        Returns:
            Diagnostic for MISSING_HEADER
        """
        return Diagnostic(
            code=DiagnosticCode.MISSING_HEADER,
            message="Expected 'LanguageEnum: <EnumName>' header",
            span=span,
            hint="Start the definition with a line such as 'LanguageEnum: Language'",
            expected=("LanguageEnum",),
        )

    @staticmethod
    def empty_parameter_list(field_name: str, span: SourceSpan | None) -> Diagnostic:
        """Field declares '()' with no parameters.

        Args:
            field_name: Field owning the empty list
            span: Location of the opening parenthesis

        Returns:
            Diagnostic for EMPTY_PARAMETER_LIST
        """
        msg = f"Field '{field_name}' declares an empty parameter list"
        return Diagnostic(
            code=DiagnosticCode.EMPTY_PARAMETER_LIST,
            message=msg,
            span=span,
            hint="Remove the parentheses or declare at least one parameter",
            field_name=field_name,
        )

    @staticmethod
    def source_too_large(size: int, limit: int) -> Diagnostic:
        """Source exceeds the configured size limit.

        Args:
            size: Source length in characters
            limit: Configured maximum

        Returns:
            Diagnostic for SOURCE_TOO_LARGE
        """
        msg = f"Atlas source is {size} characters, limit is {limit}"
        return Diagnostic(
            code=DiagnosticCode.SOURCE_TOO_LARGE,
            message=msg,
            span=None,
            hint="Raise GeneratorConfig.max_source_size or split the definition",
        )

    @staticmethod
    def identifier_too_long(length: int, limit: int, span: SourceSpan | None) -> Diagnostic:
        """Identifier exceeds MAX_IDENTIFIER_LENGTH.

        Args:
            length: Identifier length
            limit: Maximum identifier length
            span: Location of the identifier

        Returns:
            Diagnostic for IDENTIFIER_TOO_LONG
        """
        msg = f"Identifier is {length} characters long, limit is {limit}"
        return Diagnostic(
            code=DiagnosticCode.IDENTIFIER_TOO_LONG,
            message=msg,
            span=span,
        )

    @staticmethod
    def duplicate_variant_entry(
        field_name: str, variant: str, span: SourceSpan | None
    ) -> Diagnostic:
        """Variant listed twice within one field.

        Args:
            field_name: Field containing the duplicate
            variant: Repeated variant identifier
            span: Location of the second occurrence

        Returns:
            Diagnostic for DUPLICATE_VARIANT_ENTRY
        """
        msg = f"Variant '{variant}' is listed more than once in field '{field_name}'"
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_VARIANT_ENTRY,
            message=msg,
            span=span,
            hint="Keep a single entry per variant",
            field_name=field_name,
        )

    @staticmethod
    def duplicate_parameter(
        field_name: str, parameter: str, span: SourceSpan | None
    ) -> Diagnostic:
        """Parameter name declared twice.

        Args:
            field_name: Field declaring the parameters
            parameter: Repeated parameter name
            span: Location of the second declaration

        Returns:
            Diagnostic for DUPLICATE_PARAMETER
        """
        msg = f"Parameter '{parameter}' is declared more than once in field '{field_name}'"
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_PARAMETER,
            message=msg,
            span=span,
            field_name=field_name,
        )

    # ------------------------------------------------------------------
    # Model
    # ------------------------------------------------------------------

    @staticmethod
    def unknown_variant(
        field_name: str,
        variant: str,
        enum_name: str,
        variants: tuple[str, ...],
        span: SourceSpan | None,
    ) -> Diagnostic:
        """Entry names a variant the enum does not declare.

        Args:
            field_name: Field containing the entry
            variant: Unknown variant identifier
            enum_name: Target enum name
            variants: Variants the enum declares
            span: Location of the entry

        Returns:
            Diagnostic for UNKNOWN_VARIANT
        """
        msg = f"Variant '{variant}' in field '{field_name}' is not a member of enum '{enum_name}'"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_VARIANT,
            message=msg,
            span=span,
            hint=f"Declare '{variant}' on {enum_name} or remove the entry",
            field_name=field_name,
            expected=variants,
        )

    @staticmethod
    def mixed_parameter_typing(
        field_name: str,
        typed: tuple[str, ...],
        untyped: tuple[str, ...],
        span: SourceSpan | None,
    ) -> Diagnostic:
        """Field mixes typed and untyped parameters.

        Args:
            field_name: Offending field
            typed: Parameters carrying an annotation
            untyped: Parameters without one
            span: Location of the field

        Returns:
            Diagnostic for MIXED_PARAMETER_TYPING
        """
        msg = (
            f"Field '{field_name}' mixes typed parameters ({_quoted(typed)}) "
            f"with untyped parameters ({_quoted(untyped)})"
        )
        return Diagnostic(
            code=DiagnosticCode.MIXED_PARAMETER_TYPING,
            message=msg,
            span=span,
            hint="Annotate every parameter or none of them",
            field_name=field_name,
        )

    @staticmethod
    def malformed_placeholder(
        field_name: str, variant: str, detail: str, span: SourceSpan | None
    ) -> Diagnostic:
        """Template contains a placeholder that cannot be compiled.

        Args:
            field_name: Field owning the template
            variant: Variant whose template is malformed
            detail: What is wrong with the placeholder
            span: Location of the template

        Returns:
            Diagnostic for MALFORMED_PLACEHOLDER
        """
        msg = f"Malformed placeholder in field '{field_name}' for variant '{variant}': {detail}"
        return Diagnostic(
            code=DiagnosticCode.MALFORMED_PLACEHOLDER,
            message=msg,
            span=span,
            hint="Use {name} for parameters and {{ or }} for literal braces",
            field_name=field_name,
        )

    @staticmethod
    def unknown_placeholder(
        field_name: str,
        variant: str,
        placeholder: str,
        parameters: tuple[str, ...],
        span: SourceSpan | None,
    ) -> Diagnostic:
        """Template references a name that is not a declared parameter.

        Args:
            field_name: Field owning the template
            variant: Variant whose template references the name
            placeholder: Unresolved placeholder name
            parameters: Declared parameter names
            span: Location of the template

        Returns:
            Diagnostic for MALFORMED_PLACEHOLDER
        """
        msg = (
            f"Placeholder '{{{placeholder}}}' in field '{field_name}' for variant "
            f"'{variant}' does not name a declared parameter"
        )
        hint = (
            f"Declare '{placeholder}' in the parameter list of '{field_name}'"
            if parameters
            else f"Add a parameter list such as '{field_name}({placeholder})'"
        )
        return Diagnostic(
            code=DiagnosticCode.MALFORMED_PLACEHOLDER,
            message=msg,
            span=span,
            hint=hint,
            field_name=field_name,
            expected=parameters,
        )

    @staticmethod
    def duplicate_field(field_name: str, span: SourceSpan | None) -> Diagnostic:
        """Two field blocks share one name.

        Args:
            field_name: Repeated field name
            span: Location of the second block

        Returns:
            Diagnostic for DUPLICATE_FIELD
        """
        msg = f"Field '{field_name}' is defined more than once"
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_FIELD,
            message=msg,
            span=span,
            hint="Merge the entries into a single block",
            field_name=field_name,
        )

    @staticmethod
    def enum_mismatch(declared: str, actual: str, span: SourceSpan | None) -> Diagnostic:
        """Header enum name differs from the bound enum.

        Args:
            declared: Name written in the header
            actual: Name of the enum supplied by the host program
            span: Location of the header identifier

        Returns:
            Diagnostic for ENUM_MISMATCH
        """
        msg = f"Definition targets enum '{declared}' but is being built for '{actual}'"
        return Diagnostic(
            code=DiagnosticCode.ENUM_MISMATCH,
            message=msg,
            span=span,
            hint=f"Change the header to 'LanguageEnum: {actual}'",
            expected=(actual,),
        )

    @staticmethod
    def unknown_export_variant(
        variant: str, enum_name: str, variants: tuple[str, ...]
    ) -> Diagnostic:
        """Catalog export requested for a variant the enum does not declare.

        Args:
            variant: Requested variant
            enum_name: Target enum name
            variants: Variants the enum declares

        Returns:
            Diagnostic for UNKNOWN_VARIANT
        """
        msg = f"Cannot export catalog: '{variant}' is not a member of enum '{enum_name}'"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_VARIANT,
            message=msg,
            span=None,
            hint=f"Choose one of: {_quoted(variants)}",
            expected=variants,
        )

    # ------------------------------------------------------------------
    # Binding
    # ------------------------------------------------------------------

    @staticmethod
    def binding_conflict(field_name: str, enum_name: str, reason: str) -> Diagnostic:
        """Accessor name collides with something already on the enum.

        Args:
            field_name: Field whose accessor cannot be attached
            enum_name: Target enum name
            reason: What the name collides with

        Returns:
            Diagnostic for BINDING_CONFLICT
        """
        msg = f"Cannot bind field '{field_name}' to {enum_name}: {reason}"
        return Diagnostic(
            code=DiagnosticCode.BINDING_CONFLICT,
            message=msg,
            span=None,
            hint="Rename the field, or pass GeneratorConfig(allow_override=True)",
            field_name=field_name,
        )
