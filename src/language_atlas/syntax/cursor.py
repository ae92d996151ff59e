"""Immutable cursor infrastructure for type-safe parsing.

Implements the immutable cursor pattern for zero-`None` parsing.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - EOF is a state (is_eof), not a return value
    - Every advance() returns NEW cursor (prevents infinite loops)
    - Line:column computed on-demand (O(n) only for errors)

Line Ending Support:
    LF and CRLF are supported (\\n is the line delimiter). CR-only line
    endings produce incorrect line numbers in diagnostics.
"""

from dataclasses import dataclass, field

from language_atlas.diagnostics import ErrorTemplate, SourceSpan

__all__ = ["Cursor", "LineOffsetCache", "ParseError", "ParseResult"]

# Whitespace accepted between atlas tokens. Tabs are allowed: atlas sources
# are commonly embedded in indented Python string literals.
_WHITESPACE: frozenset[str] = frozenset(" \t\n\r")


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> cursor.current
        'h'
        >>> cursor.advance().current
        'e'
        >>> cursor.current  # Original unchanged (immutability)
        'h'
        >>> Cursor("hi", 2).is_eof
        True
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        """True if position >= source length."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Get current character.

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            diagnostic = ErrorTemplate.unexpected_eof(self.pos)
            raise EOFError(diagnostic.message)
        return self.source[self.pos]

    def peek(self, offset: int = 0) -> str | None:
        """Peek at character with offset without advancing.

        Returns None ONLY when peeking beyond EOF.
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions (clamped to EOF)."""
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def slice_to(self, end_pos: int) -> str:
        """Extract source slice from current position to end_pos (exclusive).

        Example:
            >>> cursor = Cursor("hello world", 0)
            >>> start_cursor = cursor
            >>> while not cursor.is_eof and cursor.current != ' ':
            ...     cursor = cursor.advance()
            >>> start_cursor.slice_to(cursor.pos)
            'hello'
        """
        return self.source[self.pos : end_pos]

    def skip_whitespace(self) -> "Cursor":
        """Skip spaces, tabs, and line endings."""
        c = self
        while not c.is_eof and c.current in _WHITESPACE:
            c = c.advance()
        return c

    def skip_to_line_end(self) -> "Cursor":
        """Advance to the next line ending character (not consumed)."""
        cursor = self
        while not cursor.is_eof and cursor.current not in ("\n", "\r"):
            cursor = cursor.advance()
        return cursor

    def expect(self, char: str) -> "Cursor | None":
        """Consume character if it matches expected, return None otherwise."""
        if not self.is_eof and self.current == char:
            return self.advance()
        return None

    def compute_line_col(self) -> tuple[int, int]:
        """Compute 1-indexed (line, column) for current position.

        Performance:
            O(n) where n = current position. Only call for error reporting.

        Example:
            >>> Cursor("line1\\nline2", 8).compute_line_col()
            (2, 3)
        """
        line = self.source.count("\n", 0, self.pos) + 1
        last_newline = self.source.rfind("\n", 0, self.pos)
        col = self.pos - last_newline if last_newline >= 0 else self.pos + 1
        return (line, col)

    def source_span(self, end_pos: int | None = None) -> SourceSpan:
        """Build a diagnostic SourceSpan starting at the current position."""
        line, col = self.compute_line_col()
        pos = min(self.pos, len(self.source))
        end = pos if end_pos is None else max(pos, end_pos)
        return SourceSpan(start=pos, end=end, line=line, column=col)


class LineOffsetCache:
    """Cached line offset computation for efficient position lookups.

    Precomputes line start offsets in O(n) single pass, then provides
    O(log n) lookups using binary search. Use this when you need to
    compute line:column for multiple positions in the same source.

    Example:
        >>> cache = LineOffsetCache("line1\\nline2\\nline3")
        >>> cache.get_line_col(0)
        (1, 1)
        >>> cache.get_line_col(8)
        (2, 3)

    Thread Safety:
        Thread-safe. Internal state is only set during __init__.
    """

    __slots__ = ("_offsets", "_source_len")

    def __init__(self, source: str) -> None:
        offsets = [0]
        for i, char in enumerate(source):
            if char == "\n":
                offsets.append(i + 1)
        self._offsets: tuple[int, ...] = tuple(offsets)
        self._source_len = len(source)

    def get_line_col(self, pos: int) -> tuple[int, int]:
        """Get 1-indexed (line, column) for position using binary search."""
        if pos < 0:
            pos = 0
        elif pos > self._source_len:
            pos = self._source_len

        left, right = 0, len(self._offsets) - 1
        while left < right:
            mid = (left + right + 1) // 2
            if self._offsets[mid] <= pos:
                left = mid
            else:
                right = mid - 1

        return (left + 1, pos - self._offsets[left] + 1)

    def source_span(self, start: int, end: int) -> SourceSpan:
        """Build a diagnostic SourceSpan for an offset range."""
        line, col = self.get_line_col(start)
        return SourceSpan(start=start, end=max(start, end), line=line, column=col)


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """Parser result containing parsed value and new cursor position.

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> result = ParseResult('h', cursor.advance())
        >>> result.value
        'h'
        >>> result.cursor.pos
        1
    """

    value: T
    cursor: Cursor


@dataclass(frozen=True, slots=True)
class ParseError:
    """Parse error with location and context.

    Example:
        >>> error = ParseError("Expected '}'", Cursor("hello", 2), expected=('}',))
        >>> error.format_error()
        "1:3: Expected '}' (expected: '}')"
    """

    message: str
    cursor: Cursor
    expected: tuple[str, ...] = field(default_factory=tuple)

    def format_error(self) -> str:
        """Format error with line:column."""
        line, col = self.cursor.compute_line_col()
        error_msg = f"{line}:{col}: {self.message}"

        if self.expected:
            expected_str = ", ".join(f"'{e}'" for e in self.expected)
            error_msg += f" (expected: {expected_str})"

        return error_msg

    def format_with_context(self, context_lines: int = 2) -> str:
        """Format error with source context and pointer.

        Example:
            >>> source = "LanguageEnum: L\\ngreeting {\\n  English \\"Hi\\"\\n}"
            >>> error = ParseError("Expected ':'", Cursor(source, 37))
            >>> print(error.format_with_context(context_lines=0))
            3:11: Expected ':'
            <BLANKLINE>
               3 |   English "Hi"
                             ^
        """
        line, col = self.cursor.compute_line_col()
        lines = self.cursor.source.split("\n")

        result_lines = [self.format_error(), ""]

        start_line = max(1, line - context_lines)
        end_line = min(len(lines), line + context_lines)

        for i in range(start_line, end_line + 1):
            line_num_str = f"{i:4} | "
            result_lines.append(line_num_str + lines[i - 1])

            if i == line:
                pointer = " " * (len(line_num_str) + col - 1) + "^"
                result_lines.append(pointer)

        return "\n".join(result_lines)

    def source_span(self) -> SourceSpan:
        """Location of the error as a diagnostic SourceSpan."""
        return self.cursor.source_span()
