"""Whitespace and comment handling for the atlas parser.

Atlas sources allow whitespace and line comments between any two tokens:

    trivia ::= (whitespace | "//" comment | "#" comment)*

Comments run to the end of the line. They never appear inside string
literals; inside a type annotation they are dropped from the annotation text.
"""

from language_atlas.syntax.cursor import Cursor


def skip_comment(cursor: Cursor) -> Cursor:
    """Skip one line comment if the cursor is at its start.

    Args:
        cursor: Current position in source

    Returns:
        Cursor at the line ending after the comment, or unchanged if the
        cursor is not at a comment
    """
    if cursor.is_eof:
        return cursor
    if cursor.current == "#" or (cursor.current == "/" and cursor.peek(1) == "/"):
        return cursor.skip_to_line_end()
    return cursor


def skip_trivia(cursor: Cursor) -> Cursor:
    """Skip whitespace and comments.

    Design:
        Immutable cursor ensures termination: the loop exits as soon as a
        pass makes no progress.
    """
    while True:
        after = skip_comment(cursor.skip_whitespace())
        if after.pos == cursor.pos:
            return cursor
        cursor = after
