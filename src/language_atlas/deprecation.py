"""Incomplete-accessor marking for language-atlas.

Fields declared without any language string still get an accessor, so call
sites keep working while translations are pending. Those accessors are
flagged the way deprecated APIs are: a DeprecationWarning on every call and
a ``__deprecated__`` attribute that type checkers and IDEs understand
(PEP 702).

Python 3.13+.
"""

import functools
import warnings
from collections.abc import Callable
from typing import ParamSpec, TypeVar

__all__ = [
    "incomplete",
    "warn_incomplete",
]

P = ParamSpec("P")
R = TypeVar("R")


def warn_incomplete(note: str, *, stacklevel: int = 2) -> None:
    """Issue the DeprecationWarning used for incomplete accessors.

    Args:
        note: Warning text
        stacklevel: Stack level for warning (default: 2, caller's caller)

    Note:
        Uses DeprecationWarning (not FutureWarning) per Python convention.
        DeprecationWarning is filtered by default for end users but visible
        during development when running with -W default or pytest.
    """
    warnings.warn(note, DeprecationWarning, stacklevel=stacklevel)


def incomplete(
    note: str,
    *,
    warn: bool = True,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator marking an accessor as incomplete.

    Preserves the wrapped function's name, docstring, and ``__signature__``.

    Args:
        note: Explanation shown in the warning and stored in ``__deprecated__``
        warn: Emit DeprecationWarning on each call (default: True)

    Returns:
        Decorator function

    Example:
        >>> @incomplete("No language string provided for this field.")
        ... def dummy(self) -> str:
        ...     return "ToDo!"
        >>> dummy.__deprecated__
        'No language string provided for this field.'
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            if warn:
                warn_incomplete(note, stacklevel=3)
            return func(*args, **kwargs)

        wrapper.__deprecated__ = note  # type: ignore[attr-defined]

        incomplete_note = f"\n\n.. deprecated::\n    {note}"
        if wrapper.__doc__:
            wrapper.__doc__ += incomplete_note
        else:
            wrapper.__doc__ = incomplete_note.strip()

        return wrapper

    return decorator
