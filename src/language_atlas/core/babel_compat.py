"""Babel compatibility layer for optional dependency handling.

Provides centralized import checks for Babel so every Babel-dependent entry
point fails with the same helpful message.

Design Rationale:
    language-atlas supports two installation modes:
    - Generator only: `pip install language-atlas` (no external dependencies)
    - With catalogs: `pip install language-atlas[babel]` (gettext export)

    Generator-only installations never trigger Babel imports.

Usage Pattern:
    from language_atlas.core.babel_compat import require_babel

    def my_function() -> None:
        require_babel("my_function")  # Raises BabelImportError if missing
        from babel.messages.catalog import Catalog  # Safe now
        ...

Python 3.13+.
"""

from __future__ import annotations

from functools import lru_cache

__all__ = [
    "BabelImportError",
    "is_babel_available",
    "require_babel",
]


@lru_cache(maxsize=1)
def _check_babel_available() -> bool:
    """Check if Babel is installed (computed once, cached via lru_cache)."""
    try:
        import babel  # noqa: F401, PLC0415  # pylint: disable=unused-import

        return True
    except ImportError:
        return False


class BabelImportError(ImportError):
    """Raised when Babel is required but not installed."""

    def __init__(self, feature: str) -> None:
        """Create error with feature-specific message.

        Args:
            feature: Name of the feature/function requiring Babel
        """
        message = (
            f"{feature} requires Babel for gettext catalog support. "
            "Install with: pip install language-atlas[babel]"
        )
        super().__init__(message)
        self.feature = feature


def is_babel_available() -> bool:
    """Check if Babel is installed and importable."""
    return _check_babel_available()


def require_babel(feature: str) -> None:
    """Assert that Babel is available, raising BabelImportError if not.

    Args:
        feature: Name of the feature requiring Babel (for error message)

    Raises:
        BabelImportError: If Babel is not installed
    """
    if not _check_babel_available():
        raise BabelImportError(feature)
