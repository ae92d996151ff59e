"""Atlas parser package.

Exports:
    AtlasParser: Parser class (configurable size limit)
"""

from .core import AtlasParser

__all__ = ["AtlasParser"]
