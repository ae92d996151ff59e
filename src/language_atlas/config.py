"""Generator configuration.

Provides a single frozen dataclass that encapsulates the knobs shared by the
parser, emitter, and binder. Passing one object keeps the public functions
free of long keyword lists and guarantees every stage sees the same values.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from language_atlas.constants import MAX_SOURCE_SIZE, STUB_NOTE, STUB_SENTINEL

__all__ = ["DEFAULT_CONFIG", "GeneratorConfig"]


@dataclass(frozen=True, slots=True)
class GeneratorConfig:
    """Immutable configuration for the generation pipeline.

    All fields have sensible defaults; ``GeneratorConfig()`` reproduces the
    stock behavior.

    Attributes:
        stub_sentinel: Value returned by stub accessors (default: "ToDo!").
        stub_note: Note carried by the DeprecationWarning of stub accessors.
        warn_on_stub: Emit DeprecationWarning when a stub accessor is called
            (default: True). The ``__deprecated__`` marker is set either way.
        allow_override: Let bound accessors replace existing non-member
            attributes of the enum class (default: False).
        max_source_size: Maximum atlas source size in characters
            (default: 1 MB). Zero disables the limit.

    Example:
        >>> config = GeneratorConfig(stub_sentinel="TODO", warn_on_stub=False)
        >>> config.stub_sentinel
        'TODO'
    """

    stub_sentinel: str = STUB_SENTINEL
    stub_note: str = STUB_NOTE
    warn_on_stub: bool = True
    allow_override: bool = False
    max_source_size: int = MAX_SOURCE_SIZE

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            TypeError: If stub_sentinel or stub_note is not a string.
            ValueError: If max_source_size is negative.
        """
        if not isinstance(self.stub_sentinel, str):
            msg = f"stub_sentinel must be str, got {type(self.stub_sentinel).__name__}"
            raise TypeError(msg)
        if not isinstance(self.stub_note, str):
            msg = f"stub_note must be str, got {type(self.stub_note).__name__}"
            raise TypeError(msg)
        if self.max_source_size < 0:
            msg = f"max_source_size must be >= 0, got {self.max_source_size}"
            raise ValueError(msg)


DEFAULT_CONFIG = GeneratorConfig()
