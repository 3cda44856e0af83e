"""ContextVar-based configuration for BookGen.

Provides thread-local defaults using Python's ContextVars (PEP 567).
A DocumentSession reads the context config once, at construction, and keeps
it for its whole lifetime; changing the context afterwards does not affect
sessions that already exist.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    # Explicit config (preferred)
    session = DocumentSession(StringSink(), config=BookConfig(strict_levels=False))

    # Or set a default for every session created in this context
    with book_config_context(BookConfig(toc_include_self=True)):
        session = DocumentSession(StringSink())

"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True, slots=True)
class BookConfig:
    """Immutable document configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Attributes:
        indent_unit: Text emitted once per nesting level before each line
        label_separator: Character following each number in a heading label
        strict_levels: Reject headings that skip a level (h1 -> h3)
        strict_depth: Raise on unmatched closes instead of clamping depth to 0
        strict_assets: Raise on missing/unreadable assets instead of emitting nothing
        toc_capacity: Maximum number of recorded headings (None = unbounded)
        toc_title: Title of the TOC's own heading (None = no heading)
        toc_include_self: List the TOC's own heading inside the TOC
        dark_mode: Use the dark palette for the default stylesheet
        encoding: Text encoding of files read by DocumentSession.include_file()

    """

    indent_unit: str = "  "
    label_separator: str = "."
    strict_levels: bool = True
    strict_depth: bool = True
    strict_assets: bool = True
    toc_capacity: int | None = None
    toc_title: str | None = "Table of Contents"
    toc_include_self: bool = False
    dark_mode: bool = False
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        if self.toc_capacity is not None and self.toc_capacity < 1:
            raise ValueError(f"toc_capacity must be positive or None, got {self.toc_capacity}")
        if not self.label_separator:
            raise ValueError("label_separator must not be empty")

    @classmethod
    def from_dict(cls, config_dict: dict) -> "BookConfig":
        """Create BookConfig from dictionary.

        Useful when settings come from external sources (TOML, YAML, CLI).
        Only includes keys that are valid BookConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                BookConfig attribute names.

        Returns:
            New BookConfig instance with values from dict.

        Example:
            >>> config = BookConfig.from_dict({
            ...     "strict_levels": False,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.strict_levels
            False

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: BookConfig = BookConfig()

_book_config: ContextVar[BookConfig] = ContextVar(
    "book_config",
    default=_DEFAULT_CONFIG,
)


def get_book_config() -> BookConfig:
    """Get current default configuration (thread-local).

    Returns:
        The active BookConfig for this thread/context.

    """
    return _book_config.get()


def set_book_config(config: BookConfig) -> None:
    """Set the default configuration for the current context.

    Args:
        config: BookConfig instance used by sessions created afterwards.

    """
    _book_config.set(config)


def reset_book_config() -> None:
    """Reset to the default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.

    """
    _book_config.set(_DEFAULT_CONFIG)


@contextmanager
def book_config_context(config: BookConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: BookConfig to use within the context.

    Yields:
        None

    Example:
        >>> with book_config_context(BookConfig(strict_levels=False)):
        ...     session = DocumentSession(StringSink())
        ...     # session skips levels without raising
        >>> # Automatically reset to previous config

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _book_config.get()
    _book_config.set(config)
    try:
        yield
    finally:
        _book_config.set(previous)


__all__ = [
    "BookConfig",
    "get_book_config",
    "set_book_config",
    "reset_book_config",
    "book_config_context",
]
