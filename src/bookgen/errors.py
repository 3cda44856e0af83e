"""Exception classes for BookGen.

Two families matter to callers:

- InvariantError: programmer errors (bad heading level, skipped level,
  unmatched close, TOC capacity). Fatal for the session that raised them.
- AssetError: an external file could not be read while embedding it.
"""

from __future__ import annotations

from pathlib import Path


class BookGenError(Exception):
    """Base exception for all BookGen errors.
    
    Subclass this for specific error categories.
    """

    pass


class InvariantError(BookGenError):
    """A structural invariant of the document was violated.

    Continuing would produce a mislabeled or malformed document, so the
    session that raised it refuses further operations.
    """

    pass


class HeadingLevelError(InvariantError, ValueError):
    """Heading level outside 1..6."""

    def __init__(self, level: int) -> None:
        self.level = level
        super().__init__(f"Heading level must be between 1 and 6, got {level}")


class SkippedHeadingLevelError(InvariantError):
    """Heading recorded without its parent level.
    
    Raised under the strict level policy when, e.g., an h3 follows an h1
    with no h2 in between.
    """

    def __init__(self, level: int, counters: tuple[int, ...]) -> None:
        """Initialize skipped level error.
        
        Args:
            level: Level of the rejected heading
            counters: Chapter counters at the time of the call
        """
        self.level = level
        self.counters = counters
        super().__init__(
            f"Heading level {level} requires an open level {level - 1} section "
            f"(counters: {list(counters)})"
        )


class DepthUnderflowError(InvariantError):
    """More closing tags than opening tags."""

    def __init__(self, name: str | None = None) -> None:
        self.name = name
        target = f" </{name}>" if name else ""
        super().__init__(f"Unmatched close{target}: nesting depth is already 0")


class TocCapacityError(InvariantError):
    """The table of contents reached its configured capacity."""

    def __init__(self, capacity: int) -> None:
        self.capacity = capacity
        super().__init__(f"Table of contents is full ({capacity} entries)")


class AssetError(BookGenError):
    """An asset file could not be opened or read.
    
    The underlying OSError is chained as __cause__.
    """

    def __init__(self, path: str | Path, message: str) -> None:
        """Initialize asset error.
        
        Args:
            path: Path of the asset being embedded
            message: Description of the failure
        """
        self.path = str(path)
        super().__init__(f"Asset '{self.path}': {message}")


class SessionStateError(BookGenError):
    """Operation attempted on a closed or failed session."""

    pass


class SinkClosedError(BookGenError):
    """Write attempted on a closed output sink."""

    pass
