"""Table of contents recording.

Headings are recorded in call order as immutable TocEntry values; the
session renders them once, at the end, as a nested list of anchor links.

Example:
    >>> toc = TocRecorder()
    >>> toc.append(TocEntry(title="Intro", level=1, label="1."))
    >>> toc.append(TocEntry(title="Details", level=2, label="1.1."))
    >>> [e.label for e in toc.select(max_depth=1)]
    ['1.']
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from bookgen.errors import TocCapacityError
from bookgen.headings import MAX_LEVEL


@dataclass(frozen=True, slots=True)
class TocEntry:
    """One recorded heading.

    Attributes:
        title: Heading title as passed by the caller (may contain markup)
        level: Heading level, 1..6
        label: Dotted chapter label, also used as the anchor id

    """

    title: str
    level: int
    label: str

    @property
    def anchor(self) -> str:
        return f"#{self.label}"


class TocRecorder:
    """Append-only, insertion-ordered store of TOC entries.

    Unbounded by default. When a capacity is given, appending past it raises
    TocCapacityError.

    """

    __slots__ = ("_entries", "capacity")

    def __init__(self, capacity: int | None = None) -> None:
        self.capacity = capacity
        self._entries: list[TocEntry] = []

    def check_capacity(self) -> None:
        """Raise TocCapacityError if one more entry would not fit."""
        if self.capacity is not None and len(self._entries) >= self.capacity:
            raise TocCapacityError(self.capacity)

    def append(self, entry: TocEntry) -> None:
        self.check_capacity()
        self._entries.append(entry)

    @property
    def entries(self) -> tuple[TocEntry, ...]:
        return tuple(self._entries)

    def select(self, max_depth: int = 0) -> list[TocEntry]:
        """Entries to list in a rendered TOC.

        Args:
            max_depth: Deepest level to keep. 0 keeps every level.

        Returns:
            Entries with level <= max_depth, in call order

        Raises:
            ValueError: If max_depth is outside 0..6
        """
        if not 0 <= max_depth <= MAX_LEVEL:
            raise ValueError(f"max_depth must be between 0 and {MAX_LEVEL}, got {max_depth}")
        if max_depth == 0:
            return list(self._entries)
        return [entry for entry in self._entries if entry.level <= max_depth]

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TocEntry]:
        return iter(tuple(self._entries))

    def __bool__(self) -> bool:
        return bool(self._entries)
