"""Hierarchical heading numbering.

Keeps one counter per heading level (h1..h6). Recording a heading bumps the
counter at its level, zeroes every deeper counter, and returns the dotted
label built from the counters above and at that level:

    >>> counter = ChapterCounter()
    >>> counter.record(1)
    '1.'
    >>> counter.record(2)
    '1.1.'
    >>> counter.record(2)
    '1.2.'
    >>> counter.record(1)
    '2.'

Level Policy:
    strict_levels=True rejects a heading whose parent level has no open
    section (h1 followed directly by h3). With strict_levels=False the skip is
    logged and the label carries a 0 in the skipped position ("1.0.1.").

"""

from __future__ import annotations

from bookgen.errors import HeadingLevelError, SkippedHeadingLevelError
from bookgen.utils.logger import get_logger

logger = get_logger(__name__)

MIN_LEVEL = 1
MAX_LEVEL = 6


def format_label(counters: tuple[int, ...] | list[int], level: int, separator: str = ".") -> str:
    """Build the dotted label for a heading at ``level``.

    Examples:
        >>> format_label([1, 2, 0, 0, 0, 0], 2)
        '1.2.'
        >>> format_label([3, 1, 4, 0, 0, 0], 3, separator="-")
        '3-1-4-'
    """
    return "".join(f"{counters[i]}{separator}" for i in range(level))


def _advanced(counters: list[int], level: int) -> list[int]:
    """Counters after one more heading at level: bump it, zero everything deeper."""
    return [*counters[: level - 1], counters[level - 1] + 1] + [0] * (MAX_LEVEL - level)


class ChapterCounter:
    """Per-level chapter counters for one document.

    Thread Safety:
        Not shared. Each DocumentSession owns its own counter.

    """

    __slots__ = ("_counters", "separator", "strict_levels")

    def __init__(self, *, separator: str = ".", strict_levels: bool = True) -> None:
        self.separator = separator
        self.strict_levels = strict_levels
        self._counters = [0] * MAX_LEVEL

    @property
    def counters(self) -> tuple[int, ...]:
        return tuple(self._counters)

    def peek(self, level: int) -> str:
        """Return the label a heading at ``level`` would get, without recording it.

        Performs every check record() does without touching the counters,
        so callers can fail, or write the heading, before committing.

        Raises:
            HeadingLevelError: level outside 1..6
            SkippedHeadingLevelError: parent level not open (strict policy)
        """
        if isinstance(level, bool) or not isinstance(level, int):
            raise HeadingLevelError(level)
        if not MIN_LEVEL <= level <= MAX_LEVEL:
            raise HeadingLevelError(level)
        if level > MIN_LEVEL and self._counters[level - 2] == 0:
            if self.strict_levels:
                raise SkippedHeadingLevelError(level, self.counters)
            logger.warning(
                "Heading level %d recorded without a level %d parent", level, level - 1
            )
        return format_label(_advanced(self._counters, level), level, self.separator)

    def commit(self, level: int) -> None:
        """Advance the counters for a heading already checked with peek()."""
        self._counters = _advanced(self._counters, level)

    def record(self, level: int) -> str:
        """Record a heading and return its label.

        Args:
            level: Heading level, 1 (coarsest) to 6

        Returns:
            Dotted label such as "2.3.1."
        """
        label = self.peek(level)
        self.commit(level)
        return label

    def reset(self) -> None:
        self._counters = [0] * MAX_LEVEL

    def __repr__(self) -> str:
        return f"ChapterCounter(counters={self._counters}, strict_levels={self.strict_levels})"
