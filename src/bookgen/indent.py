"""Nesting depth tracking for indented output.

Every opening tag calls enter() and every closing tag calls leave(); the
session asks for the current prefix before writing each line.

Example:
    >>> tracker = IndentTracker()
    >>> tracker.enter()
    >>> tracker.prefix
    '  '
    >>> tracker.leave()
    >>> tracker.prefix
    ''
"""

from __future__ import annotations

from bookgen.errors import DepthUnderflowError
from bookgen.utils.logger import get_logger

logger = get_logger(__name__)


class IndentTracker:
    """Current nesting depth of the document being emitted.

    In strict mode an unmatched leave() raises DepthUnderflowError and leaves
    the depth untouched. In permissive mode the depth is clamped at zero and
    a warning is logged.

    """

    __slots__ = ("_depth", "strict", "unit")

    def __init__(self, unit: str = "  ", *, strict: bool = True) -> None:
        self.unit = unit
        self.strict = strict
        self._depth = 0

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def prefix(self) -> str:
        """Indentation for the next emitted line."""
        return self.unit * max(self._depth, 0)

    def current_indent(self) -> str:
        return self.prefix

    def enter(self) -> None:
        self._depth += 1

    def leave(self, name: str | None = None) -> None:
        """Decrease depth by one.

        Args:
            name: Element being closed, used in diagnostics

        Raises:
            DepthUnderflowError: In strict mode, when depth is already 0
        """
        if self._depth <= 0:
            if self.strict:
                raise DepthUnderflowError(name)
            logger.warning("Unmatched close %s at depth 0; clamping", name or "(anonymous)")
            self._depth = 0
            return
        self._depth -= 1

    def reset(self) -> None:
        self._depth = 0

    def __repr__(self) -> str:
        return f"IndentTracker(depth={self._depth}, strict={self.strict})"
