"""Tests for TocRecorder and TocEntry."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from bookgen.errors import TocCapacityError
from bookgen.toc import TocEntry, TocRecorder


def _entry(level: int, label: str = "1.", title: str = "T") -> TocEntry:
    return TocEntry(title=title, level=level, label=label)


class TestTocEntry:
    """TocEntry value semantics."""

    def test_immutable(self) -> None:
        entry = _entry(1)
        with pytest.raises(AttributeError):
            entry.level = 2  # type: ignore[misc]

    def test_anchor(self) -> None:
        assert _entry(2, label="1.2.").anchor == "#1.2."


class TestTocRecorder:
    """Append, order, and capacity."""

    def test_keeps_call_order(self) -> None:
        toc = TocRecorder()
        for i, level in enumerate([1, 2, 2, 1], start=1):
            toc.append(_entry(level, label=f"{i}."))
        assert [e.label for e in toc] == ["1.", "2.", "3.", "4."]
        assert len(toc) == 4

    def test_entries_is_a_snapshot(self) -> None:
        toc = TocRecorder()
        toc.append(_entry(1))
        snapshot = toc.entries
        toc.append(_entry(1, label="2."))
        assert len(snapshot) == 1

    def test_unbounded_by_default(self) -> None:
        toc = TocRecorder()
        for i in range(500):
            toc.append(_entry(1, label=f"{i}."))
        assert len(toc) == 500

    def test_capacity_exceeded(self) -> None:
        toc = TocRecorder(capacity=2)
        toc.append(_entry(1))
        toc.append(_entry(1))
        with pytest.raises(TocCapacityError) as exc_info:
            toc.append(_entry(1))
        assert exc_info.value.capacity == 2
        assert len(toc) == 2

    def test_check_capacity(self) -> None:
        toc = TocRecorder(capacity=1)
        toc.check_capacity()
        toc.append(_entry(1))
        with pytest.raises(TocCapacityError):
            toc.check_capacity()

    def test_clear(self) -> None:
        toc = TocRecorder()
        toc.append(_entry(1))
        toc.clear()
        assert not toc
        assert len(toc) == 0


class TestSelect:
    """Depth filtering."""

    def test_zero_keeps_everything(self) -> None:
        toc = TocRecorder()
        for level in (1, 2, 3, 6):
            toc.append(_entry(level))
        assert [e.level for e in toc.select(0)] == [1, 2, 3, 6]

    def test_filters_deeper_levels(self) -> None:
        toc = TocRecorder()
        for level in (1, 2, 3, 2, 1):
            toc.append(_entry(level))
        assert [e.level for e in toc.select(2)] == [1, 2, 2, 1]

    @pytest.mark.parametrize("max_depth", [-1, 7])
    def test_rejects_bad_depth(self, max_depth: int) -> None:
        with pytest.raises(ValueError):
            TocRecorder().select(max_depth)

    @given(
        levels=st.lists(st.integers(min_value=1, max_value=6), max_size=30),
        max_depth=st.integers(min_value=0, max_value=6),
    )
    @settings(max_examples=100)
    def test_select_property(self, levels: list[int], max_depth: int) -> None:
        """Exactly the entries with level <= max_depth, in original order."""
        toc = TocRecorder()
        for i, level in enumerate(levels):
            toc.append(_entry(level, label=f"{i}."))
        selected = toc.select(max_depth)
        expected = [
            f"{i}." for i, level in enumerate(levels) if max_depth == 0 or level <= max_depth
        ]
        assert [e.label for e in selected] == expected
