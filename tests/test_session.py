"""Tests for DocumentSession, the stateful assembly engine."""

import io
import logging
from pathlib import Path

import pytest

from bookgen import (
    AssetError,
    BookConfig,
    DepthUnderflowError,
    DocumentSession,
    HeadingLevelError,
    SessionStateError,
    SinkClosedError,
    SkippedHeadingLevelError,
    StreamSink,
    StringSink,
    TocCapacityError,
    book_config_context,
)


class TestPrimitives:
    """open/close/void/line/raw emission and indentation."""

    def test_nested_elements_are_indented(self, session: DocumentSession, sink: StringSink) -> None:
        session.open_element("html")
        session.open_element("body", {"class": "main"})
        session.line("Hello")
        session.void_element("br")
        session.close_element("body")
        session.close_element("html")
        assert sink.getvalue() == (
            "<html>\n"
            '  <body class="main">\n'
            "    Hello\n"
            "    <br>\n"
            "  </body>\n"
            "</html>\n"
        )

    def test_string_attrs_used_verbatim(self, session: DocumentSession, sink: StringSink) -> None:
        session.open_element("html", 'lang="en"')
        assert sink.getvalue() == '<html lang="en">\n'

    def test_mapping_attrs_are_escaped(self, session: DocumentSession, sink: StringSink) -> None:
        session.void_element("img", {"alt": 'a "b" & c', "hidden": True, "title": None})
        assert sink.getvalue() == '<img alt="a &quot;b&quot; &amp; c" hidden>\n'

    def test_raw_has_no_indent_or_newline(self, session: DocumentSession, sink: StringSink) -> None:
        session.open_element("p")
        session.raw("x")
        assert sink.getvalue() == "<p>\nx"

    def test_element_context_manager(self, session: DocumentSession, sink: StringSink) -> None:
        with session.element("ul"):
            session.line("<li>one</li>")
        assert sink.getvalue() == "<ul>\n  <li>one</li>\n</ul>\n"
        assert session.depth == 0

    def test_blocks_indent_without_elements(self, session: DocumentSession, sink: StringSink) -> None:
        session.open_block("body {")
        session.line("margin: 0;")
        session.close_block("}")
        assert sink.getvalue() == "body {\n  margin: 0;\n}\n"

    def test_balanced_sequence_restores_depth(self, session: DocumentSession) -> None:
        session.open_element("div")
        before = session.depth
        for _ in range(4):
            session.open_element("div")
        for _ in range(4):
            session.close_element("div")
        assert session.depth == before


class TestDepthUnderflow:
    """Unmatched closes."""

    def test_strict_is_fatal(self, session: DocumentSession, sink: StringSink) -> None:
        with pytest.raises(DepthUnderflowError):
            session.close_element("div")
        assert sink.getvalue() == ""
        assert session.failed
        with pytest.raises(SessionStateError):
            session.line("after")

    def test_permissive_clamps(self, sink: StringSink, permissive: BookConfig) -> None:
        """Extra close: depth stays 0 and the next line has no prefix."""
        session = DocumentSession(sink, config=permissive)
        session.open_element("div")
        session.close_element("div")
        session.close_element("div")
        session.line("next")
        assert session.depth == 0
        assert sink.getvalue().splitlines()[-1] == "next"
        assert not session.failed


class TestHeadings:
    """Numbered headings and their TOC records."""

    def test_heading_line(self, session: DocumentSession, sink: StringSink) -> None:
        session.open_element("body")
        label = session.heading(1, "Intro")
        assert label == "1."
        assert sink.getvalue() == '<body>\n  <h1 id="1.">1. Intro</h1>\n'

    def test_reference_labels(self, session: DocumentSession) -> None:
        labels = [session.heading(level, t) for level, t in [(1, "A"), (2, "B"), (2, "C"), (1, "D")]]
        assert labels == ["1.", "1.1.", "1.2.", "2."]

    def test_entries_recorded_in_order(self, session: DocumentSession) -> None:
        calls = [(1, "A"), (2, "B"), (3, "C"), (2, "D")]
        for level, title in calls:
            session.heading(level, title)
        entries = session.toc_entries
        assert len(entries) == len(calls)
        assert [(e.level, e.title) for e in entries] == calls
        assert [e.label for e in entries] == ["1.", "1.1.", "1.1.1.", "1.2."]

    def test_title_is_verbatim(self, session: DocumentSession, sink: StringSink) -> None:
        session.heading(1, "The <code>depth</code> variable")
        assert "1. The <code>depth</code> variable</h1>" in sink.getvalue()

    @pytest.mark.parametrize("level", [0, 7])
    def test_bad_level_emits_nothing(
        self, session: DocumentSession, sink: StringSink, level: int
    ) -> None:
        with pytest.raises(HeadingLevelError):
            session.heading(level, "X")
        assert sink.getvalue() == ""
        assert session.toc_entries == ()
        assert session.counters == (0,) * 6

    def test_skipped_level_strict(self, session: DocumentSession, sink: StringSink) -> None:
        session.heading(1, "A")
        with pytest.raises(SkippedHeadingLevelError):
            session.heading(3, "C")
        assert len(session.toc_entries) == 1
        assert "C</h3>" not in sink.getvalue()

    def test_skipped_level_permissive(self, sink: StringSink, permissive: BookConfig) -> None:
        session = DocumentSession(sink, config=permissive)
        session.heading(1, "A")
        assert session.heading(3, "C") == "1.0.1."

    def test_custom_separator(self, sink: StringSink) -> None:
        session = DocumentSession(sink, config=BookConfig(label_separator="-"))
        session.heading(1, "A")
        assert session.heading(2, "B") == "1-1-"
        assert '<h2 id="1-1-">1-1- B</h2>' in sink.getvalue()

    def test_capacity_is_checked_before_emitting(self, sink: StringSink) -> None:
        session = DocumentSession(sink, config=BookConfig(toc_capacity=2))
        session.heading(1, "A")
        session.heading(1, "B")
        before = sink.getvalue()
        with pytest.raises(TocCapacityError):
            session.heading(1, "C")
        assert sink.getvalue() == before
        assert session.counters[0] == 2
        assert session.failed


class TestToc:
    """Table of contents rendering."""

    def test_default_rendering(self, session: DocumentSession, sink: StringSink) -> None:
        session.heading(1, "A")
        session.heading(2, "B")
        start = len(sink.getvalue())
        session.toc()
        assert sink.getvalue()[start:] == (
            '<div class="toc">\n'
            '  <h1 id="2.">2. Table of Contents</h1>\n'
            "  <ul>\n"
            '    <li class="toc-L1"><a href="#1.">1. A</a></li>\n'
            '    <li class="toc-L2"><a href="#1.1.">1.1. B</a></li>\n'
            "  </ul>\n"
            "</div>\n"
        )
        assert session.depth == 0

    def test_self_heading_recorded_but_not_listed(
        self, session: DocumentSession, sink: StringSink
    ) -> None:
        """N headings recorded, N-1 listed when the TOC's own heading is excluded."""
        session.heading(1, "A")
        session.heading(1, "B")
        session.toc()
        assert len(session.toc_entries) == 3
        assert sink.getvalue().count("<li ") == 2
        assert 'href="#3."' not in sink.getvalue()

    def test_self_heading_included(self, sink: StringSink) -> None:
        session = DocumentSession(sink, config=BookConfig(toc_include_self=True))
        session.heading(1, "A")
        session.toc()
        assert sink.getvalue().count("<li ") == 2
        assert '<a href="#2.">2. Table of Contents</a>' in sink.getvalue()

    def test_without_title(self, sink: StringSink) -> None:
        session = DocumentSession(sink, config=BookConfig(toc_title=None))
        session.heading(1, "A")
        session.toc()
        assert "<h1" not in sink.getvalue().split('<div class="toc">')[1]
        assert len(session.toc_entries) == 1

    def test_custom_title(self, sink: StringSink) -> None:
        session = DocumentSession(sink, config=BookConfig(toc_title="Contents"))
        session.toc()
        assert '<h1 id="1.">1. Contents</h1>' in sink.getvalue()

    @pytest.mark.parametrize("max_depth,expected", [(0, 4), (1, 2), (2, 3), (3, 4), (6, 4)])
    def test_depth_filter(self, sink: StringSink, max_depth: int, expected: int) -> None:
        session = DocumentSession(sink, config=BookConfig(toc_title=None))
        for level in (1, 2, 3, 1):
            session.heading(level, "T")
        session.toc(max_depth)
        assert sink.getvalue().count("<li ") == expected

    def test_invalid_depth(self, session: DocumentSession, sink: StringSink) -> None:
        with pytest.raises(ValueError):
            session.toc(9)
        assert sink.getvalue() == ""

    def test_toc_is_indented_at_call_site(self, session: DocumentSession, sink: StringSink) -> None:
        session.open_element("body")
        session.toc()
        assert '  <div class="toc">\n' in sink.getvalue()
        assert session.depth == 1

    def test_full_toc_fails_before_opening_container(self, sink: StringSink) -> None:
        session = DocumentSession(sink, config=BookConfig(toc_capacity=1))
        session.heading(1, "A")
        with pytest.raises(TocCapacityError):
            session.toc()
        assert "toc" not in sink.getvalue()


class TestAssets:
    """Base64 embedding and raw inclusion."""

    def test_embed_base64(self, session: DocumentSession, sink: StringSink, tmp_path: Path) -> None:
        asset = tmp_path / "data.bin"
        asset.write_bytes(b"hello")
        session.open_element("p")
        written = session.embed_base64(asset)
        assert written == 8
        assert sink.getvalue() == "<p>\naGVsbG8="

    def test_missing_asset_strict(self, session: DocumentSession, tmp_path: Path) -> None:
        with pytest.raises(AssetError):
            session.embed_base64(tmp_path / "missing.png")
        assert session.failed

    def test_missing_asset_permissive(
        self, sink: StringSink, permissive: BookConfig, tmp_path: Path
    ) -> None:
        session = DocumentSession(sink, config=permissive)
        assert session.embed_base64(tmp_path / "missing.png", before="<img") == 0
        assert sink.getvalue() == ""
        assert not session.failed

    def test_include_file(self, session: DocumentSession, sink: StringSink, tmp_path: Path) -> None:
        snippet = tmp_path / "snippet.html"
        snippet.write_text("<b>bold</b>\n", encoding="utf-8")
        assert session.include_file(snippet) == len("<b>bold</b>\n")
        assert sink.getvalue() == "<b>bold</b>\n"

    def test_include_uses_configured_encoding(self, sink: StringSink, tmp_path: Path) -> None:
        snippet = tmp_path / "latin.html"
        snippet.write_bytes("<p>caf\u00e9</p>".encode("latin-1"))
        session = DocumentSession(sink, BookConfig(encoding="latin-1"))
        session.include_file(snippet)
        assert sink.getvalue() == "<p>caf\u00e9</p>"

    def test_include_missing_strict(self, session: DocumentSession, tmp_path: Path) -> None:
        with pytest.raises(AssetError):
            session.include_file(tmp_path / "missing.html")

    def test_include_missing_permissive(
        self,
        sink: StringSink,
        permissive: BookConfig,
        tmp_path: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        session = DocumentSession(sink, config=permissive)
        with caplog.at_level(logging.WARNING, logger="bookgen"):
            assert session.include_file(tmp_path / "missing.html") == 0
        assert sink.getvalue() == ""
        assert "Skipping include" in caplog.text


class _FailingSink(StringSink):
    """Raises OSError on the write numbered fail_on (1-based)."""

    __slots__ = ("_fail_on", "_writes")

    def __init__(self, fail_on: int) -> None:
        super().__init__()
        self._fail_on = fail_on
        self._writes = 0

    def write(self, text: str) -> None:
        self._writes += 1
        if self._writes == self._fail_on:
            raise OSError("No space left on device")
        super().write(text)


class TestSinkFailure:
    """A sink that stops accepting writes ends the session."""

    def test_failed_heading_write_is_fatal(self) -> None:
        sink = _FailingSink(fail_on=2)
        session = DocumentSession(sink)
        assert session.heading(1, "A") == "1."
        with pytest.raises(OSError):
            session.heading(1, "B")
        assert session.failed
        with pytest.raises(SessionStateError):
            session.heading(1, "C")

    def test_failed_heading_write_leaves_no_gap(self) -> None:
        sink = _FailingSink(fail_on=2)
        session = DocumentSession(sink)
        session.heading(1, "A")
        with pytest.raises(OSError):
            session.heading(1, "B")
        assert session.counters[0] == 1
        assert [entry.label for entry in session.toc_entries] == ["1."]

        session.reset()
        assert session.heading(1, "C") == "1."

    def test_failed_close_write_is_fatal(self) -> None:
        sink = _FailingSink(fail_on=2)
        session = DocumentSession(sink)
        session.open_element("div")
        with pytest.raises(OSError):
            session.close_element("div")
        assert session.failed
        with pytest.raises(SessionStateError):
            session.line("after")
        assert sink.getvalue() == "<div>\n"

    def test_closed_sink_is_fatal(self, sink: StringSink) -> None:
        session = DocumentSession(sink)
        sink.close()
        with pytest.raises(SinkClosedError):
            session.heading(1, "A")
        assert session.failed
        assert session.toc_entries == ()


class TestLifecycle:
    """reset(), close(), context manager, config capture."""

    def test_reset_clears_state(self, session: DocumentSession) -> None:
        session.open_element("div")
        session.heading(1, "A")
        session.reset()
        assert session.depth == 0
        assert session.counters == (0,) * 6
        assert session.toc_entries == ()
        assert session.heading(1, "B") == "1."

    def test_reset_recovers_failed_session(self, session: DocumentSession) -> None:
        with pytest.raises(HeadingLevelError):
            session.heading(0, "X")
        assert session.failed
        session.reset()
        assert not session.failed
        assert session.heading(1, "A") == "1."

    def test_context_manager_closes_sink(self, sink: StringSink) -> None:
        with DocumentSession(sink) as session:
            session.line("x")
        assert sink.closed
        assert session.closed

    def test_sink_closed_on_fatal_error(self, sink: StringSink) -> None:
        with pytest.raises(SkippedHeadingLevelError):
            with DocumentSession(sink) as session:
                session.heading(2, "orphan")
        assert sink.closed
        assert sink.getvalue() == ""

    def test_operations_after_close(self, session: DocumentSession) -> None:
        session.close()
        session.close()
        with pytest.raises(SessionStateError):
            session.heading(1, "A")
        with pytest.raises(SessionStateError):
            session.reset()

    def test_stream_sink_flushed_on_close(self) -> None:
        buffer = io.BytesIO()
        with DocumentSession(StreamSink(buffer)) as session:
            session.heading(1, "Café")
        assert buffer.getvalue().decode("utf-8") == '<h1 id="1.">1. Café</h1>\n'
        assert not buffer.closed

    def test_config_captured_at_construction(self, sink: StringSink) -> None:
        with book_config_context(BookConfig(strict_levels=False)):
            session = DocumentSession(sink)
        session.heading(1, "A")
        assert session.heading(3, "C") == "1.0.1."
        assert session.config.strict_levels is False

    def test_unclosed_elements_warned(
        self, sink: StringSink, caplog: pytest.LogCaptureFixture
    ) -> None:
        session = DocumentSession(sink)
        session.open_element("div")
        with caplog.at_level(logging.WARNING, logger="bookgen"):
            session.close()
        assert "unclosed" in caplog.text

    def test_repr(self, session: DocumentSession) -> None:
        assert "open" in repr(session)
        session.close()
        assert "closed" in repr(session)
