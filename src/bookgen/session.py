"""Document session: the stateful assembly engine.

A DocumentSession owns everything that changes while a document is
written: the nesting depth, the chapter counters, the recorded table of
contents, and the output sink. Nothing is module-global, so independent
sessions may run concurrently in different threads.

Every call runs to completion and writes zero or more lines to the sink in
call order. The table of contents is rendered from previously recorded
headings, typically once at the end of the document.

Fatal Errors:
    InvariantError subclasses (bad or skipped heading level, unmatched
    close, TOC capacity) and strict-mode AssetError end the session: the
    error propagates, and every later operation raises SessionStateError.
    Used as a context manager, the sink is flushed and closed on every exit
    path.

Example:
    >>> sink = StringSink()
    >>> with DocumentSession(sink) as doc:
    ...     doc.open_element("body")
    ...     label = doc.heading(1, "Intro")
    ...     doc.close_element("body")
    >>> print(sink.getvalue())
    <body>
      <h1 id="1.">1. Intro</h1>
    </body>
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from types import TracebackType

from bookgen.config import BookConfig, get_book_config
from bookgen.encoding import encode_file_to_sink
from bookgen.errors import AssetError, InvariantError, SessionStateError, SinkClosedError
from bookgen.headings import ChapterCounter
from bookgen.indent import IndentTracker
from bookgen.sinks import OutputSink
from bookgen.toc import TocEntry, TocRecorder
from bookgen.utils.logger import get_logger
from bookgen.utils.text import Attrs, escape_attr, start_tag

logger = get_logger(__name__)


class DocumentSession:
    """One document being written to one sink.

    Thread Safety:
        A session is confined to the thread that drives it. Create one
        session per document; sessions share no state.

    """

    def __init__(self, sink: OutputSink, config: BookConfig | None = None) -> None:
        """Initialize session.

        Args:
            sink: Destination for the generated markup
            config: Document configuration (current context default if None)
        """
        self._config = config or get_book_config()
        self._sink = sink
        self._indent = IndentTracker(self._config.indent_unit, strict=self._config.strict_depth)
        self._chapters = ChapterCounter(
            separator=self._config.label_separator,
            strict_levels=self._config.strict_levels,
        )
        self._toc = TocRecorder(self._config.toc_capacity)
        self._failed = False
        self._closed = False

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def __enter__(self) -> DocumentSession:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def reset(self) -> None:
        """Start a fresh document on the same sink.

        Resets depth and chapter counters to zero, clears the recorded TOC,
        and clears the failure flag.

        Raises:
            SessionStateError: If the session is closed
        """
        if self._closed:
            raise SessionStateError("cannot reset a closed session")
        self._indent.reset()
        self._chapters.reset()
        self._toc.clear()
        self._failed = False
        logger.debug("Session reset")

    def close(self) -> None:
        """Flush and close the sink. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        try:
            self._sink.flush()
        finally:
            self._sink.close()
        if self._indent.depth:
            logger.warning("Session closed with %d unclosed element(s)", self._indent.depth)
        logger.debug("Session closed after %d heading(s)", len(self._toc))

    @property
    def config(self) -> BookConfig:
        return self._config

    @property
    def sink(self) -> OutputSink:
        return self._sink

    @property
    def depth(self) -> int:
        return self._indent.depth

    @property
    def counters(self) -> tuple[int, ...]:
        return self._chapters.counters

    @property
    def toc_entries(self) -> tuple[TocEntry, ...]:
        return self._toc.entries

    @property
    def failed(self) -> bool:
        return self._failed

    @property
    def closed(self) -> bool:
        return self._closed

    @contextmanager
    def _operation(self) -> Iterator[None]:
        """Guard a public operation: refuse when unusable, fail on fatal errors.

        A sink write failure (OSError, SinkClosedError) also fails the session.
        """
        if self._closed:
            raise SessionStateError("session is closed")
        if self._failed:
            raise SessionStateError("session failed on an earlier error; call reset()")
        try:
            yield
        except (InvariantError, AssetError, SinkClosedError, OSError) as exc:
            if not self._failed:
                self._failed = True
                logger.error("Fatal document error: %s", exc)
            raise

    # =========================================================================
    # Primitive emission
    # =========================================================================

    def _write_line(self, text: str) -> None:
        self._sink.write(f"{self._indent.prefix}{text}\n")

    def open_element(self, name: str, attrs: Attrs = None) -> None:
        """Emit an opening tag and increase nesting depth."""
        with self._operation():
            self._write_line(start_tag(name, attrs))
            self._indent.enter()

    def close_element(self, name: str) -> None:
        """Decrease nesting depth and emit a closing tag.

        Raises:
            DepthUnderflowError: If nothing is open (strict_depth)
        """
        with self._operation():
            self._indent.leave(name)
            self._write_line(f"</{name}>")

    def void_element(self, name: str, attrs: Attrs = None) -> None:
        """Emit a tag with no closing counterpart (br, img, link)."""
        with self._operation():
            self._write_line(start_tag(name, attrs))

    def line(self, text: str) -> None:
        """Emit one indented line of text."""
        with self._operation():
            self._write_line(text)

    def raw(self, text: str) -> None:
        """Emit text exactly as given: no indentation, no newline."""
        with self._operation():
            self._sink.write(text)

    def open_block(self, text: str) -> None:
        """Emit a line and indent what follows, without an element (CSS rules)."""
        with self._operation():
            self._write_line(text)
            self._indent.enter()

    def close_block(self, text: str) -> None:
        """Outdent and emit the closing line of a block opened by open_block()."""
        with self._operation():
            self._indent.leave()
            self._write_line(text)

    @contextmanager
    def element(self, name: str, attrs: Attrs = None) -> Iterator[None]:
        """Open an element for the duration of a with block.

        The element is only closed when the block completes normally, so a
        fatal error inside it is not masked by a second one.

        Example:
            >>> with doc.element("ul"):
            ...     doc.line("<li>one</li>")
        """
        self.open_element(name, attrs)
        yield
        self.close_element(name)

    # =========================================================================
    # Headings and table of contents
    # =========================================================================

    def heading(self, level: int, title: str) -> str:
        """Emit a numbered heading and record it for the TOC.

        Args:
            level: Heading level, 1..6
            title: Heading text (inserted verbatim)

        Returns:
            The heading's dotted label, e.g. "2.1."

        Raises:
            HeadingLevelError: level outside 1..6
            SkippedHeadingLevelError: parent level not open (strict_levels)
            TocCapacityError: TOC already holds toc_capacity entries
        """
        with self._operation():
            self._toc.check_capacity()
            label = self._chapters.peek(level)
            anchor = escape_attr(label)
            self._write_line(f'<h{level} id="{anchor}">{label} {title}</h{level}>')
            self._chapters.commit(level)
            self._toc.append(TocEntry(title=title, level=level, label=label))
            return label

    def toc(self, max_depth: int = 0) -> None:
        """Emit the table of contents.

        Lists recorded headings in call order inside a ``div.toc``, one
        ``li.toc-L<level>`` link per heading. The TOC's own heading
        (config.toc_title) is numbered and recorded like any other; it is
        listed only when config.toc_include_self is set.

        Args:
            max_depth: Deepest heading level to list. 0 lists every level.
        """
        with self._operation():
            listed = self._toc.select(max_depth)
            title = self._config.toc_title
            if title is not None:
                self._toc.check_capacity()

            self.open_element("div", {"class": "toc"})
            if title is not None:
                self.heading(1, title)
                if self._config.toc_include_self:
                    listed = self._toc.select(max_depth)

            self.open_element("ul")
            for entry in listed:
                self._write_line(
                    f'<li class="toc-L{entry.level}">'
                    f'<a href="{escape_attr(entry.anchor)}">{entry.label} {entry.title}</a></li>'
                )
            self.close_element("ul")
            self.close_element("div")

    # =========================================================================
    # Assets
    # =========================================================================

    def embed_base64(self, path: str | Path, *, before: str = "", after: str = "") -> int:
        """Write a file's contents to the sink as Base64 text.

        Text is written raw (no indentation, no newline) so it can sit inside
        an attribute such as a data: URI. ``before`` and ``after`` are written
        around the payload only when the file could be opened.

        Returns:
            Number of Base64 characters written (0 for a skipped asset)

        Raises:
            AssetError: If the file cannot be read (strict_assets)
        """
        with self._operation():
            return encode_file_to_sink(
                path,
                self._sink,
                strict=self._config.strict_assets,
                before=before,
                after=after,
            )

    def include_file(self, path: str | Path) -> int:
        """Copy a text file into the document verbatim.

        The whole file is read before anything is written.

        Returns:
            Number of characters written (0 for a skipped asset)

        Raises:
            AssetError: If the file cannot be read (strict_assets)
        """
        with self._operation():
            try:
                content = Path(path).read_text(encoding=self._config.encoding)
            except (OSError, UnicodeDecodeError) as exc:
                if self._config.strict_assets:
                    raise AssetError(path, f"cannot read ({exc})") from exc
                logger.warning("Skipping include %s: %s", path, exc)
                return 0
            self._sink.write(content)
            return len(content)

    def __repr__(self) -> str:
        state = "closed" if self._closed else "failed" if self._failed else "open"
        return f"DocumentSession({state}, depth={self.depth}, headings={len(self._toc)})"
