"""
BookGen: linear, indented HTML document generation

Write an HTML book one call at a time: open and close elements, add
numbered headings, inline assets as Base64, and finish with an
auto-numbered table of contents. Output streams straight to a sink; nothing
is held as a tree and nothing is read back.

Quick Start:
    >>> from bookgen import Book, StringSink
    >>> sink = StringSink()
    >>> with Book(sink) as book:
    ...     book.body()
    ...     _ = book.heading(1, "Intro")
    ...     _ = book.heading(2, "Motivation")
    ...     book.toc()
    ...     book.end_body()
    >>> print(sink.getvalue())
    <body>
      <h1 id="1.">1. Intro</h1>
      <h2 id="1.1.">1.1. Motivation</h2>
      ...

    >>> # Or write straight to a file
    >>> from bookgen import FileSink
    >>> with Book(FileSink("book.html")) as book:
    ...     _ = book.heading(1, "Intro")

Installation:
    pip install bookgen              # Zero runtime dependencies
"""

from bookgen.builder import Book
from bookgen.config import (
    BookConfig,
    book_config_context,
    get_book_config,
    reset_book_config,
    set_book_config,
)
from bookgen.encoding import encode_bytes, encode_file_to_sink, encode_window, iter_encoded
from bookgen.errors import (
    AssetError,
    BookGenError,
    DepthUnderflowError,
    HeadingLevelError,
    InvariantError,
    SessionStateError,
    SinkClosedError,
    SkippedHeadingLevelError,
    TocCapacityError,
)
from bookgen.headings import ChapterCounter, format_label
from bookgen.indent import IndentTracker
from bookgen.session import DocumentSession
from bookgen.sinks import FileSink, OutputSink, StreamSink, StringSink
from bookgen.themes import DARK, LIGHT, Palette, stylesheet
from bookgen.toc import TocEntry, TocRecorder

__version__ = "0.1.0"


def render_book(build, config: BookConfig | None = None) -> str:
    """Run ``build(book)`` against an in-memory Book and return the HTML.

    Args:
        build: Callable receiving the Book
        config: Document configuration (current context default if None)

    Returns:
        The generated document

    Example:
        >>> html = render_book(lambda b: b.heading(1, "Only chapter"))
        >>> html
        '<h1 id="1.">1. Only chapter</h1>\\n'
    """
    sink = StringSink()
    with Book(sink, config=config) as book:
        build(book)
    return sink.getvalue()


__all__ = [  # noqa: RUF022 - grouped by category for maintainability
    # Version
    "__version__",
    # High-level
    "Book",
    "DocumentSession",
    "render_book",
    # Engine components
    "ChapterCounter",
    "IndentTracker",
    "TocEntry",
    "TocRecorder",
    "format_label",
    # Asset encoding
    "encode_bytes",
    "encode_file_to_sink",
    "encode_window",
    "iter_encoded",
    # Sinks
    "FileSink",
    "OutputSink",
    "StreamSink",
    "StringSink",
    # Themes
    "DARK",
    "LIGHT",
    "Palette",
    "stylesheet",
    # Configuration (ContextVar-based)
    "BookConfig",
    "get_book_config",
    "set_book_config",
    "reset_book_config",
    "book_config_context",
    # Errors
    "AssetError",
    "BookGenError",
    "DepthUnderflowError",
    "HeadingLevelError",
    "InvariantError",
    "SessionStateError",
    "SinkClosedError",
    "SkippedHeadingLevelError",
    "TocCapacityError",
]
