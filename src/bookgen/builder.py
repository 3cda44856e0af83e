"""Book: HTML tag helpers over a DocumentSession.

Each helper is a thin composition of the session primitives
(open_element, close_element, void_element, line). Text arguments are
inserted verbatim so callers can inject inline markup such as
``<code>`` or ``<i>``; escape untrusted text yourself.

Optional attributes follow one rule everywhere: None or "" means no
attributes, a string is used as-is, a mapping is formatted and escaped.

Example:
    >>> from bookgen import Book, StringSink
    >>> sink = StringSink()
    >>> with Book(sink) as book:
    ...     book.root({"lang": "en"})
    ...     book.metadata()
    ...     book.doctitle("Example")
    ...     book.end_metadata()
    ...     book.body()
    ...     _ = book.heading(1, "Intro")
    ...     book.text("Hello.")
    ...     book.toc()
    ...     book.end_body()
    ...     book.end_root()
"""

from __future__ import annotations

import mimetypes
from pathlib import Path

from bookgen.session import DocumentSession
from bookgen.themes import DARK, LIGHT, stylesheet
from bookgen.utils.text import Attrs, escape_attr, format_attrs


def _optional(attrs: Attrs) -> Attrs:
    """Treat "" like None."""
    return attrs or None


def _trailing(attrs: Attrs) -> str:
    """Formatted attributes with a leading space, or ""."""
    formatted = format_attrs(attrs)
    return f" {formatted}" if formatted else ""


class Book(DocumentSession):
    """DocumentSession with one helper per common HTML construct."""

    # =========================================================================
    # Document structure
    # =========================================================================

    def root(self, attrs: Attrs = None) -> None:
        self.open_element("html", _optional(attrs))

    def end_root(self) -> None:
        self.close_element("html")

    def metadata(self) -> None:
        self.open_element("head")

    def end_metadata(self) -> None:
        self.close_element("head")

    def body(self, attrs: Attrs = None) -> None:
        self.open_element("body", _optional(attrs))

    def end_body(self) -> None:
        self.close_element("body")

    # =========================================================================
    # Metadata and styling
    # =========================================================================

    def doctitle(self, text: str) -> None:
        self.open_element("title")
        self.line(text)
        self.close_element("title")

    def stylesheet(self, path: str) -> None:
        """Link an external stylesheet. Use inside the head element."""
        self.void_element("link", {"rel": "stylesheet", "href": path})

    def default_style(self) -> None:
        """Emit the built-in theme inline. Use inside the head element.

        The palette follows config.dark_mode.
        """
        palette = DARK if self.config.dark_mode else LIGHT
        self.open_element("style")
        for rule in stylesheet(palette):
            if rule.compact:
                self.line(rule.inline())
                continue
            self.open_block(f"{rule.selector} {{")
            for statement in rule.statements():
                self.line(statement)
            self.close_block("}")
        self.close_element("style")

    # =========================================================================
    # Text and code
    # =========================================================================

    def text(self, text: str) -> None:
        """Emit an indented line of text."""
        self.line(text)

    def code_block(self, code: str) -> None:
        """Emit a ``<pre>`` block.

        Whitespace inside the block is preserved, so only the opening tag is
        indented. Escape ``<``, ``>`` and ``&`` in code yourself.
        """
        self.line(f"<pre>{code}</pre>")

    def code_inline(self, code: str) -> None:
        self.open_element("code")
        self.line(code)
        self.close_element("code")

    # =========================================================================
    # Lists
    # =========================================================================

    def li(self, text: str) -> None:
        self.open_element("li")
        self.line(text)
        self.close_element("li")

    def ul(self, attrs: Attrs = None) -> None:
        self.open_element("ul", _optional(attrs))

    def end_ul(self) -> None:
        self.close_element("ul")

    def ol(self, attrs: Attrs = None) -> None:
        self.open_element("ol", _optional(attrs))

    def end_ol(self) -> None:
        self.close_element("ol")

    # =========================================================================
    # Tables
    # =========================================================================

    def table(self, attrs: Attrs = None) -> None:
        self.open_element("table", _optional(attrs))

    def end_table(self) -> None:
        self.close_element("table")

    def table_row(self, attrs: Attrs = None) -> None:
        self.open_element("tr", _optional(attrs))

    def end_table_row(self) -> None:
        self.close_element("tr")

    def th(self, text: str, attrs: Attrs = None) -> None:
        """Table header cell; attrs for colspan, align, etc."""
        self._cell("th", text, attrs)

    def td(self, text: str, attrs: Attrs = None) -> None:
        """Table data cell; attrs for colspan, align, etc."""
        self._cell("td", text, attrs)

    def _cell(self, tag: str, text: str, attrs: Attrs) -> None:
        self.open_element(tag, _optional(attrs))
        self.line(text)
        self.close_element(tag)

    def caption(self, text: str) -> None:
        self.open_element("caption")
        self.line(text)
        self.close_element("caption")

    # =========================================================================
    # Images
    # =========================================================================

    def img(self, src: str, attrs: Attrs = None) -> None:
        """Image referenced by path or URL."""
        self.line(f'<img src="{escape_attr(src)}"{_trailing(attrs)}>')

    def img_embedded(self, path: str | Path, mime: str | None = None, attrs: Attrs = None) -> int:
        """Image inlined as a Base64 ``data:`` URI.

        Nothing at all is emitted when the file is missing and
        config.strict_assets is off.

        Args:
            path: Image file to embed
            mime: Media type (guessed from the file name if None)
            attrs: Extra attributes after src

        Returns:
            Number of Base64 characters written
        """
        media_type = mime or mimetypes.guess_type(str(path))[0] or "application/octet-stream"
        return self.embed_base64(
            path,
            before=f'{self._indent.prefix}<img src="data:{media_type};base64,',
            after=f'"{_trailing(attrs)}>\n',
        )

    def figure(self, attrs: Attrs = None) -> None:
        self.open_element("figure", _optional(attrs))

    def end_figure(self) -> None:
        self.close_element("figure")

    def figcaption(self, text: str) -> None:
        self.open_element("figcaption")
        self.line(text)
        self.close_element("figcaption")

    # =========================================================================
    # Breaks, links, quotes
    # =========================================================================

    def linebreak(self, count: int = 1) -> None:
        for _ in range(count):
            self.void_element("br")

    def pagebreak(self) -> None:
        self.line('<div style="break-after: page;"></div>')

    def link(self, url: str, label: str) -> None:
        self.line(f'<a href="{escape_attr(url)}">{label}</a>')

    def quote(self, text: str, author: str | None = None) -> None:
        """Block quote with an optional attribution footer."""
        self.open_element("blockquote")
        self.open_element("p")
        self.line(text)
        self.close_element("p")
        if author:
            self.open_element("footer")
            self.line(f"— {author}")
            self.close_element("footer")
        self.close_element("blockquote")
