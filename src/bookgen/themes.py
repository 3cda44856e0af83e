"""Default stylesheet and color palettes.

The default theme is a single serif column with styled code blocks, tables,
quotes, figures, and per-level TOC entries (``li.toc-L1`` .. ``li.toc-L6``).
Book.default_style() writes it inline inside ``<style>``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Palette:
    """Colors used by the default stylesheet."""

    text_primary: str
    text_secondary: str
    text_muted: str
    bg_page: str
    bg_subtle: str
    bg_surface: str
    border_primary: str
    border_accent: str


LIGHT = Palette(
    text_primary="#333333",
    text_secondary="#666666",
    text_muted="#888888",
    bg_page="#ffffff",
    bg_subtle="#eeeeee",
    bg_surface="#f5f5f5",
    border_primary="#cccccc",
    border_accent="#bbbbbb",
)

DARK = Palette(
    text_primary="#e6e6e6",
    text_secondary="#b3b3b3",
    text_muted="#9a9a9a",
    bg_page="#121212",
    bg_subtle="#242424",
    bg_surface="#1e1e1e",
    border_primary="#3a3a3a",
    border_accent="#4a4a4a",
)


@dataclass(frozen=True, slots=True)
class CssRule:
    """One CSS rule.

    Compact rules render on a single line; the others render as an indented
    block with one declaration per line.
    """

    selector: str
    declarations: tuple[str, ...]
    compact: bool = False

    def statements(self) -> list[str]:
        """Declarations terminated with ';' (nested blocks are left as-is)."""
        return [d if d.endswith("}") else f"{d};" for d in self.declarations]

    def inline(self) -> str:
        """Render the whole rule on one line.

        Examples:
            >>> CssRule("a", ("color: red", "margin: 0")).inline()
            'a { color: red; margin: 0; }'
        """
        return f"{self.selector} {{ {' '.join(self.statements())} }}"


def _toc_level_rules(p: Palette) -> list[CssRule]:
    # (padding-left, font-size, color) per level
    styles = [
        ("20px", "0.95em", p.text_primary),
        ("40px", "0.9em", p.text_secondary),
        ("40px", "0.9em", p.text_secondary),
        ("50px", "0.9em", p.text_muted),
        ("60px", "0.9em", p.text_muted),
    ]
    rules = [
        CssRule(
            "li.toc-L1",
            ("font-weight: bold", "margin-top: 10px", f"color: {p.text_primary}"),
            compact=True,
        )
    ]
    for level, (padding, size, color) in enumerate(styles, start=2):
        rules.append(
            CssRule(
                f"li.toc-L{level}",
                (f"padding-left: {padding}", f"font-size: {size}", f"color: {color}"),
                compact=True,
            )
        )
    return rules


def stylesheet(palette: Palette = LIGHT) -> list[CssRule]:
    """Rules of the default theme, in emission order."""
    p = palette
    return [
        CssRule(
            "body",
            (
                "max-width: 800px",
                "margin: 40px auto",
                "padding: 0 20px",
                f"color: {p.text_primary}",
                f"background: {p.bg_page}",
                "font-family: serif",
            ),
        ),
        CssRule("h1", (f"border-bottom: 2px solid {p.border_primary}", "padding-bottom: 10px"), compact=True),
        CssRule("code", (f"background: {p.bg_surface}", "padding: 2px", "font-family: monospace")),
        CssRule(
            "pre",
            (
                f"background: {p.bg_surface}",
                "padding: 15px",
                "overflow-x: auto",
                f"border-left: 4px solid {p.border_accent}",
            ),
        ),
        CssRule("a", ("text-decoration: underline", "color: inherit"), compact=True),
        CssRule(".toc ul", ("list-style: none", "padding-left: 0"), compact=True),
        CssRule(".toc a", ("text-decoration: none",), compact=True),
        *_toc_level_rules(p),
        CssRule("table", ("border-collapse: collapse", "width: 100%", "margin: 20px 0"), compact=True),
        CssRule("th, td", (f"border: 1px solid {p.border_primary}", "padding: 8px 10px"), compact=True),
        CssRule(
            "th",
            (f"background: {p.bg_subtle}", "font-weight: bold", "text-align: left"),
            compact=True,
        ),
        CssRule(
            "caption",
            ("caption-side: bottom", "font-size: 0.9em", f"color: {p.text_muted}", "margin-top: 8px"),
            compact=True,
        ),
        CssRule("@media print", ("body { max-width: 100%; margin: 0; }",), compact=True),
        CssRule(
            "blockquote",
            (
                "margin: 1.5em 0",
                "padding: 0.75em 1.5em",
                f"border-left: 4px solid {p.border_accent}",
                f"background: {p.bg_surface}",
                f"color: {p.text_secondary}",
            ),
        ),
        CssRule("blockquote p", ("margin: 0", "font-style: italic")),
        CssRule("blockquote footer", ("margin-top: 0.5em", "font-size: 0.9em", f"color: {p.text_muted}")),
        CssRule(
            "figcaption",
            ("margin-top: 0.5em", "font-size: 0.9em", f"color: {p.text_muted}", "text-align: center"),
        ),
        CssRule("figure", ("margin: 1.5em auto", "text-align: center", "width: fit-content")),
        CssRule("figure img", ("display: block", "margin: 0 auto")),
    ]
