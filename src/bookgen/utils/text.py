"""Text helpers for attribute formatting.

Caller text (titles, paragraphs) is emitted verbatim so that markup can be
injected; only attribute values built from mappings are escaped here.

Example:
    >>> from bookgen.utils.text import format_attrs
    >>> format_attrs({"class": "toc", "hidden": True})
    'class="toc" hidden'
"""

from __future__ import annotations

import html as html_module
from collections.abc import Mapping

Attrs = str | Mapping[str, object] | None


def escape_attr(value: str) -> str:
    """Escape a string for use inside a double-quoted attribute value.

    Examples:
        >>> escape_attr('say "hi" & <bye>')
        'say &quot;hi&quot; &amp; &lt;bye&gt;'
    """
    if not value:
        return ""
    return html_module.escape(value, quote=True).replace("&#x27;", "'")


def format_attrs(attrs: Attrs) -> str:
    """Format element attributes.

    Args:
        attrs: Preformatted attribute string (used as-is), a mapping of
            attribute names to values, or None.
            In a mapping, True renders a bare attribute and None/False
            drop the attribute.

    Returns:
        Attribute text without a leading space ("" when there is none)
    """
    if attrs is None:
        return ""
    if isinstance(attrs, str):
        return attrs.strip()

    parts: list[str] = []
    for name, value in attrs.items():
        if value is None or value is False:
            continue
        if value is True:
            parts.append(name)
        else:
            parts.append(f'{name}="{escape_attr(str(value))}"')
    return " ".join(parts)


def start_tag(name: str, attrs: Attrs = None) -> str:
    """Build an opening (or void) tag.

    Examples:
        >>> start_tag("div", {"class": "toc"})
        '<div class="toc">'
        >>> start_tag("br")
        '<br>'
    """
    formatted = format_attrs(attrs)
    if formatted:
        return f"<{name} {formatted}>"
    return f"<{name}>"
