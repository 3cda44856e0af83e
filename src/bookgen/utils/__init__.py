"""Utility modules for BookGen.

Provides:
- text: escape_attr, format_attrs, start_tag for tag formatting
- logger: get_logger for logging
"""

from bookgen.utils.logger import get_logger
from bookgen.utils.text import escape_attr, format_attrs, start_tag

__all__ = [
    "escape_attr",
    "format_attrs",
    "get_logger",
    "start_tag",
]
