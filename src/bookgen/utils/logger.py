"""Logger lookup under the ``bookgen`` namespace.

Library modules log warnings for permissive-mode recoveries (clamped depth,
skipped heading levels, skipped assets) and one error when a session fails.
Nothing is configured here; attach handlers to the ``bookgen`` logger.
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``, prefixed with ``bookgen.`` if needed.

    >>> get_logger("encoding").name
    'bookgen.encoding'
    """
    if not (name == "bookgen" or name.startswith("bookgen.")):
        name = f"bookgen.{name}"
    return logging.getLogger(name)
