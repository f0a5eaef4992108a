"""Progress lines for the fetch pipeline.

Lines go to stderr: the stdio transport owns stdout.
"""

from __future__ import annotations

import sys

from better_fetch.config import settings


def echo(tag: str, message: str) -> None:
    """Print ``[tag] message`` to stderr unless ``FETCH_LOG`` is off."""
    if settings.fetch_log:
        print(f"[{tag}] {message}", file=sys.stderr)
