"""Decide whether a response body goes through Markdown conversion."""

from __future__ import annotations

from enum import Enum

_HTML_MARKERS = ("text/html", "application/xhtml")


class ContentKind(str, Enum):
    HTML = "html"
    OPAQUE = "opaque"


def classify(content_type: str | None) -> ContentKind:
    """Return :attr:`ContentKind.HTML` for HTML/XHTML content types.

    Anything else, a missing header included, is passed through as
    :attr:`ContentKind.OPAQUE`.
    """
    lowered = (content_type or "").lower()
    if any(marker in lowered for marker in _HTML_MARKERS):
        return ContentKind.HTML
    return ContentKind.OPAQUE
