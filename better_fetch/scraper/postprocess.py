"""Post-processing of converted Markdown: links, whitespace, length."""

from __future__ import annotations

import re
from typing import Optional

TRUNCATION_SUFFIX = "\n\n[Content truncated...]"

# [label](target): the label stops at the first "]", the target at the first
# unescaped ")".
_INLINE_LINK = re.compile(r"\[([^\]]*)\]\((?:\\.|[^)\\])*\)")
_EXCESS_NEWLINES = re.compile(r"\n{4,}")


def strip_links(markdown: str) -> str:
    """Rewrite every inline link ``[label](target)`` to just ``label``."""
    return _INLINE_LINK.sub(r"\1", markdown)


def normalize_whitespace(text: str) -> str:
    """Cap blank runs at two blank lines and trim both ends.

    Idempotent: ``normalize_whitespace(normalize_whitespace(t))`` equals
    ``normalize_whitespace(t)``.
    """
    return _EXCESS_NEWLINES.sub("\n\n\n", text).strip()


def truncate(text: str, max_length: Optional[int]) -> str:
    """Hard-cut *text* to *max_length* characters and mark the cut.

    ``None`` means unlimited.  Text at or under the limit is returned as is.
    """
    if max_length is None or len(text) <= max_length:
        return text
    return text[:max_length] + TRUNCATION_SUFFIX


def postprocess(markdown: str, include_links: bool = True, max_length: Optional[int] = None) -> str:
    """Apply link stripping, whitespace normalization and truncation, in order."""
    if not include_links:
        markdown = strip_links(markdown)
    markdown = normalize_whitespace(markdown)
    return truncate(markdown, max_length)
