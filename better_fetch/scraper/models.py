"""Data models for the fetch pipeline.

Every value here lives for a single ``fetch`` invocation only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union


@dataclass
class FetchRequest:
    """The caller's input for one invocation."""

    url: str
    include_links: bool = True
    max_length: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_length is not None and self.max_length <= 0:
            raise ValueError(
                f"maxLength must be a positive integer, got {self.max_length}"
            )


@dataclass
class RawResponse:
    """The final HTTP response for a URL fetch, after redirects."""

    url: str
    status_code: int
    reason_phrase: str
    content_type: str
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code <= 299


@dataclass
class FetchFailure:
    """A fetch that never produced an HTTP response (DNS, TLS, timeout, ...)."""

    message: str


FetchOutcome = Union[RawResponse, FetchFailure]


@dataclass(frozen=True)
class ConversionConfig:
    """Fixed HTML → Markdown conversion settings.

    Not exposed to callers; see :data:`DEFAULT_CONVERSION_CONFIG`.
    """

    preprocessing_enabled: bool = True
    preprocessing_preset: str = "aggressive"
    remove_navigation: bool = True
    remove_forms: bool = True
    heading_style: str = "atx"
    code_block_style: str = "backticks"
    strip_tags: Tuple[str, ...] = (
        "script",
        "style",
        "noscript",
        "iframe",
        "svg",
        "img",
        "picture",
        "figure",
    )


DEFAULT_CONVERSION_CONFIG = ConversionConfig()


@dataclass
class ToolResult:
    """The visible output of the whole pipeline."""

    text: str
    is_error: bool = False

    def as_envelope(self) -> Dict[str, Any]:
        """Return the wire shape ``{content: [...], isError?}``."""
        envelope: Dict[str, Any] = {
            "content": [{"type": "text", "text": self.text}],
        }
        if self.is_error:
            envelope["isError"] = True
        return envelope
