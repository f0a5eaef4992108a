"""HTML → Markdown conversion.

The conversion engine sits behind the :class:`HtmlToMarkdown` protocol.  The
default engine is *markdownify* running over a BeautifulSoup tree that has
been pruned according to a :class:`~better_fetch.scraper.models.ConversionConfig`.

The engine is warmed up once per process behind :func:`ensure_engine_ready`;
concurrent callers await the same warm-up task instead of starting their own.
"""

from __future__ import annotations

import asyncio
from typing import Optional, Protocol

from bs4 import BeautifulSoup
from bs4.element import Tag
from markdownify import ATX, ATX_CLOSED, UNDERLINED, MarkdownConverter

from better_fetch.progress import echo
from better_fetch.scraper.models import DEFAULT_CONVERSION_CONFIG, ConversionConfig

# ---------------------------------------------------------------------------
# Preprocessing tables
# ---------------------------------------------------------------------------
_NAVIGATION_TAGS = ["nav", "aside", "menu"]
# Page-level chrome; kept when it belongs to an <article> or <main>.
_PAGE_CHROME_TAGS = ["header", "footer"]
_NAVIGATION_ROLES = {
    "navigation",
    "banner",
    "contentinfo",
    "complementary",
    "search",
    "menu",
    "menubar",
}
_FORM_TAGS = ["form", "input", "button", "select", "textarea", "label", "fieldset"]

# Whole id or class tokens; compound names like "has-sidebar" do not match.
_BOILERPLATE_NAMES = frozenset(
    {
        "nav",
        "navbar",
        "navigation",
        "menu",
        "sidebar",
        "breadcrumb",
        "breadcrumbs",
        "ad",
        "ads",
        "advert",
        "advertisement",
        "sponsored",
        "cookie-banner",
        "cookie-consent",
        "cookie-notice",
        "share-buttons",
        "social-share",
    }
)
_CONTENT_TAGS = ["main", "article"]

_HEADING_STYLES = {
    "atx": ATX,
    "atx_closed": ATX_CLOSED,
    "underlined": UNDERLINED,
}


class HtmlToMarkdown(Protocol):
    """Anything that can turn HTML into Markdown under a fixed config."""

    def convert(self, html: str, config: ConversionConfig) -> str:
        ...


def _remove(tags: list) -> None:
    for tag in tags:
        if not tag.decomposed:
            tag.decompose()


def _holds_content(tag: Tag) -> bool:
    return tag.find(_CONTENT_TAGS) is not None


def _remove_chrome(tags: list) -> None:
    """Remove page chrome, sparing anything that wraps <main> or <article>."""
    _remove([tag for tag in tags if not _holds_content(tag)])


def _looks_like_boilerplate(tag: Tag) -> bool:
    tokens = [name.lower() for name in tag.get("class") or []]
    element_id = tag.get("id")
    if isinstance(element_id, str):
        tokens.extend(element_id.lower().split())
    return any(token in _BOILERPLATE_NAMES for token in tokens)


def _strip_navigation(soup: BeautifulSoup, aggressive: bool) -> None:
    _remove_chrome(soup.find_all(_NAVIGATION_TAGS))
    _remove_chrome(
        [
            tag
            for tag in soup.find_all(_PAGE_CHROME_TAGS)
            if tag.find_parent(_CONTENT_TAGS) is None
        ]
    )
    _remove_chrome(
        soup.find_all(
            lambda tag: (tag.get("role") or "").lower() in _NAVIGATION_ROLES
        )
    )
    if aggressive:
        _remove_chrome(
            [
                tag
                for tag in soup.find_all(True)
                if tag.name not in ("html", "body", "main", "article")
                and _looks_like_boilerplate(tag)
            ]
        )


def preprocess(soup: BeautifulSoup, config: ConversionConfig) -> BeautifulSoup:
    """Prune *soup* in place before conversion and return it.

    Tags in ``config.strip_tags`` are always removed together with their
    contents.  Navigation and form removal only run when preprocessing is
    enabled; the ``"aggressive"`` preset also drops elements whose id or
    class marks them as menus, sidebars, breadcrumbs, ads or cookie banners.
    """
    _remove(soup.find_all(list(config.strip_tags)))

    if not config.preprocessing_enabled:
        return soup

    if config.remove_navigation:
        _strip_navigation(soup, aggressive=config.preprocessing_preset == "aggressive")
    if config.remove_forms:
        _remove(soup.find_all(_FORM_TAGS))
    return soup


class MarkdownifyEngine:
    """:class:`HtmlToMarkdown` backed by BeautifulSoup + markdownify."""

    parser = "html.parser"

    def _markdown_converter(self, config: ConversionConfig) -> MarkdownConverter:
        try:
            heading_style = _HEADING_STYLES[config.heading_style]
        except KeyError:
            raise ValueError(f"Unsupported heading style {config.heading_style!r}") from None
        # markdownify always fences <pre> blocks with backticks.
        if config.code_block_style != "backticks":
            raise ValueError(f"Unsupported code block style {config.code_block_style!r}")
        return MarkdownConverter(heading_style=heading_style, bullets="-")

    def convert(self, html: str, config: ConversionConfig = DEFAULT_CONVERSION_CONFIG) -> str:
        soup = preprocess(BeautifulSoup(html, self.parser), config)
        return self._markdown_converter(config).convert_soup(soup)


default_engine = MarkdownifyEngine()


def convert_html(
    html: str,
    engine: Optional[HtmlToMarkdown] = None,
    config: ConversionConfig = DEFAULT_CONVERSION_CONFIG,
) -> str:
    """Convert *html* to Markdown with *engine* (default: markdownify)."""
    return (engine or default_engine).convert(html, config)


# ---------------------------------------------------------------------------
# Readiness barrier
# ---------------------------------------------------------------------------
_engine_warm = False
_warm_up_task: Optional[asyncio.Task] = None


def _warm_up() -> None:
    global _engine_warm
    default_engine.convert("<p>ready</p>")
    _engine_warm = True
    echo("convert", "engine ready")


async def ensure_engine_ready() -> None:
    """Wait until the conversion engine has been warmed up once.

    The first caller schedules the warm-up; everyone else awaits the same
    task.  A warm-up that failed is retried by the next caller.
    """
    global _warm_up_task
    if _engine_warm:
        return
    loop = asyncio.get_running_loop()
    task = _warm_up_task
    if task is None or task.get_loop() is not loop or task.done():
        task = loop.create_task(asyncio.to_thread(_warm_up))
        _warm_up_task = task
    await asyncio.shield(task)
