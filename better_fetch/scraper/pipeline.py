"""The ``fetch`` pipeline.

``run_fetch`` drives one invocation from a URL to a :class:`ToolResult`:

    ready → fetch → classify → convert | passthrough → post-process → result

Any failure returns early as an error result; nothing after a failed fetch
runs, and no exception leaves :func:`run_fetch`.
"""

from __future__ import annotations

from typing import Optional

from better_fetch.progress import echo
from better_fetch.scraper.classifier import ContentKind, classify
from better_fetch.scraper.converter import HtmlToMarkdown, convert_html, ensure_engine_ready
from better_fetch.scraper.fetcher import describe_error, fetch_resource
from better_fetch.scraper.models import FetchFailure, FetchRequest, ToolResult
from better_fetch.scraper.postprocess import postprocess, truncate
from better_fetch.scraper.response import error_result, text_result


async def run_fetch(
    request: FetchRequest,
    engine: Optional[HtmlToMarkdown] = None,
) -> ToolResult:
    """Fetch ``request.url`` and return clean text, or an error result.

    Args:
        request: URL plus output options.
        engine: Conversion engine override (default: markdownify).

    Returns:
        A :class:`ToolResult`.  ``is_error`` is set for transport failures,
        non-2xx statuses and any exception raised along the way; never for
        a successful fetch, however much it was truncated.
    """
    try:
        await ensure_engine_ready()

        # --------------------------------------------------------------
        # 1 — Fetch
        # --------------------------------------------------------------
        outcome = await fetch_resource(request.url)
        if isinstance(outcome, FetchFailure):
            return error_result(outcome.message)
        if not outcome.ok:
            return error_result(f"{outcome.status_code} {outcome.reason_phrase}".rstrip())

        # --------------------------------------------------------------
        # 2 — Classify; non-HTML bodies only get truncated
        # --------------------------------------------------------------
        if classify(outcome.content_type) is ContentKind.OPAQUE:
            echo("fetch", f"passthrough for {outcome.content_type or 'unknown content type'}")
            return text_result(truncate(outcome.body, request.max_length))

        # --------------------------------------------------------------
        # 3 & 4 — Convert and post-process
        # --------------------------------------------------------------
        markdown = convert_html(outcome.body, engine)
        return text_result(
            postprocess(markdown, request.include_links, request.max_length)
        )
    except Exception as exc:
        echo("fetch", f"✗ {request.url}: {exc!r}")
        return error_result(describe_error(exc))


async def fetch_markdown(
    url: str,
    include_links: bool = True,
    max_length: Optional[int] = None,
) -> ToolResult:
    """Keyword-argument entry point used by the tool and the CLI.

    An invalid ``max_length`` comes back as an error result before any
    network call is made.
    """
    try:
        request = FetchRequest(url=url, include_links=include_links, max_length=max_length)
    except ValueError as exc:
        return error_result(describe_error(exc))
    return await run_fetch(request)
