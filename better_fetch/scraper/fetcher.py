"""Async HTTP fetcher with browser-like headers.

No robots.txt lookup is made: the tool exists to reach pages that automated
fetchers get refused on.
"""

from __future__ import annotations

import httpx

from better_fetch.config import settings
from better_fetch.progress import echo
from better_fetch.scraper.models import FetchFailure, FetchOutcome, RawResponse

_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"


def _request_headers() -> dict[str, str]:
    return {
        "User-Agent": settings.user_agent,
        "Accept": _ACCEPT,
        "Accept-Language": "en-US,en;q=0.5",
        "Cache-Control": "no-cache",
    }


def describe_error(exc: BaseException) -> str:
    """Return the message of *exc*, or its repr when it carries none."""
    return str(exc) or repr(exc)


async def fetch_resource(url: str) -> FetchOutcome:
    """GET *url* once and return a :class:`RawResponse` or :class:`FetchFailure`.

    Redirects are followed inside the client, so the caller only ever sees
    the final response.  Every HTTP status, 4xx/5xx included, comes back as
    a :class:`RawResponse`; deciding what counts as failure is the
    pipeline's job.  Transport errors (DNS, TLS, refused connection,
    timeout) are returned as :class:`FetchFailure` and never raised.
    """
    echo("fetch", f"GET {url}")
    try:
        async with httpx.AsyncClient(
            headers=_request_headers(),
            timeout=settings.request_timeout,
            follow_redirects=True,
        ) as client:
            response = await client.get(url)
            body = response.text
    except httpx.HTTPError as exc:
        echo("fetch", f"✗ {url}: {exc!r}")
        return FetchFailure(message=describe_error(exc))

    echo("fetch", f"HTTP {response.status_code} ({len(body)} chars) from {response.url}")
    return RawResponse(
        url=str(response.url),
        status_code=response.status_code,
        reason_phrase=response.reason_phrase,
        content_type=response.headers.get("content-type", ""),
        body=body,
    )
