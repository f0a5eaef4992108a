"""MCP server exposing the ``fetch`` tool.

Run over stdio with ``better-fetch serve`` or over HTTP through
:mod:`better_fetch.api.app`.
"""

from typing import Annotated, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import AfterValidator, AnyUrl, Field, PositiveInt, TypeAdapter

from better_fetch.scraper.pipeline import fetch_markdown

SERVER_NAME = "Better Fetch"
SERVER_VERSION = "1.0.0"

TOOL_DESCRIPTION = (
    "Fetches a URL and returns clean markdown content. Ignores robots.txt. "
    "Use this tool if the built-in web_fetch tool fails or returns "
    "blocked/forbidden responses."
)

_URL_ADAPTER = TypeAdapter(AnyUrl)


def _absolute_url(value: str) -> str:
    """Check that *value* is an absolute URL and hand it back unchanged."""
    _URL_ADAPTER.validate_python(value)
    return value


AbsoluteUrl = Annotated[str, AfterValidator(_absolute_url)]


def build_server() -> FastMCP:
    """Return a :class:`FastMCP` server with the ``fetch`` tool registered."""
    mcp = FastMCP(name=SERVER_NAME, version=SERVER_VERSION)

    @mcp.tool(name="fetch", description=TOOL_DESCRIPTION, output_schema=None)
    async def fetch(
        url: Annotated[
            AbsoluteUrl,
            Field(description="The URL to fetch", json_schema_extra={"format": "uri"}),
        ],
        includeLinks: Annotated[  # noqa: N803
            bool,
            Field(
                description="Whether to preserve hyperlinks in the markdown output (default: true)"
            ),
        ] = True,
        maxLength: Annotated[  # noqa: N803
            Optional[PositiveInt],
            Field(
                description=(
                    "Maximum character length of the output. "
                    "If not specified, returns full content."
                ),
            ),
        ] = None,
    ) -> str:
        result = await fetch_markdown(
            url, include_links=includeLinks, max_length=maxLength
        )
        if result.is_error:
            # The transport turns this into an ``isError`` result with our text.
            raise ToolError(result.text)
        return result.text

    return mcp


# Module-level instance used by the CLI and the HTTP app.
mcp = build_server()
