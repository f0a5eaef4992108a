"""Better Fetch CLI — fetch a page once, or run the MCP server.

Usage:
    better-fetch --help
    python cli/main.py --help

Commands:
    fetch   → run the fetch pipeline once and print the result
    serve   → expose the ``fetch`` tool over stdio or HTTP
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from better_fetch.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio
from typing import Optional

import typer

from better_fetch.config import settings

app = typer.Typer(
    name="better-fetch",
    help="Fetch URLs as clean Markdown, or serve the MCP fetch tool.",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# fetch
# ---------------------------------------------------------------------------
@app.command("fetch")
def fetch(
    url: str = typer.Argument(..., help="URL to fetch."),
    include_links: bool = typer.Option(
        True, "--links/--no-links", help="Keep hyperlinks in the Markdown output."
    ),
    max_length: Optional[int] = typer.Option(
        None, "--max-length", min=1, help="Truncate the output to this many characters."
    ),
) -> None:
    """Fetch URL and print clean Markdown (or the raw body for non-HTML)."""
    from better_fetch.scraper import fetch_markdown

    result = asyncio.run(
        fetch_markdown(url, include_links=include_links, max_length=max_length)
    )
    if result.is_error:
        typer.echo(result.text, err=True)
        raise typer.Exit(code=1)
    typer.echo(result.text)


# ---------------------------------------------------------------------------
# serve
# ---------------------------------------------------------------------------
@app.command("serve")
def serve(
    transport: str = typer.Option(
        settings.mcp_transport, help="Transport: stdio | http."
    ),
    host: str = typer.Option(settings.server_host, help="Bind address (http only)."),
    port: int = typer.Option(settings.server_port, help="Bind port (http only)."),
) -> None:
    """Run the MCP server exposing the ``fetch`` tool."""
    if transport == "stdio":
        from better_fetch.server import mcp

        mcp.run(transport="stdio", show_banner=False)
    elif transport == "http":
        import uvicorn

        typer.echo(f"[serve] MCP endpoints on http://{host}:{port}/mcp/ and /sse/", err=True)
        uvicorn.run("better_fetch.api.app:app", host=host, port=port)
    else:
        typer.echo(f"[serve] Unknown transport {transport!r}. Use: stdio | http", err=True)
        raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
