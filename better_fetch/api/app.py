"""FastAPI application factory.

Routes
------
The ``fetch`` tool is reachable over two MCP transports:

    /mcp              — Streamable HTTP
    /sse              — Server-Sent Events stream
    /sse/message/     — SSE client → server messages

Every other path answers ``404 Not found``.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from fastmcp.server.http import create_sse_app

from better_fetch.server import SERVER_NAME, SERVER_VERSION, build_server

MCP_PATH = "/mcp"
SSE_PATH = "/sse"
SSE_MESSAGE_PATH = "/sse/message/"


async def _not_found(request: Request, exc: Exception) -> PlainTextResponse:
    return PlainTextResponse("Not found", status_code=404)


def create_app() -> FastAPI:
    """Return a FastAPI application serving a fresh MCP server instance."""
    server = build_server()
    streamable_app = server.http_app(path=MCP_PATH)
    sse_app = create_sse_app(server=server, message_path=SSE_MESSAGE_PATH, sse_path=SSE_PATH)

    # The Streamable HTTP session manager lives for the app's lifespan.
    app = FastAPI(
        title=SERVER_NAME,
        description="MCP endpoints for the Better Fetch `fetch` tool.",
        version=SERVER_VERSION,
        lifespan=streamable_app.lifespan,
    )
    app.add_exception_handler(404, _not_found)

    # Routes are added at their own paths rather than mounted, so /mcp and
    # /sse answer without a trailing-slash redirect.
    app.router.routes.extend(streamable_app.routes)
    app.router.routes.extend(sse_app.routes)
    for middleware in streamable_app.user_middleware:
        app.add_middleware(middleware.cls, *middleware.args, **middleware.kwargs)

    return app


# Module-level instance used by uvicorn:
#   uvicorn better_fetch.api.app:app
app = create_app()
