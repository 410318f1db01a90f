"""MCP and HTTP server for the agent tools."""

from __future__ import annotations

import asyncio
import logging

import uvicorn
from mcp.server.fastmcp import FastMCP

from agent_tools.api.router import API_ROUTES
from agent_tools.core.resources import get_resources, shutdown_resources
from agent_tools.tools.router import register_tools

logger = logging.getLogger(__name__)

# Streamable HTTP lives under /mcp/stream so /mcp/describe and /mcp/call stay plain JSON routes
mcp = FastMCP(
    "Agent Tools",
    instructions=(
        "Tools for scraping photo albums into a spreadsheet: render a page "
        "with fetch_html, find albums with extract_album_links, collect "
        "images with extract_image_links, then write rows with "
        "sheets_append_rows."
    ),
    stateless_http=True,
    streamable_http_path="/mcp/stream",
)

for _path, _methods, _endpoint in API_ROUTES:
    mcp.custom_route(_path, methods=_methods)(_endpoint)

if get_resources().settings.enable_mcp_tools:
    register_tools(mcp)


async def serve(transport: str = "streamable-http") -> None:
    """Serve the HTTP app until shutdown, then release resources.

    Args:
        transport: MCP transport mounted next to the JSON routes
                   ('streamable-http' or 'sse')
    """
    if transport == "streamable-http":
        app = mcp.streamable_http_app()
    elif transport == "sse":
        app = mcp.sse_app()
    else:
        raise ValueError(f"Unsupported transport: {transport}")

    config = uvicorn.Config(
        app,
        host=mcp.settings.host,
        port=mcp.settings.port,
        log_level=get_resources().settings.log_level.lower(),
    )
    server = uvicorn.Server(config)

    try:
        await server.serve()
    finally:
        await shutdown_resources()


def run_server(transport: str = "streamable-http", host: str | None = None, port: int | None = None) -> None:
    """Run the server.

    Args:
        transport: Transport type ('streamable-http' or 'sse')
        host: Host to bind to (default: HOST setting)
        port: Port to bind to (default: PORT setting)
    """
    settings = get_resources().settings
    mcp.settings.host = host or settings.host
    mcp.settings.port = port or settings.port

    logger.info(f"Starting agent tools server on {mcp.settings.host}:{mcp.settings.port} ({transport})")
    asyncio.run(serve(transport))
