"""MCP tool definitions for scraping and spreadsheet output."""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP

from agent_tools.models.tools import (
    AlbumLinksResponse,
    FetchHtmlResponse,
    ImageLinksResponse,
    SheetsAppendResponse,
)
from agent_tools.tools.service import (
    append_sheet_rows,
    fetch_page_html,
    find_album_links,
    find_image_links,
)


async def fetch_html(url: str, render: bool = True) -> FetchHtmlResponse:
    """Load a page and return its fully rendered HTML.

    Args:
        url: Absolute URL to load (must be http:// or https://)
        render: Render in headless Chromium and wait for the network to go
                idle (default: True). False fetches the raw HTML with a
                single GET request.

    Returns:
        FetchHtmlResponse with the HTML and the URL reached after redirects
    """
    return await fetch_page_html(url, render)


async def extract_album_links(html: str) -> AlbumLinksResponse:
    """Extract album links from an HTML page.

    Args:
        html: HTML document, usually the output of fetch_html

    Returns:
        AlbumLinksResponse with distinct album URLs and their titles
    """
    return await find_album_links(html)


async def extract_image_links(html: str) -> ImageLinksResponse:
    """Extract image URLs from an HTML page.

    Args:
        html: HTML document, usually the output of fetch_html for an album

    Returns:
        ImageLinksResponse with distinct absolute image URLs in page order
    """
    return await find_image_links(html)


async def sheets_append_rows(rows: list[dict[str, Any]]) -> SheetsAppendResponse:
    """Append rows to the configured Google Sheet.

    Args:
        rows: Row objects keyed by column name ("Album Title", "Album URL",
              "Image 1" .. "Image 8"); missing columns are left empty

    Returns:
        SheetsAppendResponse with the number of rows appended
    """
    return await append_sheet_rows(rows)


def register_tools(mcp: FastMCP) -> None:
    """Register the agent tools on the MCP server.

    Args:
        mcp: FastMCP server instance to register tools on
    """
    mcp.tool()(fetch_html)
    mcp.tool()(extract_album_links)
    mcp.tool()(extract_image_links)
    mcp.tool()(sheets_append_rows)
