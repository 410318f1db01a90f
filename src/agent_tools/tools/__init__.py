"""Agent tools and business logic.

This module provides the operations an agent combines into a scraping
workflow (render, extract, append):
- fetch_html: Rendered HTML of a page
- extract_album_links: Album links found in HTML
- extract_image_links: Image links found in HTML
- sheets_append_rows: Rows appended to a Google Sheet

The tools module follows a router -> service pattern:
- router.py: MCP tool definitions and registration
- registry.py: Static catalog used for discovery and dispatch by name
- service.py: Business logic delegating to providers, extractors and sheets
"""

from agent_tools.tools.registry import (
    TOOLS,
    ToolSpec,
    call_tool,
    describe_tools,
    get_tool,
)
from agent_tools.tools.router import (
    extract_album_links,
    extract_image_links,
    fetch_html,
    register_tools,
    sheets_append_rows,
)
from agent_tools.tools.service import (
    append_sheet_rows,
    fetch_page_html,
    find_album_links,
    find_image_links,
)

__all__ = [
    # MCP tool functions
    "fetch_html",
    "extract_album_links",
    "extract_image_links",
    "sheets_append_rows",
    "register_tools",
    # Registry
    "TOOLS",
    "ToolSpec",
    "call_tool",
    "describe_tools",
    "get_tool",
    # Service functions
    "fetch_page_html",
    "find_album_links",
    "find_image_links",
    "append_sheet_rows",
]
