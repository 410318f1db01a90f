"""Pydantic data models for tool arguments and responses.

This module defines the data structures exchanged over the HTTP surface
and the MCP tool interface:
- Tool arguments (FetchHtmlArgs, HtmlArgs, SheetsAppendArgs)
- Tool results (FetchHtmlResponse, AlbumLinksResponse, ImageLinksResponse,
  SheetsAppendResponse)
- Tool discovery (ToolDescriptor)
"""

from agent_tools.models.tools import (
    AlbumLink,
    AlbumLinksResponse,
    FetchHtmlArgs,
    FetchHtmlResponse,
    HtmlArgs,
    ImageLinksResponse,
    SheetsAppendArgs,
    SheetsAppendResponse,
    ToolDescriptor,
)

__all__ = [
    # Arguments
    "FetchHtmlArgs",
    "HtmlArgs",
    "SheetsAppendArgs",
    # Results
    "FetchHtmlResponse",
    "AlbumLink",
    "AlbumLinksResponse",
    "ImageLinksResponse",
    "SheetsAppendResponse",
    # Discovery
    "ToolDescriptor",
]
