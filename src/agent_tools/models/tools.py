"""Pydantic models for the scraping and spreadsheet tools."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FetchHtmlArgs(BaseModel):
    """Arguments for fetch_html."""

    url: str = Field(description="Absolute http(s) URL of the page to load")
    render: bool = Field(
        default=True,
        description="Render with a headless browser (true) or fetch the raw HTML (false)",
    )


class HtmlArgs(BaseModel):
    """Arguments for the HTML extraction tools."""

    html: str = Field(description="HTML document to parse")


class SheetsAppendArgs(BaseModel):
    """Arguments for sheets_append_rows."""

    rows: list[dict[str, Any]] = Field(
        description=(
            "Rows keyed by column name: 'Album Title', 'Album URL', "
            "'Image 1' through 'Image 8'"
        )
    )


class FetchHtmlResponse(BaseModel):
    """Response model for fetch_html."""

    model_config = ConfigDict(populate_by_name=True)

    html: str = Field(description="The document HTML")
    final_url: str = Field(alias="finalUrl", description="The URL reached after redirects")


class AlbumLink(BaseModel):
    """A link to an album page."""

    album_url: str = Field(description="Absolute album URL")
    album_title: str = Field(default="Untitled", description="Album title")


class AlbumLinksResponse(BaseModel):
    """Response model for extract_album_links."""

    albums: list[AlbumLink] = Field(description="Distinct album links in first-seen order")


class ImageLinksResponse(BaseModel):
    """Response model for extract_image_links."""

    images: list[str] = Field(description="Distinct absolute image URLs in document order")


class SheetsAppendResponse(BaseModel):
    """Response model for sheets_append_rows."""

    ok: bool = Field(default=True, description="Whether the rows were appended")
    count: int = Field(description="Number of rows appended")


class ToolDescriptor(BaseModel):
    """Catalog entry returned by tool discovery."""

    name: str = Field(description="Tool name used with /mcp/call")
    description: str = Field(description="What the tool does")
    input_schema: dict[str, Any] = Field(description="JSON schema of the tool arguments")
