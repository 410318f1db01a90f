"""Business logic for the agent tools."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any

from agent_tools.core.resources import get_provider, get_resources
from agent_tools.errors import MissingFieldError, error_message
from agent_tools.extractors import extract_album_links, extract_image_links
from agent_tools.metrics import record_call
from agent_tools.models.tools import (
    AlbumLink,
    AlbumLinksResponse,
    FetchHtmlResponse,
    ImageLinksResponse,
    SheetsAppendResponse,
)

logger = logging.getLogger(__name__)


def render_flag(value: Any) -> bool:
    """Interpret the render argument; null means the default (render)."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip().lower() not in ("false", "0", "no", "off")
    return bool(value)


@contextmanager
def track_call(tool: str, target: str | None = None) -> Iterator[None]:
    """Record the outcome and duration of a tool call in the metrics."""
    start = time.perf_counter()
    try:
        yield
    except Exception as e:
        elapsed_ms = (time.perf_counter() - start) * 1000
        record_call(tool, success=False, target=target, elapsed_ms=elapsed_ms, error=error_message(e))
        raise

    elapsed_ms = (time.perf_counter() - start) * 1000
    record_call(tool, success=True, target=target, elapsed_ms=elapsed_ms)


async def fetch_page_html(url: str, render: bool | str | None = True) -> FetchHtmlResponse:
    """Load a page and return its HTML.

    Args:
        url: Absolute http(s) URL
        render: Render with the headless browser (default) or do a plain GET

    Returns:
        FetchHtmlResponse with the HTML and the final URL

    Raises:
        MissingFieldError: If url is empty
        ValueError: If the URL is not http(s)
    """
    if not url:
        raise MissingFieldError("url")

    with track_call("fetch_html", target=url):
        provider = get_provider(url, render=render_flag(render))
        result = await provider.render(url)

    return FetchHtmlResponse(html=result.html, final_url=result.final_url)


async def find_album_links(html: str) -> AlbumLinksResponse:
    """Extract album links from HTML using the configured base origin."""
    base_url = get_resources().settings.base_url

    with track_call("extract_album_links"):
        albums = extract_album_links(html, base_url)

    return AlbumLinksResponse(albums=[AlbumLink(**album) for album in albums])


async def find_image_links(html: str) -> ImageLinksResponse:
    """Extract image links from HTML using the configured base origin."""
    base_url = get_resources().settings.base_url

    with track_call("extract_image_links"):
        images = extract_image_links(html, base_url)

    return ImageLinksResponse(images=images)


async def append_sheet_rows(rows: Sequence[Mapping[str, Any]]) -> SheetsAppendResponse:
    """Append rows to the configured spreadsheet tab.

    Args:
        rows: Row objects keyed by column name

    Returns:
        SheetsAppendResponse with the number of rows appended
    """
    sheets = get_resources().sheets

    with track_call("sheets_append_rows", target=sheets.range):
        count = await sheets.append_rows(rows)

    logger.info(f"Appended {count} row(s) to {sheets.range}")
    return SheetsAppendResponse(ok=True, count=count)
