"""HTML extraction of album and image links."""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Tag

from agent_tools.urls import normalize_url

# Most specific first; every tier runs, the first to reach a URL wins its title
ALBUM_SELECTORS: tuple[str, ...] = (
    ".album__main a",
    ".categories__main a",
    ".show__main a",
    "a",
)

ALBUM_URL_PATTERN = re.compile(r"/albums?/")

UNTITLED = "Untitled"

# Preferred first: the original-resolution attribute, then the plain source
IMAGE_SOURCE_ATTRIBUTES: tuple[str, ...] = ("data-origin-src", "src")

IMAGE_EXCLUDE_MARKERS: tuple[str, ...] = ("sprite", "placeholder", "loading")


def _anchor_title(anchor: Tag) -> str:
    title = anchor.get("title")
    if isinstance(title, str) and title.strip():
        return title.strip()

    text = anchor.get_text().strip()
    return text or UNTITLED


def extract_album_links(html: str, base_url: str) -> list[dict[str, str]]:
    """Extract album links from an HTML page.

    Args:
        html: The HTML content to process
        base_url: Origin used to resolve relative hrefs

    Returns:
        List of {"album_url", "album_title"} dictionaries, one per distinct
        album URL, in first-seen order across the selector tiers
    """
    soup = BeautifulSoup(html or "", "lxml")
    albums: list[dict[str, str]] = []
    seen: set[str] = set()

    for selector in ALBUM_SELECTORS:
        for anchor in soup.select(selector):
            url = normalize_url(anchor.get("href") or "", base_url)
            if not url or url in seen or not ALBUM_URL_PATTERN.search(url):
                continue

            seen.add(url)
            albums.append({"album_url": url, "album_title": _anchor_title(anchor)})

    return albums


def image_source(img: Tag) -> str:
    """Return the best source attribute of an <img>, or "" if it has none."""
    for attribute in IMAGE_SOURCE_ATTRIBUTES:
        value = img.get(attribute)
        if isinstance(value, str) and value:
            return value
    return ""


def is_excluded_image(src: str) -> bool:
    """Check whether a raw image source looks like a sprite or placeholder."""
    return any(marker in src for marker in IMAGE_EXCLUDE_MARKERS)


def extract_image_links(html: str, base_url: str) -> list[str]:
    """Extract image URLs from an HTML page.

    Args:
        html: The HTML content to process
        base_url: Origin used to resolve relative sources

    Returns:
        Absolute image URLs in document order, without duplicates
    """
    soup = BeautifulSoup(html or "", "lxml")
    images: list[str] = []
    seen: set[str] = set()

    for img in soup.find_all("img"):
        src = image_source(img)
        if not src or is_excluded_image(src):
            continue

        url = normalize_url(src, base_url)
        if url not in seen:
            seen.add(url)
            images.append(url)

    return images
