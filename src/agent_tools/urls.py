"""URL helpers for resolving links found in scraped pages."""

from __future__ import annotations

import re

# Anything of the form "scheme:" counts as already absolute
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")


def has_scheme(url: str) -> bool:
    """Return True if the URL starts with a scheme such as ``https:``."""
    return bool(_SCHEME_RE.match(url))


def normalize_url(url: str | None, base_url: str) -> str:
    """Resolve a possibly relative URL against a base origin.

    Args:
        url: The URL as written in the page (absolute, protocol-relative,
             root-relative or path-relative)
        base_url: Origin used for relative forms (e.g. "https://example.com")

    Returns:
        Absolute URL, or an empty string for empty input. The input is not
        escaped or validated.

    Examples:
        >>> normalize_url("/x", "https://h")
        'https://h/x'
        >>> normalize_url("x", "https://h/")
        'https://h/x'
        >>> normalize_url("//cdn.example.com/a.jpg", "https://h")
        'https://cdn.example.com/a.jpg'
    """
    if not url:
        return ""

    if has_scheme(url):
        return url

    if url.startswith("//"):
        return "https:" + url

    origin = base_url.rstrip("/")
    if url.startswith("/"):
        return origin + url

    return f"{origin}/{url.lstrip('/')}"
