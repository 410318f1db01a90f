"""Base provider interface for loading pages."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlparse


@dataclass
class RenderResult:
    """HTML of a loaded page."""

    url: str
    html: str
    final_url: str
    status_code: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


class PageProvider(ABC):
    """Abstract base class for page providers."""

    @abstractmethod
    async def render(self, url: str, **kwargs: Any) -> RenderResult:
        """Load a URL and return its HTML.

        Args:
            url: The URL to load
            **kwargs: Additional provider-specific options

        Returns:
            RenderResult with the document HTML and the final URL reached
        """
        pass

    def supports_url(self, url: str) -> bool:
        """Check if this provider supports the given URL.

        Args:
            url: The URL to check

        Returns:
            True if the URL uses http or https scheme and names a host
        """
        try:
            parsed = urlparse(url)
            return parsed.scheme in ("http", "https") and bool(parsed.netloc)
        except Exception:
            return False

    async def close(self) -> None:
        """Release any long-lived resources held by the provider."""
        return None
