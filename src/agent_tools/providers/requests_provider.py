"""Plain HTTP page provider using the requests library."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import requests

from agent_tools.providers.base import PageProvider, RenderResult

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"
)


class RequestsProvider(PageProvider):
    """Fetch raw HTML without running scripts.

    Used when a caller asks for ``render=false``. There is no caching and no
    retry; a failed request fails the call.
    """

    def __init__(self, timeout: int = 30, user_agent: str = DEFAULT_USER_AGENT) -> None:
        """Initialize the requests provider.

        Args:
            timeout: Request timeout in seconds (default: 30)
            user_agent: User agent string (default: Chrome 131 on macOS)
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self.session = requests.Session()

    async def render(self, url: str, **kwargs: Any) -> RenderResult:
        """Fetch a URL with a single GET request.

        Args:
            url: The URL to fetch
            **kwargs: Additional options
                - timeout: Request timeout in seconds
                - headers: Custom HTTP headers

        Returns:
            RenderResult with the response body and the URL after redirects

        Raises:
            requests.RequestException: If the request fails or returns an error status
        """
        timeout = kwargs.get("timeout", self.timeout)
        headers = dict(kwargs.get("headers") or {})
        headers.setdefault("User-Agent", self.user_agent)

        logger.debug(f"Fetching {url} without rendering")

        # Run requests in thread pool to avoid blocking
        loop = asyncio.get_event_loop()
        response = await loop.run_in_executor(
            None,
            lambda: self.session.get(url, headers=headers, timeout=timeout),
        )
        response.raise_for_status()

        return RenderResult(
            url=url,
            html=response.text,
            final_url=response.url or url,
            status_code=response.status_code,
            metadata={
                "content_type": response.headers.get("Content-Type"),
                "elapsed_ms": response.elapsed.total_seconds() * 1000,
            },
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()
