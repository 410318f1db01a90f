"""Lazily created resources for the agent tools server."""

from __future__ import annotations

import logging
import threading

from agent_tools.config import Settings
from agent_tools.providers import PageProvider, PlaywrightProvider, RequestsProvider
from agent_tools.sheets import SheetsAppender

logger = logging.getLogger(__name__)


class Resources:
    """Owner of the process-wide providers and API clients.

    Each resource is built the first time it is requested and reused for
    the rest of the process lifetime, until ``shutdown`` is awaited.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings if settings is not None else Settings.from_env()

        self._renderer: PageProvider | None = None
        self._fetcher: PageProvider | None = None
        self._sheets: SheetsAppender | None = None
        self._lock = threading.Lock()

    @property
    def renderer(self) -> PageProvider:
        """Headless browser provider."""
        with self._lock:
            if self._renderer is None:
                self._renderer = PlaywrightProvider(
                    timeout_ms=self.settings.render_timeout_ms,
                    wait_until=self.settings.render_wait_until,
                    max_concurrency=self.settings.render_concurrency,
                    shared_browser=self.settings.shared_browser,
                )
            return self._renderer

    @property
    def fetcher(self) -> PageProvider:
        """Plain HTTP provider used when rendering is turned off."""
        with self._lock:
            if self._fetcher is None:
                self._fetcher = RequestsProvider(timeout=self.settings.fetch_timeout)
            return self._fetcher

    @property
    def sheets(self) -> SheetsAppender:
        """Spreadsheet appender for the configured sheet."""
        with self._lock:
            if self._sheets is None:
                self._sheets = SheetsAppender(
                    sheet_id=self.settings.sheet_id,
                    sheet_name=self.settings.sheet_name,
                    credentials_b64=self.settings.gsa_base64,
                )
            return self._sheets

    async def shutdown(self) -> None:
        """Close every provider that has been created."""
        with self._lock:
            providers = [p for p in (self._renderer, self._fetcher) if p is not None]
            self._renderer = None
            self._fetcher = None
            self._sheets = None

        for provider in providers:
            try:
                await provider.close()
            except Exception as e:
                logger.warning(f"Error closing {type(provider).__name__}: {e}")


_resources: Resources | None = None
_resources_lock = threading.Lock()


def get_resources() -> Resources:
    """Get the process-wide resources, creating them on first use."""
    global _resources
    with _resources_lock:
        if _resources is None:
            _resources = Resources()
        return _resources


def set_resources(resources: Resources | None) -> None:
    """Replace the process-wide resources (None resets to lazy creation)."""
    global _resources
    with _resources_lock:
        _resources = resources


async def shutdown_resources() -> None:
    """Release the process-wide resources if they were ever created."""
    global _resources
    with _resources_lock:
        resources = _resources
        _resources = None

    if resources is not None:
        await resources.shutdown()
        logger.info("Released server resources")


def get_provider(url: str, render: bool = True) -> PageProvider:
    """Get the provider for a URL.

    Args:
        url: The URL to load
        render: Use the headless browser (True) or a plain GET (False)

    Returns:
        A page provider that supports the URL

    Raises:
        ValueError: If no provider supports the URL
    """
    resources = get_resources()
    provider = resources.renderer if render else resources.fetcher

    if provider.supports_url(url):
        return provider

    raise ValueError(f"No provider supports URL: {url}")
