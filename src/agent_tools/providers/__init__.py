"""Page providers for fetching rendered or raw HTML."""

from agent_tools.providers.base import PageProvider, RenderResult
from agent_tools.providers.playwright_provider import PlaywrightProvider
from agent_tools.providers.requests_provider import RequestsProvider

__all__ = ["PageProvider", "RenderResult", "PlaywrightProvider", "RequestsProvider"]
