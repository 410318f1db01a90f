"""Core infrastructure shared by the tool modules.

This module owns the long-lived objects every request reuses:
- Settings loaded from the environment
- Page providers (headless browser and plain HTTP)
- The Google Sheets appender

They are created on first use and released by ``shutdown_resources``.
"""

from agent_tools.core.resources import (
    Resources,
    get_provider,
    get_resources,
    set_resources,
    shutdown_resources,
)

__all__ = [
    "Resources",
    "get_provider",
    "get_resources",
    "set_resources",
    "shutdown_resources",
]
