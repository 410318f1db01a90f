"""Environment-driven configuration for the agent tools server."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_BASE_URL = "https://yolo66.x.yupoo.com"
DEFAULT_SHEET_NAME = "Sheet1"
DEFAULT_PORT = 10000
DEFAULT_RENDER_TIMEOUT_MS = 90000
DEFAULT_RENDER_CONCURRENCY = 4

# Request bodies above this size are rejected before parsing
MAX_BODY_BYTES = 10 * 1024 * 1024


def _env_flag(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes")


def _env_int(value: str | None, default: int) -> int:
    if value is None or value == "":
        return default
    return int(value)


@dataclass(frozen=True)
class Settings:
    """Server settings.

    Read once from the environment; the instance is immutable so it can be
    shared across concurrent requests.
    """

    base_url: str = DEFAULT_BASE_URL
    sheet_id: str | None = None
    sheet_name: str = DEFAULT_SHEET_NAME
    gsa_base64: str | None = None
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    render_timeout_ms: int = DEFAULT_RENDER_TIMEOUT_MS
    render_wait_until: str = "networkidle"
    render_concurrency: int = DEFAULT_RENDER_CONCURRENCY
    shared_browser: bool = False
    fetch_timeout: int = 30
    enable_mcp_tools: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from (default: os.environ)

        Returns:
            Settings with defaults applied for unset variables

        Raises:
            ValueError: If a numeric variable is not an integer
        """
        env = os.environ if environ is None else environ

        return cls(
            base_url=env.get("BASE_URL") or DEFAULT_BASE_URL,
            sheet_id=env.get("SHEET_ID") or None,
            sheet_name=env.get("SHEET_NAME") or DEFAULT_SHEET_NAME,
            gsa_base64=env.get("GSA_BASE64") or None,
            host=env.get("HOST") or "0.0.0.0",
            port=_env_int(env.get("PORT"), DEFAULT_PORT),
            render_timeout_ms=_env_int(env.get("RENDER_TIMEOUT_MS"), DEFAULT_RENDER_TIMEOUT_MS),
            render_wait_until=env.get("RENDER_WAIT_UNTIL") or "networkidle",
            render_concurrency=max(1, _env_int(env.get("RENDER_CONCURRENCY"), DEFAULT_RENDER_CONCURRENCY)),
            shared_browser=_env_flag(env.get("BROWSER_SHARED"), False),
            fetch_timeout=_env_int(env.get("FETCH_TIMEOUT"), 30),
            enable_mcp_tools=_env_flag(env.get("ENABLE_MCP_TOOLS"), True),
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        )
