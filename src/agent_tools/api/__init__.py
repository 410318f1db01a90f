"""HTTP API for invoking the agent tools.

This module provides the JSON endpoints of the server:
- Liveness and identity (/, /health)
- Call statistics (/api/stats)
- One endpoint per tool (/tool/{name})
- Tool discovery and dispatch by name (/mcp/describe, /mcp/call)

The endpoints delegate to agent_tools.tools; they only decode the request
body and turn exceptions into JSON error responses.
"""

from agent_tools.api.router import (
    API_ROUTES,
    api_stats,
    health_check,
    mcp_call,
    mcp_describe,
    root,
    routes,
    tool_endpoint,
)

__all__ = [
    "API_ROUTES",
    "api_stats",
    "health_check",
    "mcp_call",
    "mcp_describe",
    "root",
    "routes",
    "tool_endpoint",
]
