"""HTTP routes for tool invocation, discovery and status."""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from agent_tools import SERVICE_NAME, __version__
from agent_tools.config import MAX_BODY_BYTES
from agent_tools.errors import MissingFieldError, UnknownToolError, error_message
from agent_tools.metrics import get_metrics
from agent_tools.tools.registry import TOOLS, call_tool, describe_tools

logger = logging.getLogger(__name__)


class RequestError(Exception):
    """A request that is rejected before any tool runs."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


async def read_json_body(request: Request) -> dict[str, Any]:
    """Decode the request body as a JSON object.

    An empty body decodes to an empty object.

    Raises:
        RequestError: If the body is too large, not JSON, or not an object
    """
    content_length = request.headers.get("content-length", "")
    if content_length.isdigit() and int(content_length) > MAX_BODY_BYTES:
        raise RequestError("request entity too large", status_code=413)

    # Chunked uploads carry no Content-Length, so count while reading
    chunks: list[bytes] = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > MAX_BODY_BYTES:
            raise RequestError("request entity too large", status_code=413)
        chunks.append(chunk)
    body = b"".join(chunks)

    if not body.strip():
        return {}

    try:
        data = json.loads(body)
    except ValueError as e:
        raise RequestError(f"Invalid JSON body: {e}") from e

    if not isinstance(data, dict):
        raise RequestError("Request body must be a JSON object")

    return data


async def _run_tool(name: str, arguments: dict[str, Any]) -> dict[str, Any] | JSONResponse:
    try:
        return await call_tool(name, arguments)
    except (MissingFieldError, UnknownToolError) as e:
        return _error(str(e), 400)
    except Exception as e:
        logger.warning(f"Tool {name} failed: {type(e).__name__}: {e}")
        return _error(error_message(e), 500)


async def root(request: Request) -> JSONResponse:
    """Identify the service and list its tools."""
    return JSONResponse({
        "ok": True,
        "service": SERVICE_NAME,
        "version": __version__,
        "tools": list(TOOLS),
    })


async def health_check(request: Request) -> JSONResponse:
    """Health check endpoint for container orchestration."""
    return JSONResponse({"ok": True})


async def api_stats(request: Request) -> JSONResponse:
    """Get tool call statistics as JSON."""
    return JSONResponse(get_metrics().to_dict())


async def tool_endpoint(request: Request) -> JSONResponse:
    """Run the tool named in the path with the JSON body as arguments.

    Returns:
        JSONResponse with the tool result, or {"error": ...} with status
        400 (missing field, bad body), 404 (unknown tool), 413 (body too
        large) or 500 (the tool raised)
    """
    name = request.path_params["name"]
    if name not in TOOLS:
        return _error(f"Unknown tool: {name}", 404)

    try:
        arguments = await read_json_body(request)
    except RequestError as e:
        return _error(str(e), e.status_code)

    result = await _run_tool(name, arguments)
    if isinstance(result, JSONResponse):
        return result
    return JSONResponse(result)


async def mcp_describe(request: Request) -> JSONResponse:
    """List the available tools with their input schemas."""
    return JSONResponse({"tools": [tool.model_dump() for tool in describe_tools()]})


async def mcp_call(request: Request) -> JSONResponse:
    """Run a tool by name.

    Body: {"name": <tool name>, "arguments": {...}}

    Returns:
        JSONResponse with {"content": <tool result>} or {"error": ...}
    """
    try:
        body = await read_json_body(request)
    except RequestError as e:
        return _error(str(e), e.status_code)

    name = body.get("name")
    if not name:
        return _error("name is required", 400)

    arguments = body.get("arguments")
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        return _error("arguments must be an object", 400)

    result = await _run_tool(str(name), arguments)
    if isinstance(result, JSONResponse):
        return result
    return JSONResponse({"content": result})


Endpoint = Callable[[Request], Awaitable[JSONResponse]]

API_ROUTES: list[tuple[str, list[str], Endpoint]] = [
    ("/", ["GET"], root),
    ("/health", ["GET"], health_check),
    ("/api/stats", ["GET"], api_stats),
    ("/tool/{name}", ["POST"], tool_endpoint),
    ("/mcp/describe", ["POST", "GET"], mcp_describe),
    ("/mcp/call", ["POST"], mcp_call),
]


def routes() -> list[Route]:
    """Build Starlette routes for the API endpoints."""
    return [Route(path, endpoint, methods=methods) for path, methods, endpoint in API_ROUTES]
