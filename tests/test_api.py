"""Integration tests for the HTTP API routes."""

from __future__ import annotations

from dataclasses import replace
from unittest.mock import AsyncMock, Mock, patch

import pytest
from starlette.applications import Starlette
from starlette.testclient import TestClient

from agent_tools.api import routes
from agent_tools.config import MAX_BODY_BYTES, Settings
from agent_tools.core.resources import Resources, set_resources
from agent_tools.providers import RenderResult


@pytest.fixture
def client() -> TestClient:
    """Test client for the API routes."""
    return TestClient(Starlette(routes=routes()))


class TestStatusRoutes:
    """Tests for identity, health and stats."""

    def test_root(self, client: TestClient) -> None:
        response = client.get("/")

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["service"] == "agent-tools-server"
        assert "fetch_html" in body["tools"]

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"ok": True}

    def test_stats_counts_calls(self, client: TestClient) -> None:
        client.post("/tool/extract_image_links", json={"html": "<img src='a.jpg'>"})
        client.post("/tool/fetch_html", json={"url": "ftp://h"})

        stats = client.get("/api/stats").json()

        assert stats["calls"]["total"] == 2
        assert stats["calls"]["failed"] == 1
        assert stats["calls"]["by_tool"] == {"extract_image_links": 1, "fetch_html": 1}
        assert stats["recent_errors"][0]["error"] == "No provider supports URL: ftp://h"


class TestToolRoutes:
    """Tests for POST /tool/{name}."""

    def test_fetch_html(self, client: TestClient) -> None:
        provider = Mock()
        provider.render = AsyncMock(
            return_value=RenderResult(url="https://h/a", html="<html>a</html>", final_url="https://h/b")
        )

        with patch("agent_tools.tools.service.get_provider", return_value=provider):
            response = client.post("/tool/fetch_html", json={"url": "https://h/a"})

        assert response.status_code == 200
        assert response.json() == {"html": "<html>a</html>", "finalUrl": "https://h/b"}

    def test_fetch_html_missing_url(self, client: TestClient) -> None:
        """Test that a missing url is a 400, not a 500."""
        response = client.post("/tool/fetch_html", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "url is required"}

    def test_fetch_html_empty_url(self, client: TestClient) -> None:
        response = client.post("/tool/fetch_html", json={"url": ""})

        assert response.status_code == 400

    def test_fetch_html_navigation_error(self, client: TestClient) -> None:
        """Test that provider errors surface their message with a 500."""
        provider = Mock()
        provider.render = AsyncMock(side_effect=RuntimeError("net::ERR_NAME_NOT_RESOLVED at https://nope"))

        with patch("agent_tools.tools.service.get_provider", return_value=provider):
            response = client.post("/tool/fetch_html", json={"url": "https://nope"})

        assert response.status_code == 500
        assert response.json() == {"error": "net::ERR_NAME_NOT_RESOLVED at https://nope"}

    def test_extract_album_links(self, client: TestClient) -> None:
        html = '<div class="album__main"><a href="/albums/1" title="One">x</a></div>'

        response = client.post("/tool/extract_album_links", json={"html": html})

        assert response.status_code == 200
        assert response.json() == {"albums": [{"album_url": "https://h/albums/1", "album_title": "One"}]}

    def test_extract_image_links(self, client: TestClient) -> None:
        html = '<img src="a.jpg"><img data-origin-src="b.jpg" src="low.jpg"><img src="sprite1.png">'

        response = client.post("/tool/extract_image_links", json={"html": html})

        assert response.status_code == 200
        assert response.json() == {"images": ["https://h/a.jpg", "https://h/b.jpg"]}

    def test_extract_empty_html(self, client: TestClient) -> None:
        response = client.post("/tool/extract_image_links", json={"html": ""})

        assert response.status_code == 200
        assert response.json() == {"images": []}

    def test_extract_missing_html(self, client: TestClient) -> None:
        response = client.post("/tool/extract_album_links", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "html is required"}

    def test_sheets_append_rows(self, client: TestClient, resources: Resources) -> None:
        service = Mock()
        resources.sheets._service = service

        response = client.post(
            "/tool/sheets_append_rows",
            json={"rows": [{"Album Title": "T", "Album URL": "U", "Image 1": "i1"}]},
        )

        assert response.status_code == 200
        assert response.json() == {"ok": True, "count": 1}
        append = service.spreadsheets.return_value.values.return_value.append
        assert append.call_args[1]["body"] == {"values": [["T", "U", "i1", "", "", "", "", "", "", ""]]}

    def test_sheets_missing_config(self, client: TestClient) -> None:
        response = client.post("/tool/sheets_append_rows", json={"rows": [{"Album Title": "T"}]})

        assert response.status_code == 500
        assert response.json() == {"error": "GSA_BASE64 is not configured"}

    def test_malformed_credential_isolated(self, client: TestClient, settings: Settings) -> None:
        """Test that a bad credential fails appends but not other tools."""
        set_resources(Resources(replace(settings, gsa_base64="%%% not base64 %%%")))

        response = client.post("/tool/sheets_append_rows", json={"rows": [{"Album Title": "T"}]})
        assert response.status_code == 500
        assert "base64" in response.json()["error"]

        response = client.post("/tool/extract_image_links", json={"html": '<img src="a.jpg">'})
        assert response.status_code == 200
        assert response.json() == {"images": ["https://h/a.jpg"]}

    def test_fetch_html_null_render_uses_browser(self, client: TestClient) -> None:
        """Test that render: null keeps the headless browser default."""
        provider = Mock()
        provider.render = AsyncMock(
            return_value=RenderResult(url="https://h/a", html="<html>a</html>", final_url="https://h/a")
        )

        with patch("agent_tools.tools.service.get_provider", return_value=provider) as mock_get_provider:
            response = client.post("/tool/fetch_html", json={"url": "https://h/a", "render": None})

        assert response.status_code == 200
        mock_get_provider.assert_called_once_with("https://h/a", render=True)

    def test_fetch_html_string_render_flag(self, client: TestClient) -> None:
        """Test that a "false" string turns rendering off."""
        provider = Mock()
        provider.render = AsyncMock(
            return_value=RenderResult(url="https://h/a", html="<html>a</html>", final_url="https://h/a")
        )

        with patch("agent_tools.tools.service.get_provider", return_value=provider) as mock_get_provider:
            client.post("/tool/fetch_html", json={"url": "https://h/a", "render": "false"})
            client.post("/tool/fetch_html", json={"url": "https://h/a", "render": False})

        assert [c[1]["render"] for c in mock_get_provider.call_args_list] == [False, False]

    def test_sheets_empty_rows_misconfigured(self, client: TestClient, settings: Settings) -> None:
        """Test that an empty batch still reports broken sheet configuration."""
        set_resources(Resources(replace(settings, gsa_base64="%%% not base64 %%%", sheet_id=None)))

        response = client.post("/tool/sheets_append_rows", json={"rows": []})

        assert response.status_code == 500
        assert response.json() == {"error": "SHEET_ID is not configured"}

    def test_sheets_empty_rows_bad_credential(self, client: TestClient, settings: Settings) -> None:
        set_resources(Resources(replace(settings, gsa_base64="%%% not base64 %%%")))

        response = client.post("/tool/sheets_append_rows", json={"rows": []})

        assert response.status_code == 500
        assert "base64" in response.json()["error"]

    def test_unknown_tool(self, client: TestClient) -> None:
        response = client.post("/tool/nope", json={})

        assert response.status_code == 404
        assert response.json() == {"error": "Unknown tool: nope"}

    def test_invalid_json(self, client: TestClient) -> None:
        response = client.post(
            "/tool/extract_image_links",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid JSON body")

    def test_body_must_be_object(self, client: TestClient) -> None:
        response = client.post("/tool/extract_image_links", json=["<img>"])

        assert response.status_code == 400
        assert response.json() == {"error": "Request body must be a JSON object"}

    def test_body_too_large(self, client: TestClient) -> None:
        response = client.post(
            "/tool/extract_image_links",
            content=b" " * (MAX_BODY_BYTES + 1),
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 413
        assert response.json() == {"error": "request entity too large"}

    def test_chunked_body_too_large(self, client: TestClient) -> None:
        """Test that a body without Content-Length is still capped."""
        chunk = b" " * (1024 * 1024)
        chunks = (chunk for _ in range(MAX_BODY_BYTES // len(chunk) + 1))

        response = client.post(
            "/tool/extract_image_links",
            content=chunks,
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 413
        assert response.json() == {"error": "request entity too large"}


class TestMcpRoutes:
    """Tests for tool discovery and dispatch."""

    def test_describe(self, client: TestClient) -> None:
        response = client.post("/mcp/describe")

        assert response.status_code == 200
        tools = {tool["name"]: tool for tool in response.json()["tools"]}
        assert set(tools) == {"fetch_html", "extract_album_links", "extract_image_links", "sheets_append_rows"}
        assert tools["fetch_html"]["input_schema"]["required"] == ["url"]
        assert tools["sheets_append_rows"]["description"]

    def test_call(self, client: TestClient) -> None:
        response = client.post(
            "/mcp/call",
            json={"name": "extract_image_links", "arguments": {"html": '<img src="//cdn.example.com/a.jpg">'}},
        )

        assert response.status_code == 200
        assert response.json() == {"content": {"images": ["https://cdn.example.com/a.jpg"]}}

    def test_call_unknown_tool(self, client: TestClient) -> None:
        response = client.post("/mcp/call", json={"name": "delete_everything", "arguments": {}})

        assert response.status_code == 400
        assert response.json() == {"error": "Unknown tool: delete_everything"}

    def test_call_missing_name(self, client: TestClient) -> None:
        response = client.post("/mcp/call", json={"arguments": {}})

        assert response.status_code == 400
        assert response.json() == {"error": "name is required"}

    def test_call_missing_argument(self, client: TestClient) -> None:
        response = client.post("/mcp/call", json={"name": "fetch_html"})

        assert response.status_code == 400
        assert response.json() == {"error": "url is required"}

    def test_call_arguments_not_object(self, client: TestClient) -> None:
        response = client.post("/mcp/call", json={"name": "fetch_html", "arguments": "https://h"})

        assert response.status_code == 400
        assert response.json() == {"error": "arguments must be an object"}

    def test_call_tool_error(self, client: TestClient) -> None:
        response = client.post(
            "/mcp/call",
            json={"name": "sheets_append_rows", "arguments": {"rows": [{"Album Title": "T"}]}},
        )

        assert response.status_code == 500
        assert response.json() == {"error": "GSA_BASE64 is not configured"}
