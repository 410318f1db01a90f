"""Static tool catalog and dispatch by tool name."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from agent_tools.errors import MissingFieldError, UnknownToolError
from agent_tools.models.tools import FetchHtmlArgs, HtmlArgs, SheetsAppendArgs, ToolDescriptor
from agent_tools.tools.service import (
    append_sheet_rows,
    fetch_page_html,
    find_album_links,
    find_image_links,
)


@dataclass(frozen=True)
class ToolSpec:
    """A named tool: its argument model and the coroutine that runs it."""

    name: str
    description: str
    args_model: type[BaseModel]
    handler: Callable[..., Awaitable[BaseModel]]

    @property
    def input_schema(self) -> dict[str, Any]:
        return self.args_model.model_json_schema()

    @property
    def required(self) -> list[str]:
        return list(self.input_schema.get("required", []))

    def describe(self) -> ToolDescriptor:
        return ToolDescriptor(name=self.name, description=self.description, input_schema=self.input_schema)


TOOLS: dict[str, ToolSpec] = {
    spec.name: spec
    for spec in (
        ToolSpec(
            name="fetch_html",
            description="Render a page in a headless browser and return its HTML and final URL.",
            args_model=FetchHtmlArgs,
            handler=fetch_page_html,
        ),
        ToolSpec(
            name="extract_album_links",
            description="Extract distinct album links (album_url, album_title) from HTML.",
            args_model=HtmlArgs,
            handler=find_album_links,
        ),
        ToolSpec(
            name="extract_image_links",
            description="Extract distinct absolute image URLs from HTML, skipping sprites and placeholders.",
            args_model=HtmlArgs,
            handler=find_image_links,
        ),
        ToolSpec(
            name="sheets_append_rows",
            description="Append rows (Album Title, Album URL, Image 1-8) to the configured Google Sheet.",
            args_model=SheetsAppendArgs,
            handler=append_sheet_rows,
        ),
    )
}


def describe_tools() -> list[ToolDescriptor]:
    """Return the catalog of available tools."""
    return [spec.describe() for spec in TOOLS.values()]


def get_tool(name: str) -> ToolSpec:
    """Look up a tool by name.

    Raises:
        UnknownToolError: If no tool has that name
    """
    try:
        return TOOLS[name]
    except KeyError:
        raise UnknownToolError(name) from None


async def call_tool(name: str, arguments: Mapping[str, Any]) -> dict[str, Any]:
    """Run a tool by name.

    Only the presence of required arguments is checked here; unknown
    arguments are ignored and null optional arguments fall back to their
    defaults.

    Args:
        name: Registered tool name
        arguments: Tool arguments as decoded from the request

    Returns:
        The tool result serialized for JSON

    Raises:
        UnknownToolError: If the tool does not exist
        MissingFieldError: If a required argument is absent or null
    """
    spec = get_tool(name)

    for field in spec.required:
        if arguments.get(field) is None:
            raise MissingFieldError(field)

    kwargs = {
        key: arguments[key]
        for key in spec.args_model.model_fields
        if arguments.get(key) is not None
    }
    result = await spec.handler(**kwargs)
    return result.model_dump(by_alias=True)
