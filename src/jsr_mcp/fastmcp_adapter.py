"""Adapters for exposing the JSR tools via FastMCP."""

from __future__ import annotations

from typing import Any

import httpx
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent

from jsr_mcp._version import __version__
from jsr_mcp.config import JSRConfig
from jsr_mcp.server import MCPServer, build_server
from jsr_mcp.tooling import ToolDefinition

SERVER_NAME = "jsr-mcp"
INSTRUCTIONS = (
    "Search, inspect and manage packages, scopes and users on the JSR "
    "registry (jsr.io). Write operations require JSR_API_TOKEN."
)


class ToolDefinitionAdapter(Tool):
    """Expose a :class:`ToolDefinition` as a FastMCP tool."""

    def __init__(self, definition: ToolDefinition, server: MCPServer) -> None:
        """Create a FastMCP tool wrapper dispatching through ``server``."""
        super().__init__(
            name=definition.name,
            description=definition.description,
            parameters=definition.input_schema(),
            tags=set(),
        )
        self._server = server

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        """Dispatch the call and translate the envelope for FastMCP."""
        envelope = await self._server.invoke(self.name, arguments)
        if envelope.is_error:
            raise ToolError(envelope.text)
        return ToolResult(
            content=[
                TextContent(type="text", text=part["text"])
                for part in envelope.content
            ]
        )


def to_fastmcp_tools(server: MCPServer) -> list[Tool]:
    """Wrap every registered tool for FastMCP."""
    return [
        ToolDefinitionAdapter(definition, server) for definition in server.list_tools()
    ]


def build_fastmcp_app(
    config: JSRConfig, transport: httpx.AsyncBaseTransport | None = None
) -> tuple[FastMCP, MCPServer]:
    """Create a FastMCP server instance with all JSR tools registered."""
    app = FastMCP(name=SERVER_NAME, instructions=INSTRUCTIONS, version=__version__)
    server = build_server(config, transport=transport)
    for tool in to_fastmcp_tools(server):
        app.add_tool(tool)
    return app, server
