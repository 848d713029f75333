"""Tool registration helpers for the JSR MCP server."""

from __future__ import annotations

from jsr_mcp.client import JSRClient
from jsr_mcp.tooling import ToolDefinition
from jsr_mcp.tools.authorizations import authorization_tools
from jsr_mcp.tools.packages import package_tools
from jsr_mcp.tools.scopes import scope_tools
from jsr_mcp.tools.users import user_tools


def build_tools(client: JSRClient) -> list[ToolDefinition]:
    """Instantiate all tool definitions bound to the provided client."""
    return [
        *package_tools(client),
        *scope_tools(client),
        *user_tools(client),
        *authorization_tools(client),
    ]
