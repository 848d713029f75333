"""Tool registry and dispatcher.

:class:`MCPServer` is transport-agnostic: it tracks registered tools and turns
every invocation into exactly one :class:`ToolResult` envelope. Unknown tool
names, invalid arguments and remote failures all come back as error
envelopes; nothing raised by a tool escapes :meth:`MCPServer.invoke`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import httpx

from jsr_mcp.client import JSRClient
from jsr_mcp.config import JSRConfig
from jsr_mcp.errors import MCPError, ToolValidationError
from jsr_mcp.logging_config import get_logger
from jsr_mcp.tooling import ToolDefinition
from jsr_mcp.tools import build_tools

logger = get_logger(__name__)


@dataclass
class ToolResult:
    """Result envelope returned by tool execution.

    Attributes:
        name: Name of the tool that was invoked.
        content: Ordered text content parts.
        is_error: Whether the invocation failed.

    """

    name: str
    content: list[dict[str, str]] = field(default_factory=list)
    is_error: bool = False

    @classmethod
    def success(cls, name: str, text: str) -> ToolResult:
        """Build a success envelope carrying one text part."""
        return cls(name=name, content=[{"type": "text", "text": text}])

    @classmethod
    def failure(cls, name: str, message: str) -> ToolResult:
        """Build an error envelope carrying one text part."""
        return cls(
            name=name,
            content=[{"type": "text", "text": f"Error: {message}"}],
            is_error=True,
        )

    @property
    def text(self) -> str:
        """Text of the first content part."""
        return self.content[0]["text"] if self.content else ""

    def to_dict(self) -> dict[str, Any]:
        """Render the MCP ``tools/call`` result shape."""
        result: dict[str, Any] = {"content": list(self.content)}
        if self.is_error:
            result["isError"] = True
        return result


class MCPServer:
    """In-memory registry and dispatcher for MCP tools."""

    def __init__(self) -> None:
        """Initialize an empty server registry."""
        self._tools: dict[str, ToolDefinition] = {}

    def register_tool(self, tool: ToolDefinition) -> None:
        """Register a tool with the server.

        Raises:
            ValueError: If a tool with the same name is already registered.

        """
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' is already registered")
        self._tools[tool.name] = tool

    def register_tools(self, *tools: ToolDefinition) -> None:
        """Register multiple tools at once."""
        for tool in tools:
            self.register_tool(tool)

    def available_tools(self) -> list[str]:
        """List the names of registered tools, sorted."""
        return sorted(self._tools)

    def list_tools(self) -> list[ToolDefinition]:
        """Return every registered tool in registration order."""
        return list(self._tools.values())

    def describe(self, name: str) -> ToolDefinition | None:
        """Look up a tool by exact name, or ``None`` if it is unknown."""
        return self._tools.get(name)

    async def invoke(
        self, name: str, arguments: dict[str, Any] | None = None
    ) -> ToolResult:
        """Execute a registered tool and wrap the outcome.

        Args:
            name: Name of the tool to execute.
            arguments: Raw, untrusted arguments supplied by the caller.

        Returns:
            ToolResult whose ``is_error`` flag reflects the outcome.

        """
        tool = self.describe(name)
        if tool is None:
            logger.warning("Rejected call to unknown tool %s", name)
            return ToolResult.failure(name, f"Unknown tool: {name}")

        try:
            params = tool.validate(arguments if arguments is not None else {})
        except ToolValidationError as error:
            logger.info("Invalid arguments for %s: %s", name, error.to_dict())
            return ToolResult.failure(name, error.message)

        try:
            payload = await tool.handler(params)
        except MCPError as error:
            logger.warning("Tool %s failed: %s", name, error.to_dict())
            return ToolResult.failure(name, error.message)
        except Exception as exc:
            logger.exception("Tool %s raised an unexpected error", name)
            return ToolResult.failure(name, str(exc) or type(exc).__name__)

        if tool.confirmation is not None:
            return ToolResult.success(name, tool.confirmation)
        return ToolResult.success(name, json.dumps(payload, indent=2))

    def to_catalog(self) -> dict[str, dict[str, Any]]:
        """Produce a catalog for discovery, keyed by tool name."""
        return {name: tool.metadata() for name, tool in self._tools.items()}


def build_server(
    config: JSRConfig, transport: httpx.AsyncBaseTransport | None = None
) -> MCPServer:
    """Create a server with the full JSR tool catalog registered."""
    server = MCPServer()
    server.register_tools(*build_tools(JSRClient(config, transport=transport)))
    return server
