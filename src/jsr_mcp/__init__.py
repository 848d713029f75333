"""Model Context Protocol server for the JSR package registry."""

from jsr_mcp._version import __version__
from jsr_mcp.client import JSRClient
from jsr_mcp.config import JSRConfig, create_jsr_config, load_config
from jsr_mcp.errors import JSRRequestError, MCPError, ToolValidationError
from jsr_mcp.server import MCPServer, ToolResult, build_server
from jsr_mcp.tooling import ToolDefinition, ToolParameters

__all__ = [
    "JSRClient",
    "JSRConfig",
    "JSRRequestError",
    "MCPError",
    "MCPServer",
    "ToolDefinition",
    "ToolParameters",
    "ToolResult",
    "ToolValidationError",
    "__version__",
    "build_server",
    "create_jsr_config",
    "load_config",
]
