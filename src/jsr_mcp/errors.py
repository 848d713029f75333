"""Custom error types for the JSR MCP server."""

from __future__ import annotations

from typing import NoReturn, TypedDict


class MCPErrorPayload(TypedDict):
    """Structured JSON payload for MCP errors."""

    error: dict[str, object | None]


class MCPError(Exception):
    """Structured MCP error containing a JSON-friendly payload."""

    def __init__(
        self, error_type: str, message: str, details: object | None = None
    ) -> None:
        """Create a structured MCP error payload."""
        super().__init__(message)
        self.message = message
        self.error: MCPErrorPayload = {
            "error": {
                "type": error_type,
                "message": message,
                "details": details,
            }
        }

    def to_dict(self) -> MCPErrorPayload:
        """Return the structured error payload."""
        return self.error


class JSRRequestError(MCPError):
    """Raised when a request to the JSR API or registry fails.

    Covers network failures, timeouts, non-2xx responses and bodies that
    cannot be decoded as JSON. ``status_code`` is set only when the server
    actually answered.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Create a request error, optionally tagged with an HTTP status."""
        super().__init__("RequestError", message, {"status_code": status_code})
        self.status_code = status_code


class ToolValidationError(MCPError):
    """Raised when tool arguments do not satisfy the tool's input schema."""

    def __init__(self, tool_name: str, violations: list[str]) -> None:
        """Create a validation error listing every violated constraint."""
        message = f"Invalid parameters for tool '{tool_name}': " + "; ".join(
            violations
        )
        super().__init__("ValidationError", message, violations)
        self.tool_name = tool_name
        self.violations = violations


def raise_mcp_error(
    error_type: str, message: str, details: object | None = None
) -> NoReturn:
    """Raise an :class:`MCPError` with a structured payload."""
    raise MCPError(error_type=error_type, message=message, details=details)
