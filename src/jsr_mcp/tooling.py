"""Tool definitions for the JSR MCP server."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from jsr_mcp.errors import ToolValidationError

ToolHandler = Callable[[dict[str, Any]], Awaitable[Any]]


class ToolParameters(BaseModel):
    """Base parameters schema for MCP tools.

    Python field names are snake_case; the wire names advertised to MCP
    clients are the camelCase aliases used by the JSR API.
    """

    model_config = ConfigDict(extra="forbid", alias_generator=to_camel)


def _to_wire(value: Any) -> Any:
    """Render nested models with their wire (alias) names."""
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, exclude_unset=True)
    if isinstance(value, list):
        return [_to_wire(item) for item in value]
    return value


def _describe_error(error: dict[str, Any]) -> str:
    location = ".".join(str(part) for part in error["loc"]) or "arguments"
    return f"{location}: {error['msg']}"


@dataclass
class ToolDefinition:
    """Description of a tool that can be registered with the server.

    Attributes:
        name: Unique name of the tool.
        description: Human-readable description of the tool purpose.
        parameters_model: Pydantic model used to validate input parameters.
        handler: Coroutine function that executes the tool logic.
        confirmation: Fixed reply for operations that return no payload.
    """

    name: str
    description: str
    parameters_model: type[ToolParameters]
    handler: ToolHandler
    confirmation: str | None = None

    def validate(self, parameters: Any) -> dict[str, Any]:
        """Validate incoming tool parameters.

        Only the fields the caller supplied are returned, keyed by their
        Python names, so optional fields that were omitted stay omitted.

        Args:
            parameters: Raw arguments provided for the tool.

        Raises:
            ToolValidationError: If parameter validation fails.

        Returns:
            Validated parameter dictionary.
        """
        try:
            model = self.parameters_model.model_validate(parameters)
        except ValidationError as error:
            raise ToolValidationError(
                self.name, [_describe_error(item) for item in error.errors()]
            ) from error
        return {
            field: _to_wire(value)
            for field, value in model
            if field in model.model_fields_set
        }

    def metadata(self) -> dict[str, Any]:
        """Return a discovery-friendly description of the tool."""
        return {
            "name": self.name,
            "description": self.description,
            "schema": self.input_schema(),
        }

    def input_schema(self) -> dict[str, Any]:
        """JSON schema of the tool's arguments, using wire names."""
        return self.parameters_model.model_json_schema(by_alias=True)


def remote_tool(
    name: str,
    description: str,
    parameters_model: type[ToolParameters],
    operation: Callable[..., Awaitable[Any]],
    confirmation: str | None = None,
) -> ToolDefinition:
    """Bind a remote operation to a tool name and input schema.

    The validated parameters are passed to ``operation`` as keyword
    arguments, so parameter model field names must match its signature.
    """

    async def handler(params: dict[str, Any]) -> Any:
        return await operation(**params)

    handler.__name__ = name
    return ToolDefinition(
        name=name,
        description=description,
        parameters_model=parameters_model,
        handler=handler,
        confirmation=confirmation,
    )
