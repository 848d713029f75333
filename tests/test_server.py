"""Tests for the tool registry and dispatcher."""

from __future__ import annotations

import json
import logging
from typing import Any

import pytest

from jsr_mcp.errors import JSRRequestError
from jsr_mcp.server import MCPServer, ToolResult
from jsr_mcp.tooling import ToolDefinition, ToolParameters, remote_tool


class EchoParams(ToolParameters):
    """Parameters for the echo tool."""

    message: str


def echo_tool() -> ToolDefinition:
    async def echo(message: str) -> dict[str, Any]:
        return {"echo": message}

    return remote_tool("echo", "Echo the message back.", EchoParams, echo)


class TestMCPServer:
    """Behavioral coverage for MCPServer registration and lookup."""

    def test_register_and_list_tools(self) -> None:
        """Registers a tool and ensures it appears in the catalog."""
        # Arrange
        server = MCPServer()
        tool = echo_tool()

        # Act
        server.register_tool(tool)

        # Assert
        assert server.available_tools() == ["echo"]
        assert server.list_tools() == [tool]
        catalog = server.to_catalog()
        assert catalog["echo"]["description"] == tool.description
        assert catalog["echo"]["schema"]["required"] == ["message"]

    def test_prevents_duplicate_tool_names(self) -> None:
        """Duplicate tool registrations raise a ValueError."""
        # Arrange
        server = MCPServer()
        server.register_tool(echo_tool())

        # Act / Assert
        with pytest.raises(ValueError):
            server.register_tool(echo_tool())

    def test_describe_unknown_tool_returns_none(self) -> None:
        server = MCPServer()
        server.register_tool(echo_tool())

        assert server.describe("echo") is not None
        assert server.describe("missing") is None


class TestInvoke:
    """Every invocation produces exactly one well-formed envelope."""

    @pytest.mark.anyio()
    async def test_success_is_pretty_printed_json(self) -> None:
        server = MCPServer()
        server.register_tool(echo_tool())

        result = await server.invoke("echo", {"message": "hi"})

        assert result.is_error is False
        assert len(result.content) == 1
        assert result.content[0]["type"] == "text"
        assert result.text == json.dumps({"echo": "hi"}, indent=2)
        assert "isError" not in result.to_dict()

    @pytest.mark.anyio()
    async def test_unknown_tool_is_an_error_envelope(self, server, jsr_api) -> None:
        result = await server.invoke("jsr_not_a_tool", {})

        assert result.is_error is True
        assert "jsr_not_a_tool" in result.text
        assert result.to_dict()["isError"] is True
        assert jsr_api.requests == []

    @pytest.mark.anyio()
    async def test_invalid_arguments_never_reach_the_network(
        self, server, jsr_api
    ) -> None:
        result = await server.invoke(
            "jsr_search_packages", {"query": "std", "limit": 101}
        )

        assert result.is_error is True
        assert "limit" in result.text
        assert jsr_api.requests == []

    @pytest.mark.anyio()
    async def test_uppercase_scope_is_rejected(self, server, jsr_api) -> None:
        result = await server.invoke("jsr_get_scope", {"scope": "Std"})

        assert result.is_error is True
        assert "scope" in result.text
        assert jsr_api.requests == []

    @pytest.mark.anyio()
    async def test_all_violations_are_listed(self, server, jsr_api) -> None:
        result = await server.invoke(
            "jsr_list_package_versions",
            {"scope": "std-", "name": "Assert", "limit": 0, "page": "2"},
        )

        assert result.is_error is True
        for field_name in ("scope", "name", "limit", "page"):
            assert field_name in result.text
        assert jsr_api.requests == []

    @pytest.mark.anyio()
    async def test_missing_arguments_are_treated_as_empty(self, server) -> None:
        result = await server.invoke("jsr_get_package", None)

        assert result.is_error is True
        assert "scope: Field required" in result.text

    @pytest.mark.anyio()
    async def test_remote_failure_becomes_error_envelope(self) -> None:
        async def fail() -> None:
            raise JSRRequestError(
                "JSR API request failed: 500 Internal Server Error: boom"
            )

        server = MCPServer()
        server.register_tool(
            remote_tool("fail", "Always fails.", ToolParameters, fail)
        )

        result = await server.invoke("fail", {})

        assert result == ToolResult(
            name="fail",
            content=[
                {
                    "type": "text",
                    "text": "Error: JSR API request failed: "
                    "500 Internal Server Error: boom",
                }
            ],
            is_error=True,
        )

    @pytest.mark.anyio()
    async def test_unexpected_exception_is_contained(self) -> None:
        async def explode() -> None:
            raise RuntimeError("unexpected")

        server = MCPServer()
        server.register_tool(
            remote_tool("explode", "Raises.", ToolParameters, explode)
        )

        result = await server.invoke("explode")

        assert result.is_error is True
        assert result.text == "Error: unexpected"

    @pytest.mark.anyio()
    async def test_void_operation_returns_confirmation(self, server, jsr_api) -> None:
        jsr_api.add("DELETE", "/scopes/acme", status_code=204)

        result = await server.invoke("jsr_delete_scope", {"scope": "acme"})

        assert result.is_error is False
        assert result.content == [
            {"type": "text", "text": "Scope deleted successfully"}
        ]

    @pytest.mark.anyio()
    async def test_not_found_message_mentions_status(self, server, jsr_api) -> None:
        result = await server.invoke(
            "jsr_get_package", {"scope": "nonexistent", "name": "package"}
        )

        assert result.is_error is True
        assert "404" in result.text

    @pytest.mark.anyio()
    async def test_repeated_reads_are_identical(self, server, jsr_api) -> None:
        jsr_api.add("GET", "/scopes/std", json={"scope": "std", "createdAt": "x"})

        first = await server.invoke("jsr_get_scope", {"scope": "std"})
        second = await server.invoke("jsr_get_scope", {"scope": "std"})

        assert first.text == second.text
        assert len(jsr_api.requests) == 2

    @pytest.mark.anyio()
    async def test_structured_error_payload_is_logged(
        self, server, jsr_api, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.WARNING, logger="jsr_mcp.server")

        await server.invoke("jsr_get_scope", {"scope": "missing"})

        record = next(r for r in caplog.records if r.name == "jsr_mcp.server")
        assert "'type': 'RequestError'" in record.getMessage()
        assert "'status_code': 404" in record.getMessage()
