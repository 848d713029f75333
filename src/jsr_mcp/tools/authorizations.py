"""Authorization flow tools.

The flow spans four independent calls: create, approve or deny, poll the
details, then exchange. Ordering and polling belong to the caller.
"""

from __future__ import annotations

from jsr_mcp.client import JSRClient
from jsr_mcp.schemas import (
    AuthorizationCodeParams,
    CreateAuthorizationParams,
    ExchangeAuthorizationParams,
)
from jsr_mcp.tooling import ToolDefinition, remote_tool


def authorization_tools(client: JSRClient) -> list[ToolDefinition]:
    """Create the authorization flow tool definitions."""
    return [
        remote_tool(
            "jsr_create_authorization",
            "Start an authorization flow.",
            CreateAuthorizationParams,
            client.create_authorization,
        ),
        remote_tool(
            "jsr_get_authorization_details",
            "Get details of an authorization.",
            AuthorizationCodeParams,
            client.get_authorization_details,
        ),
        remote_tool(
            "jsr_approve_authorization",
            "Approve an authorization (requires authentication).",
            AuthorizationCodeParams,
            client.approve_authorization,
            confirmation="Authorization approved successfully",
        ),
        remote_tool(
            "jsr_deny_authorization",
            "Deny an authorization (requires authentication).",
            AuthorizationCodeParams,
            client.deny_authorization,
            confirmation="Authorization denied successfully",
        ),
        remote_tool(
            "jsr_exchange_authorization",
            "Exchange authorization code for access token.",
            ExchangeAuthorizationParams,
            client.exchange_authorization,
        ),
    ]
