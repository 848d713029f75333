"""User lookup and invite-response tools."""

from __future__ import annotations

from jsr_mcp.client import JSRClient
from jsr_mcp.schemas import NoParams, ScopeRef, UserRef
from jsr_mcp.tooling import ToolDefinition, remote_tool


def user_tools(client: JSRClient) -> list[ToolDefinition]:
    """Create the user-related tool definitions."""
    return [
        remote_tool(
            "jsr_get_current_user",
            "Get details of the authenticated user.",
            NoParams,
            client.get_current_user,
        ),
        remote_tool(
            "jsr_get_current_user_scopes",
            "List scopes that the authenticated user is a member of.",
            NoParams,
            client.get_current_user_scopes,
        ),
        remote_tool(
            "jsr_get_current_user_scope_member",
            "Get details of the authenticated user's membership in a specific scope.",
            ScopeRef,
            client.get_current_user_scope_member,
        ),
        remote_tool(
            "jsr_get_current_user_invites",
            "List scope invites for the authenticated user.",
            NoParams,
            client.get_current_user_invites,
        ),
        remote_tool(
            "jsr_get_user",
            "Get details of a specific user.",
            UserRef,
            client.get_user,
        ),
        remote_tool(
            "jsr_get_user_scopes",
            "List scopes that a specific user is a member of.",
            UserRef,
            client.get_user_scopes,
        ),
        remote_tool(
            "jsr_accept_scope_invite",
            "Accept an invite to a scope (requires authentication).",
            ScopeRef,
            client.accept_scope_invite,
        ),
        remote_tool(
            "jsr_decline_scope_invite",
            "Decline an invite to a scope (requires authentication).",
            ScopeRef,
            client.decline_scope_invite,
            confirmation="Invite declined successfully",
        ),
    ]
