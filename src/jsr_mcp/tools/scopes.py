"""Scope, membership and invite management tools."""

from __future__ import annotations

from jsr_mcp.client import JSRClient
from jsr_mcp.schemas import (
    AddScopeMemberParams,
    CreateScopeParams,
    ListScopePackagesParams,
    ScopeMemberRef,
    ScopeRef,
    UpdateScopeMemberParams,
    UpdateScopeParams,
)
from jsr_mcp.tooling import ToolDefinition, remote_tool


def scope_tools(client: JSRClient) -> list[ToolDefinition]:
    """Create the scope-related tool definitions."""
    return [
        remote_tool(
            "jsr_get_scope",
            "Get detailed information about a scope in the JSR registry.",
            ScopeRef,
            client.get_scope,
        ),
        remote_tool(
            "jsr_list_scope_packages",
            "List all packages within a specific scope.",
            ListScopePackagesParams,
            client.list_scope_packages,
        ),
        remote_tool(
            "jsr_list_scope_members",
            "List members of a specific scope.",
            ScopeRef,
            client.list_scope_members,
        ),
        remote_tool(
            "jsr_list_scope_invites",
            "List pending invites for a specific scope.",
            ScopeRef,
            client.list_scope_invites,
        ),
        remote_tool(
            "jsr_create_scope",
            "Create a new scope (requires authentication).",
            CreateScopeParams,
            client.create_scope,
        ),
        remote_tool(
            "jsr_update_scope",
            "Update scope settings (requires authentication and scope admin).",
            UpdateScopeParams,
            client.update_scope,
        ),
        remote_tool(
            "jsr_delete_scope",
            "Delete a scope (requires authentication and scope admin, "
            "scope must have no packages).",
            ScopeRef,
            client.delete_scope,
            confirmation="Scope deleted successfully",
        ),
        remote_tool(
            "jsr_add_scope_member",
            "Invite a user to a scope (requires authentication and scope admin).",
            AddScopeMemberParams,
            client.add_scope_member,
        ),
        remote_tool(
            "jsr_update_scope_member",
            "Update scope member roles (requires authentication and scope admin).",
            UpdateScopeMemberParams,
            client.update_scope_member,
        ),
        remote_tool(
            "jsr_remove_scope_member",
            "Remove a member from a scope (requires authentication and scope admin).",
            ScopeMemberRef,
            client.remove_scope_member,
            confirmation="Member removed successfully",
        ),
        remote_tool(
            "jsr_delete_scope_invite",
            "Delete a scope invite (requires authentication and scope admin).",
            ScopeMemberRef,
            client.delete_scope_invite,
            confirmation="Invite deleted successfully",
        ),
    ]
