"""Package search, inspection and publishing tools."""

from __future__ import annotations

from typing import Any

import anyio

from jsr_mcp.client import JSRClient
from jsr_mcp.errors import raise_mcp_error
from jsr_mcp.schemas import (
    CreatePackageParams,
    CreatePackageVersionParams,
    GetPackageDependentsParams,
    ListPackagesParams,
    ListPackageVersionsParams,
    NoParams,
    PackageRef,
    PackageVersionRef,
    PublishingTaskRef,
    SearchPackagesParams,
    UpdatePackageParams,
    UpdatePackageVersionParams,
)
from jsr_mcp.tooling import ToolDefinition, remote_tool


async def read_tarball(path: str) -> bytes:
    """Read a package tarball fully into memory without blocking the loop."""
    try:
        return await anyio.Path(path).read_bytes()
    except OSError as exc:
        raise_mcp_error(
            "FileReadError", f"Failed to read tarball '{path}': {exc}", str(exc)
        )


def package_tools(client: JSRClient) -> list[ToolDefinition]:
    """Create the package-related tool definitions."""

    async def publish_version(
        scope: str, name: str, version: str, config_path: str, tarball_path: str
    ) -> Any:
        tarball = await read_tarball(tarball_path)
        return await client.create_package_version(
            scope, name, version, config_path, tarball
        )

    return [
        remote_tool(
            "jsr_search_packages",
            "Search for packages in the JSR registry. "
            "Returns a list of packages matching the query.",
            SearchPackagesParams,
            client.search_packages,
        ),
        remote_tool(
            "jsr_get_package",
            "Get detailed information about a specific package in the JSR registry.",
            PackageRef,
            client.get_package,
        ),
        remote_tool(
            "jsr_get_package_version",
            "Get detailed information about a specific version of a package.",
            PackageVersionRef,
            client.get_package_version,
        ),
        remote_tool(
            "jsr_list_package_versions",
            "List all available versions of a specific package.",
            ListPackageVersionsParams,
            client.list_package_versions,
        ),
        remote_tool(
            "jsr_get_package_metadata",
            "Get package metadata from the JSR registry "
            "(versions, latest version, etc.).",
            PackageRef,
            client.get_package_metadata,
        ),
        remote_tool(
            "jsr_list_packages",
            "List all packages in the JSR registry.",
            ListPackagesParams,
            client.list_packages,
        ),
        remote_tool(
            "jsr_get_package_dependents",
            "Get packages that depend on a specific package.",
            GetPackageDependentsParams,
            client.get_package_dependents,
        ),
        remote_tool(
            "jsr_get_package_score",
            "Get the package score details for a specific package.",
            PackageRef,
            client.get_package_score,
        ),
        remote_tool(
            "jsr_get_package_dependencies",
            "Get the dependencies of a specific package version.",
            PackageVersionRef,
            client.get_package_dependencies,
        ),
        remote_tool(
            "jsr_get_publishing_task",
            "Get details of a publishing task.",
            PublishingTaskRef,
            client.get_publishing_task,
        ),
        remote_tool(
            "jsr_get_stats",
            "Get registry statistics including newest packages, recent updates, "
            "and featured packages.",
            NoParams,
            client.get_stats,
        ),
        remote_tool(
            "jsr_create_package",
            "Create a new package in a scope "
            "(requires authentication and scope membership).",
            CreatePackageParams,
            client.create_package,
        ),
        remote_tool(
            "jsr_update_package",
            "Update package details (requires authentication and scope membership).",
            UpdatePackageParams,
            client.update_package,
        ),
        remote_tool(
            "jsr_delete_package",
            "Delete a package (requires authentication and scope admin, "
            "package must have no versions).",
            PackageRef,
            client.delete_package,
            confirmation="Package deleted successfully",
        ),
        remote_tool(
            "jsr_create_package_version",
            "Create a new package version by uploading a tarball "
            "(requires authentication and scope membership).",
            CreatePackageVersionParams,
            publish_version,
        ),
        remote_tool(
            "jsr_update_package_version",
            "Update package version yanked status "
            "(requires authentication and scope membership).",
            UpdatePackageVersionParams,
            client.update_package_version,
        ),
    ]
