"""Input schemas for the JSR tools.

Primitive fields are strict: a string is never coerced into a number or a
boolean, and vice versa.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import Field

from jsr_mcp.tooling import ToolParameters

NAME_PATTERN = r"^[a-z][a-z0-9]*(?:-[a-z0-9]+)*$"

StrictText = Annotated[str, Field(strict=True)]
StrictFlag = Annotated[bool, Field(strict=True)]

ScopeName = Annotated[
    str,
    Field(
        strict=True,
        pattern=NAME_PATTERN,
        description="The scope name (without @ prefix)",
    ),
]
PackageName = Annotated[
    str, Field(strict=True, pattern=NAME_PATTERN, description="The package name")
]
Version = Annotated[str, Field(strict=True, description="The semantic version")]
UserId = Annotated[str, Field(strict=True, description="The user ID (UUID)")]
PageLimit = Annotated[
    int,
    Field(
        strict=True,
        ge=1,
        le=100,
        description="Maximum number of results to return (1-100)",
    ),
]
PageNumber = Annotated[
    int, Field(strict=True, ge=1, description="Page number (1-indexed)")
]
Skip = Annotated[
    int,
    Field(strict=True, ge=0, description="Number of results to skip (for pagination)"),
]
AuthorizationCode = Annotated[
    str, Field(strict=True, description="The authorization code")
]


class NoParams(ToolParameters):
    """Tools that take no arguments."""


class SearchPackagesParams(ToolParameters):
    """Parameters for jsr_search_packages."""

    query: StrictText | None = Field(
        default=None, description="Search query for packages"
    )
    limit: PageLimit | None = None
    skip: Skip | None = None


class ListPackagesParams(ToolParameters):
    """Parameters for jsr_list_packages."""

    limit: PageLimit | None = None
    page: PageNumber | None = None
    query: StrictText | None = Field(default=None, description="Optional search query")


class PackageRef(ToolParameters):
    """Identifies one package."""

    scope: ScopeName
    name: PackageName


class PackageVersionRef(PackageRef):
    """Identifies one package version."""

    version: Version


class ListPackageVersionsParams(PackageRef):
    """Parameters for jsr_list_package_versions."""

    limit: PageLimit | None = None
    page: PageNumber | None = None


class GetPackageDependentsParams(PackageRef):
    """Parameters for jsr_get_package_dependents."""

    limit: PageLimit | None = None
    page: PageNumber | None = None
    versions_per_package_limit: Annotated[
        int,
        Field(
            strict=True,
            ge=1,
            le=10,
            description="Maximum number of versions per package (1-10)",
        ),
    ] | None = None


class ScopeRef(ToolParameters):
    """Identifies one scope."""

    scope: ScopeName


class ListScopePackagesParams(ScopeRef):
    """Parameters for jsr_list_scope_packages."""

    limit: PageLimit | None = None
    skip: Skip | None = None


class UserRef(ToolParameters):
    """Parameters that only require a user identifier."""

    user_id: UserId = Field(alias="id")


class PublishingTaskRef(ToolParameters):
    """Parameters for jsr_get_publishing_task."""

    task_id: Annotated[
        str, Field(strict=True, description="The publishing task ID (UUID)")
    ] = Field(alias="id")


class CreateScopeParams(ScopeRef):
    """Parameters for jsr_create_scope."""

    description: StrictText | None = Field(
        default=None, description="Optional description for the scope"
    )


class UpdateScopeParams(ScopeRef):
    """Parameters for jsr_update_scope."""

    gh_actions_verify_actor: StrictFlag | None = Field(
        default=None, description="Whether to verify GitHub Actions actor"
    )
    require_publishing_from_ci: StrictFlag | None = Field(
        default=None,
        alias="requirePublishingFromCI",
        description="Whether to require publishing from CI",
    )


class AddScopeMemberParams(ScopeRef):
    """Parameters for jsr_add_scope_member."""

    github_login: StrictText = Field(
        description="GitHub username of the user to invite"
    )


class ScopeMemberRef(ScopeRef):
    """Identifies a member (or invitee) of a scope."""

    user_id: UserId


class UpdateScopeMemberParams(ScopeMemberRef):
    """Parameters for jsr_update_scope_member."""

    is_admin: StrictFlag = Field(description="Whether the user should be an admin")


class CreatePackageParams(ScopeRef):
    """Parameters for jsr_create_package."""

    package: PackageName


class GithubRepository(ToolParameters):
    """Repository linked to a package."""

    owner: StrictText = Field(description="GitHub repository owner")
    name: StrictText = Field(description="GitHub repository name")


class RuntimeCompat(ToolParameters):
    """Runtimes a package declares support for."""

    deno: StrictFlag | None = None
    node: StrictFlag | None = None
    bun: StrictFlag | None = None
    browser: StrictFlag | None = None
    workerd: StrictFlag | None = None


class UpdatePackageParams(PackageRef):
    """Parameters for jsr_update_package."""

    description: Annotated[str, Field(strict=True, max_length=250)] | None = Field(
        default=None, description="Package description (max 250 chars)"
    )
    github_repository: GithubRepository | None = Field(
        default=None,
        description="GitHub repository information; null unlinks the repository",
    )
    runtime_compat: RuntimeCompat | None = Field(
        default=None, description="Runtime compatibility information"
    )
    is_archived: StrictFlag | None = Field(
        default=None, description="Whether the package is archived"
    )


class CreatePackageVersionParams(PackageVersionRef):
    """Parameters for jsr_create_package_version."""

    config_path: StrictText = Field(
        description="Path to the config file within the tarball"
    )
    tarball_path: StrictText = Field(
        description="Path to the gzipped tarball file to upload"
    )


class UpdatePackageVersionParams(PackageVersionRef):
    """Parameters for jsr_update_package_version."""

    yanked: StrictFlag = Field(description="Whether the version should be yanked")


class ScopePublishPermission(ToolParameters):
    """Permission to publish any package in a scope."""

    permission: Literal["package/publish"]
    scope: ScopeName


class PackagePublishPermission(ScopePublishPermission):
    """Permission to publish one package."""

    package: PackageName


class VersionPublishPermission(PackagePublishPermission):
    """Permission to publish one exact tarball of a version."""

    version: Version
    tarball_hash: StrictText


Permission = Union[
    VersionPublishPermission, PackagePublishPermission, ScopePublishPermission
]


class CreateAuthorizationParams(ToolParameters):
    """Parameters for jsr_create_authorization."""

    challenge: StrictText = Field(
        description="The challenge for later token retrieval"
    )
    permissions: list[Permission] | None = Field(
        default=None, description="Optional permissions for the token"
    )


class AuthorizationCodeParams(ToolParameters):
    """Parameters that only require an authorization code."""

    code: AuthorizationCode


class ExchangeAuthorizationParams(ToolParameters):
    """Parameters for jsr_exchange_authorization."""

    exchange_token: StrictText = Field(description="The exchange token")
    verifier: StrictText = Field(description="The verifier for the challenge")
