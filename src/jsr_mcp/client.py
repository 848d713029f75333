"""Async client for the JSR management API and public registry.

Every operation issues exactly one HTTP request. Path segments are
interpolated as given; callers validate scope and package names before they
reach this module.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import BaseModel

from jsr_mcp._version import __version__
from jsr_mcp.config import JSRConfig
from jsr_mcp.errors import JSRRequestError
from jsr_mcp.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 20
PROJECT_URL = "https://jsr.io/docs/api"


class _Unset:
    """Marker for optional body fields the caller did not supply."""

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


def build_user_agent(version: str = __version__) -> str:
    """Return the User-Agent header identifying this client."""
    return f"jsr-mcp/{version}; {PROJECT_URL}"


def skip_to_page(skip: int, limit: int | None) -> int:
    """Convert a skip offset into a 1-indexed page number.

    The result only approximates the requested offset when ``skip`` is not a
    multiple of the page size.
    """
    return skip // (limit or DEFAULT_PAGE_SIZE) + 1


def page_to_skip(page: int | None, limit: int | None) -> int:
    """Convert a 1-indexed page number into the equivalent skip offset."""
    if not page:
        return 0
    return (page - 1) * (limit or DEFAULT_PAGE_SIZE)


class PaginatedResponse(BaseModel):
    """Uniform envelope for list endpoints."""

    data: list[Any]
    total: int
    returned: int
    skip: int
    limit: int | None = None


def _paginate(
    items: list[Any], total: int | None, skip: int, limit: int | None
) -> dict[str, Any]:
    return PaginatedResponse(
        data=items,
        total=len(items) if total is None else total,
        returned=len(items),
        skip=max(skip, 0),
        limit=limit,
    ).model_dump(exclude_none=True)


def _items_and_total(payload: Any) -> tuple[list[Any], int | None]:
    """Split a ``{"items": [...], "total": n}`` body, tolerating bare lists."""
    if isinstance(payload, list):
        return payload, None
    if isinstance(payload, Mapping):
        items = payload.get("items") or []
        total = payload.get("total")
        return list(items), total if isinstance(total, int) else None
    return [], None


def _compact(
    values: Mapping[str, Any], nullable: frozenset[str] = frozenset()
) -> dict[str, Any]:
    """Drop fields that were not supplied.

    ``None`` is sent only for keys listed in ``nullable``, where null clears
    the stored value on the server.
    """
    return {
        key: value
        for key, value in values.items()
        if value is not UNSET and (value is not None or key in nullable)
    }


def _query(**params: Any) -> dict[str, Any]:
    return {key: value for key, value in params.items() if value is not None}


@dataclass(frozen=True)
class ConnectionStatus:
    """Outcome of :meth:`JSRClient.test_connection`."""

    success: bool
    error: str | None = None


class JSRClient:
    """Remote operation set bound to one immutable :class:`JSRConfig`."""

    def __init__(
        self,
        config: JSRConfig,
        transport: httpx.AsyncBaseTransport | None = None,
        user_agent: str | None = None,
    ) -> None:
        """Create a client.

        Args:
            config: Connection configuration.
            transport: Optional httpx transport, used to stub HTTP in tests.
            user_agent: Overrides the default User-Agent header.
        """
        self.config = config
        self._transport = transport
        self._user_agent = user_agent or build_user_agent()

    def _http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport, timeout=self.config.timeout)

    async def _send(
        self, label: str, method: str, url: str, **kwargs: Any
    ) -> httpx.Response:
        logger.debug("%s %s", method, url)
        try:
            async with self._http() as http:
                return await http.request(method, url, **kwargs)
        except httpx.TimeoutException as exc:
            raise JSRRequestError(
                f"{label} request failed: timed out after {self.config.timeout}s"
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise JSRRequestError(f"{label} request failed: {exc}") from exc

    @staticmethod
    def _decode(label: str, response: httpx.Response) -> Any:
        if response.status_code == 204:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise JSRRequestError(
                f"{label} request failed: invalid JSON in response: {exc}",
                status_code=response.status_code,
            ) from exc

    async def _api_request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        content: bytes | None = None,
        content_type: str = "application/json",
    ) -> Any:
        headers = {"Content-Type": content_type, "User-Agent": self._user_agent}
        if self.config.api_token:
            headers["Authorization"] = f"Bearer {self.config.api_token}"

        response = await self._send(
            "JSR API",
            method,
            f"{self.config.api_url}{path}",
            params=params,
            json=json,
            content=content,
            headers=headers,
        )
        if not response.is_success:
            logger.warning("%s %s returned %s", method, path, response.status_code)
            raise JSRRequestError(
                "JSR API request failed: "
                f"{response.status_code} {response.reason_phrase}: {response.text}",
                status_code=response.status_code,
            )
        return self._decode("JSR API", response)

    async def _registry_request(self, path: str) -> Any:
        headers = {"Accept": "application/json", "User-Agent": self._user_agent}
        response = await self._send(
            "JSR Registry", "GET", f"{self.config.registry_url}{path}", headers=headers
        )
        if not response.is_success:
            logger.warning("GET %s returned %s", path, response.status_code)
            raise JSRRequestError(
                "JSR Registry request failed: "
                f"{response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )
        return self._decode("JSR Registry", response)

    # Packages

    async def search_packages(
        self,
        query: str | None = None,
        limit: int | None = None,
        skip: int | None = None,
    ) -> dict[str, Any]:
        """Search packages, converting ``skip`` to the page the API expects."""
        page = skip_to_page(skip, limit) if skip else None
        result = await self._api_request(
            "GET",
            "/packages",
            params=_query(query=query or None, limit=limit, page=page),
        )
        return self._with_page_info(result, skip or 0, limit)

    async def list_packages(
        self,
        limit: int | None = None,
        page: int | None = None,
        query: str | None = None,
    ) -> dict[str, Any]:
        """List registry packages by page number."""
        result = await self._api_request(
            "GET",
            "/packages",
            params=_query(limit=limit, page=page, query=query or None),
        )
        return self._with_page_info(result, page_to_skip(page, limit), limit)

    @staticmethod
    def _with_page_info(result: Any, skip: int, limit: int | None) -> dict[str, Any]:
        items, total = _items_and_total(result)
        body = dict(result) if isinstance(result, Mapping) else {"items": items}
        body.setdefault("items", items)
        body["total"] = len(items) if total is None else total
        body["returned"] = len(items)
        body["skip"] = skip
        if limit is not None:
            body["limit"] = limit
        return body

    async def get_package(self, scope: str, name: str) -> Any:
        return await self._api_request("GET", f"/scopes/{scope}/packages/{name}")

    async def get_package_version(self, scope: str, name: str, version: str) -> Any:
        return await self._api_request(
            "GET", f"/scopes/{scope}/packages/{name}/versions/{version}"
        )

    async def list_package_versions(
        self,
        scope: str,
        name: str,
        limit: int | None = None,
        page: int | None = None,
    ) -> dict[str, Any]:
        """List versions; the API returns a bare array with no total."""
        result = await self._api_request(
            "GET",
            f"/scopes/{scope}/packages/{name}/versions",
            params=_query(limit=limit, page=page),
        )
        items, total = _items_and_total(result)
        return _paginate(items, total, page_to_skip(page, limit), limit)

    async def get_package_metadata(self, scope: str, name: str) -> Any:
        """Fetch ``meta.json`` (latest version and version map) from the registry."""
        return await self._registry_request(f"/@{scope}/{name}/meta.json")

    async def get_package_dependents(
        self,
        scope: str,
        name: str,
        limit: int | None = None,
        page: int | None = None,
        versions_per_package_limit: int | None = None,
    ) -> dict[str, Any]:
        result = await self._api_request(
            "GET",
            f"/scopes/{scope}/packages/{name}/dependents",
            params=_query(
                limit=limit,
                page=page,
                versions_per_package_limit=versions_per_package_limit,
            ),
        )
        items, total = _items_and_total(result)
        return _paginate(items, total, page_to_skip(page, limit), limit)

    async def get_package_score(self, scope: str, name: str) -> Any:
        return await self._api_request("GET", f"/scopes/{scope}/packages/{name}/score")

    async def get_package_dependencies(
        self, scope: str, name: str, version: str
    ) -> Any:
        return await self._api_request(
            "GET", f"/scopes/{scope}/packages/{name}/versions/{version}/dependencies"
        )

    async def create_package(self, scope: str, package: str) -> Any:
        return await self._api_request(
            "POST", f"/scopes/{scope}/packages", json={"package": package}
        )

    async def update_package(
        self,
        scope: str,
        name: str,
        *,
        description: str | None = None,
        github_repository: Mapping[str, Any] | None = UNSET,
        runtime_compat: Mapping[str, Any] | None = None,
        is_archived: bool | None = None,
    ) -> Any:
        """Patch package details.

        Only supplied fields are sent. Passing ``github_repository=None``
        explicitly unlinks the repository.
        """
        body = _compact(
            {
                "description": description,
                "githubRepository": github_repository,
                "runtimeCompat": runtime_compat,
                "isArchived": is_archived,
            },
            nullable=frozenset({"githubRepository"}),
        )
        return await self._api_request(
            "PATCH", f"/scopes/{scope}/packages/{name}", json=body
        )

    async def delete_package(self, scope: str, name: str) -> None:
        await self._api_request("DELETE", f"/scopes/{scope}/packages/{name}")

    async def create_package_version(
        self,
        scope: str,
        name: str,
        version: str,
        config_path: str,
        tarball: bytes,
    ) -> Any:
        """Upload a gzipped tarball; returns the resulting publishing task."""
        return await self._api_request(
            "POST",
            f"/scopes/{scope}/packages/{name}/versions/{version}",
            params={"config": config_path},
            content=tarball,
            content_type="application/octet-stream",
        )

    async def update_package_version(
        self, scope: str, name: str, version: str, yanked: bool
    ) -> Any:
        return await self._api_request(
            "PATCH",
            f"/scopes/{scope}/packages/{name}/versions/{version}",
            json={"yanked": yanked},
        )

    async def get_publishing_task(self, task_id: str) -> Any:
        return await self._api_request("GET", f"/publishing_tasks/{task_id}")

    async def get_stats(self) -> Any:
        return await self._api_request("GET", "/stats")

    # Scopes

    async def get_scope(self, scope: str) -> Any:
        return await self._api_request("GET", f"/scopes/{scope}")

    async def list_scope_packages(
        self,
        scope: str,
        limit: int | None = None,
        skip: int | None = None,
    ) -> dict[str, Any]:
        """List a scope's packages; ``skip`` is mapped onto a page number."""
        page = skip_to_page(skip, limit) if skip is not None else 1
        result = await self._api_request(
            "GET",
            f"/scopes/{scope}/packages",
            params=_query(limit=limit, page=page if page > 1 else None),
        )
        items, total = _items_and_total(result)
        return _paginate(items, total, skip or 0, limit)

    async def create_scope(self, scope: str, description: str | None = None) -> Any:
        body = {"scope": scope}
        if description is not None:
            body["description"] = description
        return await self._api_request("POST", "/scopes", json=body)

    async def update_scope(
        self,
        scope: str,
        *,
        gh_actions_verify_actor: bool | None = None,
        require_publishing_from_ci: bool | None = None,
    ) -> Any:
        body = _compact(
            {
                "ghActionsVerifyActor": gh_actions_verify_actor,
                "requirePublishingFromCI": require_publishing_from_ci,
            }
        )
        return await self._api_request("PATCH", f"/scopes/{scope}", json=body)

    async def delete_scope(self, scope: str) -> None:
        await self._api_request("DELETE", f"/scopes/{scope}")

    async def list_scope_members(self, scope: str) -> Any:
        return await self._api_request("GET", f"/scopes/{scope}/members")

    async def add_scope_member(self, scope: str, github_login: str) -> Any:
        """Invite a GitHub user to a scope."""
        return await self._api_request(
            "POST", f"/scopes/{scope}/members", json={"githubLogin": github_login}
        )

    async def update_scope_member(
        self, scope: str, user_id: str, is_admin: bool
    ) -> Any:
        return await self._api_request(
            "PATCH", f"/scopes/{scope}/members/{user_id}", json={"isAdmin": is_admin}
        )

    async def remove_scope_member(self, scope: str, user_id: str) -> None:
        await self._api_request("DELETE", f"/scopes/{scope}/members/{user_id}")

    async def list_scope_invites(self, scope: str) -> Any:
        return await self._api_request("GET", f"/scopes/{scope}/invites")

    async def delete_scope_invite(self, scope: str, user_id: str) -> None:
        await self._api_request("DELETE", f"/scopes/{scope}/invites/{user_id}")

    # Users

    async def get_current_user(self) -> Any:
        return await self._api_request("GET", "/user")

    async def get_current_user_scopes(self) -> Any:
        return await self._api_request("GET", "/user/scopes")

    async def get_current_user_scope_member(self, scope: str) -> Any:
        return await self._api_request("GET", f"/user/member/{scope}")

    async def get_current_user_invites(self) -> Any:
        return await self._api_request("GET", "/user/invites")

    async def accept_scope_invite(self, scope: str) -> Any:
        return await self._api_request("POST", f"/user/invites/{scope}")

    async def decline_scope_invite(self, scope: str) -> None:
        await self._api_request("DELETE", f"/user/invites/{scope}")

    async def get_user(self, user_id: str) -> Any:
        return await self._api_request("GET", f"/users/{user_id}")

    async def get_user_scopes(self, user_id: str) -> Any:
        return await self._api_request("GET", f"/users/{user_id}/scopes")

    # Authorization flow

    async def create_authorization(
        self, challenge: str, permissions: list[Mapping[str, Any]] | None = None
    ) -> Any:
        """Start an authorization flow.

        The response carries ``verificationUrl``, ``code``, ``exchangeToken``,
        ``pollInterval`` and ``expiresAt``. Approval, polling and exchange are
        separate calls driven by the caller.
        """
        body: dict[str, Any] = {"challenge": challenge}
        if permissions is not None:
            body["permissions"] = list(permissions)
        return await self._api_request("POST", "/authorizations", json=body)

    async def get_authorization_details(self, code: str) -> Any:
        return await self._api_request("GET", f"/authorizations/details/{code}")

    async def approve_authorization(self, code: str) -> None:
        await self._api_request("POST", f"/authorizations/approve/{code}")

    async def deny_authorization(self, code: str) -> None:
        await self._api_request("POST", f"/authorizations/deny/{code}")

    async def exchange_authorization(self, exchange_token: str, verifier: str) -> Any:
        """Exchange an approved authorization for an access token."""
        return await self._api_request(
            "POST",
            "/authorizations/exchange",
            json={"exchangeToken": exchange_token, "verifier": verifier},
        )

    # Diagnostics

    async def test_connection(self) -> ConnectionStatus:
        """Run a one-result search to check the configuration; never raises."""
        try:
            await self.search_packages(limit=1)
        except JSRRequestError as error:
            return ConnectionStatus(success=False, error=error.message)
        except Exception as exc:
            logger.debug("Connection probe raised", exc_info=True)
            return ConnectionStatus(success=False, error=str(exc) or type(exc).__name__)
        return ConnectionStatus(success=True)
