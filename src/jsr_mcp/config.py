"""Connection configuration for the JSR API and registry."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://api.jsr.io"
DEFAULT_REGISTRY_URL = "https://jsr.io"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class JSRConfig:
    """Immutable connection settings shared by every remote operation.

    Attributes:
        api_url: Base URL of the management API, without trailing slash.
        registry_url: Base URL of the public registry, without trailing slash.
        api_token: Optional bearer token attached to management requests.
        timeout: Per-request timeout in seconds.
    """

    api_url: str
    registry_url: str
    api_token: str | None = None
    timeout: float = DEFAULT_TIMEOUT

    @property
    def authenticated(self) -> bool:
        """Whether management requests carry an Authorization header."""
        return bool(self.api_token)

    def __repr__(self) -> str:
        token = "***" if self.api_token else None
        return (
            f"JSRConfig(api_url={self.api_url!r}, registry_url={self.registry_url!r}, "
            f"api_token={token!r}, timeout={self.timeout!r})"
        )


def _normalize_url(url: str, label: str) -> str:
    normalized = url.strip()
    if normalized.endswith("/"):
        normalized = normalized[:-1]
    if not normalized:
        raise ValueError(f"{label} must not be empty")
    return normalized


def create_jsr_config(
    api_url: str,
    registry_url: str,
    api_token: str | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> JSRConfig:
    """Create a configuration with normalized base URLs.

    Args:
        api_url: Base URL of the management API (e.g. "https://api.jsr.io").
        registry_url: Base URL of the registry (e.g. "https://jsr.io").
        api_token: Optional bearer token for authenticated requests.
        timeout: Per-request timeout in seconds.

    Raises:
        ValueError: If either URL is empty.

    Returns:
        JSRConfig with one trailing slash removed from each URL.
    """
    return JSRConfig(
        api_url=_normalize_url(api_url, "api_url"),
        registry_url=_normalize_url(registry_url, "registry_url"),
        api_token=api_token or None,
        timeout=timeout,
    )


class JSRSettings(BaseSettings):
    """Environment-driven settings, optionally read from a ``.env`` file."""

    model_config = SettingsConfigDict(
        env_prefix="JSR_",
        env_file=".env",
        extra="ignore",
    )

    api_url: str = DEFAULT_API_URL
    registry_url: str = DEFAULT_REGISTRY_URL
    api_token: str | None = None
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)

    @field_validator("api_token")
    @classmethod
    def _blank_token_is_absent(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

    def to_config(self) -> JSRConfig:
        """Build the immutable connection configuration."""
        return create_jsr_config(
            self.api_url, self.registry_url, self.api_token, self.timeout
        )


def load_config() -> JSRConfig:
    """Load the connection configuration from the process environment."""
    return JSRSettings().to_config()
