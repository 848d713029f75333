"""Connection configuration tests."""

from __future__ import annotations

import dataclasses

import pytest

from jsr_mcp.config import (
    DEFAULT_API_URL,
    DEFAULT_REGISTRY_URL,
    JSRSettings,
    create_jsr_config,
    load_config,
)


def test_create_config_strips_trailing_slashes() -> None:
    """Trailing slashes are removed and the token is kept."""
    config = create_jsr_config("https://api.jsr.io/", "https://jsr.io/", "tok")

    assert config.api_url == "https://api.jsr.io"
    assert config.registry_url == "https://jsr.io"
    assert config.api_token == "tok"
    assert config.authenticated is True


def test_config_is_immutable() -> None:
    config = create_jsr_config("https://api.jsr.io", "https://jsr.io")

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.api_url = "https://elsewhere.example"  # type: ignore[misc]


def test_empty_urls_are_rejected() -> None:
    with pytest.raises(ValueError, match="api_url"):
        create_jsr_config("/", "https://jsr.io")
    with pytest.raises(ValueError, match="registry_url"):
        create_jsr_config("https://api.jsr.io", "")


def test_repr_hides_token() -> None:
    config = create_jsr_config("https://api.jsr.io", "https://jsr.io", "secret")

    assert "secret" not in repr(config)


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Without environment overrides the public JSR endpoints are used."""
    monkeypatch.chdir(tmp_path)
    for name in ("JSR_API_URL", "JSR_REGISTRY_URL", "JSR_API_TOKEN", "JSR_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)

    config = load_config()

    assert config.api_url == DEFAULT_API_URL
    assert config.registry_url == DEFAULT_REGISTRY_URL
    assert config.api_token is None
    assert config.authenticated is False


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("JSR_API_URL", "http://localhost:8000/")
    monkeypatch.setenv("JSR_REGISTRY_URL", "http://localhost:8001/")
    monkeypatch.setenv("JSR_API_TOKEN", "env-token")
    monkeypatch.setenv("JSR_TIMEOUT", "5")

    config = load_config()

    assert config.api_url == "http://localhost:8000"
    assert config.registry_url == "http://localhost:8001"
    assert config.api_token == "env-token"
    assert config.timeout == 5.0


def test_blank_token_counts_as_absent(
    monkeypatch: pytest.MonkeyPatch, tmp_path
) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("JSR_API_TOKEN", "   ")

    assert JSRSettings().to_config().api_token is None


def test_settings_read_dotenv_file(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """A .env file in the working directory is honoured."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("JSR_API_TOKEN", raising=False)
    (tmp_path / ".env").write_text("JSR_API_TOKEN=from-dotenv\n", encoding="utf-8")

    assert load_config().api_token == "from-dotenv"
