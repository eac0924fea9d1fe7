# tests/test_settings.py
from __future__ import annotations

from pathlib import Path

import pytest

import vonage_client.utils.settings as settings_module
from vonage_client.utils.settings import Settings, base_url, get_settings

_ENV_FIELDS = [
    "API_KEY",
    "API_SECRET",
    "APPLICATION_ID",
    "PRIVATE_KEY",
    "PRIVATE_KEY_PATH",
    "API_BASE_URL",
    "HTTP_TIMEOUT_SECONDS",
]


@pytest.fixture
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Point the loader at a temp YAML file with a clean VONAGE_CLIENT_* environment."""
    for name in _ENV_FIELDS:
        monkeypatch.delenv(f"VONAGE_CLIENT_{name}", raising=False)

    yaml_path = tmp_path / "parameters.yaml"
    monkeypatch.setattr(settings_module, "PARAMETERS_PATH", yaml_path)
    settings_module._load_yaml_parameters.cache_clear()
    get_settings.cache_clear()
    yield yaml_path
    settings_module._load_yaml_parameters.cache_clear()
    get_settings.cache_clear()


def test_defaults_apply_when_yaml_is_missing(isolated_settings: Path) -> None:
    s = get_settings()

    assert base_url(s.api_base_url) == "https://api.nexmo.com"
    assert base_url(s.api_eu_base_url) == "https://api-eu.vonage.com"
    assert s.http_timeout_seconds == 60.0
    assert s.api_key is None


def test_yaml_values_are_loaded(isolated_settings: Path) -> None:
    isolated_settings.write_text(
        "api_base_url: https://api.example.com\nhttp_timeout_seconds: 5\n",
        encoding="utf-8",
    )

    s = get_settings()

    assert base_url(s.api_base_url) == "https://api.example.com"
    assert s.http_timeout_seconds == 5.0


def test_env_overrides_yaml(isolated_settings: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    isolated_settings.write_text("http_timeout_seconds: 5\n", encoding="utf-8")
    monkeypatch.setenv("VONAGE_CLIENT_HTTP_TIMEOUT_SECONDS", "12.5")

    assert get_settings().http_timeout_seconds == 12.5


def test_non_mapping_yaml_is_ignored(isolated_settings: Path) -> None:
    isolated_settings.write_text("- just\n- a list\n", encoding="utf-8")

    assert get_settings().http_timeout_seconds == 60.0


def test_half_configured_key_pair_fails_fast(isolated_settings: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VONAGE_CLIENT_API_KEY", "a1b2c3d4")

    with pytest.raises(RuntimeError) as exc_info:
        get_settings()

    assert "api_key and api_secret" in str(exc_info.value)


def test_application_id_without_private_key_fails_fast(
    isolated_settings: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("VONAGE_CLIENT_APPLICATION_ID", "78d335fa-323d-0114-9c3d-d6f0d48968cf")

    with pytest.raises(RuntimeError):
        get_settings()


def test_read_private_key_prefers_inline_key(isolated_settings: Path, tmp_path: Path) -> None:
    key_file = tmp_path / "private.key"
    key_file.write_text("FROM-FILE", encoding="utf-8")

    assert Settings(private_key="INLINE", private_key_path=key_file).read_private_key() == "INLINE"
    assert Settings(private_key_path=key_file).read_private_key() == "FROM-FILE"
    assert Settings().read_private_key() is None
