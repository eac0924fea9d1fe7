"""
vonage_client/utils/settings.py

WHAT THIS FILE IS FOR
---------------------
This module defines the *single source of truth* for runtime configuration
of the Vonage communications client library.

It is responsible for:
- Defining all supported configuration fields (via Pydantic BaseSettings)
- Loading default values from parameters/parameters.yaml
- Overriding defaults with environment variables (VONAGE_CLIENT_*)
- Validating that credentials are supplied in consistent pairs
- Exposing a cached, fully-validated Settings object to the client façade

LOAD & PRECEDENCE MODEL
-----------------------
Configuration is loaded in the following order (last wins):

1) Field defaults declared on Settings
2) YAML defaults from:
       parameters/parameters.yaml
3) Environment variables:
       VONAGE_CLIENT_*

This allows:
- Base URLs and timeouts to be tuned without code changes
- Credentials to live only in the deployment environment
- No hard-coded secrets in source code

WHAT THIS FILE IS NOT FOR
-------------------------
This module is NOT responsible for:
- Building auth headers or signing tokens (see utils/auth.py)
- HTTP calls
- Request / response mapping

It should only define *configuration structure and loading rules*.

DESIGN INTENT
-------------
- All runtime-configurable behavior MUST be declared here
- Credentials come in pairs; a half-configured pair fails fast
- Explicit constructor arguments on VonageClient always win over Settings
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
import yaml
from pydantic import AnyHttpUrl, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger(__name__)

PARAMETERS_PATH = Path(__file__).resolve().parents[2] / "parameters" / "parameters.yaml"


class Settings(BaseSettings):
    """
    Runtime settings for the Vonage client.

    Load order / precedence:
        1) YAML defaults (parameters/parameters.yaml)
        2) Environment variables (VONAGE_CLIENT_*), overriding YAML
    """

    model_config = SettingsConfigDict(
        env_prefix="VONAGE_CLIENT_",
        extra="ignore",
    )

    # Library metadata
    service_name: str = "vonage_client"
    environment: str = "local"
    log_level: str = "INFO"
    user_agent: str = "vonage-client-python/0.1.0"

    # Credentials
    # - api_key / api_secret: Basic auth and legacy query-param auth
    # - application_id + private key: JWT auth
    api_key: Optional[str] = None
    api_secret: Optional[str] = None
    application_id: Optional[str] = None
    private_key: Optional[str] = Field(
        default=None,
        description="PEM-encoded RSA private key. Takes precedence over private_key_path.",
    )
    private_key_path: Optional[Path] = None

    # Base URLs per API family
    api_base_url: AnyHttpUrl = Field("https://api.nexmo.com", validate_default=True)
    api_eu_base_url: AnyHttpUrl = Field("https://api-eu.vonage.com", validate_default=True)
    messages_sandbox_base_url: AnyHttpUrl = Field("https://messages-sandbox.nexmo.com", validate_default=True)

    # Transport timeout, seconds, applied to every call
    http_timeout_seconds: float = 60.0

    def read_private_key(self) -> Optional[str]:
        """Return the PEM key text, reading private_key_path if needed."""
        if self.private_key:
            return self.private_key
        if self.private_key_path:
            return self.private_key_path.read_text(encoding="utf-8")
        return None


def base_url(url: AnyHttpUrl) -> str:
    """pydantic renders bare hosts with a trailing slash; endpoints add their own."""
    return str(url).rstrip("/")


@lru_cache(maxsize=1)
def _load_yaml_parameters() -> Dict[str, Any]:
    """
    Load base configuration from parameters/parameters.yaml.

    Cached to:
    - Avoid repeated disk I/O
    - Guarantee consistent config during process lifetime
    """
    if not PARAMETERS_PATH.exists():
        logger.warning("parameters_yaml_missing", expected=str(PARAMETERS_PATH))
        return {}

    try:
        with PARAMETERS_PATH.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.error("parameters_yaml_load_error", path=str(PARAMETERS_PATH), error=str(exc))
        return {}

    if not isinstance(data, dict):
        logger.warning(
            "parameters_yaml_not_dict",
            path=str(PARAMETERS_PATH),
            type=type(data).__name__,
        )
        return {}
    logger.info("parameters_yaml_loaded", path=str(PARAMETERS_PATH))
    return data


def _credential_problems(merged: Dict[str, Any]) -> list[str]:
    problems: list[str] = []
    if bool(merged.get("api_key")) != bool(merged.get("api_secret")):
        problems.append("api_key and api_secret must be set together")
    has_key = bool(merged.get("private_key") or merged.get("private_key_path"))
    if bool(merged.get("application_id")) != has_key:
        problems.append("application_id requires private_key or private_key_path (and vice versa)")
    return problems


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Construct and return the final validated Settings object.

    This function is:
    - Cached (singleton per process)
    - The ONLY supported way to access runtime settings

    VonageClient calls this when it is not handed an explicit Settings.
    """
    # 1) YAML defaults
    yaml_data = _load_yaml_parameters()

    # 2) env overrides (partial)
    try:
        env_settings = Settings()
        env_data = env_settings.model_dump(exclude_unset=True)
        logger.info("settings_loaded_env_only_partial", fields=sorted(env_data.keys()))
    except ValidationError as exc:
        logger.warning("settings_env_validation_error", errors=exc.errors())
        env_data = {}

    # 3) merge
    merged: Dict[str, Any] = {**yaml_data, **env_data}

    # 4) enforce credential pairs
    problems = _credential_problems(merged)
    if problems:
        logger.error("settings_inconsistent_credentials", problems=problems, yaml_path=str(PARAMETERS_PATH))
        raise RuntimeError(
            f"Invalid credential settings: {'; '.join(problems)}. "
            "Set them either in environment variables (VONAGE_CLIENT_*) "
            f"or in {PARAMETERS_PATH}."
        )

    # 5) final validation
    settings = Settings.model_validate(merged)

    logger.info(
        "settings_loaded",
        environment=settings.environment,
        service_name=settings.service_name,
        api_base_url=base_url(settings.api_base_url),
        api_eu_base_url=base_url(settings.api_eu_base_url),
        http_timeout_seconds=settings.http_timeout_seconds,
        has_api_key=bool(settings.api_key),
        has_application_id=bool(settings.application_id),
    )

    return settings
