from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from deflate.credentials import DeflateCredentials
from deflate.errors import ConfigurationError

API_URL = "https://api.deflate.io/v1/"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class ClientSettings:
    base_url: str = API_URL
    timeout: float = DEFAULT_TIMEOUT
    verify: bool = True

    def url_for(self, action: str) -> str:
        return self.base_url.rstrip("/") + "/" + action.lstrip("/")


def load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ConfigurationError("Config root must be a mapping (YAML dict).")
    return data


def require_bool(section: dict[str, Any], key: str, default: bool, prefix: str = "") -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ConfigurationError(f"{prefix}{key} must be true or false, got {value!r}")
    return value


def settings_from_mapping(data: dict[str, Any]) -> ClientSettings:
    client = data.get("client") or {}
    if not isinstance(client, dict):
        raise ConfigurationError("client section must be a mapping")

    base_url = str(client.get("base_url", API_URL))
    if not base_url.startswith(("http://", "https://")):
        raise ConfigurationError(f"client.base_url must be an http(s) URL, got {base_url!r}")

    timeout = float(client.get("timeout", DEFAULT_TIMEOUT))
    if timeout <= 0:
        raise ConfigurationError("client.timeout must be > 0")

    return ClientSettings(
        base_url=base_url,
        timeout=timeout,
        verify=require_bool(client, "verify", True, prefix="client."),
    )


def load_settings(path: Path) -> ClientSettings:
    return settings_from_mapping(load_yaml(path))


def require_env(name: str) -> str:
    v = os.getenv(name)
    if not v:
        raise ConfigurationError(f"Missing required env var: {name}")
    return v


def credentials_from_env(
    key_var: str = "DEFLATE_API_KEY", secret_var: str = "DEFLATE_API_SECRET"
) -> DeflateCredentials:
    """Read API credentials from the environment, loading a local .env first."""
    load_dotenv()
    return DeflateCredentials(api_key=require_env(key_var), api_secret=require_env(secret_var))
