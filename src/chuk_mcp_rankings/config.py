"""
Server configuration.

Sources, lowest precedence first:
1. Defaults
2. YAML file (RANKINGS_CONFIG or --config)
3. Environment variables (RANKINGS_*)
4. Command-line flags (applied by server.py)
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from chuk_mcp_rankings.constants import DEFAULT_SEARCH_LIMIT, MINIMUM_LIST_SIZE, StorageBackend

ENV_PREFIX = "RANKINGS_"

# Environment variable -> config field
ENV_FIELDS: dict[str, str] = {
    "API_URL": "api_url",
    "STORAGE": "storage",
    "DIR": "rankings_dir",
    "TIMEOUT": "timeout",
    "SEARCH_LIMIT": "search_limit",
    "MINIMUM_LIST_SIZE": "minimum_list_size",
}


class RankingsConfig(BaseModel):
    """Runtime configuration for the rankings server."""

    api_url: str | None = Field(None, description="Catalog backend root URL")
    storage: StorageBackend = Field(StorageBackend.YAML, description="Where lists are saved")
    rankings_dir: Path = Field(
        default_factory=lambda: Path.cwd() / "rankings",
        description="Directory for YAML ranking files",
    )
    timeout: float = Field(10.0, gt=0, description="HTTP timeout in seconds")
    search_limit: int = Field(DEFAULT_SEARCH_LIMIT, ge=1, le=50, description="Search results kept")
    minimum_list_size: int = Field(MINIMUM_LIST_SIZE, ge=1, description="Songs needed to save")

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str | None) -> str | None:
        """Empty strings mean 'not configured'."""
        if not v:
            return None
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"api_url must be an http(s) URL, got '{v}'")
        return v.rstrip("/")

    @classmethod
    def from_yaml(cls, path: Path) -> RankingsConfig:
        """Load configuration from a YAML file."""
        return cls.model_validate(_read_yaml(path))

    @classmethod
    def load(
        cls,
        config_path: Path | None = None,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> RankingsConfig:
        """
        Build the effective configuration.

        Args:
            config_path: Optional YAML file (falls back to RANKINGS_CONFIG)
            environ: Environment mapping (defaults to os.environ)
            **overrides: Values that win over everything else; None is ignored

        Returns:
            The merged RankingsConfig
        """
        env = os.environ if environ is None else environ

        if config_path is None and env.get(f"{ENV_PREFIX}CONFIG"):
            config_path = Path(env[f"{ENV_PREFIX}CONFIG"])

        data: dict[str, Any] = {}
        if config_path is not None:
            data.update(_read_yaml(config_path))

        for suffix, field_name in ENV_FIELDS.items():
            value = env.get(f"{ENV_PREFIX}{suffix}")
            if value is not None:
                data[field_name] = value

        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(data)


def _read_yaml(path: Path) -> dict[str, Any]:
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return data
