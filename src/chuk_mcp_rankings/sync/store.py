"""
Ranking stores - where saved lists live.

A store accepts an ordered list of entries and returns an ordered list.
Nothing more is promised: no partial saves, no history, no durability
guarantees beyond what the backend gives.

Stores:
- HttpRankingStore: the backend's /songs endpoint
- YamlRankingStore: one <name>.ranking.yaml file per list
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import yaml
from pydantic import ValidationError

from chuk_mcp_rankings.constants import RANKING_SCHEMA
from chuk_mcp_rankings.errors import TransportError
from chuk_mcp_rankings.models.song import RankedEntry
from chuk_mcp_rankings.sync.client import CatalogClient

logger = logging.getLogger(__name__)

RANKING_SUFFIX = ".ranking.yaml"


@runtime_checkable
class RankingStore(Protocol):
    """Persistence contract for one ranked list."""

    async def load(self) -> list[RankedEntry]:
        """Return the saved entries (empty if nothing was saved)."""
        ...

    async def save(self, entries: list[RankedEntry]) -> None:
        """Replace the saved entries. Raises TransportError on failure."""
        ...


class HttpRankingStore:
    """Store backed by the catalog backend's /songs endpoint."""

    def __init__(self, client: CatalogClient):
        self.client = client

    def __repr__(self) -> str:
        return f"HttpRankingStore({self.client.base_url!r})"

    async def load(self) -> list[RankedEntry]:
        return await self.client.fetch_entries()

    async def save(self, entries: list[RankedEntry]) -> None:
        await self.client.store_entries(entries)


class YamlRankingStore:
    """
    Store backed by a local YAML file.

    The file holds the list name, save time and the entries in their
    flat wire shape, so it can be edited by hand or version controlled.
    """

    def __init__(self, path: Path, name: str | None = None):
        """
        Initialize the store.

        Args:
            path: The .ranking.yaml file
            name: List name recorded in the file (defaults to the file stem)
        """
        self.path = path
        self.name = name or path.name.removesuffix(RANKING_SUFFIX)

    def __repr__(self) -> str:
        return f"YamlRankingStore({str(self.path)!r})"

    @classmethod
    def for_name(cls, directory: Path, name: str) -> YamlRankingStore:
        """Get the store for a named list inside a directory."""
        # Sanitize name for filename
        safe_name = name.replace(" ", "_").replace("/", "_")
        return cls(directory / f"{safe_name}{RANKING_SUFFIX}", name=name)

    @staticmethod
    def discover(directory: Path) -> list[YamlRankingStore]:
        """
        Find every saved list in a directory.

        Each store is named after the ``name`` recorded in its file, so
        lists whose names were sanitized for the filename keep them.
        """
        if not directory.exists():
            return []
        return [
            YamlRankingStore(path, name=YamlRankingStore._recorded_name(path))
            for path in sorted(directory.glob(f"*{RANKING_SUFFIX}"))
        ]

    @staticmethod
    def _recorded_name(path: Path) -> str | None:
        """List name stored in a ranking file (None if unreadable)."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Could not read list name from {path}: {e}")
            return None
        if isinstance(data, dict) and isinstance(data.get("name"), str):
            return data["name"]
        return None

    async def load(self) -> list[RankedEntry]:
        if not self.path.exists():
            return []

        try:
            with open(self.path) as f:
                data = yaml.safe_load(f) or {}
            return [RankedEntry.from_wire(item) for item in data.get("entries", [])]
        except (OSError, yaml.YAMLError, ValidationError, ValueError, AttributeError) as e:
            raise TransportError(f"Failed to read {self.path}: {e}") from e

    async def save(self, entries: list[RankedEntry]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                yaml.safe_dump(
                    self.to_yaml_dict(entries),
                    f,
                    default_flow_style=False,
                    sort_keys=False,
                    allow_unicode=True,
                )
        except OSError as e:
            raise TransportError(f"Failed to write {self.path}: {e}") from e

        logger.info(f"Saved {len(entries)} entries to {self.path}")

    def to_yaml_dict(self, entries: list[RankedEntry]) -> dict[str, Any]:
        """Produce the canonical YAML document for a list."""
        return {
            "schema": RANKING_SCHEMA,
            "name": self.name,
            "saved": datetime.now(UTC).isoformat(),
            "entries": [entry.to_wire() for entry in entries],
        }
