"""
Song models - catalog items and their ranked placements.

A Song is the external catalog entity. A RankedEntry places a Song
at a rank in a list. Rank is the only ordering key.

Both models are frozen: moving a song produces a new RankedEntry.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chuk_mcp_rankings.identity import identity_key


class Song(BaseModel):
    """
    A song returned by the catalog.

    Only name and artist take part in identity. Unknown fields
    coming from the catalog are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(..., description="Track title")
    artist: str = Field(..., description="Primary artist")
    uri: str = Field("", description="Catalog URI (e.g., 'spotify:track:...')")
    album_cover_url: str = Field("", description="Artwork URL")

    @field_validator("name", "artist")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        """Name and artist are required for identity."""
        if not v:
            raise ValueError("Song name and artist must not be empty")
        return v

    @property
    def key(self) -> str:
        """Identity key used for duplicate detection."""
        return identity_key(self)

    def label(self) -> str:
        """Short human-readable label."""
        return f"{self.name} - {self.artist}"

    def to_wire(self) -> dict[str, Any]:
        """Convert to the JSON shape the catalog speaks."""
        return {
            "key": self.key,
            "name": self.name,
            "artist": self.artist,
            "uri": self.uri,
            "album_cover_url": self.album_cover_url,
        }


class RankedEntry(BaseModel):
    """A song placed at a 1-based rank."""

    model_config = ConfigDict(frozen=True)

    song: Song = Field(..., description="The ranked song")
    rank: int = Field(..., ge=1, description="1-based position in the list")

    @property
    def key(self) -> str:
        return self.song.key

    def with_rank(self, rank: int) -> RankedEntry:
        """Return a copy of this entry at a different rank."""
        if rank == self.rank:
            return self
        return RankedEntry(song=self.song, rank=rank)

    def to_wire(self) -> dict[str, Any]:
        """
        Convert to the flat persisted shape.

        This is the shape the store accepts and returns:
        {key, name, artist, uri, album_cover_url, rank}.
        """
        data = self.song.to_wire()
        data["rank"] = self.rank
        return data

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> RankedEntry:
        """
        Create a RankedEntry from the flat persisted shape.

        Raises:
            ValueError: If the rank is missing or invalid
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected an entry object, got {type(data).__name__}")
        rank = data.get("rank")
        if rank is None:
            raise ValueError(f"Entry for '{data.get('name')}' has no rank")
        return cls(song=Song.model_validate(data), rank=int(rank))
