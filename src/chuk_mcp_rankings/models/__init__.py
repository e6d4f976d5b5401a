"""
Pydantic models for the rankings system.

This module provides:
- Song: Catalog item (name, artist, uri, artwork)
- RankedEntry: A Song placed at a rank
"""

from chuk_mcp_rankings.models.song import RankedEntry, Song

__all__ = [
    "RankedEntry",
    "Song",
]
