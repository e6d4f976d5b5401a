"""
Constants and enums for the rankings system.

No magic strings - use enums and Literal types for constrained values.
"""

from enum import Enum
from typing import Literal

# A list can only be saved once it holds at least this many songs
MINIMUM_LIST_SIZE = 10

# Candidates returned by a single catalog search
DEFAULT_SEARCH_LIMIT = 10

# Weight of the average rank in the community chart score
CHART_RANK_WEIGHT = 0.15

# Weight of each overlapping song in a taste comparison
OVERLAP_WEIGHT = 10.0

# Schema versions - frozen for v1
SchemaVersion = Literal["ranking/v1", "config/v1"]

RANKING_SCHEMA: SchemaVersion = "ranking/v1"


class StorageBackend(str, Enum):
    """Where ranked lists are persisted."""

    HTTP = "http"  # Remote /songs endpoint
    YAML = "yaml"  # Local <name>.ranking.yaml files


class ErrorMessages:
    """Standardized error messages."""

    DUPLICATE_SONG = "'{name}' by {artist} is already in your list."
    INVALID_RANK = "Invalid rank: {rank}. Must be between 1 and {limit}."
    BELOW_MINIMUM = "Please add {minimum} songs before saving (list has {size})."
    SESSION_NOT_FOUND = "Ranking list '{name}' not found."
    SESSION_EXISTS = "Ranking list '{name}' already exists."
    NO_SEARCH_RESULTS = "No search results for rank {rank}. Search first."
    SEARCH_RESULT_NOT_FOUND = "Search result {index} not found."
    NO_CATALOG = "No catalog API configured. Set RANKINGS_API_URL."


class SuccessMessages:
    """Standardized success messages."""

    LIST_CREATED = "Created ranking list '{name}'."
    SONG_ADDED = "Added '{name}' at rank {rank}."
    SONG_REPLACED = "Added '{name}' at rank {rank}, replacing '{previous}'."
    SONG_REMOVED = "Removed '{name}' from rank {rank}."
    SONG_MOVED = "Moved '{name}' from rank {from_rank} to rank {to_rank}."
    LIST_SAVED = "Saved {count} songs."
