"""
Exceptions raised by the rankings engine and its adapters.

Tools catch these at the MCP boundary and turn them into
``{"status": "error"}`` payloads.
"""

from __future__ import annotations

from chuk_mcp_rankings.constants import ErrorMessages


class RankingError(Exception):
    """Base class for all ranking errors."""


class DuplicateItemError(RankingError, ValueError):
    """A song with the same identity key is already ranked."""

    def __init__(self, key: str, name: str, artist: str):
        self.key = key
        super().__init__(ErrorMessages.DUPLICATE_SONG.format(name=name, artist=artist))


class InvalidRankError(RankingError, ValueError):
    """A rank outside the range the operation accepts."""

    def __init__(self, rank: int, limit: int):
        self.rank = rank
        self.limit = limit
        super().__init__(ErrorMessages.INVALID_RANK.format(rank=rank, limit=limit))


class BelowMinimumSizeError(RankingError, ValueError):
    """Save refused locally because the list is too short."""

    def __init__(self, size: int, minimum: int):
        self.size = size
        self.minimum = minimum
        super().__init__(ErrorMessages.BELOW_MINIMUM.format(minimum=minimum, size=size))


class TransportError(RankingError, RuntimeError):
    """The catalog or the store could not be reached, or answered non-2xx."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class SessionNotFoundError(RankingError, KeyError):
    """No ranking session with the given name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(ErrorMessages.SESSION_NOT_FOUND.format(name=name))

    def __str__(self) -> str:
        return str(self.args[0])
