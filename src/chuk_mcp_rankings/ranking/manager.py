"""
Ranking Manager - owns ranking sessions and their lifecycle.

A RankingSession is one user's list: its RankedCollection, the
SyncAdapter that loads/saves it, and the most recent search results.
Every user action goes through a session handler that reads, computes
and writes the collection without yielding in between.

Lifecycle: create (empty or loaded) -> mutated by handlers -> dropped.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from chuk_mcp_rankings.constants import MINIMUM_LIST_SIZE, ErrorMessages, StorageBackend
from chuk_mcp_rankings.core.chart import (
    ChartEntry,
    TasteComparison,
    build_chart,
    compare_rankings,
)
from chuk_mcp_rankings.core.collection import RankedCollection
from chuk_mcp_rankings.core.reorder import ReorderMove
from chuk_mcp_rankings.errors import InvalidRankError, SessionNotFoundError, TransportError
from chuk_mcp_rankings.models.song import RankedEntry, Song
from chuk_mcp_rankings.ranking.validator import RankingValidator, ValidationResult
from chuk_mcp_rankings.sync.adapter import SaveResult, SearchResult, SyncAdapter
from chuk_mcp_rankings.sync.client import CatalogClient
from chuk_mcp_rankings.sync.store import HttpRankingStore, RankingStore, YamlRankingStore

logger = logging.getLogger(__name__)


class RankingSession:
    """One ranked list and the handlers that change it."""

    def __init__(
        self,
        name: str,
        store: RankingStore,
        catalog: CatalogClient | None = None,
        minimum_list_size: int = MINIMUM_LIST_SIZE,
    ):
        self.name = name
        self.collection = RankedCollection()
        self.adapter = SyncAdapter(
            self.collection,
            store,
            catalog=catalog,
            minimum_list_size=minimum_list_size,
        )
        self.validator = RankingValidator(minimum_list_size)
        self.last_search: SearchResult | None = None
        self.created = datetime.now(UTC)
        self.modified = self.created

    def __repr__(self) -> str:
        return f"RankingSession({self.name!r}, size={self.collection.size()})"

    @property
    def store(self) -> RankingStore:
        return self.adapter.store

    def entries(self) -> list[RankedEntry]:
        return self.collection.sorted_entries()

    def add_song(self, song: Song, rank: int) -> RankedEntry | None:
        """
        Place a song at a rank.

        Returns:
            The song that previously held the rank, if any
        """
        evicted = self.collection.add(song, rank)
        self._touch()
        return evicted

    def add_search_result(self, index: int) -> tuple[RankedEntry, RankedEntry | None]:
        """
        Place one of the latest search candidates at the searched rank.

        Args:
            index: 0-based position in the latest search results

        Returns:
            (new entry, evicted entry or None)
        """
        search = self.last_search
        if search is None or not search.songs:
            rank = search.target_rank if search else "?"
            raise ValueError(ErrorMessages.NO_SEARCH_RESULTS.format(rank=rank))
        if not 0 <= index < len(search.songs):
            raise ValueError(ErrorMessages.SEARCH_RESULT_NOT_FOUND.format(index=index))

        song = search.songs[index]
        evicted = self.add_song(song, search.target_rank)
        self.last_search = None
        return RankedEntry(song=song, rank=search.target_rank), evicted

    def remove_song(self, rank: int) -> RankedEntry | None:
        """Remove the song at a rank; later songs move up."""
        removed = self.collection.remove(rank)
        if removed is not None:
            self._touch()
        return removed

    def move_song(self, from_rank: int, to_rank: int, insert_before: bool = True) -> RankedEntry:
        """
        Move a song and renumber the list.

        Returns:
            The moved song's new entry
        """
        moved = self.collection.get(from_rank)
        if moved is None:
            raise InvalidRankError(from_rank, self.collection.size())

        new_order = self.collection.apply_move(ReorderMove(from_rank, to_rank, insert_before))
        self._touch()

        # A move is a permutation, so the moved key is always present
        position = [entry.key for entry in new_order].index(moved.key)
        return new_order[position]

    def clear(self) -> None:
        self.collection.clear()
        self.last_search = None
        self._touch()

    def validate(self) -> ValidationResult:
        return self.validator.validate(self.collection)

    async def search(self, query: str, rank: int) -> SearchResult:
        """
        Search for candidates for a rank.

        Only the latest search is kept; stale responses are returned but
        never replace newer results.
        """
        limit = self.collection.size() + 1
        if not 1 <= rank <= limit:
            raise InvalidRankError(rank, limit)

        result = await self.adapter.search(query, rank)
        if not result.stale:
            self.last_search = result
        return result

    async def load(self) -> list[RankedEntry]:
        entries = await self.adapter.load()
        self.last_search = None
        self._touch()
        return entries

    async def save(self) -> SaveResult:
        return await self.adapter.save()

    def to_dict(self) -> dict[str, Any]:
        """Summary used by the tools."""
        return {
            "name": self.name,
            "size": self.collection.size(),
            "minimum_to_save": self.adapter.minimum_list_size,
            "entries": [entry.to_wire() for entry in self.entries()],
            "modified": self.modified.isoformat(),
        }

    def _touch(self) -> None:
        self.modified = datetime.now(UTC)


class RankingManager:
    """
    Manages ranking sessions with pluggable persistence.

    Sessions are held in memory by name. Each one gets a store:
    the backend's /songs endpoint, or a YAML file under rankings_dir.
    """

    def __init__(
        self,
        rankings_dir: Path,
        catalog: CatalogClient | None = None,
        storage: StorageBackend = StorageBackend.YAML,
        minimum_list_size: int = MINIMUM_LIST_SIZE,
    ):
        """
        Initialize the manager.

        Args:
            rankings_dir: Directory for YAML ranking files
            catalog: Catalog client for search (and HTTP storage)
            storage: Persistence backend for new sessions
            minimum_list_size: Songs required before a save is attempted
        """
        self.rankings_dir = rankings_dir
        self.catalog = catalog
        self.storage = StorageBackend(storage)
        self.minimum_list_size = minimum_list_size
        self._sessions: dict[str, RankingSession] = {}

    def store_for(self, name: str) -> RankingStore:
        """Build the store a session with this name persists to."""
        if self.storage == StorageBackend.HTTP:
            if self.catalog is None:
                raise TransportError(ErrorMessages.NO_CATALOG)
            return HttpRankingStore(self.catalog)
        return YamlRankingStore.for_name(self.rankings_dir, name)

    async def create(self, name: str, load: bool = True) -> RankingSession:
        """
        Create a new session.

        Args:
            name: List name
            load: Hydrate from the store (empty on failure)

        Returns:
            The created RankingSession
        """
        if name in self._sessions:
            raise ValueError(ErrorMessages.SESSION_EXISTS.format(name=name))

        session = RankingSession(
            name,
            self.store_for(name),
            catalog=self.catalog,
            minimum_list_size=self.minimum_list_size,
        )
        if load:
            await session.load()

        self._sessions[name] = session
        logger.info(f"Opened ranking list '{name}' ({session.collection.size()} songs)")
        return session

    async def get(self, name: str) -> RankingSession | None:
        return self._sessions.get(name)

    async def require(self, name: str) -> RankingSession:
        """Get a session or raise SessionNotFoundError."""
        session = self._sessions.get(name)
        if session is None:
            raise SessionNotFoundError(name)
        return session

    async def open(self, name: str) -> RankingSession:
        """Get an existing session, or create and load it."""
        session = self._sessions.get(name)
        if session is None:
            session = await self.create(name)
        return session

    async def drop(self, name: str) -> bool:
        """
        Discard a session. Unsaved changes are lost.

        Returns:
            True if dropped, False if not found
        """
        return self._sessions.pop(name, None) is not None

    async def list_sessions(self) -> list[RankingSession]:
        return sorted(self._sessions.values(), key=lambda s: s.modified, reverse=True)

    async def entries_for(self, name: str) -> list[RankedEntry]:
        """
        Ranked entries for a list, from memory or its YAML file.

        Open sessions win over what is on disk.
        """
        session = self._sessions.get(name)
        if session is not None:
            return session.entries()

        store = YamlRankingStore.for_name(self.rankings_dir, name)
        if not store.path.exists():
            raise SessionNotFoundError(name)
        return RankedCollection(await store.load()).sorted_entries()

    async def saved_list_names(self) -> list[str]:
        """Names of lists saved as YAML files plus open sessions."""
        names = {store.name for store in YamlRankingStore.discover(self.rankings_dir)}
        names.update(self._sessions)
        return sorted(names)

    async def chart(self, names: list[str] | None = None) -> list[ChartEntry]:
        """Build the community chart over the given (or all known) lists."""
        names = names if names is not None else await self.saved_list_names()
        rankings = [await self.entries_for(name) for name in names]
        return build_chart(rankings, list_size=self.minimum_list_size)

    async def compare(self, first: str, second: str) -> TasteComparison:
        return compare_rankings(await self.entries_for(first), await self.entries_for(second))

    async def aclose(self) -> None:
        """Release the catalog client."""
        if self.catalog is not None:
            await self.catalog.aclose()
