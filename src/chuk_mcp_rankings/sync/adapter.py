"""
Sync adapter - moves a RankedCollection in and out of external services.

- load: hydrate the collection from the store (empty on failure)
- save: send the ranked entries to the store (all or nothing)
- search: stateless passthrough to the catalog

Network calls happen before or after a collection mutation, never in
the middle of one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from chuk_mcp_rankings.constants import MINIMUM_LIST_SIZE, ErrorMessages
from chuk_mcp_rankings.core.collection import RankedCollection
from chuk_mcp_rankings.errors import BelowMinimumSizeError, TransportError
from chuk_mcp_rankings.models.song import RankedEntry, Song
from chuk_mcp_rankings.sync.client import CatalogClient
from chuk_mcp_rankings.sync.store import RankingStore

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """Candidates for one search request."""

    query: str
    target_rank: int
    sequence: int
    songs: list[Song] = field(default_factory=list)
    stale: bool = False


@dataclass
class SaveResult:
    """Outcome of a successful save."""

    count: int
    entries: list[RankedEntry] = field(default_factory=list)


class SyncAdapter:
    """
    Thin translation between a RankedCollection and the outside world.

    Search responses carry a sequence number. When a response comes back
    after a newer search has started it is marked stale, so callers only
    ever apply the latest request's results.
    """

    def __init__(
        self,
        collection: RankedCollection,
        store: RankingStore,
        catalog: CatalogClient | None = None,
        minimum_list_size: int = MINIMUM_LIST_SIZE,
    ):
        self.collection = collection
        self.store = store
        self.catalog = catalog
        self.minimum_list_size = minimum_list_size
        self._search_sequence = 0

    @property
    def latest_search(self) -> int:
        """Sequence number of the most recently started search."""
        return self._search_sequence

    async def load(self) -> list[RankedEntry]:
        """
        Replace the collection with the saved entries.

        Transport failures are logged and leave an empty collection.

        Returns:
            The hydrated entries in rank order
        """
        try:
            entries = await self.store.load()
        except TransportError as e:
            logger.warning(f"Load failed, starting with an empty list: {e}")
            self.collection.clear()
            return []

        return self.collection.hydrate(entries)

    async def save(self) -> SaveResult:
        """
        Persist the collection.

        Raises:
            BelowMinimumSizeError: Fewer than minimum_list_size entries;
                the store is not contacted
            TransportError: The store rejected the save
        """
        size = self.collection.size()
        if size < self.minimum_list_size:
            raise BelowMinimumSizeError(size, self.minimum_list_size)

        entries = self.collection.sorted_entries()
        await self.store.save(entries)
        logger.info(f"Saved {len(entries)} ranked songs via {self.store!r}")
        return SaveResult(count=len(entries), entries=entries)

    async def search(self, query: str, target_rank: int) -> SearchResult:
        """
        Search the catalog for candidates to place at target_rank.

        Does not touch the collection.

        Raises:
            TransportError: No catalog configured, or the request failed
        """
        if self.catalog is None:
            raise TransportError(ErrorMessages.NO_CATALOG)

        self._search_sequence += 1
        sequence = self._search_sequence

        songs = await self.catalog.search(query, target_rank)

        result = SearchResult(
            query=query,
            target_rank=target_rank,
            sequence=sequence,
            songs=songs,
            stale=sequence != self._search_sequence,
        )
        if result.stale:
            logger.debug(
                f"Search #{sequence} for '{query}' superseded by #{self._search_sequence}"
            )
        return result
