"""
Ranked collection - the rank to song map and its identity set.

Invariants held after every completed mutation:
- ranks are exactly 1..size() with no gaps
- the identity set holds exactly the keys of the ranked songs

Every mutation is computed in full before it is applied, so a failing
call never leaves partial state behind.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from chuk_mcp_rankings.core.reorder import ReorderMove, compute_reorder, renumber
from chuk_mcp_rankings.errors import DuplicateItemError, InvalidRankError
from chuk_mcp_rankings.models.song import RankedEntry, Song

logger = logging.getLogger(__name__)


class RankedCollection:
    """
    An ordered list of songs addressed by 1-based rank.

    Adding at an occupied rank overwrites that slot: the previous
    occupant is dropped, not shifted down.
    """

    def __init__(self, entries: Iterable[RankedEntry] | None = None):
        self._entries: dict[int, RankedEntry] = {}
        self._keys: set[str] = set()
        if entries is not None:
            self.hydrate(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[RankedEntry]:
        return iter(self.sorted_entries())

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Song):
            return item.key in self._keys
        if isinstance(item, str):
            return item in self._keys
        return False

    def __repr__(self) -> str:
        return f"RankedCollection(size={self.size()})"

    def size(self) -> int:
        return len(self._entries)

    def has(self, key: str) -> bool:
        """Check whether a song with this identity key is ranked."""
        return key in self._keys

    def keys(self) -> frozenset[str]:
        """Snapshot of the identity set."""
        return frozenset(self._keys)

    def get(self, rank: int) -> RankedEntry | None:
        return self._entries.get(rank)

    def sorted_entries(self) -> list[RankedEntry]:
        """Entries ordered by ascending rank."""
        return [self._entries[rank] for rank in sorted(self._entries)]

    def add(self, song: Song, target_rank: int) -> RankedEntry | None:
        """
        Put a song at a rank, overwriting whatever is there.

        Args:
            song: The song to rank
            target_rank: 1..size() to overwrite a slot, size()+1 to append

        Returns:
            The evicted entry, or None if the slot was free

        Raises:
            DuplicateItemError: If the song is already ranked
            InvalidRankError: If target_rank would leave a gap
        """
        if song.key in self._keys:
            raise DuplicateItemError(song.key, song.name, song.artist)

        limit = self.size() + 1
        if not 1 <= target_rank <= limit:
            raise InvalidRankError(target_rank, limit)

        evicted = self._entries.get(target_rank)
        if evicted is not None:
            self._keys.discard(evicted.key)
            logger.debug(f"Evicted '{evicted.song.label()}' from rank {target_rank}")

        self._entries[target_rank] = RankedEntry(song=song, rank=target_rank)
        self._keys.add(song.key)
        return evicted

    def remove(self, rank: int) -> RankedEntry | None:
        """
        Remove the entry at a rank and close the gap.

        Entries below the removed one move up by one rank.

        Returns:
            The removed entry, or None if the rank was empty
        """
        removed = self._entries.get(rank)
        if removed is None:
            return None

        remaining = [e for e in self.sorted_entries() if e.rank != rank]
        self._replace(renumber(remaining))
        return removed

    def reorder(self, from_rank: int, to_rank: int, insert_before: bool = True) -> list[RankedEntry]:
        """
        Move an entry and renumber the whole list.

        Returns:
            The new sorted entries
        """
        return self.apply_move(ReorderMove(from_rank, to_rank, insert_before))

    def apply_move(self, move: ReorderMove) -> list[RankedEntry]:
        """Apply a prepared ReorderMove."""
        new_order = compute_reorder(self._entries.values(), move)
        self._replace(new_order)
        return new_order

    def apply_order(self, entries: Iterable[RankedEntry]) -> None:
        """
        Replace the contents with a complete ordered sequence.

        Ranks are reassigned 1..N in the given order.

        Raises:
            DuplicateItemError: If the sequence repeats an identity key
        """
        ordered = renumber(entries)
        seen: set[str] = set()
        for entry in ordered:
            if entry.key in seen:
                raise DuplicateItemError(entry.key, entry.song.name, entry.song.artist)
            seen.add(entry.key)
        self._replace(ordered)

    def hydrate(self, entries: Iterable[RankedEntry]) -> list[RankedEntry]:
        """
        Replace the contents with entries loaded from a store.

        Entries are ordered by their persisted rank. Later repeats of an
        identity key are dropped. Ranks are renumbered to 1..N.

        Returns:
            The hydrated sorted entries
        """
        kept: list[RankedEntry] = []
        seen: set[str] = set()
        for entry in sorted(entries, key=lambda e: e.rank):
            if entry.key in seen:
                logger.warning(f"Dropping duplicate '{entry.song.label()}' at rank {entry.rank}")
                continue
            seen.add(entry.key)
            kept.append(entry)

        ordered = renumber(kept)
        self._replace(ordered)
        return ordered

    def clear(self) -> None:
        self._entries.clear()
        self._keys.clear()

    def _replace(self, ordered: list[RankedEntry]) -> None:
        """Swap in a fully computed, already renumbered sequence."""
        self._entries = {entry.rank: entry for entry in ordered}
        self._keys = {entry.key for entry in ordered}
