"""
Reorder engine - recompute every rank after a move.

A move is a (from_rank, to_rank, insert_before) triple. Pointer drags,
keyboard moves and programmatic calls all build a ReorderMove and go
through compute_reorder.

The engine works on the rank-sorted sequence with list-splice semantics:
pop the moved entry, compute the insertion index, insert, renumber 1..N.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from chuk_mcp_rankings.errors import InvalidRankError
from chuk_mcp_rankings.models.song import RankedEntry


@dataclass(frozen=True)
class ReorderMove:
    """
    A single move instruction.

    Attributes:
        from_rank: Current rank of the moved entry
        to_rank: Rank of the entry it was dropped on
        insert_before: True when dropped above the target's midpoint
    """

    from_rank: int
    to_rank: int
    insert_before: bool = True

    @classmethod
    def up(cls, rank: int) -> ReorderMove:
        """Move one place towards rank 1."""
        return cls(rank, max(rank - 1, 1), insert_before=True)

    @classmethod
    def down(cls, rank: int, size: int) -> ReorderMove:
        """Move one place towards the bottom."""
        return cls(rank, min(rank + 1, size), insert_before=False)

    @classmethod
    def to_top(cls, rank: int) -> ReorderMove:
        return cls(rank, 1, insert_before=True)

    @classmethod
    def to_bottom(cls, rank: int, size: int) -> ReorderMove:
        return cls(rank, size, insert_before=False)

    @property
    def is_noop(self) -> bool:
        """Dropping an entry onto itself changes nothing."""
        return self.from_rank == self.to_rank

    def insertion_index(self) -> int:
        """
        0-based index in the sequence after the moved entry was popped.

        Dropping below the target inserts after it. When the source sat
        above the target, popping it shifted the target up by one.
        """
        index = self.to_rank - 1
        if not self.insert_before:
            index += 1
        if self.from_rank < self.to_rank:
            index -= 1
        return index


def renumber(entries: Iterable[RankedEntry]) -> list[RankedEntry]:
    """Assign rank = position + 1 in iteration order."""
    return [entry.with_rank(position + 1) for position, entry in enumerate(entries)]


def compute_reorder(entries: Iterable[RankedEntry], move: ReorderMove) -> list[RankedEntry]:
    """
    Compute the complete new rank assignment for a move.

    Args:
        entries: Current entries (any order; sorted by rank here)
        move: The move to apply

    Returns:
        New entries ranked 1..N reflecting the move. Inputs are not mutated.

    Raises:
        InvalidRankError: If either rank is outside 1..N
    """
    sequence = sorted(entries, key=lambda e: e.rank)
    size = len(sequence)

    for rank in (move.from_rank, move.to_rank):
        if not 1 <= rank <= size:
            raise InvalidRankError(rank, size)

    if move.is_noop:
        return renumber(sequence)

    moved = sequence.pop(move.from_rank - 1)
    index = min(max(move.insertion_index(), 0), len(sequence))
    sequence.insert(index, moved)

    return renumber(sequence)
