"""
Core ranking primitives - the state engine.

These hold the invariants everything else relies on:
- RankedCollection: rank to song map plus identity set, ranks always 1..N
- ReorderMove: a (from_rank, to_rank, insert_before) move instruction
- compute_reorder: pure function renumbering a list after a move
- build_chart / compare_rankings: aggregate views over saved lists
"""

from chuk_mcp_rankings.core.chart import (
    ChartEntry,
    SharedSong,
    TasteComparison,
    build_chart,
    compare_rankings,
)
from chuk_mcp_rankings.core.collection import RankedCollection
from chuk_mcp_rankings.core.reorder import ReorderMove, compute_reorder, renumber

__all__ = [
    # Collection
    "RankedCollection",
    # Reorder
    "ReorderMove",
    "compute_reorder",
    "renumber",
    # Charts
    "ChartEntry",
    "SharedSong",
    "TasteComparison",
    "build_chart",
    "compare_rankings",
]
