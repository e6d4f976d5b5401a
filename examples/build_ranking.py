#!/usr/bin/env python3
"""
Example: Build, reorder and save a ranked list.

Walks through the same steps a user takes: place songs at ranks,
replace one, drag one to a new position, nudge another with the
keyboard, then save once the list is long enough.

Usage:
    python examples/build_ranking.py
    # Creates: examples/output/demo.ranking.yaml
"""

from pathlib import Path

from chuk_mcp_rankings.core import ReorderMove
from chuk_mcp_rankings.errors import BelowMinimumSizeError, DuplicateItemError
from chuk_mcp_rankings.models import Song
from chuk_mcp_rankings.ranking import RankingManager

SONGS = [
    ("Hyperballad", "Björk"),
    ("Teardrop", "Massive Attack"),
    ("Paranoid Android", "Radiohead"),
    ("Unfinished Sympathy", "Massive Attack"),
    ("Windowlicker", "Aphex Twin"),
    ("Glory Box", "Portishead"),
    ("Bittersweet Symphony", "The Verve"),
    ("Army of Me", "Björk"),
    ("Common People", "Pulp"),
]


def show(title: str, session) -> None:
    print(title)
    for entry in session.entries():
        print(f"  {entry.rank:2d}. {entry.song.label()}")
    print()


async def main() -> None:
    """Build the demo list and save it as YAML."""
    output_dir = Path(__file__).parent / "output"

    print("CHUK Rankings")
    print("=" * 40)

    manager = RankingManager(output_dir)
    session = await manager.create("demo", load=False)

    for rank, (name, artist) in enumerate(SONGS, start=1):
        session.add_song(Song(name=name, artist=artist), rank)
    show("Initial list:", session)

    # Same song twice is refused
    try:
        session.add_song(Song(name="Teardrop", artist="Massive Attack"), 9)
    except DuplicateItemError as e:
        print(f"Refused: {e}\n")

    # Overwrite rank 5
    evicted = session.add_song(Song(name="Karma Police", artist="Radiohead"), 5)
    print(f"Replaced {evicted.song.label()} at rank 5\n")

    # Drag rank 9 onto rank 2, landing above it
    session.move_song(9, 2, insert_before=True)
    show("After dragging 9 above 2:", session)

    # Keyboard: move rank 3 down one
    session.collection.apply_move(ReorderMove.down(3, session.collection.size()))
    show("After moving 3 down:", session)

    try:
        await session.save()
    except BelowMinimumSizeError as e:
        print(f"Not saved: {e}\n")

    session.add_song(Song(name="Karmacoma", artist="Massive Attack"), 10)
    result = await session.save()
    print(f"Saved {result.count} songs to {session.store.path}")


if __name__ == "__main__":
    import asyncio

    asyncio.run(main())
