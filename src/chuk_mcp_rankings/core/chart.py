"""
Charts - aggregate views over many saved ranked lists.

- build_chart: community chart, one row per distinct song
- compare_rankings: how closely two lists agree
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from chuk_mcp_rankings.constants import CHART_RANK_WEIGHT, MINIMUM_LIST_SIZE, OVERLAP_WEIGHT
from chuk_mcp_rankings.models.song import RankedEntry, Song


@dataclass
class ChartEntry:
    """A song's standing across all submitted lists."""

    song: Song
    votes: int
    average_rank: float
    score: float
    position: int = 0

    def to_dict(self) -> dict:
        return {
            "position": self.position,
            "name": self.song.name,
            "artist": self.song.artist,
            "uri": self.song.uri,
            "votes": self.votes,
            "average_rank": round(self.average_rank, 2),
            "score": round(self.score, 3),
        }


@dataclass
class SharedSong:
    """A song both lists ranked."""

    name: str
    artist: str
    first_rank: int
    second_rank: int

    @property
    def rank_difference(self) -> int:
        return abs(self.first_rank - self.second_rank)


@dataclass
class TasteComparison:
    """Agreement between two ranked lists."""

    overlapping_songs: int = 0
    song_rank_diff: float | None = None
    song_relationship_strength: float = 0.0
    overlapping_artists: int = 0
    artist_rank_diff: float | None = None
    shared_songs: list[SharedSong] = field(default_factory=list)
    shared_artists: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "overlapping_songs": self.overlapping_songs,
            "song_rank_diff": self.song_rank_diff,
            "song_relationship_strength": self.song_relationship_strength,
            "overlapping_artists": self.overlapping_artists,
            "artist_rank_diff": self.artist_rank_diff,
            "shared_songs": [
                {
                    "name": s.name,
                    "artist": s.artist,
                    "first_rank": s.first_rank,
                    "second_rank": s.second_rank,
                    "rank_difference": s.rank_difference,
                }
                for s in self.shared_songs
            ],
            "shared_artists": self.shared_artists,
        }


def build_chart(
    rankings: Iterable[Sequence[RankedEntry]],
    list_size: int = MINIMUM_LIST_SIZE,
) -> list[ChartEntry]:
    """
    Aggregate many ranked lists into one chart.

    Each song scores one point per list it appears in, plus a bonus
    for ranking high: CHART_RANK_WEIGHT * (list_size + 1 - average_rank).

    Args:
        rankings: Ranked lists (one per user)
        list_size: Nominal list length used for the rank bonus

    Returns:
        Chart entries, highest score first, ties broken by name
    """
    songs: dict[str, Song] = {}
    ranks: dict[str, list[int]] = {}

    for entries in rankings:
        for entry in entries:
            songs.setdefault(entry.key, entry.song)
            ranks.setdefault(entry.key, []).append(entry.rank)

    chart = []
    for key, song_ranks in ranks.items():
        votes = len(song_ranks)
        average = sum(song_ranks) / votes
        score = votes + CHART_RANK_WEIGHT * (list_size + 1 - average)
        chart.append(ChartEntry(song=songs[key], votes=votes, average_rank=average, score=score))

    chart.sort(key=lambda c: (-c.score, c.song.name))
    for position, entry in enumerate(chart, start=1):
        entry.position = position
    return chart


def compare_rankings(
    first: Sequence[RankedEntry],
    second: Sequence[RankedEntry],
) -> TasteComparison:
    """
    Compare two ranked lists.

    Songs match on identity key; artists match on exact artist string.
    Relationship strength is OVERLAP_WEIGHT per shared song minus the
    average rank difference of those songs.
    """
    result = TasteComparison()

    second_by_key = {entry.key: entry for entry in second}
    for entry in first:
        other = second_by_key.get(entry.key)
        if other is None:
            continue
        result.shared_songs.append(
            SharedSong(
                name=entry.song.name,
                artist=entry.song.artist,
                first_rank=entry.rank,
                second_rank=other.rank,
            )
        )

    result.shared_songs.sort(key=lambda s: (s.rank_difference, s.first_rank))
    result.overlapping_songs = len(result.shared_songs)
    if result.shared_songs:
        diffs = [s.rank_difference for s in result.shared_songs]
        result.song_rank_diff = sum(diffs) / len(diffs)
        result.song_relationship_strength = (
            result.overlapping_songs * OVERLAP_WEIGHT - result.song_rank_diff
        )

    # Every pairing of same-artist songs across the two lists
    artist_diffs: list[int] = []
    artists: set[str] = set()
    for a in first:
        for b in second:
            if a.song.artist == b.song.artist:
                artists.add(a.song.artist)
                artist_diffs.append(abs(a.rank - b.rank))

    result.shared_artists = sorted(artists)
    result.overlapping_artists = len(artists)
    if artist_diffs:
        result.artist_rank_diff = sum(artist_diffs) / len(artist_diffs)

    return result
