"""
Tests for charts and list comparison.
"""

import pytest
from factories import make_entries, make_song

from chuk_mcp_rankings.core import build_chart, compare_rankings
from chuk_mcp_rankings.models import RankedEntry, Song


def ranked(*songs: Song) -> list[RankedEntry]:
    return [RankedEntry(song=song, rank=rank) for rank, song in enumerate(songs, start=1)]


class TestBuildChart:
    """Tests for build_chart."""

    def test_empty(self) -> None:
        """No lists, no chart."""
        assert build_chart([]) == []

    def test_single_list_keeps_order(self) -> None:
        """One list charts in its own order."""
        chart = build_chart([make_entries(5)])
        assert [c.song.name for c in chart] == [f"Song {n}" for n in range(1, 6)]
        assert [c.position for c in chart] == [1, 2, 3, 4, 5]

    def test_score_formula(self) -> None:
        """votes + 0.15 * (list_size + 1 - average rank)."""
        a, b = make_song(1), make_song(2)
        chart = build_chart([ranked(a, b), ranked(b, a)], list_size=10)
        by_name = {c.song.name: c for c in chart}
        assert by_name["Song 1"].votes == 2
        assert by_name["Song 1"].average_rank == pytest.approx(1.5)
        assert by_name["Song 1"].score == pytest.approx(2 + 0.15 * 9.5)

    def test_votes_beat_rank(self) -> None:
        """A song on more lists outranks a single number one."""
        popular, favourite = make_song(1), make_song(2)
        chart = build_chart(
            [
                ranked(favourite, popular),
                ranked(make_song(3), make_song(4), popular),
            ]
        )
        assert chart[0].song == popular

    def test_ties_broken_by_name(self) -> None:
        """Equal scores sort by song name."""
        tied = build_chart(
            [ranked(Song(name="B", artist="X")), ranked(Song(name="A", artist="X"))]
        )
        assert [c.song.name for c in tied] == ["A", "B"]

    def test_to_dict(self) -> None:
        """Chart rows serialize with rounded numbers."""
        row = build_chart([make_entries(1)])[0].to_dict()
        assert row["position"] == 1
        assert row["uri"] == "spotify:track:0001"
        assert row["votes"] == 1


class TestCompareRankings:
    """Tests for compare_rankings."""

    def test_no_overlap(self) -> None:
        """Disjoint lists share nothing."""
        result = compare_rankings(ranked(make_song(1)), ranked(make_song(2)))
        assert result.overlapping_songs == 0
        assert result.song_rank_diff is None
        assert result.song_relationship_strength == 0.0
        assert result.overlapping_artists == 0

    def test_shared_songs(self) -> None:
        """Strength is 10 per shared song minus the average rank gap."""
        a, b, c = make_song(1), make_song(2), make_song(3)
        result = compare_rankings(ranked(a, b, c), ranked(c, b))

        assert result.overlapping_songs == 2
        # b: 2 vs 2, c: 3 vs 1
        assert result.song_rank_diff == pytest.approx(1.0)
        assert result.song_relationship_strength == pytest.approx(19.0)
        assert [s.name for s in result.shared_songs] == ["Song 2", "Song 3"]

    def test_shared_artists(self) -> None:
        """Different songs by the same artist count as a shared artist."""
        first = ranked(Song(name="One", artist="U2"), Song(name="Yellow", artist="Coldplay"))
        second = ranked(Song(name="Vertigo", artist="U2"))
        result = compare_rankings(first, second)

        assert result.overlapping_songs == 0
        assert result.shared_artists == ["U2"]
        assert result.artist_rank_diff == pytest.approx(0.0)
        assert result.to_dict()["overlapping_artists"] == 1
