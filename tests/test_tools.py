"""
Tests for MCP tools.

Tests the MCP tool implementations for ranked lists, sync and charts.
"""

import json
from pathlib import Path

import httpx
import pytest
import yaml
from factories import make_entries

from chuk_mcp_rankings.constants import ErrorMessages
from chuk_mcp_rankings.ranking import RankingManager
from chuk_mcp_rankings.sync import CatalogClient, YamlRankingStore
from chuk_mcp_rankings.tools import (
    register_chart_tools,
    register_ranking_tools,
    register_sync_tools,
)

CATALOG = [
    {"name": "Hyperballad", "artist": "Björk", "uri": "spotify:track:h", "album_cover_url": "h.jpg"},
    {"name": "Army of Me", "artist": "Björk", "uri": "spotify:track:a", "album_cover_url": "a.jpg"},
]


# Mock MCP server for testing tools
class MockMCPServer:
    """Mock MCP server that just stores registered tools."""

    def __init__(self, name: str):
        self.name = name
        self.tools: dict = {}

    def tool(self, func):
        """Decorator to register a tool."""
        self.tools[func.__name__] = func
        return func


def catalog_client() -> CatalogClient:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=CATALOG)

    return CatalogClient("http://backend.test", transport=httpx.MockTransport(handler))


@pytest.fixture
def tools(temp_dir: Path) -> dict:
    """All tools registered against one manager."""
    mcp = MockMCPServer("test")
    manager = RankingManager(temp_dir, catalog=catalog_client())
    registered: dict = {}
    registered.update(register_ranking_tools(mcp, manager))
    registered.update(register_sync_tools(mcp, manager))
    registered.update(register_chart_tools(mcp, manager))
    assert set(registered) == set(mcp.tools)
    return registered


async def call(tools: dict, tool: str, /, **kwargs) -> dict:
    return json.loads(await tools[tool](**kwargs))


async def fill(tools: dict, ranking: str, count: int) -> None:
    for n in range(1, count + 1):
        data = await call(
            tools, "rank_add_song", ranking=ranking, name=f"Song {n}", artist="X", rank=n
        )
        assert data["status"] == "success"


class TestRankingTools:
    """Tests for ranked-list tools."""

    @pytest.mark.asyncio
    async def test_create_list(self, tools: dict):
        """Create an empty list."""
        data = await call(tools, "rank_create_list", name="alice")
        assert data["status"] == "success"
        assert data["ranking"]["size"] == 0
        assert data["ranking"]["minimum_to_save"] == 10

    @pytest.mark.asyncio
    async def test_create_twice(self, tools: dict):
        """Second create of the same name fails."""
        await call(tools, "rank_create_list", name="alice")
        data = await call(tools, "rank_create_list", name="alice")
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_get_missing_list(self, tools: dict):
        """Unknown lists are errors."""
        data = await call(tools, "rank_get_list", ranking="nobody")
        assert data["status"] == "error"
        assert "nobody" in data["message"]

    @pytest.mark.asyncio
    async def test_add_replace_and_duplicate(self, tools: dict):
        """Add, overwrite a rank, then reject a duplicate."""
        await call(tools, "rank_create_list", name="alice")
        await fill(tools, "alice", 2)

        replaced = await call(
            tools, "rank_add_song", ranking="alice", name="New", artist="Y", rank=2
        )
        assert replaced["replaced"]["name"] == "Song 2"
        assert replaced["ranking"]["size"] == 2

        duplicate = await call(
            tools, "rank_add_song", ranking="alice", name="New", artist="Y", rank=3
        )
        assert duplicate["status"] == "error"
        assert "already in your list" in duplicate["message"]

    @pytest.mark.asyncio
    async def test_add_leaving_gap(self, tools: dict):
        """Ranks beyond size + 1 are refused."""
        await call(tools, "rank_create_list", name="alice")
        data = await call(tools, "rank_add_song", ranking="alice", name="A", artist="X", rank=4)
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_remove(self, tools: dict):
        """Remove renumbers; removing an empty rank is a no-op."""
        await call(tools, "rank_create_list", name="alice")
        await fill(tools, "alice", 3)

        data = await call(tools, "rank_remove_song", ranking="alice", rank=1)
        assert data["removed"]["name"] == "Song 1"
        assert [e["rank"] for e in data["ranking"]["entries"]] == [1, 2]

        data = await call(tools, "rank_remove_song", ranking="alice", rank=9)
        assert data["status"] == "success"
        assert data["removed"] is None

    @pytest.mark.asyncio
    async def test_move(self, tools: dict):
        """[A,B,C] 1 -> below 3 gives [B,C,A]."""
        await call(tools, "rank_create_list", name="alice")
        for rank, name in enumerate(["A", "B", "C"], start=1):
            await call(tools, "rank_add_song", ranking="alice", name=name, artist="X", rank=rank)

        data = await call(
            tools, "rank_move_song", ranking="alice", from_rank=1, to_rank=3, insert_before=False
        )
        assert data["status"] == "success"
        assert [e["name"] for e in data["ranking"]["entries"]] == ["B", "C", "A"]
        assert [e["rank"] for e in data["ranking"]["entries"]] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_move_invalid(self, tools: dict):
        """Moving to a rank past the end fails."""
        await call(tools, "rank_create_list", name="alice")
        await fill(tools, "alice", 2)
        data = await call(tools, "rank_move_song", ranking="alice", from_rank=1, to_rank=5)
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_validate_and_clear(self, tools: dict):
        """Validation reports save readiness; clear empties."""
        await call(tools, "rank_create_list", name="alice")
        await fill(tools, "alice", 3)

        data = await call(tools, "rank_validate_list", ranking="alice")
        assert data["valid"]
        assert not data["can_save"]

        data = await call(tools, "rank_clear_list", ranking="alice")
        assert data["ranking"]["size"] == 0

    @pytest.mark.asyncio
    async def test_list_and_drop_sessions(self, tools: dict):
        """Open lists are listed and can be closed."""
        await call(tools, "rank_create_list", name="alice")
        await call(tools, "rank_create_list", name="bob")

        data = await call(tools, "rank_list_sessions")
        assert {r["name"] for r in data["rankings"]} == {"alice", "bob"}

        assert (await call(tools, "rank_drop_session", ranking="bob"))["status"] == "success"
        missing = await call(tools, "rank_drop_session", ranking="bob")
        assert missing["status"] == "error"
        assert missing["message"] == ErrorMessages.SESSION_NOT_FOUND.format(name="bob")


class TestSyncTools:
    """Tests for search/load/save tools."""

    @pytest.mark.asyncio
    async def test_search_and_add_result(self, tools: dict):
        """Search, then add a candidate at the searched rank."""
        await call(tools, "rank_create_list", name="alice")

        data = await call(tools, "rank_search_songs", ranking="alice", query="bjork", rank=1)
        assert data["status"] == "success"
        assert [s["index"] for s in data["songs"]] == [0, 1]
        assert data["rank"] == 1

        data = await call(tools, "rank_add_search_result", ranking="alice", index=1)
        assert data["status"] == "success"
        assert data["ranking"]["entries"][0]["name"] == "Army of Me"
        assert data["ranking"]["entries"][0]["uri"] == "spotify:track:a"

    @pytest.mark.asyncio
    async def test_add_result_without_search(self, tools: dict):
        """Nothing searched, nothing to add."""
        await call(tools, "rank_create_list", name="alice")
        data = await call(tools, "rank_add_search_result", ranking="alice", index=0)
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_save_refused_below_minimum(self, tools: dict, temp_dir: Path):
        """Nine songs can't be saved."""
        await call(tools, "rank_create_list", name="alice")
        await fill(tools, "alice", 9)

        data = await call(tools, "rank_save_list", ranking="alice")
        assert data["status"] == "error"
        assert "10" in data["message"]
        assert not (temp_dir / "alice.ranking.yaml").exists()

    @pytest.mark.asyncio
    async def test_save_and_load(self, tools: dict, temp_dir: Path):
        """Saved lists reload after local edits."""
        await call(tools, "rank_create_list", name="alice")
        await fill(tools, "alice", 10)

        data = await call(tools, "rank_save_list", ranking="alice")
        assert data["status"] == "success"
        assert data["count"] == 10
        assert (temp_dir / "alice.ranking.yaml").exists()

        await call(tools, "rank_clear_list", ranking="alice")
        data = await call(tools, "rank_load_list", ranking="alice")
        assert data["ranking"]["size"] == 10

    @pytest.mark.asyncio
    async def test_load_reads_store_once(self, tools: dict, temp_dir: Path, monkeypatch):
        """Loading a list reads its file once, whether or not it was open."""
        await YamlRankingStore.for_name(temp_dir, "bob").save(make_entries(3))
        reads: list[Path] = []
        original_load = YamlRankingStore.load

        async def counting_load(self):
            reads.append(self.path)
            return await original_load(self)

        monkeypatch.setattr(YamlRankingStore, "load", counting_load)

        data = await call(tools, "rank_load_list", ranking="bob")
        assert data["ranking"]["size"] == 3
        assert len(reads) == 1

        await call(tools, "rank_load_list", ranking="bob")
        assert len(reads) == 2

    @pytest.mark.asyncio
    async def test_export_yaml(self, tools: dict):
        """Export produces the YAML store document."""
        await call(tools, "rank_create_list", name="alice")
        await fill(tools, "alice", 2)

        data = await call(tools, "rank_export_yaml", ranking="alice")
        document = yaml.safe_load(data["yaml"])
        assert document["schema"] == "ranking/v1"
        assert [e["rank"] for e in document["entries"]] == [1, 2]


class TestChartTools:
    """Tests for chart tools."""

    @pytest.mark.asyncio
    async def test_chart_and_compare(self, tools: dict):
        """Chart over two lists, then compare them."""
        for name in ("alice", "bob"):
            await call(tools, "rank_create_list", name=name)
        await fill(tools, "alice", 3)
        await fill(tools, "bob", 2)

        data = await call(tools, "rank_build_chart", rankings=["alice", "bob"], limit=2)
        assert data["status"] == "success"
        assert [row["name"] for row in data["chart"]] == ["Song 1", "Song 2"]
        assert data["chart"][0]["votes"] == 2

        data = await call(tools, "rank_compare_lists", first="alice", second="bob")
        assert data["comparison"]["overlapping_songs"] == 2

    @pytest.mark.asyncio
    async def test_chart_unknown_list(self, tools: dict):
        """Charting a list that doesn't exist fails."""
        data = await call(tools, "rank_build_chart", rankings=["ghost"])
        assert data["status"] == "error"
