"""
Sync tools - MCP tools for search, load and save.

These wrap the SyncAdapter of a ranking session. Search never changes
the list; load replaces it; save sends it to the store.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import yaml

from chuk_mcp_rankings.constants import SuccessMessages
from chuk_mcp_rankings.ranking import RankingManager
from chuk_mcp_rankings.sync.store import YamlRankingStore
from chuk_mcp_rankings.tools.responses import error_response

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_sync_tools(
    mcp: ChukMCPServer,
    manager: RankingManager,
) -> dict[str, Any]:
    """
    Register search/load/save tools with the MCP server.

    Args:
        mcp: The MCP server instance
        manager: The ranking manager

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def rank_search_songs(ranking: str, query: str, rank: int) -> str:
        """
        Search the catalog for songs to place at a rank.

        The results are remembered for the list so one of them can be
        added with rank_add_search_result. Only the latest search counts.

        Args:
            ranking: List name
            query: Search text (track title, artist, ...)
            rank: Rank the chosen song should take

        Returns:
            JSON string with candidate songs

        Example:
            rank_search_songs(ranking="alice", query="hyperballad", rank=1)
        """
        try:
            session = await manager.require(ranking)
            result = await session.search(query, rank)
            return json.dumps(
                {
                    "status": "success",
                    "query": result.query,
                    "rank": result.target_rank,
                    "stale": result.stale,
                    "songs": [
                        {"index": i, **song.to_wire()} for i, song in enumerate(result.songs)
                    ],
                }
            )
        except Exception as e:
            return error_response(e, "search songs")

    tools["rank_search_songs"] = rank_search_songs

    @mcp.tool  # type: ignore[arg-type]
    async def rank_load_list(ranking: str) -> str:
        """
        Reload a list from its store, discarding unsaved changes.

        If the store can't be reached the list is left empty.

        Args:
            ranking: List name

        Returns:
            JSON string with the loaded list
        """
        try:
            session = await manager.get(ranking)
            if session is None:
                # create() already loads a new session
                session = await manager.create(ranking)
            else:
                await session.load()
            return json.dumps({"status": "success", "ranking": session.to_dict()})
        except Exception as e:
            return error_response(e, "load list")

    tools["rank_load_list"] = rank_load_list

    @mcp.tool  # type: ignore[arg-type]
    async def rank_save_list(ranking: str) -> str:
        """
        Save a list.

        Lists shorter than the minimum (10 songs) are refused without
        contacting the store. The save is all or nothing.

        Args:
            ranking: List name

        Returns:
            JSON string with the save result
        """
        try:
            session = await manager.require(ranking)
            result = await session.save()
            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.LIST_SAVED.format(count=result.count),
                    "count": result.count,
                }
            )
        except Exception as e:
            return error_response(e, "save list")

    tools["rank_save_list"] = rank_save_list

    @mcp.tool  # type: ignore[arg-type]
    async def rank_export_yaml(ranking: str) -> str:
        """
        Export a list as YAML.

        Produces the same document the YAML store writes, without saving.

        Args:
            ranking: List name

        Returns:
            JSON string with the YAML text
        """
        try:
            session = await manager.require(ranking)
            store = YamlRankingStore.for_name(manager.rankings_dir, ranking)
            document = yaml.safe_dump(
                store.to_yaml_dict(session.entries()),
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )
            return json.dumps({"status": "success", "yaml": document})
        except Exception as e:
            return error_response(e, "export list")

    tools["rank_export_yaml"] = rank_export_yaml

    return tools
