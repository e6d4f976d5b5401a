"""
Ranking tools - MCP tools for building and reordering a ranked list.

Tools for creating lists, placing songs at ranks, removing them and
moving them around. Every tool returns a JSON string.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_rankings.constants import ErrorMessages, SuccessMessages
from chuk_mcp_rankings.models.song import Song
from chuk_mcp_rankings.ranking import RankingManager
from chuk_mcp_rankings.tools.responses import error_response

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_ranking_tools(
    mcp: ChukMCPServer,
    manager: RankingManager,
) -> dict[str, Any]:
    """
    Register ranked-list tools with the MCP server.

    Args:
        mcp: The MCP server instance
        manager: The ranking manager

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def rank_create_list(name: str, load: bool = True) -> str:
        """
        Create a ranked list.

        Opens a new list and, by default, loads whatever was saved for it.
        A failed load starts the list empty.

        Args:
            name: Unique list name (e.g., the user's name)
            load: Load the saved list (default: True)

        Returns:
            JSON string with the list

        Example:
            rank_create_list(name="alice")
        """
        try:
            session = await manager.create(name, load=load)
            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.LIST_CREATED.format(name=name),
                    "ranking": session.to_dict(),
                }
            )
        except Exception as e:
            return error_response(e, "create ranked list")

    tools["rank_create_list"] = rank_create_list

    @mcp.tool  # type: ignore[arg-type]
    async def rank_get_list(ranking: str) -> str:
        """
        Get a ranked list.

        Args:
            ranking: List name

        Returns:
            JSON string with the entries in rank order
        """
        try:
            session = await manager.require(ranking)
            return json.dumps({"status": "success", "ranking": session.to_dict()})
        except Exception as e:
            return error_response(e, "get ranked list")

    tools["rank_get_list"] = rank_get_list

    @mcp.tool  # type: ignore[arg-type]
    async def rank_list_sessions() -> str:
        """
        List open ranked lists.

        Returns:
            JSON string with name, size and last change of each open list
        """
        try:
            sessions = await manager.list_sessions()
            return json.dumps(
                {
                    "status": "success",
                    "rankings": [
                        {
                            "name": s.name,
                            "size": s.collection.size(),
                            "modified": s.modified.isoformat(),
                        }
                        for s in sessions
                    ],
                }
            )
        except Exception as e:
            return error_response(e, "list ranked lists")

    tools["rank_list_sessions"] = rank_list_sessions

    @mcp.tool  # type: ignore[arg-type]
    async def rank_add_song(
        ranking: str,
        name: str,
        artist: str,
        rank: int,
        uri: str = "",
        album_cover_url: str = "",
    ) -> str:
        """
        Put a song at a rank.

        If the rank is taken, the song there is replaced (not pushed down).
        A song already in the list is rejected.

        Args:
            ranking: List name
            name: Track title
            artist: Artist name
            rank: 1 to size to replace, size + 1 to append
            uri: Optional catalog URI
            album_cover_url: Optional artwork URL

        Returns:
            JSON string with the new entry and any replaced song

        Example:
            rank_add_song(ranking="alice", name="Hyperballad", artist="Björk", rank=1)
        """
        try:
            session = await manager.require(ranking)
            song = Song(name=name, artist=artist, uri=uri, album_cover_url=album_cover_url)
            evicted = session.add_song(song, rank)
            return json.dumps(_added_payload(session.to_dict(), song, rank, evicted))
        except Exception as e:
            return error_response(e, "add song")

    tools["rank_add_song"] = rank_add_song

    @mcp.tool  # type: ignore[arg-type]
    async def rank_add_search_result(ranking: str, index: int) -> str:
        """
        Add a song from the latest search to the rank it was searched for.

        Args:
            ranking: List name
            index: 0-based position in the latest search results

        Returns:
            JSON string with the new entry and any replaced song
        """
        try:
            session = await manager.require(ranking)
            entry, evicted = session.add_search_result(index)
            return json.dumps(_added_payload(session.to_dict(), entry.song, entry.rank, evicted))
        except Exception as e:
            return error_response(e, "add search result")

    tools["rank_add_search_result"] = rank_add_search_result

    @mcp.tool  # type: ignore[arg-type]
    async def rank_remove_song(ranking: str, rank: int) -> str:
        """
        Remove the song at a rank.

        Songs below it move up one rank. Removing an empty rank does nothing.

        Args:
            ranking: List name
            rank: Rank to clear

        Returns:
            JSON string with the removed song (or null) and the list
        """
        try:
            session = await manager.require(ranking)
            removed = session.remove_song(rank)
            payload: dict[str, Any] = {
                "status": "success",
                "removed": removed.to_wire() if removed else None,
                "ranking": session.to_dict(),
            }
            if removed is not None:
                payload["message"] = SuccessMessages.SONG_REMOVED.format(
                    name=removed.song.name, rank=rank
                )
            return json.dumps(payload)
        except Exception as e:
            return error_response(e, "remove song")

    tools["rank_remove_song"] = rank_remove_song

    @mcp.tool  # type: ignore[arg-type]
    async def rank_move_song(
        ranking: str,
        from_rank: int,
        to_rank: int,
        insert_before: bool = True,
    ) -> str:
        """
        Move a song to another position and renumber the list.

        This is a drag and drop: the song at from_rank is dropped onto the
        song at to_rank, landing above it (insert_before=True) or below it.

        Args:
            ranking: List name
            from_rank: Rank of the song to move
            to_rank: Rank of the song it is dropped on
            insert_before: Land above the target (default) or below it

        Returns:
            JSON string with the reordered list

        Example:
            rank_move_song(ranking="alice", from_rank=1, to_rank=3, insert_before=False)
        """
        try:
            session = await manager.require(ranking)
            moved = session.move_song(from_rank, to_rank, insert_before)
            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.SONG_MOVED.format(
                        name=moved.song.name, from_rank=from_rank, to_rank=moved.rank
                    ),
                    "ranking": session.to_dict(),
                }
            )
        except Exception as e:
            return error_response(e, "move song")

    tools["rank_move_song"] = rank_move_song

    @mcp.tool  # type: ignore[arg-type]
    async def rank_clear_list(ranking: str) -> str:
        """
        Remove every song from a list (nothing is saved).

        Args:
            ranking: List name
        """
        try:
            session = await manager.require(ranking)
            session.clear()
            return json.dumps({"status": "success", "ranking": session.to_dict()})
        except Exception as e:
            return error_response(e, "clear list")

    tools["rank_clear_list"] = rank_clear_list

    @mcp.tool  # type: ignore[arg-type]
    async def rank_validate_list(ranking: str) -> str:
        """
        Check a list for broken ranks, duplicates and save readiness.

        Args:
            ranking: List name

        Returns:
            JSON string with validation issues
        """
        try:
            session = await manager.require(ranking)
            result = session.validate()
            return json.dumps(
                {
                    "status": "success",
                    "valid": result.is_valid,
                    "can_save": result.can_save,
                    "issues": [issue.to_dict() for issue in result.issues],
                }
            )
        except Exception as e:
            return error_response(e, "validate list")

    tools["rank_validate_list"] = rank_validate_list

    @mcp.tool  # type: ignore[arg-type]
    async def rank_drop_session(ranking: str) -> str:
        """
        Close a list without saving.

        Args:
            ranking: List name
        """
        try:
            if await manager.drop(ranking):
                return json.dumps({"status": "success", "message": f"Closed '{ranking}'"})
            return json.dumps(
                {
                    "status": "error",
                    "message": ErrorMessages.SESSION_NOT_FOUND.format(name=ranking),
                }
            )
        except Exception as e:
            return error_response(e, "close list")

    tools["rank_drop_session"] = rank_drop_session

    return tools


def _added_payload(ranking: dict[str, Any], song: Song, rank: int, evicted: Any) -> dict[str, Any]:
    if evicted is None:
        message = SuccessMessages.SONG_ADDED.format(name=song.name, rank=rank)
    else:
        message = SuccessMessages.SONG_REPLACED.format(
            name=song.name, rank=rank, previous=evicted.song.name
        )
    return {
        "status": "success",
        "message": message,
        "replaced": evicted.to_wire() if evicted is not None else None,
        "ranking": ranking,
    }
