"""
Chart tools - MCP tools for views across many lists.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_rankings.ranking import RankingManager
from chuk_mcp_rankings.tools.responses import error_response

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_chart_tools(
    mcp: ChukMCPServer,
    manager: RankingManager,
) -> dict[str, Any]:
    """
    Register chart tools with the MCP server.

    Args:
        mcp: The MCP server instance
        manager: The ranking manager

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def rank_build_chart(rankings: list[str] | None = None, limit: int = 100) -> str:
        """
        Build the community chart from many ranked lists.

        Songs score a point per list they appear in plus a bonus for
        being ranked high. Open lists are used as they are; other lists
        are read from their saved YAML files.

        Args:
            rankings: List names (default: every saved or open list)
            limit: Maximum chart rows (default: 100)

        Returns:
            JSON string with the chart and its URIs in order

        Example:
            rank_build_chart(rankings=["alice", "bob"], limit=10)
        """
        try:
            chart = (await manager.chart(rankings))[:limit]
            return json.dumps(
                {
                    "status": "success",
                    "chart": [entry.to_dict() for entry in chart],
                    "uris": [entry.song.uri for entry in chart if entry.song.uri],
                }
            )
        except Exception as e:
            return error_response(e, "build chart")

    tools["rank_build_chart"] = rank_build_chart

    @mcp.tool  # type: ignore[arg-type]
    async def rank_compare_lists(first: str, second: str) -> str:
        """
        Compare two ranked lists.

        Reports shared songs and artists, how far apart they are ranked,
        and a relationship strength (higher means more alike).

        Args:
            first: First list name
            second: Second list name

        Returns:
            JSON string with the comparison
        """
        try:
            comparison = await manager.compare(first, second)
            return json.dumps(
                {
                    "status": "success",
                    "first": first,
                    "second": second,
                    "comparison": comparison.to_dict(),
                }
            )
        except Exception as e:
            return error_response(e, "compare lists")

    tools["rank_compare_lists"] = rank_compare_lists

    return tools
