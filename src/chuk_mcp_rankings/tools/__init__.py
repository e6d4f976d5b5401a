"""
MCP tool implementations.

Tools are organized by domain:
- rankings - List lifecycle, add/remove/move songs
- sync - Catalog search, load and save
- charts - Community chart and list comparison
"""

from chuk_mcp_rankings.tools.charts import register_chart_tools
from chuk_mcp_rankings.tools.rankings import register_ranking_tools
from chuk_mcp_rankings.tools.sync import register_sync_tools

__all__ = [
    "register_chart_tools",
    "register_ranking_tools",
    "register_sync_tools",
]
