#!/usr/bin/env python3
"""
Async Rankings MCP Server using chuk-mcp-server

This server provides MCP tools for building a ranked "top songs" list.
Songs are found through a catalog search, placed at ranks, moved around
with drag-and-drop style moves and saved once the list is long enough.

The server provides tools for:
- Creating and managing ranked lists
- Adding, replacing, removing and moving songs
- Searching the catalog for candidates
- Loading and saving lists (HTTP backend or local YAML files)
- Community charts and list comparison
"""

import logging

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_rankings.config import RankingsConfig
from chuk_mcp_rankings.ranking import RankingManager
from chuk_mcp_rankings.sync import CatalogClient
from chuk_mcp_rankings.tools import (
    register_chart_tools,
    register_ranking_tools,
    register_sync_tools,
)

logger = logging.getLogger(__name__)


def create_manager(config: RankingsConfig) -> RankingManager:
    """Build the ranking manager (and catalog client, if configured)."""
    catalog = None
    if config.api_url:
        catalog = CatalogClient(
            config.api_url,
            timeout=config.timeout,
            search_limit=config.search_limit,
        )

    return RankingManager(
        config.rankings_dir,
        catalog=catalog,
        storage=config.storage,
        minimum_list_size=config.minimum_list_size,
    )


def create_server(config: RankingsConfig) -> ChukMCPServer:
    """
    Create the MCP server with every tool registered.

    Args:
        config: Effective configuration

    Returns:
        The ready-to-run server
    """
    mcp = ChukMCPServer("chuk-mcp-rankings")
    manager = create_manager(config)

    register_ranking_tools(mcp, manager)
    register_sync_tools(mcp, manager)
    register_chart_tools(mcp, manager)

    logger.info("CHUK Rankings MCP Server initialized")
    logger.info(f"  Catalog API: {config.api_url or 'not configured'}")
    logger.info(f"  Storage: {config.storage.value}")
    logger.info(f"  Rankings dir: {config.rankings_dir}")
    return mcp
