"""
Sync layer - external services around the ranked list.

This module provides:
- CatalogClient: HTTP client for search and the /songs endpoint
- RankingStore: Persistence contract (HttpRankingStore, YamlRankingStore)
- SyncAdapter: load / save / search for one RankedCollection
"""

from chuk_mcp_rankings.sync.adapter import SaveResult, SearchResult, SyncAdapter
from chuk_mcp_rankings.sync.client import CatalogClient
from chuk_mcp_rankings.sync.store import HttpRankingStore, RankingStore, YamlRankingStore

__all__ = [
    "CatalogClient",
    "HttpRankingStore",
    "RankingStore",
    "SaveResult",
    "SearchResult",
    "SyncAdapter",
    "YamlRankingStore",
]
