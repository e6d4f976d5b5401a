"""
Shared JSON responses for the MCP tools.
"""

from __future__ import annotations

import json
import logging

from chuk_mcp_rankings.errors import RankingError

logger = logging.getLogger(__name__)


def error_response(e: Exception, action: str) -> str:
    """
    Log a failure and build the error payload.

    Expected ranking errors (duplicates, bad ranks, failed transport) are
    logged as warnings. Anything else gets a traceback.
    """
    if isinstance(e, RankingError):
        logger.warning(f"Failed to {action}: {e}")
    else:
        logger.exception(f"Failed to {action}")
    return json.dumps({"status": "error", "message": str(e)})
