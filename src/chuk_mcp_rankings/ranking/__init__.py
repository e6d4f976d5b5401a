"""
Ranking management - one session per user list.

This module provides:
- RankingManager: Lifecycle management for ranking sessions
- RankingSession: A list plus the handlers that change it
- RankingValidator: Density, identity and save-readiness checks
"""

from chuk_mcp_rankings.ranking.manager import RankingManager, RankingSession
from chuk_mcp_rankings.ranking.validator import (
    RankingValidator,
    ValidationIssue,
    ValidationResult,
    ValidationSeverity,
    validate_ranking,
)

__all__ = [
    "RankingManager",
    "RankingSession",
    "RankingValidator",
    "ValidationIssue",
    "ValidationResult",
    "ValidationSeverity",
    "validate_ranking",
]
