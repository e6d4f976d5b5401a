"""
Ranking validator - checks a list before it is saved or shown.

Validates:
- Ranks are dense (1..N, no gaps or repeats)
- Identity set matches the ranked songs
- List is long enough to save
- Songs carry a URI and artwork
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum

from chuk_mcp_rankings.constants import MINIMUM_LIST_SIZE
from chuk_mcp_rankings.core.collection import RankedCollection


class ValidationSeverity(str, Enum):
    """Severity level for validation issues."""

    ERROR = "error"  # Invariant broken
    WARNING = "warning"  # Usable, but save will be refused
    INFO = "info"  # Informational only


@dataclass
class ValidationIssue:
    """A single validation issue."""

    severity: ValidationSeverity
    code: str
    message: str
    rank: int | None = None

    def __str__(self) -> str:
        prefix = f"[{self.severity.value.upper()}]"
        where = f" at rank {self.rank}" if self.rank is not None else ""
        return f"{prefix} {self.code}: {self.message}{where}"

    def to_dict(self) -> dict:
        return {
            "severity": self.severity.value,
            "code": self.code,
            "message": self.message,
            "rank": self.rank,
        }


class ValidationResult:
    """Result of validating a ranked list."""

    def __init__(self) -> None:
        self.issues: list[ValidationIssue] = []

    def add(
        self,
        severity: ValidationSeverity,
        code: str,
        message: str,
        rank: int | None = None,
    ) -> None:
        self.issues.append(ValidationIssue(severity, code, message, rank))

    @property
    def is_valid(self) -> bool:
        """True if no errors (warnings/info are OK)."""
        return not self.errors

    @property
    def can_save(self) -> bool:
        """True if the list is valid and long enough to save."""
        return self.is_valid and not any(i.code == "BELOW_MINIMUM" for i in self.issues)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]

    def __bool__(self) -> bool:
        return self.is_valid

    def __str__(self) -> str:
        if not self.issues:
            return "Validation passed: no issues found"
        return "\n".join(str(issue) for issue in self.issues)


class RankingValidator:
    """Validates a RankedCollection."""

    def __init__(self, minimum_list_size: int = MINIMUM_LIST_SIZE):
        self.minimum_list_size = minimum_list_size

    def validate(self, collection: RankedCollection) -> ValidationResult:
        """
        Validate a collection.

        Args:
            collection: The list to check

        Returns:
            ValidationResult with any issues found
        """
        result = ValidationResult()

        self._validate_ranks(collection, result)
        self._validate_identity(collection, result)
        self._validate_size(collection, result)
        self._validate_metadata(collection, result)

        return result

    def _validate_ranks(self, collection: RankedCollection, result: ValidationResult) -> None:
        """Ranks must be exactly 1..N."""
        ranks = [entry.rank for entry in collection.sorted_entries()]
        expected = list(range(1, len(ranks) + 1))
        if ranks == expected:
            return

        for rank in sorted(set(expected) - set(ranks)):
            result.add(ValidationSeverity.ERROR, "RANK_GAP", "No song at this rank", rank)
        for rank, count in Counter(ranks).items():
            if count > 1:
                result.add(ValidationSeverity.ERROR, "RANK_REPEATED", "Rank used twice", rank)
            if rank > len(ranks):
                result.add(ValidationSeverity.ERROR, "RANK_OUT_OF_RANGE", "Rank beyond list size", rank)

    def _validate_identity(self, collection: RankedCollection, result: ValidationResult) -> None:
        """Identity set and ranked songs must agree."""
        ranked_keys = [entry.key for entry in collection.sorted_entries()]
        keys = collection.keys()

        for key, count in Counter(ranked_keys).items():
            if count > 1:
                result.add(ValidationSeverity.ERROR, "DUPLICATE_SONG", f"'{key}' ranked {count} times")

        missing = set(ranked_keys) - keys
        orphaned = keys - set(ranked_keys)
        for key in sorted(missing):
            result.add(ValidationSeverity.ERROR, "KEY_MISSING", f"'{key}' not in identity set")
        for key in sorted(orphaned):
            result.add(ValidationSeverity.ERROR, "KEY_ORPHANED", f"'{key}' has no ranked song")

    def _validate_size(self, collection: RankedCollection, result: ValidationResult) -> None:
        size = collection.size()
        if size == 0:
            result.add(ValidationSeverity.WARNING, "EMPTY_LIST", "List has no songs")
        if size < self.minimum_list_size:
            result.add(
                ValidationSeverity.WARNING,
                "BELOW_MINIMUM",
                f"List has {size} songs, {self.minimum_list_size} needed to save",
            )

    def _validate_metadata(self, collection: RankedCollection, result: ValidationResult) -> None:
        for entry in collection.sorted_entries():
            if not entry.song.uri:
                result.add(ValidationSeverity.INFO, "NO_URI", "Song has no catalog URI", entry.rank)
            if not entry.song.album_cover_url:
                result.add(ValidationSeverity.INFO, "NO_ARTWORK", "Song has no artwork", entry.rank)


def validate_ranking(
    collection: RankedCollection, minimum_list_size: int = MINIMUM_LIST_SIZE
) -> ValidationResult:
    """Convenience function to validate a collection."""
    return RankingValidator(minimum_list_size).validate(collection)
