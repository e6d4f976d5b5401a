"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from chuk_mcp_rankings.core import RankedCollection
from chuk_mcp_rankings.models import Song


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def abc() -> RankedCollection:
    """Collection [A, B, C] at ranks 1..3."""
    collection = RankedCollection()
    for rank, name in enumerate(["A", "B", "C"], start=1):
        collection.add(Song(name=name, artist="X"), rank)
    return collection
