"""
Item identity - the duplicate-detection key for catalog songs.

Two songs are the same song when their name and artist strings match
exactly. Artwork, URI and any other metadata are ignored.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, TypeVar


class Identifiable(Protocol):
    """Anything with a name and an artist."""

    name: str
    artist: str


T = TypeVar("T", bound=Identifiable)


def identity_key(item: Identifiable) -> str:
    """
    Derive the identity key for a song.

    Plain concatenation of name and artist: case-sensitive,
    no whitespace or unicode normalization.
    """
    return item.name + item.artist


def dedupe_songs(items: Iterable[T]) -> list[T]:
    """Keep the first occurrence of each identity key, preserving order."""
    seen: set[str] = set()
    result: list[T] = []
    for item in items:
        key = identity_key(item)
        if key in seen:
            continue
        seen.add(key)
        result.append(item)
    return result
