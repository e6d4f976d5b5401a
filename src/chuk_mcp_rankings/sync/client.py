"""
Catalog API client.

Talks to the song backend over HTTP:
- GET  /search-songs?track=&rank=  search candidates
- GET  /songs                      previously saved entries
- POST /songs                      replace saved entries

The client is transport-only. It makes no decisions about the ranked
list; every failure surfaces as TransportError.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from chuk_mcp_rankings.constants import DEFAULT_SEARCH_LIMIT
from chuk_mcp_rankings.errors import TransportError
from chuk_mcp_rankings.identity import dedupe_songs
from chuk_mcp_rankings.models.song import RankedEntry, Song

logger = logging.getLogger(__name__)


class CatalogClient:
    """
    Async client for the catalog/persistence backend.

    Owns one httpx.AsyncClient. Use as an async context manager or
    call aclose() when done.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        search_limit: int = DEFAULT_SEARCH_LIMIT,
        headers: dict[str, str] | None = None,
        cookies: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Backend root URL (e.g., 'http://localhost:8080')
            timeout: Per-request timeout in seconds
            search_limit: Maximum candidates kept from a search
            headers: Extra headers sent with every request
            cookies: Session cookies identifying the user to the backend
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.search_limit = search_limit
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers=headers,
            cookies=cookies,
            transport=transport,
        )

        # httpx logs every request at INFO
        logging.getLogger("httpx").setLevel(logging.WARNING)

        logger.info(f"CatalogClient initialized (url={self.base_url})")

    async def __aenter__(self) -> CatalogClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def search(self, query: str, target_rank: int) -> list[Song]:
        """
        Search the catalog.

        Args:
            query: Free text (track title, artist, ...)
            target_rank: Rank the caller intends to fill; passed through

        Returns:
            Candidate songs, de-duplicated by identity key
        """
        data = await self._request(
            "GET",
            "/search-songs",
            params={"track": query, "rank": target_rank},
        )
        songs = []
        for item in self._expect_list(data):
            try:
                songs.append(Song.model_validate(item))
            except ValidationError:
                # Tracks without a name or artist can't be ranked
                logger.debug(f"Skipping unusable search result: {item!r}")
        return dedupe_songs(songs)[: self.search_limit]

    async def fetch_entries(self) -> list[RankedEntry]:
        """Fetch the saved ranked entries."""
        data = await self._request("GET", "/songs")
        try:
            return [RankedEntry.from_wire(item) for item in self._expect_list(data)]
        except (ValidationError, ValueError) as e:
            raise TransportError(f"GET /songs returned an invalid entry: {e}") from e

    async def store_entries(self, entries: list[RankedEntry]) -> None:
        """Replace the saved entries with these, in rank order."""
        payload = [entry.to_wire() for entry in entries]
        await self._request("POST", "/songs", json=payload)

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and decode the JSON body (None when empty)."""
        try:
            response = await self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning(f"[CATALOG] {method} {path} returned {status}")
            raise TransportError(
                f"{method} {path} failed with status {status}", status_code=status
            ) from e
        except httpx.HTTPError as e:
            logger.warning(f"[CATALOG] {method} {path} failed: {e}")
            raise TransportError(f"{method} {path} failed: {e}") from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"{method} {path} returned invalid JSON") from e

    @staticmethod
    def _expect_list(data: Any) -> list[dict[str, Any]]:
        if not isinstance(data, list):
            raise TransportError(f"Expected a JSON array, got {type(data).__name__}")
        return data
