"""Session-scoped client for the artifact files with an injectable cache."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Protocol, Sequence

import httpx
from pydantic import ValidationError

from atpdata.models import MetadataBundle, NormalizedMatch, NormalizedPlayer, StatsBundle


logger = logging.getLogger(__name__)


class ArtifactLoadError(RuntimeError):
    """Raised when an artifact cannot be fetched or decoded."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to load {path}: {reason}")
        self.path = path
        self.reason = reason


class ArtifactStore(Protocol):
    def get(self, key: str) -> Optional[Any]: ...

    def set(self, key: str, value: Any) -> None: ...


class MemoryArtifactStore:
    """Plain dict store that lives as long as the client session."""

    def __init__(self) -> None:
        self._items: Dict[str, Any] = {}

    def get(self, key: str) -> Optional[Any]:
        return self._items.get(key)

    def set(self, key: str, value: Any) -> None:
        self._items[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)


class ArtifactClient:
    """Fetch whole artifacts over HTTP and memoize them by resource path.

    Failed loads raise ``ArtifactLoadError`` and are not cached, so a later
    call retries.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        *,
        store: ArtifactStore | None = None,
        base_path: str = "/data",
    ):
        self._http = http
        self._store: ArtifactStore = store if store is not None else MemoryArtifactStore()
        self._base_path = base_path.rstrip("/")

    @property
    def store(self) -> ArtifactStore:
        return self._store

    async def _fetch_json(self, path: str) -> Any:
        url = f"{self._base_path}{path}"
        try:
            response = await self._http.get(url)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as exc:
            raise ArtifactLoadError(path, str(exc) or type(exc).__name__) from exc
        except ValueError as exc:
            raise ArtifactLoadError(path, f"invalid JSON ({exc})") from exc

    async def _load(self, path: str, decode) -> Any:
        cached = self._store.get(path)
        if cached is not None:
            return cached
        payload = await self._fetch_json(path)
        try:
            value = decode(payload)
        except ValidationError as exc:
            raise ArtifactLoadError(path, f"unexpected shape ({exc.error_count()} errors)") from exc
        self._store.set(path, value)
        logger.debug("Loaded %s", path)
        return value

    async def get_metadata(self) -> MetadataBundle:
        return await self._load("/metadata.json", MetadataBundle.model_validate)

    async def get_stats(self) -> StatsBundle:
        return await self._load("/stats.json", StatsBundle.model_validate)

    async def get_players(self) -> List[NormalizedPlayer]:
        return await self._load(
            "/players.json",
            lambda rows: [NormalizedPlayer.model_validate(row) for row in rows],
        )

    async def get_matches_by_year(self, year: int) -> List[NormalizedMatch]:
        return await self._load(
            f"/matches/{year}.json",
            lambda rows: [NormalizedMatch.model_validate(row) for row in rows],
        )

    async def get_matches_for_years(self, years: Sequence[int]) -> List[NormalizedMatch]:
        results = await asyncio.gather(*(self.get_matches_by_year(year) for year in years))
        return [match for matches in results for match in matches]
