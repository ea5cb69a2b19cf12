"""Retrieve the roster and yearly match files from the upstream source."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import httpx

from atpdata.config import PipelineSettings
from atpdata.errors import RowParseError, SourceFetchError
from atpdata.ingest.parser import RawRow, parse_rows


logger = logging.getLogger(__name__)

USER_AGENT = "atpdata-etl/0.1"


@dataclass(frozen=True)
class YearFetch:
    """Outcome of fetching one year: rows on success, an error message otherwise."""

    year: int
    rows: List[RawRow] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def build_client(settings: PipelineSettings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=settings.timeout,
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT, "Accept": "text/csv, text/plain"},
    )


async def fetch_text(client: httpx.AsyncClient, url: str) -> str:
    response = await client.get(url)
    response.raise_for_status()
    return response.text


async def fetch_player_rows(client: httpx.AsyncClient, settings: PipelineSettings) -> List[RawRow]:
    """Fetch the player roster; any failure is fatal for the run."""

    url = settings.players_url()
    try:
        text = await fetch_text(client, url)
        rows = parse_rows(text)
    except httpx.HTTPError as exc:
        raise SourceFetchError(url, str(exc) or type(exc).__name__) from exc
    except RowParseError as exc:
        raise SourceFetchError(url, f"unparseable CSV ({exc})") from exc
    logger.info("%d players parsed", len(rows))
    return rows


async def fetch_year(client: httpx.AsyncClient, settings: PipelineSettings, year: int) -> YearFetch:
    url = settings.matches_url(year)
    try:
        text = await fetch_text(client, url)
        rows = parse_rows(text)
    except (httpx.HTTPError, RowParseError) as exc:
        reason = str(exc) or type(exc).__name__
        logger.warning("Skipping %d: %s", year, reason)
        return YearFetch(year=year, error=reason)
    return YearFetch(year=year, rows=rows)


def _batches(years: Sequence[int], size: int) -> List[Sequence[int]]:
    return [years[start:start + size] for start in range(0, len(years), size)]


async def fetch_match_years(
    client: httpx.AsyncClient,
    settings: PipelineSettings,
    years: Sequence[int] | None = None,
) -> List[YearFetch]:
    """Fetch yearly match files in sequential batches of concurrent requests.

    At most ``settings.batch_size`` requests are in flight. Each batch is
    merged into the result only after every request in it has settled.
    """

    years = list(years if years is not None else settings.years)
    results: List[YearFetch] = []
    for batch in _batches(years, settings.batch_size):
        outcomes = await asyncio.gather(*(fetch_year(client, settings, year) for year in batch))
        for outcome in outcomes:
            if outcome.ok and outcome.rows:
                logger.info("%d: %d matches", outcome.year, len(outcome.rows))
        results.extend(outcomes)
    return results
