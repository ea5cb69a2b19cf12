"""Coordinate one full rebuild: fetch, normalize, reconcile, aggregate, write."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Sequence

import httpx

from atpdata.config import PipelineSettings
from atpdata.ingest import (
    RawRow,
    YearFetch,
    build_client,
    fetch_match_years,
    fetch_player_rows,
    normalize_matches,
    normalize_players,
)
from atpdata.persistence import ArtifactBundle, ArtifactWriter
from atpdata.pipeline.aggregate import build_metadata, build_stats, rank_top_players
from atpdata.pipeline.partition import partition_by_year, persisted_years
from atpdata.pipeline.reconcile import active_player_ids, filter_active_players


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunReport:
    total_matches: int
    active_players: int
    years_written: List[int]
    skipped_years: List[int]
    artifacts: List[Path]


def build_bundle(
    player_rows: Sequence[RawRow],
    match_rows: Iterable[RawRow],
    *,
    settings: PipelineSettings | None = None,
    generated_at: datetime | None = None,
) -> ArtifactBundle:
    """Compute every artifact from raw rows without touching the network or disk."""

    settings = settings or PipelineSettings()
    players = normalize_players(player_rows)
    matches = normalize_matches(match_rows)
    logger.info("Total: %d matches", len(matches))

    active_players = filter_active_players(players, active_player_ids(matches))
    logger.info("Active players: %d", len(active_players))

    partitions = partition_by_year(matches)
    top_players = rank_top_players(matches, active_players, limit=settings.top_players_limit)
    stats = build_stats(matches, active_players, grand_slam_limit=settings.grand_slam_limit)
    metadata = build_metadata(
        matches,
        active_players,
        top_players=top_players,
        available_years=persisted_years(partitions),
        generated_at=generated_at,
    )
    return ArtifactBundle(
        partitions=partitions,
        players=active_players,
        metadata=metadata,
        stats=stats,
    )


def _flatten(fetches: Iterable[YearFetch]) -> List[RawRow]:
    rows: List[RawRow] = []
    for fetch in fetches:
        rows.extend(fetch.rows)
    return rows


async def run_pipeline(
    settings: PipelineSettings,
    *,
    client: httpx.AsyncClient | None = None,
    generated_at: datetime | None = None,
) -> RunReport:
    """Run the whole pipeline once.

    Raises ``PipelineError`` subclasses for fatal conditions; nothing is
    written unless every earlier stage succeeded.
    """

    owns_client = client is None
    http = client or build_client(settings)
    try:
        logger.info("Downloading players from %s", settings.players_url())
        player_rows = await fetch_player_rows(http, settings)
        logger.info("Downloading matches (%d-%d)", settings.start_year, settings.end_year)
        fetches = await fetch_match_years(http, settings)
    finally:
        if owns_client:
            await http.aclose()

    skipped = [fetch.year for fetch in fetches if not fetch.ok]
    bundle = build_bundle(
        player_rows,
        _flatten(fetches),
        settings=settings,
        generated_at=generated_at,
    )

    logger.info("Writing output files to %s", settings.out_dir)
    artifacts = ArtifactWriter(settings.out_dir).write_bundle(bundle)
    return RunReport(
        total_matches=bundle.stats.total_matches,
        active_players=len(bundle.players),
        years_written=list(bundle.metadata.available_years),
        skipped_years=skipped,
        artifacts=artifacts,
    )
