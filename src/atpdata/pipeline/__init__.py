"""Reconciliation, aggregation and partitioning over normalized records."""

from .aggregate import (
    average_duration_by_decade,
    build_metadata,
    build_stats,
    rank_grand_slam_leaders,
    rank_top_players,
    year_range,
)
from .partition import UNDATED_YEAR, partition_by_year, persisted_years
from .reconcile import active_player_ids, filter_active_players
from .runner import RunReport, build_bundle, run_pipeline

__all__ = [
    "RunReport",
    "UNDATED_YEAR",
    "active_player_ids",
    "average_duration_by_decade",
    "build_bundle",
    "build_metadata",
    "build_stats",
    "filter_active_players",
    "partition_by_year",
    "persisted_years",
    "rank_grand_slam_leaders",
    "rank_top_players",
    "run_pipeline",
    "year_range",
]
