"""Canonical typed records shared by the pipeline, writer and client."""

from .bundles import (
    DurationByDecade,
    GrandSlamLeader,
    MetadataBundle,
    StatsBundle,
    SurfaceTrend,
    TopPlayer,
    YearRange,
    YearStats,
)
from .match import NormalizedMatch, year_of
from .player import NormalizedPlayer

__all__ = [
    "DurationByDecade",
    "GrandSlamLeader",
    "MetadataBundle",
    "NormalizedMatch",
    "NormalizedPlayer",
    "StatsBundle",
    "SurfaceTrend",
    "TopPlayer",
    "YearRange",
    "YearStats",
    "year_of",
]
