"""Aggregate bundles written to ``stats.json`` and ``metadata.json``."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class YearStats(BaseModel):
    year: int
    matches: int = Field(..., ge=0)
    surfaces: Dict[str, int] = Field(default_factory=dict)
    levels: Dict[str, int] = Field(default_factory=dict)


class SurfaceTrend(BaseModel):
    year: int
    Hard: int = 0
    Clay: int = 0
    Grass: int = 0
    Carpet: int = 0


class GrandSlamLeader(BaseModel):
    name: str
    count: int = Field(..., ge=0)


class DurationByDecade(BaseModel):
    decade: str
    avg: int


class StatsBundle(BaseModel):
    """Pre-aggregated dashboard counters."""

    total_matches: int
    total_players: int
    total_tournaments: int
    by_year: List[YearStats]
    by_surface: Dict[str, int]
    by_level: Dict[str, int]
    surface_trends: List[SurfaceTrend]
    grand_slam_leaders: List[GrandSlamLeader]
    avg_duration_by_decade: List[DurationByDecade]

    model_config = ConfigDict(frozen=True)


class TopPlayer(BaseModel):
    id: int
    name: str
    ioc: Optional[str] = None
    w: int = Field(..., ge=0)
    l: int = Field(..., ge=0)


class YearRange(BaseModel):
    min: Optional[int] = None
    max: Optional[int] = None


class MetadataBundle(BaseModel):
    """Filter options and run-level facts for the browsing client."""

    total_matches: int
    total_players: int
    year_range: YearRange
    surfaces: List[str]
    tourney_levels: List[str]
    tourney_level_labels: Dict[str, str]
    rounds: List[str]
    countries: List[str]
    tournaments: List[str]
    top_players: List[TopPlayer]
    available_years: List[int]
    generated_at: str

    model_config = ConfigDict(frozen=True)
