"""Pre-aggregated statistics and metadata derived from normalized matches."""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Sequence

from atpdata.config.tennis import (
    FINAL_ROUND,
    GRAND_SLAM_LEVEL,
    LEVEL_LABELS,
    ROUND_ORDER,
    SURFACES,
)
from atpdata.models import (
    DurationByDecade,
    GrandSlamLeader,
    MetadataBundle,
    NormalizedMatch,
    NormalizedPlayer,
    StatsBundle,
    SurfaceTrend,
    TopPlayer,
    YearRange,
    YearStats,
    year_of,
)


@dataclass
class _YearTally:
    matches: int = 0
    surfaces: Dict[str, int] = field(default_factory=dict)
    levels: Dict[str, int] = field(default_factory=dict)


def _bump(counts: Dict[str, int], key: str) -> None:
    counts[key] = counts.get(key, 0) + 1


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def decade_label(year: int) -> str:
    return f"{(year // 10) * 10}s"


def year_range(matches: Iterable[NormalizedMatch]) -> YearRange:
    """Smallest and largest year among dated matches."""

    years = [year_of(match.tourney_date) for match in matches if match.tourney_date]
    if not years:
        return YearRange()
    return YearRange(min=min(years), max=max(years))


def distinct_sorted(values: Iterable[Optional[str]]) -> List[str]:
    return sorted({value for value in values if value})


def rank_grand_slam_leaders(
    matches: Iterable[NormalizedMatch],
    *,
    limit: int = 20,
) -> List[GrandSlamLeader]:
    """Count Grand Slam final wins per winner name.

    Ordered by count descending; equal counts keep first-encountered order.
    """

    titles: Counter[str] = Counter()
    for match in matches:
        if (
            match.tourney_level == GRAND_SLAM_LEVEL
            and match.round == FINAL_ROUND
            and match.winner_name
        ):
            titles[match.winner_name] += 1
    ranked = sorted(titles.items(), key=lambda item: -item[1])
    return [GrandSlamLeader(name=name, count=count) for name, count in ranked[:limit]]


def average_duration_by_decade(matches: Iterable[NormalizedMatch]) -> List[DurationByDecade]:
    totals: Dict[str, List[int]] = {}
    for match in matches:
        if not match.minutes or not match.tourney_date:
            continue
        bucket = totals.setdefault(decade_label(year_of(match.tourney_date)), [0, 0])
        bucket[0] += match.minutes
        bucket[1] += 1
    return [
        DurationByDecade(decade=label, avg=_round_half_up(total / count))
        for label, (total, count) in sorted(totals.items())
    ]


def rank_top_players(
    matches: Iterable[NormalizedMatch],
    players: Sequence[NormalizedPlayer],
    *,
    limit: int = 500,
) -> List[TopPlayer]:
    """Most active players by combined wins and losses.

    The ``limit`` cut happens before ids are resolved against ``players``, so
    ids without a roster entry shrink the leaderboard instead of being
    backfilled.
    """

    records: Dict[int, List[int]] = {}
    for match in matches:
        if match.winner_id is not None:
            records.setdefault(match.winner_id, [0, 0])[0] += 1
        if match.loser_id is not None:
            records.setdefault(match.loser_id, [0, 0])[1] += 1

    by_id: Dict[int, NormalizedPlayer] = {}
    for player in players:
        if player.id is not None:
            by_id.setdefault(player.id, player)

    ranked = sorted(records.items(), key=lambda item: -(item[1][0] + item[1][1]))
    leaders: List[TopPlayer] = []
    for player_id, (wins, losses) in ranked[:limit]:
        player = by_id.get(player_id)
        if player is None:
            continue
        leaders.append(TopPlayer(id=player_id, name=player.name, ioc=player.ioc, w=wins, l=losses))
    return leaders


def build_stats(
    matches: Sequence[NormalizedMatch],
    players: Sequence[NormalizedPlayer],
    *,
    grand_slam_limit: int = 20,
) -> StatsBundle:
    """Accumulate the dashboard counters in a single pass over ``matches``.

    Undated matches are tallied under year ``0`` and still count toward the
    global surface and level totals.
    """

    by_year: Dict[int, _YearTally] = {}
    by_surface: Dict[str, int] = {}
    by_level: Dict[str, int] = {}
    year_surface: Counter[tuple[int, str]] = Counter()

    for match in matches:
        year = year_of(match.tourney_date)
        tally = by_year.setdefault(year, _YearTally())
        tally.matches += 1
        if match.surface:
            _bump(tally.surfaces, match.surface)
            _bump(by_surface, match.surface)
        if match.tourney_level:
            _bump(tally.levels, match.tourney_level)
            _bump(by_level, match.tourney_level)
        if match.surface and match.tourney_date:
            year_surface[(year, match.surface)] += 1

    span = year_range(matches)
    surface_trends: List[SurfaceTrend] = []
    if span.min is not None and span.max is not None:
        for year in range(span.min, span.max + 1):
            surface_trends.append(
                SurfaceTrend(year=year, **{surface: year_surface[(year, surface)] for surface in SURFACES})
            )

    return StatsBundle(
        total_matches=len(matches),
        total_players=len(players),
        total_tournaments=len(distinct_sorted(match.tourney_name for match in matches)),
        by_year=[
            YearStats(year=year, matches=tally.matches, surfaces=tally.surfaces, levels=tally.levels)
            for year, tally in sorted(by_year.items())
        ],
        by_surface=by_surface,
        by_level=by_level,
        surface_trends=surface_trends,
        grand_slam_leaders=rank_grand_slam_leaders(matches, limit=grand_slam_limit),
        avg_duration_by_decade=average_duration_by_decade(matches),
    )


def format_timestamp(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    stamp = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


def build_metadata(
    matches: Sequence[NormalizedMatch],
    players: Sequence[NormalizedPlayer],
    *,
    top_players: Sequence[TopPlayer],
    available_years: Sequence[int],
    generated_at: datetime | None = None,
) -> MetadataBundle:
    return MetadataBundle(
        total_matches=len(matches),
        total_players=len(players),
        year_range=year_range(matches),
        surfaces=distinct_sorted(match.surface for match in matches),
        tourney_levels=distinct_sorted(match.tourney_level for match in matches),
        tourney_level_labels=dict(LEVEL_LABELS),
        rounds=list(ROUND_ORDER),
        countries=distinct_sorted(player.ioc for player in players),
        tournaments=distinct_sorted(match.tourney_name for match in matches),
        top_players=list(top_players),
        available_years=sorted(available_years),
        generated_at=format_timestamp(generated_at or datetime.now(timezone.utc)),
    )
