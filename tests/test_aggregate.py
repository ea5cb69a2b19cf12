from datetime import datetime, timezone

from atpdata.models import NormalizedMatch, NormalizedPlayer
from atpdata.pipeline import (
    average_duration_by_decade,
    build_metadata,
    build_stats,
    rank_grand_slam_leaders,
    rank_top_players,
    year_range,
)


def _match(
    *,
    date=20200101,
    surface="Hard",
    level="A",
    round_code="R32",
    winner="Winner",
    winner_id=1,
    loser="Loser",
    loser_id=2,
    minutes=None,
    tourney="Open",
):
    return NormalizedMatch(
        tourney_name=tourney,
        tourney_date=date,
        surface=surface,
        tourney_level=level,
        round=round_code,
        winner_name=winner,
        winner_id=winner_id,
        loser_name=loser,
        loser_id=loser_id,
        minutes=minutes,
    )


def _player(player_id, name, ioc=None):
    return NormalizedPlayer(id=player_id, name=name, ioc=ioc)


def test_build_stats_counts_by_year_surface_and_level():
    matches = [
        _match(date=20190301, surface="Clay", level="M"),
        _match(date=20200101, surface="Hard", level="G"),
        _match(date=20200615, surface="Clay", level="A"),
        _match(date=None, surface="Grass", level="D"),
        _match(date=20200720, surface=None, level=None),
    ]

    stats = build_stats(matches, [])

    assert stats.total_matches == 5
    assert sum(entry.matches for entry in stats.by_year) == stats.total_matches
    assert [entry.year for entry in stats.by_year] == [0, 2019, 2020]
    year_2020 = stats.by_year[2]
    assert year_2020.matches == 3
    assert year_2020.surfaces == {"Hard": 1, "Clay": 1}
    assert year_2020.levels == {"G": 1, "A": 1}
    # undated matches still count toward the global totals
    assert stats.by_surface == {"Clay": 2, "Hard": 1, "Grass": 1}
    assert stats.by_level == {"M": 1, "G": 1, "A": 1, "D": 1}
    assert sum(stats.by_surface.values()) <= stats.total_matches


def test_surface_trends_are_dense_over_year_range():
    matches = [
        _match(date=20170101, surface="Hard"),
        _match(date=20190101, surface="Carpet"),
        _match(date=20190505, surface="Carpet"),
        _match(date=None, surface="Clay"),
    ]

    trends = build_stats(matches, []).surface_trends

    assert [trend.year for trend in trends] == [2017, 2018, 2019]
    assert trends[0].Hard == 1
    assert trends[1].model_dump() == {"year": 2018, "Hard": 0, "Clay": 0, "Grass": 0, "Carpet": 0}
    assert trends[2].Carpet == 2
    assert sum(trend.Clay for trend in trends) == 0


def test_surface_trends_empty_without_dated_matches():
    stats = build_stats([_match(date=None)], [])

    assert stats.surface_trends == []
    assert year_range([_match(date=None)]).min is None


def test_grand_slam_leaders_sorted_with_stable_ties():
    matches = [
        _match(level="G", round_code="F", winner="B"),
        _match(level="G", round_code="F", winner="A"),
        _match(level="G", round_code="F", winner="A"),
        _match(level="G", round_code="F", winner="C"),
        _match(level="G", round_code="SF", winner="C"),
        _match(level="M", round_code="F", winner="C"),
        _match(level="G", round_code="F", winner=""),
    ]

    leaders = rank_grand_slam_leaders(matches)

    assert [(leader.name, leader.count) for leader in leaders] == [("A", 2), ("B", 1), ("C", 1)]


def test_grand_slam_leaders_truncated():
    matches = [
        _match(level="G", round_code="F", winner=f"Player {index}")
        for index in range(25)
    ]

    leaders = rank_grand_slam_leaders(matches, limit=20)

    assert len(leaders) == 20
    assert leaders[0].name == "Player 0"
    counts = [leader.count for leader in leaders]
    assert counts == sorted(counts, reverse=True)


def test_average_duration_by_decade_rounds_half_up():
    matches = [
        _match(date=19950101, minutes=100),
        _match(date=19990101, minutes=101),
        _match(date=20050101, minutes=90),
        _match(date=20050101, minutes=None),
        _match(date=None, minutes=300),
        _match(date=19850101, minutes=120),
    ]

    durations = average_duration_by_decade(matches)

    assert [(entry.decade, entry.avg) for entry in durations] == [
        ("1980s", 120),
        ("1990s", 101),
        ("2000s", 90),
    ]


def test_rank_top_players_orders_by_activity_and_drops_unknown_ids():
    matches = [
        _match(winner_id=1, loser_id=2),
        _match(winner_id=2, loser_id=3),
        _match(winner_id=2, loser_id=1),
        _match(winner_id=99, loser_id=3),
        _match(winner_id=99, loser_id=None),
    ]
    players = [_player(1, "One", "USA"), _player(2, "Two", "ESP"), _player(3, "Three")]

    leaders = rank_top_players(matches, players)

    assert [(leader.id, leader.w, leader.l) for leader in leaders] == [(2, 2, 1), (1, 1, 1), (3, 0, 2)]
    assert leaders[0].name == "Two"
    assert leaders[0].ioc == "ESP"


def test_rank_top_players_limit_applies_before_resolution():
    matches = [
        _match(winner_id=99, loser_id=1),
        _match(winner_id=99, loser_id=2),
        _match(winner_id=1, loser_id=2),
    ]
    players = [_player(1, "One"), _player(2, "Two")]

    leaders = rank_top_players(matches, players, limit=2)

    # 99 ranks first but has no roster entry, so only one of the top two survives
    assert [leader.id for leader in leaders] == [1]


def test_build_metadata_collects_filter_options():
    matches = [
        _match(date=20200101, surface="Hard", level="G", tourney="Australian Open"),
        _match(date=19980101, surface="Clay", level="A", tourney="Barcelona"),
        _match(date=None, surface=None, level="D", tourney="Davis Cup"),
    ]
    players = [_player(1, "One", "USA"), _player(2, "Two", "ARG"), _player(3, "Three", None)]
    stamp = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)

    metadata = build_metadata(
        matches,
        players,
        top_players=[],
        available_years=[2020, 1998],
        generated_at=stamp,
    )

    assert metadata.surfaces == ["Clay", "Hard"]
    assert metadata.tourney_levels == ["A", "D", "G"]
    assert metadata.countries == ["ARG", "USA"]
    assert metadata.tournaments == ["Australian Open", "Barcelona", "Davis Cup"]
    assert metadata.year_range.min == 1998
    assert metadata.year_range.max == 2020
    assert metadata.available_years == [1998, 2020]
    assert metadata.rounds[0] == "F"
    assert metadata.tourney_level_labels["G"] == "Grand Slam"
    assert metadata.generated_at == "2024-05-01T12:30:00.000Z"
    assert metadata.total_players == 3
