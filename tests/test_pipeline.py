import json
from datetime import datetime, timezone
from pathlib import Path

import httpx
import pytest

from atpdata.config import PipelineSettings
from atpdata.errors import SourceFetchError
from atpdata.ingest import MATCH_COLUMNS, fetch_match_years
from atpdata.pipeline import run_pipeline

BASE_URL = "https://example.test/tennis"
MATCH_HEADER = ",".join(column for _, column, _ in MATCH_COLUMNS)
STAMP = datetime(2024, 6, 1, tzinfo=timezone.utc)


def _players_csv() -> str:
    return (
        "player_id,name_first,name_last,hand,dob,ioc,height,wikidata_id\n"
        "100,Player,X,R,19900101,USA,185,\n"
        "200,Player,Y,L,19920202,ESP,,\n"
        "300,Never,Played,R,,FRA,,\n"
    )


def _match_line(**values: str) -> str:
    return ",".join(values.get(column, "") for _, column, _ in MATCH_COLUMNS)


def _scenario_csv() -> str:
    row_a = _match_line(
        tourney_name="Slam",
        winner_id="100",
        winner_name="Player X",
        loser_id="200",
        loser_name="Player Y",
        surface="Hard",
        tourney_level="G",
        round="F",
        tourney_date="20200101",
    )
    row_b = _match_line(
        tourney_name="Clay Open",
        winner_id="200",
        winner_name="Player Y",
        loser_id="100",
        loser_name="Player X",
        surface="Clay",
        tourney_level="A",
        round="QF",
        tourney_date="20200615",
    )
    return f"{MATCH_HEADER}\n{row_a}\n{row_b}\n"


def _year_csv(year: int) -> str:
    row = _match_line(
        tourney_name=f"Event {year}",
        winner_id="100",
        winner_name="Player X",
        loser_id="200",
        loser_name="Player Y",
        surface="Grass",
        tourney_level="A",
        round="R32",
        tourney_date=f"{year}0301",
        minutes="95",
    )
    return f"{MATCH_HEADER}\n{row}\n"


def _transport(files: dict[str, str], *, seen: list[str] | None = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        name = request.url.path.rsplit("/", 1)[-1]
        if seen is not None:
            seen.append(name)
        if name in files:
            return httpx.Response(200, text=files[name])
        return httpx.Response(404, text="missing")

    return httpx.MockTransport(handler)


def _settings(tmp_path: Path, start: int, end: int) -> PipelineSettings:
    return PipelineSettings(base_url=BASE_URL, out_dir=tmp_path, start_year=start, end_year=end)


def _read(path: Path):
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.mark.anyio
async def test_two_match_scenario(tmp_path: Path):
    files = {"atp_players.csv": _players_csv(), "atp_matches_2020.csv": _scenario_csv()}
    async with httpx.AsyncClient(transport=_transport(files)) as client:
        report = await run_pipeline(_settings(tmp_path, 2020, 2020), client=client, generated_at=STAMP)

    matches = _read(tmp_path / "matches" / "2020.json")
    stats = _read(tmp_path / "stats.json")
    metadata = _read(tmp_path / "metadata.json")
    players = _read(tmp_path / "players.json")

    assert len(matches) == 2
    assert [m["td"] for m in matches] == [20200101, 20200615]
    assert stats["by_surface"] == {"Hard": 1, "Clay": 1}
    assert {"name": "Player X", "count": 1} in stats["grand_slam_leaders"]
    assert 2020 in metadata["available_years"]
    assert sorted(player["id"] for player in players) == [100, 200]
    assert [entry["id"] for entry in metadata["top_players"]] == [100, 200]
    assert metadata["top_players"][0] == {"id": 100, "name": "Player X", "ioc": "USA", "w": 1, "l": 1}
    assert report.total_matches == 2
    assert report.active_players == 2
    assert report.skipped_years == []


@pytest.mark.anyio
async def test_failed_year_is_skipped(tmp_path: Path):
    files = {"atp_players.csv": _players_csv()}
    for year in range(1970, 1977):
        if year != 1973:
            files[f"atp_matches_{year}.csv"] = _year_csv(year)
    async with httpx.AsyncClient(transport=_transport(files)) as client:
        report = await run_pipeline(_settings(tmp_path, 1970, 1976), client=client, generated_at=STAMP)

    metadata = _read(tmp_path / "metadata.json")
    assert report.skipped_years == [1973]
    assert not (tmp_path / "matches" / "1973.json").exists()
    assert metadata["available_years"] == [1970, 1971, 1972, 1974, 1975, 1976]
    assert metadata["year_range"] == {"min": 1970, "max": 1976}
    trends = {entry["year"]: entry for entry in _read(tmp_path / "stats.json")["surface_trends"]}
    assert trends[1973]["Grass"] == 0
    assert trends[1974]["Grass"] == 1


@pytest.mark.anyio
async def test_roster_failure_is_fatal_and_writes_nothing(tmp_path: Path):
    files = {"atp_matches_2020.csv": _scenario_csv()}
    async with httpx.AsyncClient(transport=_transport(files)) as client:
        with pytest.raises(SourceFetchError):
            await run_pipeline(_settings(tmp_path, 2020, 2020), client=client)

    assert list(tmp_path.iterdir()) == []


@pytest.mark.anyio
async def test_rerun_is_deterministic(tmp_path: Path):
    files = {"atp_players.csv": _players_csv(), "atp_matches_2020.csv": _scenario_csv()}
    files.update({f"atp_matches_{year}.csv": _year_csv(year) for year in (2018, 2019)})
    snapshots = []
    for _ in range(2):
        async with httpx.AsyncClient(transport=_transport(files)) as client:
            await run_pipeline(_settings(tmp_path, 2018, 2020), client=client, generated_at=STAMP)
        snapshots.append(
            {
                path.relative_to(tmp_path).as_posix(): path.read_bytes()
                for path in sorted(tmp_path.rglob("*.json"))
            }
        )

    assert snapshots[0] == snapshots[1]
    assert set(snapshots[0]) == {
        "matches/2018.json",
        "matches/2019.json",
        "matches/2020.json",
        "metadata.json",
        "players.json",
        "stats.json",
    }


@pytest.mark.anyio
async def test_fetch_match_years_batches_requests(tmp_path: Path):
    seen: list[str] = []
    files = {f"atp_matches_{year}.csv": _year_csv(year) for year in range(2000, 2025)}
    settings = PipelineSettings(base_url=BASE_URL, start_year=2000, end_year=2024, batch_size=10)
    async with httpx.AsyncClient(transport=_transport(files, seen=seen)) as client:
        fetches = await fetch_match_years(client, settings)

    assert [fetch.year for fetch in fetches] == list(range(2000, 2025))
    assert all(fetch.ok and len(fetch.rows) == 1 for fetch in fetches)
    first_batch = {f"atp_matches_{year}.csv" for year in range(2000, 2010)}
    assert set(seen[:10]) == first_batch
    assert len(seen) == 25
