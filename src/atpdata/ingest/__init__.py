"""Input adapters that fetch, tokenize and normalize raw ATP CSV data."""

from .fetcher import YearFetch, build_client, fetch_match_years, fetch_player_rows, fetch_year
from .fields import clean_str, required_str, to_float, to_int
from .normalize import (
    MATCH_COLUMNS,
    display_name,
    normalize_match,
    normalize_matches,
    normalize_player,
    normalize_players,
)
from .parser import RawRow, parse_rows

__all__ = [
    "MATCH_COLUMNS",
    "RawRow",
    "YearFetch",
    "build_client",
    "clean_str",
    "display_name",
    "fetch_match_years",
    "fetch_player_rows",
    "fetch_year",
    "normalize_match",
    "normalize_matches",
    "normalize_player",
    "normalize_players",
    "parse_rows",
    "required_str",
    "to_float",
    "to_int",
]
