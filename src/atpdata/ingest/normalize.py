"""Turn raw match and player rows into typed records."""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Tuple

from atpdata.ingest.fields import clean_str, required_str, to_float, to_int
from atpdata.ingest.parser import RawRow
from atpdata.models import NormalizedMatch, NormalizedPlayer


Converter = Callable[[Optional[str]], object]

# (model field, source column, converter) in output key order.
MATCH_COLUMNS: Tuple[Tuple[str, str, Converter], ...] = (
    ("tourney_id", "tourney_id", clean_str),
    ("tourney_name", "tourney_name", clean_str),
    ("surface", "surface", clean_str),
    ("draw_size", "draw_size", to_int),
    ("tourney_level", "tourney_level", clean_str),
    ("tourney_date", "tourney_date", to_int),
    ("match_num", "match_num", to_int),
    ("winner_id", "winner_id", to_int),
    ("winner_seed", "winner_seed", to_int),
    ("winner_entry", "winner_entry", clean_str),
    ("winner_name", "winner_name", required_str),
    ("winner_hand", "winner_hand", clean_str),
    ("winner_ht", "winner_ht", to_int),
    ("winner_ioc", "winner_ioc", clean_str),
    ("winner_age", "winner_age", to_float),
    ("loser_id", "loser_id", to_int),
    ("loser_seed", "loser_seed", to_int),
    ("loser_entry", "loser_entry", clean_str),
    ("loser_name", "loser_name", required_str),
    ("loser_hand", "loser_hand", clean_str),
    ("loser_ht", "loser_ht", to_int),
    ("loser_ioc", "loser_ioc", clean_str),
    ("loser_age", "loser_age", to_float),
    ("score", "score", clean_str),
    ("best_of", "best_of", to_int),
    ("round", "round", clean_str),
    ("minutes", "minutes", to_int),
    ("w_ace", "w_ace", to_int),
    ("w_df", "w_df", to_int),
    ("w_svpt", "w_svpt", to_int),
    ("w_1st_in", "w_1stIn", to_int),
    ("w_1st_won", "w_1stWon", to_int),
    ("w_2nd_won", "w_2ndWon", to_int),
    ("w_sv_gms", "w_SvGms", to_int),
    ("w_bp_saved", "w_bpSaved", to_int),
    ("w_bp_faced", "w_bpFaced", to_int),
    ("l_ace", "l_ace", to_int),
    ("l_df", "l_df", to_int),
    ("l_svpt", "l_svpt", to_int),
    ("l_1st_in", "l_1stIn", to_int),
    ("l_1st_won", "l_1stWon", to_int),
    ("l_2nd_won", "l_2ndWon", to_int),
    ("l_sv_gms", "l_SvGms", to_int),
    ("l_bp_saved", "l_bpSaved", to_int),
    ("l_bp_faced", "l_bpFaced", to_int),
    ("winner_rank", "winner_rank", to_int),
    ("winner_rank_points", "winner_rank_points", to_int),
    ("loser_rank", "loser_rank", to_int),
    ("loser_rank_points", "loser_rank_points", to_int),
)


def normalize_match(row: RawRow) -> NormalizedMatch:
    values = {field: convert(row.get(column)) for field, column, convert in MATCH_COLUMNS}
    return NormalizedMatch(**values)


def display_name(first: Optional[str], last: Optional[str]) -> str:
    return " ".join(part for part in (first, last) if part)


def normalize_player(row: RawRow) -> NormalizedPlayer:
    first = clean_str(row.get("name_first"))
    last = clean_str(row.get("name_last"))
    return NormalizedPlayer(
        id=to_int(row.get("player_id")),
        first_name=first,
        last_name=last,
        name=display_name(first, last),
        hand=clean_str(row.get("hand")),
        dob=to_int(row.get("dob")),
        ioc=clean_str(row.get("ioc")),
        height=to_int(row.get("height")),
    )


def normalize_matches(rows: Iterable[RawRow]) -> List[NormalizedMatch]:
    return [normalize_match(row) for row in rows]


def normalize_players(rows: Iterable[RawRow]) -> List[NormalizedPlayer]:
    return [normalize_player(row) for row in rows]
