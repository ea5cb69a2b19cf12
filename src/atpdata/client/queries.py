"""Linear-scan helpers over already-loaded match subsets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from atpdata.models import NormalizedMatch, NormalizedPlayer


@dataclass(frozen=True)
class PlayerRecord:
    wins: int
    losses: int
    matches: List[NormalizedMatch]


@dataclass(frozen=True)
class HeadToHead:
    first_wins: int
    second_wins: int
    matches: List[NormalizedMatch]


def find_player(players: Sequence[NormalizedPlayer], player_id: Optional[int]) -> Optional[NormalizedPlayer]:
    if player_id is None:
        return None
    for player in players:
        if player.id == player_id:
            return player
    return None


def player_record(matches: Iterable[NormalizedMatch], player_id: int) -> PlayerRecord:
    """Wins and losses for one player; wins are listed before losses."""

    wins: List[NormalizedMatch] = []
    losses: List[NormalizedMatch] = []
    for match in matches:
        if match.winner_id == player_id:
            wins.append(match)
        elif match.loser_id == player_id:
            losses.append(match)
    return PlayerRecord(wins=len(wins), losses=len(losses), matches=wins + losses)


def head_to_head(matches: Iterable[NormalizedMatch], first_id: int, second_id: int) -> HeadToHead:
    meetings = [
        match
        for match in matches
        if (match.winner_id == first_id and match.loser_id == second_id)
        or (match.winner_id == second_id and match.loser_id == first_id)
    ]
    first_wins = sum(1 for match in meetings if match.winner_id == first_id)
    return HeadToHead(first_wins=first_wins, second_wins=len(meetings) - first_wins, matches=meetings)


def format_date(tourney_date: Optional[int]) -> str:
    if not tourney_date:
        return "-"
    text = str(tourney_date)
    return f"{text[:4]}-{text[4:6]}-{text[6:8]}"


def format_duration(minutes: Optional[int]) -> str:
    if not minutes:
        return "-"
    hours, rest = divmod(minutes, 60)
    return f"{hours}h {rest}m" if hours > 0 else f"{rest}m"
