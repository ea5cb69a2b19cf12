"""Derive the active player set from the normalized matches."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Set

from atpdata.models import NormalizedMatch, NormalizedPlayer


def active_player_ids(matches: Iterable[NormalizedMatch]) -> Set[int]:
    """Return every non-null winner or loser id."""

    ids: Set[int] = set()
    for match in matches:
        if match.winner_id is not None:
            ids.add(match.winner_id)
        if match.loser_id is not None:
            ids.add(match.loser_id)
    return ids


def filter_active_players(
    players: Sequence[NormalizedPlayer],
    active_ids: Set[int],
) -> List[NormalizedPlayer]:
    """Keep roster entries whose id appears in a match, in roster order.

    Only the first roster row for a repeated id is kept.
    """

    seen: Set[int] = set()
    active: List[NormalizedPlayer] = []
    for player in players:
        if player.id is None or player.id not in active_ids or player.id in seen:
            continue
        seen.add(player.id)
        active.append(player)
    return active
