"""Consumer-side access to the published artifacts."""

from .cache import ArtifactClient, ArtifactLoadError, ArtifactStore, MemoryArtifactStore
from .queries import (
    HeadToHead,
    PlayerRecord,
    find_player,
    format_date,
    format_duration,
    head_to_head,
    player_record,
)

__all__ = [
    "ArtifactClient",
    "ArtifactLoadError",
    "ArtifactStore",
    "HeadToHead",
    "MemoryArtifactStore",
    "PlayerRecord",
    "find_player",
    "format_date",
    "format_duration",
    "head_to_head",
    "player_record",
]
