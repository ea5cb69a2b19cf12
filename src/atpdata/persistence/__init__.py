"""Persistence layer that writes the artifact set to the output directory."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List

from atpdata.errors import ArtifactWriteError
from atpdata.models import MetadataBundle, NormalizedMatch, NormalizedPlayer, StatsBundle


logger = logging.getLogger(__name__)

MATCHES_DIR = "matches"
PLAYERS_FILE = "players.json"
METADATA_FILE = "metadata.json"
STATS_FILE = "stats.json"


@dataclass
class ArtifactBundle:
    """Everything one run persists, fully computed before any write."""

    partitions: Dict[int, List[NormalizedMatch]]
    players: List[NormalizedPlayer]
    metadata: MetadataBundle
    stats: StatsBundle


def dumps(payload: Any, *, pretty: bool = False) -> str:
    if pretty:
        return json.dumps(payload, ensure_ascii=False, indent=2)
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


class ArtifactWriter:
    """Atomic JSON writer rooted at ``out_dir``.

    Each file is written to a temporary sibling and moved into place, so a
    reader sees either the previous file or the complete new one.
    """

    def __init__(self, out_dir: Path | str):
        self.out_dir = Path(out_dir)

    def write_json(self, relative_path: str, payload: Any, *, pretty: bool = False) -> Path:
        target = self.out_dir / relative_path
        text = dumps(payload, pretty=pretty)
        tmp_name: str | None = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=target.parent,
                prefix=f".{target.name}.",
                suffix=".tmp",
                delete=False,
            ) as fh:
                tmp_name = fh.name
                fh.write(text)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, target)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise ArtifactWriteError(f"Failed to write {target}: {exc}") from exc
        return target

    def write_partitions(self, partitions: Dict[int, List[NormalizedMatch]]) -> List[Path]:
        written: List[Path] = []
        for year in sorted(partitions):
            if year <= 0:
                continue
            payload = [match.to_artifact() for match in partitions[year]]
            written.append(self.write_json(f"{MATCHES_DIR}/{year}.json", payload))
        self.remove_stale_partitions(year for year in partitions if year > 0)
        return written

    def remove_stale_partitions(self, keep_years: Iterable[int]) -> List[Path]:
        """Delete partition files from earlier runs for years not kept."""

        keep = {f"{year}.json" for year in keep_years}
        matches_dir = self.out_dir / MATCHES_DIR
        removed: List[Path] = []
        if not matches_dir.is_dir():
            return removed
        for path in sorted(matches_dir.glob("*.json")):
            if path.name in keep or not path.stem.isdigit():
                continue
            try:
                path.unlink()
            except OSError as exc:
                raise ArtifactWriteError(f"Failed to remove stale {path}: {exc}") from exc
            logger.info("Removed stale partition %s", path.name)
            removed.append(path)
        return removed

    def write_bundle(self, bundle: ArtifactBundle) -> List[Path]:
        written = self.write_partitions(bundle.partitions)
        logger.info("matches/ (%d yearly files)", len(written))
        written.append(self.write_json(PLAYERS_FILE, [player.to_artifact() for player in bundle.players]))
        written.append(self.write_json(METADATA_FILE, bundle.metadata.model_dump(), pretty=True))
        written.append(self.write_json(STATS_FILE, bundle.stats.model_dump()))
        for path in written[-3:]:
            logger.info("%s written", path.name)
        return written


__all__ = [
    "ArtifactBundle",
    "ArtifactWriter",
    "METADATA_FILE",
    "MATCHES_DIR",
    "PLAYERS_FILE",
    "STATS_FILE",
    "dumps",
]
