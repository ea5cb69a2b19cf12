"""Fixed tennis vocabularies shared by the aggregator and the metadata bundle."""

from __future__ import annotations

from typing import Mapping, Tuple


SURFACES: Tuple[str, ...] = ("Hard", "Clay", "Grass", "Carpet")

ROUND_ORDER: Tuple[str, ...] = ("F", "SF", "QF", "R16", "R32", "R64", "R128", "RR")

LEVEL_LABELS: Mapping[str, str] = {
    "G": "Grand Slam",
    "M": "Masters 1000",
    "A": "ATP Tour",
    "F": "Tour Finals",
    "D": "Davis Cup",
    "C": "Challenger",
}

GRAND_SLAM_LEVEL = "G"
FINAL_ROUND = "F"
