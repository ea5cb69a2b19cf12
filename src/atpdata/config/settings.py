"""Run settings resolved from defaults, environment and CLI overrides."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Tuple


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://raw.githubusercontent.com/JeffSackmann/tennis_atp/master"
DEFAULT_OUT_DIR = Path("public") / "data"

_BASE_URL_ENV = "ATPDATA_BASE_URL"
_OUT_DIR_ENV = "ATPDATA_OUT_DIR"
_START_YEAR_ENV = "ATPDATA_START_YEAR"
_END_YEAR_ENV = "ATPDATA_END_YEAR"
_BATCH_SIZE_ENV = "ATPDATA_BATCH_SIZE"
_TIMEOUT_ENV = "ATPDATA_TIMEOUT"


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    """Read an integer env var, warning and falling back on bad values."""

    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def _env_float(name: str, default: float, *, clamp_min: float | None = None) -> float:
    """Read a float env var, warning and falling back on bad values."""

    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.1f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    return value


@dataclass(frozen=True)
class PipelineSettings:
    base_url: str = DEFAULT_BASE_URL
    out_dir: Path = DEFAULT_OUT_DIR
    start_year: int = 1968
    end_year: int = 2024
    batch_size: int = 10
    timeout: float = 30.0
    top_players_limit: int = 500
    grand_slam_limit: int = 20
    players_file: str = "atp_players.csv"
    matches_file: str = "atp_matches_{year}.csv"

    def __post_init__(self) -> None:
        if self.end_year < self.start_year:
            raise ValueError(
                f"end_year {self.end_year} is before start_year {self.start_year}"
            )
        if self.batch_size < 1:
            raise ValueError("batch_size must be at least 1")

    @classmethod
    def from_env(cls) -> "PipelineSettings":
        """Build settings from ``ATPDATA_*`` environment variables."""

        defaults = cls()
        out_dir = os.getenv(_OUT_DIR_ENV)
        return cls(
            base_url=os.getenv(_BASE_URL_ENV) or defaults.base_url,
            out_dir=Path(out_dir) if out_dir else defaults.out_dir,
            start_year=_env_int(_START_YEAR_ENV, defaults.start_year),
            end_year=_env_int(_END_YEAR_ENV, defaults.end_year),
            batch_size=_env_int(_BATCH_SIZE_ENV, defaults.batch_size, min_value=1),
            timeout=_env_float(_TIMEOUT_ENV, defaults.timeout, clamp_min=1.0),
        )

    def with_overrides(self, **overrides: object) -> "PipelineSettings":
        """Return a copy with every non-``None`` override applied."""

        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)

    @property
    def years(self) -> Tuple[int, ...]:
        return tuple(range(self.start_year, self.end_year + 1))

    def players_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.players_file}"

    def matches_url(self, year: int) -> str:
        return f"{self.base_url.rstrip('/')}/{self.matches_file.format(year=year)}"
