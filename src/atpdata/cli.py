"""Command-line entry point that rebuilds the static ATP data artifacts."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from pathlib import Path
from typing import Sequence

from atpdata.config import PipelineSettings
from atpdata.errors import PipelineError
from atpdata.pipeline import run_pipeline


logger = logging.getLogger("atpdata")


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Download ATP CSVs and build static JSON artifacts")
    parser.add_argument("--out-dir", type=Path, default=None, help="Output directory (default public/data)")
    parser.add_argument("--base-url", default=None, help="Upstream base URL holding the CSV files")
    parser.add_argument("--start-year", type=int, default=None, help="First match year to fetch")
    parser.add_argument("--end-year", type=int, default=None, help="Last match year to fetch")
    parser.add_argument(
        "--batch-size",
        type=int,
        default=None,
        help="Number of years fetched concurrently per batch",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("ATPDATA_LOG_LEVEL", "INFO"),
        help="Logging level (DEBUG, INFO, WARNING, ...)",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = PipelineSettings.from_env().with_overrides(
            out_dir=args.out_dir,
            base_url=args.base_url,
            start_year=args.start_year,
            end_year=args.end_year,
            batch_size=args.batch_size,
        )
    except ValueError as exc:
        raise SystemExit(f"Invalid settings: {exc}") from exc

    print("ATP Tennis ETL Pipeline")
    print("=" * 50)
    try:
        report = asyncio.run(run_pipeline(settings))
    except PipelineError as exc:
        logger.error("ETL failed: %s", exc)
        raise SystemExit(1) from exc

    print(f"Matches: {report.total_matches}")
    print(f"Active players: {report.active_players}")
    if report.skipped_years:
        print("Skipped years: " + ", ".join(str(year) for year in report.skipped_years))
    print(f"Wrote {len(report.artifacts)} artifacts to {settings.out_dir}")
    print(f"  matches/ ({len(report.years_written)} yearly files)")
    for path in report.artifacts[-3:]:
        print(f"  {path.name}")
    print("ETL complete")


if __name__ == "__main__":
    main()
