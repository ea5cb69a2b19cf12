"""Stable grouping of matches into yearly partitions."""

from __future__ import annotations

from typing import Dict, Iterable, List

from atpdata.models import NormalizedMatch


UNDATED_YEAR = 0


def partition_by_year(matches: Iterable[NormalizedMatch]) -> Dict[int, List[NormalizedMatch]]:
    """Group matches by tournament year without reordering within a year.

    Matches without a date land in the ``UNDATED_YEAR`` bucket.
    """

    partitions: Dict[int, List[NormalizedMatch]] = {}
    for match in matches:
        partitions.setdefault(match.year, []).append(match)
    return partitions


def persisted_years(partitions: Dict[int, List[NormalizedMatch]]) -> List[int]:
    """Years that get a partition file, ascending."""

    return sorted(year for year in partitions if year > UNDATED_YEAR)
