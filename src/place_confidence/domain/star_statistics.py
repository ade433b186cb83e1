"""Mean, sample deviation and standard error of a 5★…1★ review distribution.

Star counts are ordered highest star first: index 0 holds 5★ reviews, index 4
holds 1★ reviews.

Usage example:
    from place_confidence.domain.star_statistics import compute_star_statistics

    stats = compute_star_statistics((5, 5, 0, 0, 0))
    assert stats.mean == 4.5
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

STAR_BUCKETS = 5
STAR_VALUES = (5, 4, 3, 2, 1)

StarCounts = tuple[int, int, int, int, int]


@dataclass(frozen=True)
class StarStatistics:
    """Summary statistics on the 1–5 star scale.

    Zero ``stdev``/``standard_error`` are sentinels meaning "no dispersion
    information" when ``total`` is 0 or 1; check ``total`` before trusting them.
    """

    total: int
    mean: float
    stdev: float
    standard_error: float

    @property
    def is_empty(self) -> bool:
        return self.total == 0

    @property
    def is_degenerate(self) -> bool:
        return self.total == 1


EMPTY_STATISTICS = StarStatistics(total=0, mean=0.0, stdev=0.0, standard_error=0.0)


def has_valid_shape(star_counts: Sequence[int]) -> bool:
    """Return True when the sequence has exactly one count per star bucket."""
    return len(star_counts) == STAR_BUCKETS


def mean_stars(star_counts: Sequence[int]) -> float:
    """Weighted mean star rating; 0 for malformed or empty distributions."""
    if not has_valid_shape(star_counts):
        return 0.0
    total = sum(star_counts)
    if total == 0:
        return 0.0
    weighted = sum(count * value for count, value in zip(star_counts, STAR_VALUES, strict=True))
    return weighted / total


def sample_stdev_stars(star_counts: Sequence[int], mean: float) -> float:
    """Sample standard deviation with Bessel's correction; 0 for fewer than two reviews."""
    if not has_valid_shape(star_counts):
        return 0.0
    total = sum(star_counts)
    if total <= 1:
        return 0.0
    squared = sum(
        count * (value - mean) ** 2 for count, value in zip(star_counts, STAR_VALUES, strict=True)
    )
    return math.sqrt(squared / (total - 1))


def standard_error_of_mean(stdev: float, total: int) -> float:
    """Standard error of the mean star rating."""
    if total <= 0:
        return 0.0
    return stdev / math.sqrt(total)


def compute_star_statistics(star_counts: Sequence[int]) -> StarStatistics:
    """Compute all star-scale statistics in one pass over a distribution."""
    if not has_valid_shape(star_counts):
        return EMPTY_STATISTICS
    total = sum(star_counts)
    if total == 0:
        return EMPTY_STATISTICS
    mean = mean_stars(star_counts)
    stdev = sample_stdev_stars(star_counts, mean)
    return StarStatistics(
        total=total,
        mean=mean,
        stdev=stdev,
        standard_error=standard_error_of_mean(stdev, total),
    )
