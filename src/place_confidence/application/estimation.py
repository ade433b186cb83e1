"""Choose an estimation path for a review signal and run it.

Usage example:
    from place_confidence.application.estimation import estimate_signal
    from place_confidence.domain.review_signals import RawReviewSignal

    outcome = estimate_signal(
        RawReviewSignal(
            place_name="Luigi's",
            reviews_count=10,
            category="Restaurant",
            star_counts=(5, 5, 0, 0, 0),
        )
    )
    assert outcome.kind == "star_distribution"
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from ..domain.aggregate_estimator import estimate_from_review_count
from ..domain.category_profiles import (
    DEFAULT_CATEGORY_PROFILE_TABLE,
    CategoryMatch,
    CategoryProfileTable,
    resolve_category_profile,
)
from ..domain.confidence_interval import confidence_interval, rescale_interval_to_percent
from ..domain.estimates import DEFAULT_CONSTANTS, Estimate, EstimationConstants
from ..domain.review_signals import RawReviewSignal
from ..domain.star_statistics import StarStatistics, compute_star_statistics, has_valid_shape
from ..observability.logging import get_logger

InsufficientReason = Literal[
    "missing_place_name",
    "missing_review_count",
    "missing_star_counts",
    "wrong_star_count_length",
    "empty_star_distribution",
]

INSUFFICIENT_DATA_MESSAGES: dict[InsufficientReason, str] = {
    "missing_place_name": "Could not identify a place name.",
    "missing_review_count": "No review count was found for this place.",
    "missing_star_counts": "No star distribution was found for this place.",
    "wrong_star_count_length": "The star distribution does not have exactly five buckets.",
    "empty_star_distribution": "The star distribution contains no reviews.",
}

logger = get_logger("place_confidence.estimation")


@dataclass(frozen=True)
class InsufficientData:
    """Not enough data to compute an estimate."""

    reason: InsufficientReason
    kind: Literal["insufficient_data"] = "insufficient_data"

    @property
    def message(self) -> str:
        return INSUFFICIENT_DATA_MESSAGES[self.reason]


@dataclass(frozen=True)
class StarDistributionResult:
    """Estimate derived from the mean star rating and its standard error."""

    place_name: str
    reviews_count: int
    match: CategoryMatch
    statistics: StarStatistics
    star_interval: tuple[float, float]
    estimate: Estimate
    kind: Literal["star_distribution"] = "star_distribution"

    @property
    def degenerate(self) -> bool:
        """A single review carries no dispersion information."""
        return self.statistics.is_degenerate


@dataclass(frozen=True)
class AggregateCountResult:
    """Estimate derived from the total review count and the category profile."""

    place_name: str
    reviews_count: int
    match: CategoryMatch
    estimate: Estimate
    standard_error: float
    star_distribution_gap: InsufficientReason
    kind: Literal["aggregate_count"] = "aggregate_count"


EstimationOutcome = InsufficientData | StarDistributionResult | AggregateCountResult


def star_distribution_gap(star_counts: tuple[int, ...] | None) -> InsufficientReason | None:
    """Return why a star distribution cannot be used, or None when it can."""
    if star_counts is None:
        return "missing_star_counts"
    if not has_valid_shape(star_counts):
        return "wrong_star_count_length"
    if sum(star_counts) == 0:
        return "empty_star_distribution"
    return None


@dataclass(frozen=True)
class StarDistributionEstimate:
    """Statistics, star-scale interval and percentage estimate for one distribution."""

    statistics: StarStatistics
    star_interval: tuple[float, float]
    estimate: Estimate


def estimate_star_distribution(
    star_counts: tuple[int, ...] | None,
    constants: EstimationConstants = DEFAULT_CONSTANTS,
) -> StarDistributionEstimate | InsufficientData:
    """Run statistics, interval construction and rescaling for one distribution.

    Absent, wrongly sized or all-zero distributions yield ``InsufficientData``.
    """
    if star_counts is None:
        return InsufficientData(reason="missing_star_counts")
    gap = star_distribution_gap(star_counts)
    if gap is not None:
        return InsufficientData(reason=gap)
    statistics = compute_star_statistics(star_counts)
    interval = confidence_interval(statistics.mean, statistics.standard_error, constants.z_score)
    return StarDistributionEstimate(
        statistics=statistics,
        star_interval=interval,
        estimate=rescale_interval_to_percent(statistics.mean, interval),
    )


def estimate_signal(
    signal: RawReviewSignal,
    table: CategoryProfileTable = DEFAULT_CATEGORY_PROFILE_TABLE,
    constants: EstimationConstants = DEFAULT_CONSTANTS,
    *,
    require_star_distribution: bool = False,
) -> EstimationOutcome:
    """Estimate confidence for one place.

    Prefers the star-distribution path. Falls back to the aggregate-count path
    when the distribution is unusable, unless ``require_star_distribution`` is set
    or the place has no reviews at all.
    Missing inputs yield ``InsufficientData``; nothing here raises for absent data.
    """
    if not signal.place_name:
        logger.warning("Insufficient data: missing place name")
        return InsufficientData(reason="missing_place_name")
    if signal.reviews_count is None:
        logger.warning("Insufficient data for %s: missing review count", signal.place_name)
        return InsufficientData(reason="missing_review_count")

    match = resolve_category_profile(signal.category, signal.place_name, table)
    star_path = estimate_star_distribution(signal.star_counts, constants)

    if isinstance(star_path, StarDistributionEstimate):
        statistics = star_path.statistics
        logger.info(
            "Star-distribution estimate for %s: %.2f%% from %s reviews (category %s)",
            signal.place_name,
            star_path.estimate.point_percent,
            statistics.total,
            match.key,
        )
        if statistics.is_degenerate:
            logger.warning("Single review for %s; interval has no dispersion", signal.place_name)
        return StarDistributionResult(
            place_name=signal.place_name,
            reviews_count=signal.reviews_count,
            match=match,
            statistics=statistics,
            star_interval=star_path.star_interval,
            estimate=star_path.estimate,
        )

    gap = star_path.reason
    # Extractors report zero reviews with empty stars when nothing was found
    if require_star_distribution or signal.reviews_count == 0:
        logger.warning("Insufficient data for %s: %s", signal.place_name, gap)
        return star_path

    aggregate = estimate_from_review_count(signal.reviews_count, match.profile, constants)
    logger.info(
        "Aggregate-count estimate for %s: %.2f%% from %s reviews (category %s, %s)",
        signal.place_name,
        aggregate.estimate.point_percent,
        signal.reviews_count,
        match.key,
        gap,
    )
    return AggregateCountResult(
        place_name=signal.place_name,
        reviews_count=signal.reviews_count,
        match=match,
        estimate=aggregate.estimate,
        standard_error=aggregate.standard_error,
        star_distribution_gap=gap,
    )
