"""Heuristic confidence from an aggregate review count and a category profile.

Usage example:
    from place_confidence.domain.aggregate_estimator import estimate_from_review_count
    from place_confidence.domain.category_profiles import GENERIC_PROFILE

    result = estimate_from_review_count(250, GENERIC_PROFILE)
    assert 0.0 <= result.estimate.lower_percent <= result.estimate.point_percent
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .category_profiles import CategoryProfile
from .estimates import DEFAULT_CONSTANTS, Estimate, EstimationConstants, clamp_percent


@dataclass(frozen=True)
class AggregateEstimate:
    """Aggregate-count estimate with the heuristic standard error that sized it."""

    estimate: Estimate
    standard_error: float


def _validate_reviews_count(reviews_count: int) -> None:
    if reviews_count < 0:
        raise ValueError(f"reviews_count must be non-negative, got {reviews_count}")


def saturated_point_percent(reviews_count: int, profile: CategoryProfile) -> float:
    """Point estimate: review count normalised against the category ceiling, weighted."""
    _validate_reviews_count(reviews_count)
    normalized = min(reviews_count, profile.max_reviews)
    return (normalized / profile.max_reviews) * profile.weight * 100


def heuristic_standard_error(
    reviews_count: int,
    profile: CategoryProfile,
    constants: EstimationConstants = DEFAULT_CONSTANTS,
) -> float:
    """Heuristic error that shrinks with sqrt(reviews_count + 1).

    Not a standard error of any estimator; see ``standard_error_of_mean`` for the
    star-distribution statistic.
    """
    _validate_reviews_count(reviews_count)
    effective_sample_size = math.sqrt(reviews_count + 1)
    return (constants.base_error_magnitude * profile.base_uncertainty_factor) / (
        effective_sample_size
    )


def estimate_from_review_count(
    reviews_count: int,
    profile: CategoryProfile,
    constants: EstimationConstants = DEFAULT_CONSTANTS,
) -> AggregateEstimate:
    """Build a symmetric, clamped interval around the saturated point estimate."""
    point = saturated_point_percent(reviews_count, profile)
    standard_error = heuristic_standard_error(reviews_count, profile, constants)
    half_width = standard_error * constants.z_score
    return AggregateEstimate(
        estimate=Estimate(
            point_percent=point,
            lower_percent=clamp_percent(point - half_width),
            upper_percent=clamp_percent(point + half_width),
        ),
        standard_error=standard_error,
    )
