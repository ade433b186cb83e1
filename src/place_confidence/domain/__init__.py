"""Pure estimation engine: category profiles, statistics and intervals."""

from .aggregate_estimator import AggregateEstimate, estimate_from_review_count
from .category_profiles import (
    DEFAULT_CATEGORY_PROFILE_TABLE,
    CategoryMatch,
    CategoryProfile,
    CategoryProfileTable,
    resolve_category_profile,
)
from .estimates import Estimate, EstimationConstants
from .star_statistics import StarStatistics, compute_star_statistics

__all__ = [
    "DEFAULT_CATEGORY_PROFILE_TABLE",
    "AggregateEstimate",
    "CategoryMatch",
    "CategoryProfile",
    "CategoryProfileTable",
    "Estimate",
    "EstimationConstants",
    "StarStatistics",
    "compute_star_statistics",
    "estimate_from_review_count",
    "resolve_category_profile",
]
