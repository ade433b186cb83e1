"""Tests for estimation path selection."""

from __future__ import annotations

import logging

import pytest

from place_confidence.application.estimation import (
    AggregateCountResult,
    InsufficientData,
    StarDistributionEstimate,
    StarDistributionResult,
    estimate_signal,
    estimate_star_distribution,
    star_distribution_gap,
)
from place_confidence.domain.aggregate_estimator import estimate_from_review_count
from place_confidence.domain.category_profiles import (
    DEFAULT_CATEGORY_PROFILE_TABLE,
    CategoryProfile,
    CategoryProfileTable,
)
from place_confidence.domain.estimates import EstimationConstants
from place_confidence.domain.review_signals import RawReviewSignal


def _signal(**overrides: object) -> RawReviewSignal:
    values: dict[str, object] = {
        "place_name": "Corner Cafe",
        "reviews_count": 250,
        "category": "Cafe",
        "star_counts": (150, 60, 20, 10, 10),
    }
    values.update(overrides)
    return RawReviewSignal(**values)  # type: ignore[arg-type]


class TestStarDistributionGap:
    """Tests for star-distribution usability."""

    def test_usable_distribution(self) -> None:
        assert star_distribution_gap((1, 0, 0, 0, 0)) is None

    def test_absent(self) -> None:
        assert star_distribution_gap(None) == "missing_star_counts"

    def test_wrong_length(self) -> None:
        assert star_distribution_gap((1, 2, 3)) == "wrong_star_count_length"

    def test_all_zero(self) -> None:
        assert star_distribution_gap((0, 0, 0, 0, 0)) == "empty_star_distribution"


class TestEstimateStarDistribution:
    """Tests for the star-distribution path on its own."""

    def test_returns_estimate_for_usable_distribution(self) -> None:
        result = estimate_star_distribution((5, 5, 0, 0, 0))

        assert isinstance(result, StarDistributionEstimate)
        assert result.statistics.mean == pytest.approx(4.5)
        assert result.estimate.point_percent == pytest.approx(87.5)

    @pytest.mark.parametrize(
        ("star_counts", "reason"),
        [
            (None, "missing_star_counts"),
            ((0, 0, 0, 0, 0), "empty_star_distribution"),
            ((1, 2, 3), "wrong_star_count_length"),
        ],
    )
    def test_refuses_unusable_distribution(
        self, star_counts: tuple[int, ...] | None, reason: str
    ) -> None:
        assert estimate_star_distribution(star_counts) == InsufficientData(
            reason=reason  # type: ignore[arg-type]
        )


class TestEstimateSignal:
    """Tests for the selection layer."""

    def test_uses_star_distribution_when_available(
        self, restaurant_signal: RawReviewSignal
    ) -> None:
        outcome = estimate_signal(restaurant_signal)

        assert isinstance(outcome, StarDistributionResult)
        assert outcome.kind == "star_distribution"
        assert outcome.match.key == "Restaurant"
        assert outcome.statistics.mean == pytest.approx(4.5)
        assert outcome.star_interval[0] == pytest.approx(4.173, abs=0.001)
        assert outcome.estimate.lower_percent == pytest.approx(79.3, abs=0.05)
        assert outcome.estimate.upper_percent == pytest.approx(95.7, abs=0.05)
        assert not outcome.degenerate

    def test_missing_place_name_is_insufficient(self) -> None:
        outcome = estimate_signal(_signal(place_name=None))
        assert outcome == InsufficientData(reason="missing_place_name")

    def test_blank_place_name_is_insufficient(self) -> None:
        outcome = estimate_signal(_signal(place_name=""))
        assert isinstance(outcome, InsufficientData)
        assert outcome.reason == "missing_place_name"

    def test_missing_review_count_is_insufficient(self) -> None:
        outcome = estimate_signal(_signal(reviews_count=None))
        assert isinstance(outcome, InsufficientData)
        assert outcome.reason == "missing_review_count"
        assert outcome.message

    @pytest.mark.parametrize(
        ("star_counts", "reason"),
        [
            (None, "missing_star_counts"),
            ((1, 2), "wrong_star_count_length"),
            ((0, 0, 0, 0, 0), "empty_star_distribution"),
        ],
    )
    def test_falls_back_to_aggregate_count(
        self, star_counts: tuple[int, ...] | None, reason: str
    ) -> None:
        outcome = estimate_signal(_signal(star_counts=star_counts))

        assert isinstance(outcome, AggregateCountResult)
        assert outcome.kind == "aggregate_count"
        assert outcome.star_distribution_gap == reason
        assert outcome.match.key == "Cafe"
        expected = estimate_from_review_count(250, outcome.match.profile)
        assert outcome.estimate == expected.estimate
        assert outcome.standard_error == expected.standard_error

    @pytest.mark.parametrize(
        ("star_counts", "reason"),
        [
            (None, "missing_star_counts"),
            ((1, 2, 3, 4, 5, 6), "wrong_star_count_length"),
            ((0, 0, 0, 0, 0), "empty_star_distribution"),
        ],
    )
    def test_required_star_distribution_reports_insufficient_data(
        self, star_counts: tuple[int, ...] | None, reason: str
    ) -> None:
        outcome = estimate_signal(
            _signal(star_counts=star_counts), require_star_distribution=True
        )
        assert outcome == InsufficientData(reason=reason)  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        ("star_counts", "reason"),
        [
            (None, "missing_star_counts"),
            ((0, 0, 0, 0, 0), "empty_star_distribution"),
        ],
    )
    def test_zero_reviews_without_stars_is_insufficient(
        self, star_counts: tuple[int, ...] | None, reason: str
    ) -> None:
        outcome = estimate_signal(
            _signal(place_name="Somewhere", reviews_count=0, star_counts=star_counts)
        )

        assert outcome == InsufficientData(reason=reason)  # type: ignore[arg-type]

    def test_single_review_is_flagged_degenerate(self) -> None:
        outcome = estimate_signal(_signal(reviews_count=1, star_counts=(0, 0, 1, 0, 0)))

        assert isinstance(outcome, StarDistributionResult)
        assert outcome.degenerate
        assert outcome.estimate.point_percent == pytest.approx(50.0)
        assert outcome.estimate.lower_percent == pytest.approx(50.0)
        assert outcome.estimate.upper_percent == pytest.approx(50.0)

    def test_uses_supplied_table_and_constants(self) -> None:
        profile = CategoryProfile(max_reviews=100, weight=1.0, base_uncertainty_factor=1.0)
        table = CategoryProfileTable(
            entries=(("Corner", profile),),
            fallback=DEFAULT_CATEGORY_PROFILE_TABLE.fallback,
        )
        constants = EstimationConstants(base_error_magnitude=10.0)

        outcome = estimate_signal(_signal(reviews_count=99, star_counts=None), table, constants)

        assert isinstance(outcome, AggregateCountResult)
        assert outcome.match.key == "Corner"
        assert outcome.estimate.point_percent == pytest.approx(99.0)
        assert outcome.standard_error == pytest.approx(1.0)

    def test_is_idempotent(self, restaurant_signal: RawReviewSignal) -> None:
        assert estimate_signal(restaurant_signal) == estimate_signal(restaurant_signal)

    def test_does_not_mutate_signal(self, restaurant_signal: RawReviewSignal) -> None:
        before = restaurant_signal
        estimate_signal(restaurant_signal)
        assert restaurant_signal == before
        assert restaurant_signal.star_counts == (5, 5, 0, 0, 0)

    def test_logs_selected_path(
        self, restaurant_signal: RawReviewSignal, caplog: pytest.LogCaptureFixture
    ) -> None:
        logger = logging.getLogger("place_confidence.estimation")
        logger.addHandler(caplog.handler)
        try:
            with caplog.at_level(logging.INFO, logger="place_confidence.estimation"):
                estimate_signal(restaurant_signal)
        finally:
            logger.removeHandler(caplog.handler)

        assert "Star-distribution estimate for Trattoria Luigi" in caplog.text
