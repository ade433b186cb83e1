"""Shared estimate value objects and fixed estimation constants."""

from __future__ import annotations

from dataclasses import dataclass

Z_SCORE_95 = 1.96  # two-sided 95% under the normal approximation
DEFAULT_BASE_ERROR_MAGNITUDE = 20.0
PERCENT_MIN = 0.0
PERCENT_MAX = 100.0


@dataclass(frozen=True)
class EstimationConstants:
    """Tunable constants used by both estimation paths."""

    z_score: float = Z_SCORE_95
    base_error_magnitude: float = DEFAULT_BASE_ERROR_MAGNITUDE


DEFAULT_CONSTANTS = EstimationConstants()


@dataclass(frozen=True)
class Estimate:
    """Point estimate and interval on the 0–100 percentage scale."""

    point_percent: float
    lower_percent: float
    upper_percent: float


def clamp_percent(value: float) -> float:
    """Clamp a value to the 0–100 percentage range."""
    return max(PERCENT_MIN, min(PERCENT_MAX, value))
