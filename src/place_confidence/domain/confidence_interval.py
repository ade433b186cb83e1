"""Normal-approximation intervals on the star scale and rescaling to percentages."""

from __future__ import annotations

from .estimates import Z_SCORE_95, Estimate, clamp_percent

MIN_STARS = 1.0
MAX_STARS = 5.0


def confidence_interval(
    mean: float, standard_error: float, z_score: float = Z_SCORE_95
) -> tuple[float, float]:
    """Return ``(mean - z*se, mean + z*se)`` without clamping."""
    half_width = standard_error * z_score
    return (mean - half_width, mean + half_width)


def stars_to_percent(value: float) -> float:
    """Map the 1–5 star scale linearly onto 0–100 (1★ is 0%, 5★ is 100%)."""
    return ((value - MIN_STARS) / (MAX_STARS - MIN_STARS)) * 100


def rescale_interval_to_percent(mean: float, interval: tuple[float, float]) -> Estimate:
    """Rescale mean and bounds independently, then clamp each bound to 0–100."""
    lower, upper = interval
    return Estimate(
        point_percent=stars_to_percent(mean),
        lower_percent=clamp_percent(stars_to_percent(lower)),
        upper_percent=clamp_percent(stars_to_percent(upper)),
    )
