"""Review-signal input record and pure parsing helpers for extracted page text.

The helpers turn the raw strings an extraction step collects (review-count
labels, rating-bar widths) into the numeric inputs of the estimators. They
never touch a page or the network.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal

from .category_profiles import GENERIC_CATEGORY_KEY
from .star_statistics import STAR_BUCKETS, StarCounts

ConfidenceBand = Literal["high", "medium", "low"]

HIGH_CONFIDENCE_THRESHOLD = 80.0
MEDIUM_CONFIDENCE_THRESHOLD = 50.0

_COUNT_RE = re.compile(r"([\d,]+)")
_BAR_WIDTH_RE = re.compile(r"width:\s*([\d.]+)%")
_EMPTY_COUNTS: StarCounts = (0, 0, 0, 0, 0)


@dataclass(frozen=True)
class RawReviewSignal:
    """Review data for one place as handed over by the extraction step."""

    place_name: str | None = None
    reviews_count: int | None = None
    category: str = GENERIC_CATEGORY_KEY
    star_counts: tuple[int, ...] | None = None


def parse_review_count_text(text: str | None) -> int:
    """Parse the first number in a label such as ``"1,687 reviews"``; 0 when absent."""
    if not text:
        return 0
    match = _COUNT_RE.search(text)
    if match is None:
        return 0
    digits = match.group(1).replace(",", "")
    if not digits:
        return 0
    return int(digits)


def parse_bar_width_percent(style_text: str | None) -> float:
    """Parse ``width: 73%`` from an inline style attribute; 0.0 when absent."""
    if not style_text:
        return 0.0
    match = _BAR_WIDTH_RE.search(style_text)
    if match is None:
        return 0.0
    try:
        return float(match.group(1))
    except ValueError:
        return 0.0


def _round_half_up(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def star_counts_from_bar_percentages(
    reviews_count: int, percentages: Sequence[float]
) -> StarCounts:
    """Split a total review count across star buckets in proportion to bar widths.

    Returns all zeros when the total is zero, the widths are not one per bucket,
    or every width is zero.
    """
    if reviews_count <= 0 or len(percentages) != STAR_BUCKETS:
        return _EMPTY_COUNTS
    width_total = sum(percentages)
    if width_total <= 0:
        return _EMPTY_COUNTS
    five, four, three, two, one = (
        _round_half_up(reviews_count * (width / width_total)) for width in percentages
    )
    return (five, four, three, two, one)


def confidence_band(percent: float) -> ConfidenceBand:
    """Bucket a confidence percentage for display."""
    if percent >= HIGH_CONFIDENCE_THRESHOLD:
        return "high"
    if percent >= MEDIUM_CONFIDENCE_THRESHOLD:
        return "medium"
    return "low"
