"""Loading review signals produced by the extraction step.

Accepts the extractor's camelCase keys (``placeName``, ``reviewsCount``,
``starCounts``) as well as snake_case. Raw page text is also accepted: a
review-count label (``reviewsText``) and rating-bar widths, either as
percentages (``starPercentages``) or inline styles (``starBarStyles``).
Explicit counts always win over the raw forms.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..domain.category_profiles import GENERIC_CATEGORY_KEY
from ..domain.review_signals import (
    RawReviewSignal,
    parse_bar_width_percent,
    parse_review_count_text,
    star_counts_from_bar_percentages,
)
from ..exceptions import SignalFileNotFoundError, SignalValidationError, StarCountsFormatError
from ..protocols import FileSystem


class _ReviewSignalModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    place_name: str | None = Field(
        default=None, validation_alias=AliasChoices("place_name", "placeName")
    )
    reviews_count: int | None = Field(
        default=None, validation_alias=AliasChoices("reviews_count", "reviewsCount")
    )
    category: str | None = None
    star_counts: tuple[int, ...] | None = Field(
        default=None, validation_alias=AliasChoices("star_counts", "starCounts")
    )
    reviews_text: str | None = Field(
        default=None, validation_alias=AliasChoices("reviews_text", "reviewsText")
    )
    star_percentages: tuple[float, ...] | None = Field(
        default=None, validation_alias=AliasChoices("star_percentages", "starPercentages")
    )
    star_bar_styles: tuple[str, ...] | None = Field(
        default=None, validation_alias=AliasChoices("star_bar_styles", "starBarStyles")
    )

    @field_validator("place_name")
    @classmethod
    def _normalise_place_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    @field_validator("reviews_count")
    @classmethod
    def _validate_reviews_count(cls, value: int | None) -> int | None:
        if value is not None and value < 0:
            raise ValueError
        return value

    @field_validator("star_counts")
    @classmethod
    def _validate_star_counts(cls, value: tuple[int, ...] | None) -> tuple[int, ...] | None:
        if value is not None and any(count < 0 for count in value):
            raise ValueError
        return value

    @field_validator("star_percentages")
    @classmethod
    def _validate_star_percentages(
        cls, value: tuple[float, ...] | None
    ) -> tuple[float, ...] | None:
        if value is not None and any(width < 0.0 for width in value):
            raise ValueError
        return value


def _format_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ("<root>",))) or "<root>"
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}"


def _bar_percentages(model: _ReviewSignalModel) -> tuple[float, ...] | None:
    if model.star_percentages is not None:
        return model.star_percentages
    if model.star_bar_styles is not None:
        return tuple(parse_bar_width_percent(style) for style in model.star_bar_styles)
    return None


def _to_domain_signal(model: _ReviewSignalModel) -> RawReviewSignal:
    category = (model.category or "").strip() or GENERIC_CATEGORY_KEY
    reviews_count = model.reviews_count
    if reviews_count is None and model.reviews_text is not None:
        reviews_count = parse_review_count_text(model.reviews_text)

    star_counts = model.star_counts
    percentages = _bar_percentages(model)
    if star_counts is None and percentages is not None and reviews_count is not None:
        star_counts = star_counts_from_bar_percentages(reviews_count, percentages)

    return RawReviewSignal(
        place_name=model.place_name,
        reviews_count=reviews_count,
        category=category,
        star_counts=star_counts,
    )


def load_review_signal(*, path: Path, fs: FileSystem) -> RawReviewSignal:
    """Load and validate one review signal from a JSON file."""
    if not fs.exists(path):
        raise SignalFileNotFoundError(str(path))

    payload = fs.read_text(path)
    try:
        model = _ReviewSignalModel.model_validate_json(payload)
    except ValidationError as exc:
        raise SignalValidationError(str(path), _format_validation_error(exc)) from exc
    return _to_domain_signal(model)


def build_review_signal(
    *,
    place_name: str | None,
    reviews_count: int | None,
    category: str | None,
    star_counts: tuple[int, ...] | None,
) -> RawReviewSignal:
    """Build a signal from individual values (e.g. CLI options)."""
    model = _ReviewSignalModel(
        place_name=place_name,
        reviews_count=reviews_count,
        category=category,
        star_counts=star_counts,
    )
    return _to_domain_signal(model)


def parse_star_counts_text(text: str) -> tuple[int, ...]:
    """Parse ``"120,40,10,5,3"`` (5★ first) into a tuple of counts."""
    parts = [part.strip() for part in text.split(",")]
    if not parts or any(not part for part in parts):
        raise StarCountsFormatError(text)
    try:
        counts = tuple(int(part) for part in parts)
    except ValueError as exc:
        raise StarCountsFormatError(text) from exc
    if any(count < 0 for count in counts):
        raise StarCountsFormatError(text)
    return counts
