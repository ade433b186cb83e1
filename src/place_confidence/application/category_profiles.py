"""Loading and strict validation for category profile tables."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from ..domain.category_profiles import (
    DEFAULT_CATEGORY_PROFILE_TABLE,
    GENERIC_CATEGORY_KEY,
    CategoryProfile,
    CategoryProfileTable,
)
from ..exceptions import CategoryProfileFileNotFoundError, CategoryProfileValidationError
from ..protocols import FileSystem

_SCHEMA_VERSION = 1


class _ProfileModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    max_reviews: int
    weight: float
    base_uncertainty_factor: float

    @field_validator("max_reviews")
    @classmethod
    def _validate_max_reviews(cls, value: int) -> int:
        if value < 1:
            raise ValueError
        return value

    @field_validator("weight", "base_uncertainty_factor")
    @classmethod
    def _validate_unit_range(cls, value: float) -> float:
        if value <= 0.0 or value > 1.0:
            raise ValueError
        return value


class _CategoryEntryModel(_ProfileModel):
    key: str

    @field_validator("key")
    @classmethod
    def _validate_key(cls, value: str) -> str:
        text = value.strip()
        if not text or text.lower() == GENERIC_CATEGORY_KEY.lower():
            raise ValueError
        return text


class _CategoryProfileTableModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    fallback: _ProfileModel
    categories: tuple[_CategoryEntryModel, ...]

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value

    @model_validator(mode="after")
    def _validate_unique_keys(self) -> _CategoryProfileTableModel:
        keys = [entry.key.lower() for entry in self.categories]
        if len(set(keys)) != len(keys):
            raise ValueError
        return self


def _format_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ("<root>",))) or "<root>"
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}"


def _to_domain_profile(model: _ProfileModel) -> CategoryProfile:
    return CategoryProfile(
        max_reviews=model.max_reviews,
        weight=model.weight,
        base_uncertainty_factor=model.base_uncertainty_factor,
    )


def load_category_profile_table(*, path: Path, fs: FileSystem) -> CategoryProfileTable:
    """Load and validate a category profile table from JSON, preserving entry order."""
    if not fs.exists(path):
        raise CategoryProfileFileNotFoundError(str(path))

    payload = fs.read_text(path)
    try:
        model = _CategoryProfileTableModel.model_validate_json(payload)
    except ValidationError as exc:
        raise CategoryProfileValidationError(str(path), _format_validation_error(exc)) from exc

    return CategoryProfileTable(
        entries=tuple((entry.key, _to_domain_profile(entry)) for entry in model.categories),
        fallback=_to_domain_profile(model.fallback),
    )


def resolve_category_profile_table(
    *, path: str | Path | None, fs: FileSystem
) -> CategoryProfileTable:
    """Return the table at ``path``, or the built-in table when no path is configured."""
    if path is None or not str(path).strip():
        return DEFAULT_CATEGORY_PROFILE_TABLE
    return load_category_profile_table(path=Path(path), fs=fs)
