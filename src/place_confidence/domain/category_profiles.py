"""Category weighting profiles and first-match category resolution.

Usage example:
    from place_confidence.domain.category_profiles import (
        DEFAULT_CATEGORY_PROFILE_TABLE,
        resolve_category_profile,
    )

    match = resolve_category_profile(
        "Italian restaurant", "Luigi's", DEFAULT_CATEGORY_PROFILE_TABLE
    )
    assert match.key == "Restaurant"
"""

from __future__ import annotations

from dataclasses import dataclass

GENERIC_CATEGORY_KEY = "Generic"


@dataclass(frozen=True)
class CategoryProfile:
    """Heuristic weighting parameters for one place category."""

    max_reviews: int  # review count at which the point estimate saturates
    weight: float  # (0, 1], scales the saturated point estimate
    base_uncertainty_factor: float  # (0, 1], scales the heuristic standard error

    def __post_init__(self) -> None:
        if self.max_reviews < 1:
            raise ValueError(f"max_reviews must be positive, got {self.max_reviews}")
        if not 0.0 < self.weight <= 1.0:
            raise ValueError(f"weight must be in (0, 1], got {self.weight}")
        if not 0.0 < self.base_uncertainty_factor <= 1.0:
            raise ValueError(
                f"base_uncertainty_factor must be in (0, 1], got {self.base_uncertainty_factor}"
            )


@dataclass(frozen=True)
class CategoryProfileTable:
    """Ordered (key, profile) pairs; earlier entries win on overlapping matches."""

    entries: tuple[tuple[str, CategoryProfile], ...]
    fallback: CategoryProfile

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(key for key, _ in self.entries)


@dataclass(frozen=True)
class CategoryMatch:
    """Resolved category key and its profile."""

    key: str
    profile: CategoryProfile

    @property
    def is_fallback(self) -> bool:
        return self.key == GENERIC_CATEGORY_KEY


GENERIC_PROFILE = CategoryProfile(max_reviews=500, weight=0.7, base_uncertainty_factor=0.8)

# Priority order. A key that contains another key as a substring must come before it
# ("Barber" before "Bar", "Coffee Shop" before "Shop").
DEFAULT_CATEGORY_PROFILE_TABLE = CategoryProfileTable(
    entries=(
        ("Hospital", CategoryProfile(max_reviews=1500, weight=0.9, base_uncertainty_factor=0.6)),
        ("Clinic", CategoryProfile(max_reviews=300, weight=0.85, base_uncertainty_factor=0.7)),
        ("Dentist", CategoryProfile(max_reviews=250, weight=0.85, base_uncertainty_factor=0.7)),
        ("Pharmacy", CategoryProfile(max_reviews=300, weight=0.8, base_uncertainty_factor=0.6)),
        ("Hotel", CategoryProfile(max_reviews=2000, weight=0.85, base_uncertainty_factor=0.5)),
        ("Restaurant", CategoryProfile(max_reviews=1000, weight=0.8, base_uncertainty_factor=0.6)),
        ("Coffee Shop", CategoryProfile(max_reviews=600, weight=0.75, base_uncertainty_factor=0.6)),
        ("Cafe", CategoryProfile(max_reviews=600, weight=0.75, base_uncertainty_factor=0.6)),
        ("Bakery", CategoryProfile(max_reviews=400, weight=0.75, base_uncertainty_factor=0.7)),
        ("Barber", CategoryProfile(max_reviews=300, weight=0.8, base_uncertainty_factor=0.7)),
        ("Bar", CategoryProfile(max_reviews=800, weight=0.7, base_uncertainty_factor=0.7)),
        ("Museum", CategoryProfile(max_reviews=5000, weight=0.9, base_uncertainty_factor=0.4)),
        ("Park", CategoryProfile(max_reviews=3000, weight=0.85, base_uncertainty_factor=0.4)),
        ("Gym", CategoryProfile(max_reviews=500, weight=0.7, base_uncertainty_factor=0.8)),
        ("School", CategoryProfile(max_reviews=200, weight=0.6, base_uncertainty_factor=0.9)),
        ("Supermarket", CategoryProfile(max_reviews=2000, weight=0.7, base_uncertainty_factor=0.5)),
        ("Store", CategoryProfile(max_reviews=800, weight=0.65, base_uncertainty_factor=0.7)),
        ("Shop", CategoryProfile(max_reviews=500, weight=0.65, base_uncertainty_factor=0.8)),
    ),
    fallback=GENERIC_PROFILE,
)


def resolve_category_profile(
    category: str | None,
    place_name: str | None,
    table: CategoryProfileTable = DEFAULT_CATEGORY_PROFILE_TABLE,
) -> CategoryMatch:
    """Return the first table entry whose key appears in the category or place name.

    Matching is a case-insensitive substring test. Falls back to the Generic profile.
    """
    category_lower = (category or "").lower()
    name_lower = (place_name or "").lower()
    for key, profile in table.entries:
        key_lower = key.lower()
        if key_lower in category_lower or key_lower in name_lower:
            return CategoryMatch(key=key, profile=profile)
    return CategoryMatch(key=GENERIC_CATEGORY_KEY, profile=table.fallback)
