"""Centralised, injectable configuration for the place confidence estimator."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Self

from dotenv import load_dotenv

from .domain.estimates import DEFAULT_BASE_ERROR_MAGNITUDE, EstimationConstants


class PositiveFloatEnvVarError(ValueError):
    """Raised when an environment variable must be a positive number."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a positive number.")


@dataclass(frozen=True)
class EstimatorConfig:
    """Immutable configuration for estimation commands.

    Load from environment with `EstimatorConfig.from_env()` or construct directly for testing.
    """

    # Empty means the built-in category profile table
    category_profiles_path: str = ""
    base_error_magnitude: float = DEFAULT_BASE_ERROR_MAGNITUDE

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> Self:
        """Load configuration from environment variables.

        Args:
            dotenv_path: Optional path to .env file. If None, uses default .env discovery.

        Returns:
            EstimatorConfig instance populated from environment.
        """
        load_dotenv(dotenv_path)

        return cls(
            category_profiles_path=os.getenv("CATEGORY_PROFILES_PATH", "").strip(),
            base_error_magnitude=_parse_optional_positive_float(
                os.getenv("BASE_ERROR_MAGNITUDE", ""),
                env_name="BASE_ERROR_MAGNITUDE",
            )
            or DEFAULT_BASE_ERROR_MAGNITUDE,
        )

    def with_overrides(
        self,
        *,
        category_profiles_path: str | None = None,
        base_error_magnitude: float | None = None,
    ) -> Self:
        """Return a new config with specified overrides (for CLI options)."""
        return replace(
            self,
            category_profiles_path=self.category_profiles_path
            if category_profiles_path is None
            else category_profiles_path.strip(),
            base_error_magnitude=self.base_error_magnitude
            if base_error_magnitude is None
            else base_error_magnitude,
        )

    def estimation_constants(self) -> EstimationConstants:
        """Constants for the estimators; the z-score stays at its 95% default."""
        return EstimationConstants(base_error_magnitude=self.base_error_magnitude)


def _parse_optional_positive_float(value: str, *, env_name: str) -> float | None:
    """Parse an optional positive float from an environment variable."""
    text = value.strip()
    if not text:
        return None
    try:
        parsed = float(text)
    except ValueError as exc:
        raise PositiveFloatEnvVarError(env_name) from exc
    if parsed <= 0.0:
        raise PositiveFloatEnvVarError(env_name)
    return parsed
