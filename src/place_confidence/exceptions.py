"""Custom exceptions for the place confidence estimator.

Insufficient review data is not an error and never raises; these exceptions
cover invalid configuration and unreadable input files.
"""

from __future__ import annotations


class PlaceConfidenceError(Exception):
    """Base exception for all estimator errors."""

    pass


class CategoryProfileFileNotFoundError(PlaceConfidenceError):
    """Raised when a category profile table file does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Category profile file not found: {path}")


class CategoryProfileValidationError(PlaceConfidenceError):
    """Raised when a category profile table file fails schema validation."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid category profile file {path}: {detail}")


class SignalFileNotFoundError(PlaceConfidenceError):
    """Raised when a review signal file does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Review signal file not found: {path}")


class SignalValidationError(PlaceConfidenceError):
    """Raised when a review signal file fails schema validation."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid review signal file {path}: {detail}")


class StarCountsFormatError(PlaceConfidenceError):
    """Raised when star counts supplied as text cannot be parsed."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(
            f"Could not parse star counts {text!r}. "
            "Expected comma-separated non-negative integers ordered 5★ to 1★, "
            "e.g. 120,40,10,5,3."
        )
