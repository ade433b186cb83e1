"""Pytest fixtures shared across the test suite.

All tests are network-isolated - socket connections are blocked by default.
"""

from __future__ import annotations

import socket

import pytest

from place_confidence.domain.review_signals import RawReviewSignal
from tests.support.errors import NetworkIsolationError


def _blocked_socket_connect(self: socket.socket, *args: object, **kwargs: object) -> None:
    """Raise an error if any test tries to make a real network connection."""
    raise NetworkIsolationError(str(args))


@pytest.fixture(autouse=True)
def block_network_access(monkeypatch: pytest.MonkeyPatch) -> None:
    """Block all network access in tests."""
    monkeypatch.setattr(socket.socket, "connect", _blocked_socket_connect)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables from leaking into config tests."""
    monkeypatch.delenv("CATEGORY_PROFILES_PATH", raising=False)
    monkeypatch.delenv("BASE_ERROR_MAGNITUDE", raising=False)


@pytest.fixture
def restaurant_signal() -> RawReviewSignal:
    """A restaurant with a usable star distribution."""
    return RawReviewSignal(
        place_name="Trattoria Luigi",
        reviews_count=10,
        category="Italian restaurant",
        star_counts=(5, 5, 0, 0, 0),
    )
