"""Shared fixtures for squaretag tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from squaretag import reset_config


@pytest.fixture(autouse=True)
def _reset_config() -> Iterator[None]:
    """Every test starts and ends with the default config."""
    reset_config()
    yield
    reset_config()
