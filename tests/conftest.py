"""Pytest configuration and fixtures."""

import pytest

from factories import make_container


@pytest.fixture
def two_sealed():
    """Two sealed 50 mL bottles, indices 1 and 2."""
    return [make_container(1), make_container(2)]


@pytest.fixture
def opened_and_sealed():
    """An opened bottle with 10 mL left plus a sealed 50 mL bottle."""
    return [make_container(1, "opened", remaining=10), make_container(2)]


@pytest.fixture
def strict_usage(monkeypatch):
    from core.config import settings
    monkeypatch.setattr(settings, "strict_usage", True)
    return settings
