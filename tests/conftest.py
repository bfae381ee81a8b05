"""Shared test fixtures and configuration."""

import os

import pytest

from near_proximity.config import get_settings


TEST_ENV = {
    "NEAR_PROXIMITY_LOG_LEVEL": "info",
    "NEAR_PROXIMITY_LOG_JSON": "true",
    "NEAR_PROXIMITY_TRACING_ENABLED": "true",
    "NEAR_PROXIMITY_BENCH_ITERATIONS": "10",
}


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Pin settings environment and drop the cached Settings instance."""
    for key in list(os.environ):
        if key.startswith("NEAR_PROXIMITY_"):
            monkeypatch.delenv(key)
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def two_keywords():
    return [[0, 1, 6, 10], [2, 3, 7, 12]]


@pytest.fixture
def three_keywords():
    return [[0, 1, 6, 10], [2, 11], [3, 7, 12]]
