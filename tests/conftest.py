"""Pytest fixtures for the ormfixture tests.

Engine and session fixtures come from the ormfixture pytest plugin.
"""

from __future__ import annotations

import pytest

from ormfixture.config import get_settings
from tests.fixtures import DATA_DIR
from tests.models import Base


@pytest.fixture(autouse=True)
def create_tables(ormfixture_engine):
    """Create the test schema in the per-test database."""
    Base.metadata.create_all(ormfixture_engine)
    yield


@pytest.fixture
def fixtures_dir_settings(monkeypatch):
    """Point the fixtures directory setting at the test data files."""
    monkeypatch.setenv("ORMFIXTURE_FIXTURES_DIR", str(DATA_DIR))
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()
