"""Pytest fixtures for loading ORM fixtures in tests.

Enabled automatically through the ``pytest11`` entry point. The test suite
is responsible for creating its tables, typically with an autouse fixture
calling ``Base.metadata.create_all(ormfixture_engine)``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generator, Mapping

import pytest
from sqlalchemy.orm import Session

from ormfixture.config import get_settings
from ormfixture.database import create_engine_from_settings, get_session_factory
from ormfixture.log import configure_logging
from ormfixture.manager import FixtureManager

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from ormfixture.base import Fixture
    from ormfixture.config import Settings


def pytest_configure(config):
    configure_logging(get_settings().log_level)


@pytest.fixture(scope="session")
def ormfixture_settings() -> Settings:
    """Get fixture settings."""
    return get_settings()


@pytest.fixture(scope="function")
def ormfixture_engine(ormfixture_settings) -> Generator[Engine, None, None]:
    """Create a database engine for one test."""
    engine = create_engine_from_settings(ormfixture_settings)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(ormfixture_engine) -> Generator[Session, None, None]:
    """
    Provide a transactional database session for tests.

    The session joins an outer transaction that is rolled back after the
    test, so anything fixtures leave behind never reaches the database.
    """
    with ormfixture_engine.connect() as conn:
        trans = conn.begin()
        factory = get_session_factory(conn, join_transaction_mode="create_savepoint")
        session = factory()
        try:
            yield session
        finally:
            session.close()
            trans.rollback()


@pytest.fixture
def load_fixtures(db_session) -> Generator[Callable[..., FixtureManager], None, None]:
    """
    Factory that loads fixtures and unloads them on teardown.

    Example:
        def test_admin(load_fixtures):
            fixtures = load_fixtures({"users": UserFixture})
            assert fixtures["users"]["admin"]["id"]
    """
    managers: list[FixtureManager] = []

    def _load(fixtures: Mapping[str, type[Fixture] | Fixture]) -> FixtureManager:
        manager = FixtureManager(db_session, fixtures)
        manager.load()
        managers.append(manager)
        return manager

    yield _load

    for manager in reversed(managers):
        manager.unload()
