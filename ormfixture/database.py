"""Database engine and session helpers."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine

    from ormfixture.config import Settings

logger = logging.getLogger(__name__)


def create_engine_from_settings(settings: Settings) -> Engine:
    """
    Create an engine for the configured database.

    In-memory SQLite shares one connection across sessions, and SQLite
    connections get explicit BEGIN handling so SAVEPOINT works under pysqlite.
    """
    url = make_url(settings.database_url)
    kwargs = {"echo": settings.echo_sql}

    if url.get_backend_name() == "sqlite":
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
            kwargs["connect_args"] = {"check_same_thread": False}
        engine = create_engine(url, **kwargs)
        _enable_sqlite_savepoints(engine)
    else:
        engine = create_engine(url, pool_pre_ping=True, **kwargs)

    logger.debug(f"Created engine for {url.render_as_string(hide_password=True)}")
    return engine


def _enable_sqlite_savepoints(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        # disable pysqlite's own BEGIN handling
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")


def get_session_factory(bind: Engine | Connection, **kwargs: Any) -> sessionmaker[Session]:
    """Create a session factory bound to an engine or an open connection."""
    kwargs.setdefault("expire_on_commit", False)
    return sessionmaker(bind=bind, **kwargs)


@contextmanager
def session_scope(factory: sessionmaker[Session]) -> Iterator[Session]:
    """
    Provide a session that commits on success and rolls back on error.

    Yields:
        Session closed when the block exits
    """
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
