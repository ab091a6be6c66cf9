"""Database configuration and session management.

The default backend is SQLite, configured on every new connection with
WAL journaling (the merge script and the web app may read while the other
writes) and foreign key enforcement (off by default in SQLite).

Schema setup goes through ``init_db``: a brand-new database gets every
table from the SQLModel metadata and has all migrations stamped as applied,
while an existing database only gets missing tables created and pending
migrations run against it.
"""
import logging

from sqlalchemy import event as sa_event
from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

import booking_manager.models  # noqa: F401  (registers tables on the metadata)
from booking_manager.core.config import settings
from booking_manager.core.migrations import apply_pending_migrations, stamp_migrations

logger = logging.getLogger(__name__)

is_sqlite = settings.database_url.startswith("sqlite")

# Connections may be handed between threads by FastAPI's threadpool.
connect_args = {"check_same_thread": False} if is_sqlite else {}

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    echo=settings.debug,  # Log SQL statements when DEBUG=true
)


if is_sqlite:

    @sa_event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        """Configure SQLite pragmas on each new connection.

        These settings are connection-level, not database-level, so they must
        be set each time a new connection is established from the pool.
        """
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def init_db(db_engine: Engine = engine) -> None:
    """Create tables and bring the schema up to date."""
    fresh = not inspect(db_engine).has_table("attendee")
    SQLModel.metadata.create_all(db_engine)
    if fresh:
        # Tables were just built from the current models
        stamp_migrations(db_engine)
        logger.info("Initialized new database schema")
    else:
        applied = apply_pending_migrations(db_engine)
        if applied:
            logger.info(f"Applied migrations: {applied}")


def get_session():
    """Dependency for getting database session."""
    with Session(engine) as session:
        yield session
