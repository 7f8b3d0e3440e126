"""Database engine setup.

Any SQLAlchemy URL works; SQLite is the default. For SQLite the pysqlite
driver's implicit transaction handling is switched off and ``BEGIN`` is
emitted by SQLAlchemy instead, so every ``engine.begin()`` block is one
real database transaction and SAVEPOINTs behave. A connection carrying the
``begin_mode`` execution option (``"IMMEDIATE"``) takes the write lock at
BEGIN, so overlapping read-then-write transactions queue on the busy
timeout instead of failing when they upgrade their read lock.

SQLAlchemy Core (not ORM) is used: repositories issue explicit statements
and check affected-row counts themselves.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url

from libpanels.infrastructure.database.schema import metadata


def create_db_engine(url: str, *, echo: bool = False) -> Engine:
    """Create an engine for *url*; SQLite gets WAL mode and explicit BEGIN."""
    engine = create_engine(url, echo=echo)

    if engine.dialect.name == "sqlite":

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
            dbapi_conn.isolation_level = None
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        @event.listens_for(engine, "begin")
        def _begin(conn: Any) -> None:
            mode = conn.get_execution_options().get("begin_mode")
            conn.exec_driver_sql(f"BEGIN {mode}" if mode else "BEGIN")

    return engine


def init_database(url: str, *, echo: bool = False) -> Engine:
    """Create the engine and both tables if they don't exist.

    For file-backed SQLite URLs the parent directory is created first.
    Idempotent: safe to call on an existing database.
    """
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite" and parsed.database not in (None, "", ":memory:"):
        Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_db_engine(url, echo=echo)
    metadata.create_all(engine)
    return engine
