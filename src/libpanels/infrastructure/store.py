"""PanelStore: the transaction scope every service operation runs in.

The store owns the engine. :meth:`PanelStore.transaction` is the atomic
unit of work: it yields a :class:`StoreTransaction` bound to one database
transaction and one :class:`RequestContext`, commits when the block exits
normally, and rolls back when anything raises, on every exit path.

The handle checks the request context before each statement, so a caller
deadline or cancel signal aborts the scope mid-operation.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from libpanels.infrastructure.database.engine import init_database
from libpanels.infrastructure.repositories.connections import ConnectionRepository
from libpanels.infrastructure.repositories.panels import PanelRepository

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy import Connection, CursorResult, Executable
    from sqlalchemy.engine import Engine

    from libpanels.config.settings import LibpanelsSettings
    from libpanels.domain.context import RequestContext

logger = logging.getLogger(__name__)


@dataclass
class StoreTransaction:
    """Active unit of work: one connection, one request context."""

    conn: Connection
    ctx: RequestContext

    def execute(self, stmt: Executable, params: dict[str, Any] | None = None) -> CursorResult[Any]:
        """Run *stmt* after checking the caller's deadline and cancel signal."""
        self.ctx.check()
        return self.conn.execute(stmt, params)

    @contextmanager
    def savepoint(self) -> Iterator[None]:
        """Nested transaction; a failure inside rolls back only the savepoint."""
        with self.conn.begin_nested():
            yield

    @property
    def panels(self) -> PanelRepository:
        return PanelRepository(self)

    @property
    def connections(self) -> ConnectionRepository:
        return ConnectionRepository(self)


class PanelStore:
    """Owns the database engine and hands out transaction scopes.

    Constructed once from :class:`LibpanelsSettings`. Services receive the
    store via their :class:`BaseService` constructor.
    """

    def __init__(self, settings: LibpanelsSettings) -> None:
        self._settings = settings
        self._engine: Engine = init_database(
            settings.resolved_database_url,
            echo=settings.database.echo,
        )

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy engine (for direct access when needed)."""
        return self._engine

    @property
    def settings(self) -> LibpanelsSettings:
        return self._settings

    def close(self) -> None:
        """Dispose of pooled connections."""
        self._engine.dispose()

    @contextmanager
    def transaction(self, ctx: RequestContext) -> Iterator[StoreTransaction]:
        """Atomic read-then-write scope.

        - Commits when the block exits normally.
        - Rolls back when the block raises, including
          :class:`OperationCancelledError` from a deadline or cancel signal.
        - On SQLite the write lock is taken at BEGIN (``BEGIN IMMEDIATE``),
          so concurrent scopes run one after another.
        - The context is checked once before BEGIN, so an already-cancelled
          request never touches the database.

        Usage::

            with store.transaction(ctx) as txn:
                panel = txn.panels.get(uid, ctx.org_id)
                txn.connections.connect(panel, dashboard_id)
        """
        ctx.check()
        with self._engine.connect() as conn:
            conn.execution_options(begin_mode="IMMEDIATE")
            with conn.begin():
                try:
                    yield StoreTransaction(conn=conn, ctx=ctx)
                except BaseException:
                    logger.debug("Rolling back transaction for org %s", ctx.org_id)
                    raise

    @contextmanager
    def session(self, ctx: RequestContext) -> Iterator[StoreTransaction]:
        """Read-only scope with a deferred BEGIN; nothing is committed."""
        ctx.check()
        with self._engine.connect() as conn:
            yield StoreTransaction(conn=conn, ctx=ctx)
