"""Connection repository: the ``library_panel_dashboards`` join table.

Callers resolve the panel first (``txn.panels.get``) and hand the resolved
:class:`Panel` in, so a missing panel surfaces as NOT_FOUND before the join
table is touched. Dashboard existence is not verified here.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import IntegrityError

from libpanels.domain.errors import ConnectionNotFoundError
from libpanels.infrastructure.database.errors import is_unique_violation
from libpanels.infrastructure.database.schema import library_panel_dashboards, library_panels

if TYPE_CHECKING:
    from libpanels.domain.panels import Panel
    from libpanels.infrastructure.store import StoreTransaction

logger = logging.getLogger(__name__)


class ConnectionRepository:
    """Encapsulates SQL for panel-to-dashboard connection rows."""

    def __init__(self, txn: StoreTransaction) -> None:
        self._txn = txn

    def connect(self, panel: Panel, dashboard_id: int, *, now: str) -> bool:
        """Connect *panel* to *dashboard_id*. Idempotent.

        The insert runs in a savepoint so a duplicate leaves the outer
        transaction usable. Returns True if a row was inserted, False if the
        pair was already connected.
        """
        stmt = insert(library_panel_dashboards).values(
            library_panel_id=panel.id,
            org_id=panel.org_id,
            dashboard_id=dashboard_id,
            created=now,
            created_by=self._txn.ctx.user_id,
        )
        try:
            with self._txn.savepoint():
                self._txn.execute(stmt)
        except IntegrityError as exc:
            if is_unique_violation(exc):
                logger.debug("Panel %s already connected to dashboard %s", panel.uid, dashboard_id)
                return False
            raise
        return True

    def disconnect(self, panel: Panel, dashboard_id: int) -> None:
        """Remove the (panel, dashboard) connection.

        Raises:
            ConnectionNotFoundError: The delete did not remove exactly one row.
        """
        stmt = delete(library_panel_dashboards).where(
            library_panel_dashboards.c.library_panel_id == panel.id,
            library_panel_dashboards.c.dashboard_id == dashboard_id,
        )
        result = self._txn.execute(stmt)
        if result.rowcount != 1:
            raise ConnectionNotFoundError(
                f"Library panel {panel.uid} is not connected to dashboard {dashboard_id}",
                uid=panel.uid,
                dashboard_id=dashboard_id,
            )

    def list_for_panel(self, panel: Panel) -> set[int]:
        """Dashboard ids connected to *panel*."""
        stmt = select(library_panel_dashboards.c.dashboard_id).where(
            library_panel_dashboards.c.library_panel_id == panel.id
        )
        return {int(row.dashboard_id) for row in self._txn.execute(stmt)}

    def list_orphaned(self, org_id: int) -> list[dict[str, Any]]:
        """Connection rows of *org_id* whose panel no longer exists.

        Deleting a panel does not cascade, so these accumulate until an
        operator cleans them up.
        """
        stmt = (
            select(
                library_panel_dashboards.c.library_panel_id,
                library_panel_dashboards.c.dashboard_id,
                library_panel_dashboards.c.created,
                library_panel_dashboards.c.created_by,
            )
            .select_from(
                library_panel_dashboards.outerjoin(
                    library_panels,
                    library_panels.c.id == library_panel_dashboards.c.library_panel_id,
                )
            )
            .where(
                library_panel_dashboards.c.org_id == org_id,
                library_panels.c.id.is_(None),
            )
            .order_by(
                library_panel_dashboards.c.library_panel_id,
                library_panel_dashboards.c.dashboard_id,
            )
        )
        return [dict(row) for row in self._txn.execute(stmt).mappings()]
