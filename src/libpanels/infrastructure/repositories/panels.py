"""Panel repository: CRUD on ``library_panels`` within one transaction.

Every lookup filters on both ``uid`` and ``org_id``. The UID is unique on
its own, but the organization filter keeps one tenant from ever reaching
another tenant's rows.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError

from libpanels.domain.errors import (
    InvariantViolationError,
    PanelAlreadyExistsError,
    PanelNotFoundError,
)
from libpanels.domain.panels import Panel, PanelPatch, merge_patch
from libpanels.infrastructure.database.errors import is_unique_violation
from libpanels.infrastructure.database.schema import library_panels

if TYPE_CHECKING:
    from libpanels.infrastructure.store import StoreTransaction

logger = logging.getLogger(__name__)


class PanelRepository:
    """Encapsulates SQL for library panel rows."""

    def __init__(self, txn: StoreTransaction) -> None:
        self._txn = txn

    def create(
        self,
        *,
        uid: str,
        folder_id: int,
        name: str,
        model: object,
        now: str,
    ) -> Panel:
        """Insert a new panel owned by the transaction's actor and org.

        Raises:
            PanelAlreadyExistsError: UID (or org/folder/name) already taken.
        """
        ctx = self._txn.ctx
        values = {
            "uid": uid,
            "org_id": ctx.org_id,
            "folder_id": folder_id,
            "name": name,
            "model": model,
            "created": now,
            "updated": now,
            "created_by": ctx.user_id,
            "updated_by": ctx.user_id,
        }
        draft = Panel(id=0, **values)
        try:
            result = self._txn.execute(insert(library_panels).values(**draft.to_row()))
        except IntegrityError as exc:
            if is_unique_violation(exc):
                raise PanelAlreadyExistsError(
                    f"Library panel already exists: {name!r}", uid=uid
                ) from exc
            raise

        (panel_id,) = result.inserted_primary_key
        return draft.model_copy(update={"id": int(panel_id)})

    def get(self, uid: str, org_id: int) -> Panel:
        """Fetch exactly one panel by (uid, org_id).

        Raises:
            PanelNotFoundError: No row matches.
            InvariantViolationError: More than one row matches.
        """
        stmt = select(library_panels).where(
            library_panels.c.uid == uid,
            library_panels.c.org_id == org_id,
        )
        rows = self._txn.execute(stmt).mappings().all()
        if not rows:
            raise PanelNotFoundError(f"Library panel not found: {uid}", uid=uid)
        if len(rows) > 1:
            logger.error("Found %d library panels for uid %s in org %s", len(rows), uid, org_id)
            msg = f"found {len(rows)} panels, while expecting at most one"
            raise InvariantViolationError(msg)
        return Panel.from_row(rows[0])

    def list_all(self, org_id: int) -> list[Panel]:
        """All panels of *org_id*, in no particular order."""
        stmt = select(library_panels).where(library_panels.c.org_id == org_id)
        rows = self._txn.execute(stmt).mappings().all()
        return [Panel.from_row(row) for row in rows]

    def patch(self, uid: str, patch: PanelPatch, *, now: str) -> Panel:
        """Merge *patch* into the stored panel and write it back by id.

        Raises:
            PanelNotFoundError: Panel missing at read, or gone by write time.
            PanelAlreadyExistsError: The merged row violates a unique constraint.
        """
        ctx = self._txn.ctx
        existing = self.get(uid, ctx.org_id)
        merged = merge_patch(existing, patch, updated=now, updated_by=ctx.user_id)

        stmt = (
            update(library_panels)
            .where(library_panels.c.id == existing.id)
            .values(**merged.to_row())
        )
        try:
            result = self._txn.execute(stmt)
        except IntegrityError as exc:
            if is_unique_violation(exc):
                raise PanelAlreadyExistsError(
                    f"Library panel already exists: {merged.name!r}", uid=uid
                ) from exc
            raise

        if result.rowcount != 1:
            raise PanelNotFoundError(f"Library panel not found: {uid}", uid=uid)
        return merged

    def delete(self, uid: str, org_id: int) -> None:
        """Hard-delete the panel row. Connection rows are left untouched.

        Raises:
            PanelNotFoundError: The delete did not remove exactly one row.
        """
        stmt = delete(library_panels).where(
            library_panels.c.uid == uid,
            library_panels.c.org_id == org_id,
        )
        result = self._txn.execute(stmt)
        if result.rowcount != 1:
            raise PanelNotFoundError(f"Library panel not found: {uid}", uid=uid)
