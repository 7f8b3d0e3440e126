"""LibraryPanelService: the facade over panels and dashboard connections.

Each operation takes the caller's :class:`RequestContext` explicitly and
runs inside exactly one store scope. Read-then-write operations (patch,
delete, connect, disconnect) and the resolve-then-list of connected
dashboards use :meth:`PanelStore.transaction`, so the read that
establishes current state and the conditional write commit or roll back
together. Plain reads use :meth:`PanelStore.session`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from libpanels.domain.errors import LibraryPanelError
from libpanels.domain.ids import UidGenerator, generate_short_uid
from libpanels.domain.panels import PanelPatch
from libpanels.services._helpers import now_iso
from libpanels.services.base import BaseService
from libpanels.services.result import ServiceResult
from libpanels.services.telemetry import traced

if TYPE_CHECKING:
    from libpanels.domain.context import RequestContext
    from libpanels.infrastructure.store import PanelStore


class LibraryPanelService(BaseService):
    """Create, read, patch and delete library panels; manage their dashboards."""

    def __init__(
        self,
        store: PanelStore,
        *,
        uid_generator: UidGenerator = generate_short_uid,
    ) -> None:
        super().__init__(store)
        self._generate_uid = uid_generator

    # ------------------------------------------------------------------
    # Panels
    # ------------------------------------------------------------------

    @traced
    def create_panel(
        self,
        ctx: RequestContext,
        *,
        name: str,
        model: Any,
        folder_id: int = 0,
    ) -> ServiceResult:
        """Create a panel with a fresh UID owned by ``ctx.user_id``."""
        op = "create_panel"
        try:
            with self._store.transaction(ctx) as txn:
                panel = txn.panels.create(
                    uid=self._generate_uid(),
                    folder_id=folder_id,
                    name=name,
                    model=model,
                    now=now_iso(),
                )
        except LibraryPanelError as exc:
            return self._failure(op, exc)
        return ServiceResult(ok=True, op=op, data=panel.model_dump())

    @traced
    def get_panel(self, ctx: RequestContext, uid: str) -> ServiceResult:
        op = "get_panel"
        try:
            with self._store.session(ctx) as txn:
                panel = txn.panels.get(uid, ctx.org_id)
        except LibraryPanelError as exc:
            return self._failure(op, exc)
        return ServiceResult(ok=True, op=op, data=panel.model_dump())

    @traced
    def list_panels(self, ctx: RequestContext) -> ServiceResult:
        """All panels of the caller's organization, unordered."""
        op = "list_panels"
        try:
            with self._store.session(ctx) as txn:
                panels = txn.panels.list_all(ctx.org_id)
        except LibraryPanelError as exc:
            return self._failure(op, exc)
        items = [p.model_dump() for p in panels]
        return ServiceResult(ok=True, op=op, data={"items": items, "count": len(items)})

    @traced
    def patch_panel(
        self,
        ctx: RequestContext,
        uid: str,
        *,
        folder_id: int = 0,
        name: str = "",
        model: Any = None,
    ) -> ServiceResult:
        """Merge the supplied fields into the stored panel.

        ``folder_id=0``, ``name=""`` and ``model=None`` keep the stored value.
        """
        op = "patch_panel"
        patch = PanelPatch(folder_id=folder_id, name=name, model=model)
        try:
            with self._store.transaction(ctx) as txn:
                panel = txn.panels.patch(uid, patch, now=now_iso())
        except LibraryPanelError as exc:
            return self._failure(op, exc)
        return ServiceResult(ok=True, op=op, data=panel.model_dump())

    @traced
    def delete_panel(self, ctx: RequestContext, uid: str) -> ServiceResult:
        """Hard-delete a panel. Its dashboard connections are kept."""
        op = "delete_panel"
        try:
            with self._store.transaction(ctx) as txn:
                txn.panels.delete(uid, ctx.org_id)
        except LibraryPanelError as exc:
            return self._failure(op, exc)
        return ServiceResult(ok=True, op=op, data={"uid": uid})

    # ------------------------------------------------------------------
    # Dashboard connections
    # ------------------------------------------------------------------

    @traced
    def connect_dashboard(
        self,
        ctx: RequestContext,
        uid: str,
        dashboard_id: int,
    ) -> ServiceResult:
        """Connect a panel to a dashboard; repeating the call is a no-op."""
        op = "connect_dashboard"
        try:
            with self._store.transaction(ctx) as txn:
                panel = txn.panels.get(uid, ctx.org_id)
                created = txn.connections.connect(panel, dashboard_id, now=now_iso())
        except LibraryPanelError as exc:
            return self._failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={"uid": uid, "dashboard_id": dashboard_id, "created": created},
        )

    @traced
    def disconnect_dashboard(
        self,
        ctx: RequestContext,
        uid: str,
        dashboard_id: int,
    ) -> ServiceResult:
        op = "disconnect_dashboard"
        try:
            with self._store.transaction(ctx) as txn:
                panel = txn.panels.get(uid, ctx.org_id)
                txn.connections.disconnect(panel, dashboard_id)
        except LibraryPanelError as exc:
            return self._failure(op, exc)
        return ServiceResult(ok=True, op=op, data={"uid": uid, "dashboard_id": dashboard_id})

    @traced
    def list_connected_dashboards(self, ctx: RequestContext, uid: str) -> ServiceResult:
        """Dashboard ids connected to the panel.

        ``data["dashboard_ids"]`` is sorted for stable output only; treat it
        as a set.
        """
        op = "list_connected_dashboards"
        try:
            with self._store.transaction(ctx) as txn:
                panel = txn.panels.get(uid, ctx.org_id)
                dashboard_ids = txn.connections.list_for_panel(panel)
        except LibraryPanelError as exc:
            return self._failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={"uid": uid, "dashboard_ids": sorted(dashboard_ids)},
        )

    @traced
    def check_connections(self, ctx: RequestContext) -> ServiceResult:
        """Report the organization's connection rows left behind by deleted panels.

        Nothing is modified.
        """
        op = "check_connections"
        try:
            with self._store.session(ctx) as txn:
                orphans = txn.connections.list_orphaned(ctx.org_id)
        except LibraryPanelError as exc:
            return self._failure(op, exc)

        warnings = [
            f"Connection to dashboard {o['dashboard_id']} references "
            f"deleted panel id {o['library_panel_id']}"
            for o in orphans
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data={"orphaned": orphans, "count": len(orphans)},
            warnings=warnings,
        )
