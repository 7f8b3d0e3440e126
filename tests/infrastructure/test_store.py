"""Tests for PanelStore transaction scopes."""

from __future__ import annotations

import threading

import pytest
from sqlalchemy import func, insert, select

from libpanels.domain.context import RequestContext
from libpanels.domain.errors import OperationCancelledError
from libpanels.infrastructure.database.schema import library_panel_dashboards
from libpanels.infrastructure.store import PanelStore


def _row(dashboard_id: int) -> dict[str, object]:
    return {
        "library_panel_id": 1,
        "org_id": 1,
        "dashboard_id": dashboard_id,
        "created": "2024-01-01T00:00:00+00:00",
        "created_by": 1,
    }


def _count(store: PanelStore) -> int:
    with store.engine.connect() as conn:
        return int(
            conn.execute(select(func.count()).select_from(library_panel_dashboards)).scalar_one()
        )


class TestTransaction:
    def test_commits_on_success(self, store: PanelStore, ctx: RequestContext) -> None:
        with store.transaction(ctx) as txn:
            txn.execute(insert(library_panel_dashboards).values(**_row(1)))
        assert _count(store) == 1

    def test_rolls_back_on_error(self, store: PanelStore, ctx: RequestContext) -> None:
        with pytest.raises(RuntimeError):
            with store.transaction(ctx) as txn:
                txn.execute(insert(library_panel_dashboards).values(**_row(1)))
                raise RuntimeError("boom")
        assert _count(store) == 0

    def test_cancel_between_statements_rolls_back(self, store: PanelStore) -> None:
        event = threading.Event()
        ctx = RequestContext(user_id=1, org_id=1, cancel_event=event)
        with pytest.raises(OperationCancelledError):
            with store.transaction(ctx) as txn:
                txn.execute(insert(library_panel_dashboards).values(**_row(1)))
                event.set()
                txn.execute(insert(library_panel_dashboards).values(**_row(2)))
        assert _count(store) == 0

    def test_cancelled_context_never_opens(self, store: PanelStore) -> None:
        event = threading.Event()
        event.set()
        ctx = RequestContext(user_id=1, org_id=1, cancel_event=event)
        with pytest.raises(OperationCancelledError):
            with store.transaction(ctx):
                pytest.fail("scope must not be entered")

    def test_savepoint_isolates_failure(self, store: PanelStore, ctx: RequestContext) -> None:
        with store.transaction(ctx) as txn:
            txn.execute(insert(library_panel_dashboards).values(**_row(1)))
            with pytest.raises(RuntimeError):
                with txn.savepoint():
                    txn.execute(insert(library_panel_dashboards).values(**_row(2)))
                    raise RuntimeError("inner")
        assert _count(store) == 1


class TestSession:
    def test_does_not_commit(self, store: PanelStore, ctx: RequestContext) -> None:
        with store.session(ctx) as txn:
            txn.execute(insert(library_panel_dashboards).values(**_row(1)))
        assert _count(store) == 0


class TestPanelStore:
    def test_creates_database_in_data_dir(self, store: PanelStore) -> None:
        assert (store.settings.data_dir / "libpanels.db").exists()
