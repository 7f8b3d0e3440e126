"""Commands: connect, disconnect and list dashboards of a library panel."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from libpanels.commands._base import PanelCommand

if TYPE_CHECKING:
    from libpanels.commands._context import AppContext


@click.command(
    cls=PanelCommand,
    examples="""\
  libpanels connect aBc123xYz 100""",
)
@click.argument("uid")
@click.argument("dashboard_id", type=int)
@click.pass_obj
def connect(app: AppContext, uid: str, dashboard_id: int) -> None:
    """Connect a library panel to a dashboard (idempotent)."""
    app.emit(app.service.connect_dashboard(app.request(), uid, dashboard_id))


@click.command(cls=PanelCommand)
@click.argument("uid")
@click.argument("dashboard_id", type=int)
@click.pass_obj
def disconnect(app: AppContext, uid: str, dashboard_id: int) -> None:
    """Disconnect a library panel from a dashboard."""
    app.emit(app.service.disconnect_dashboard(app.request(), uid, dashboard_id))


@click.command(cls=PanelCommand)
@click.argument("uid")
@click.pass_obj
def connected(app: AppContext, uid: str) -> None:
    """List dashboards connected to a library panel."""
    app.emit(app.service.list_connected_dashboards(app.request(), uid))


@click.command(cls=PanelCommand)
@click.pass_obj
def check(app: AppContext) -> None:
    """Report connections left behind by deleted panels."""
    app.emit(app.service.check_connections(app.request()))
