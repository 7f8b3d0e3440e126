"""Commands: create, get, list, patch and delete library panels."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from libpanels.commands._base import PanelCommand, parse_model

if TYPE_CHECKING:
    from libpanels.commands._context import AppContext


@click.command(
    cls=PanelCommand,
    examples="""\
  libpanels create "CPU" --model '{"type": "graph"}'
  libpanels --org 2 create "Memory" --folder-id 7 --model '{"type": "stat"}'""",
)
@click.argument("name")
@click.option("--folder-id", type=int, default=0, show_default=True, help="Folder id.")
@click.option("--model", callback=parse_model, default="{}", help="Panel model as JSON.")
@click.pass_obj
def create(app: AppContext, name: str, folder_id: int, model: Any) -> None:
    """Create a library panel."""
    app.emit(app.service.create_panel(app.request(), name=name, model=model, folder_id=folder_id))


@click.command(cls=PanelCommand)
@click.argument("uid")
@click.pass_obj
def get(app: AppContext, uid: str) -> None:
    """Show one library panel."""
    app.emit(app.service.get_panel(app.request(), uid))


@click.command("list", cls=PanelCommand)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List the organization's library panels."""
    app.emit(app.service.list_panels(app.request()))


@click.command(
    cls=PanelCommand,
    examples="""\
  libpanels patch aBc123xYz --name "CPU usage"
  libpanels patch aBc123xYz --folder-id 3
  libpanels patch aBc123xYz --model '{"type": "timeseries"}'""",
)
@click.argument("uid")
@click.option("--folder-id", type=int, default=0, help="Move to folder.")
@click.option("--name", default="", help="New name.")
@click.option("--model", callback=parse_model, default=None, help="Replace model (JSON).")
@click.pass_obj
def patch(app: AppContext, uid: str, folder_id: int, name: str, model: Any) -> None:
    """Update a library panel. Omitted options keep their stored values."""
    if folder_id == 0 and name == "" and model is None:
        click.echo("No changes specified. Use --help for options.", err=True)
        raise SystemExit(1)

    app.emit(
        app.service.patch_panel(
            app.request(),
            uid,
            folder_id=folder_id,
            name=name,
            model=model,
        )
    )


@click.command(cls=PanelCommand)
@click.argument("uid")
@click.pass_obj
def delete(app: AppContext, uid: str) -> None:
    """Delete a library panel. Dashboard connections are not removed."""
    app.emit(app.service.delete_panel(app.request(), uid))
