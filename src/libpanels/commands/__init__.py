"""Subcommand modules for libpanels.

Provides register_commands() which uses deferred imports to keep
``libpanels --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all panel and dashboard-connection commands on the root group."""
    # --- Panel lifecycle ---
    from libpanels.commands.panel import create, delete, get, list_cmd, patch

    cli.add_command(create)
    cli.add_command(get)
    cli.add_command(list_cmd)
    cli.add_command(patch)
    cli.add_command(delete)

    # --- Dashboard connections ---
    from libpanels.commands.connections import check, connect, connected, disconnect

    cli.add_command(connect)
    cli.add_command(disconnect)
    cli.add_command(connected)
    cli.add_command(check)
