"""Root CLI group for libpanels with global flags and command registration."""

from __future__ import annotations

import click

from libpanels import __version__
from libpanels.commands import register_commands
from libpanels.commands._context import AppContext
from libpanels.config.settings import LibpanelsSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="libpanels")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--org", "org_id", type=int, default=None, help="Organization id (overrides config).")
@click.option("--user", "user_id", type=int, default=None, help="Acting user id (overrides config).")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    org_id: int | None,
    user_id: int | None,
) -> None:
    """libpanels: library panel store CLI."""
    ctx.ensure_object(dict)
    settings = LibpanelsSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings, org_id=org_id, user_id=user_id)
    ctx.call_on_close(ctx.obj.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
