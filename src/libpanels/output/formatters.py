"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich) or machines (--json).
``list_panels`` results render as a table; everything else as key-value
lines under an OK/ERROR status line.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from libpanels.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from libpanels.services.result import ServiceResult


def format_result(
    result: ServiceResult,
    *,
    json_output: bool = False,
    quiet: bool = False,
) -> str:
    """Format a ServiceResult for display."""
    if json_output:
        return result.model_dump_json(indent=2)
    if quiet:
        return _format_quiet(result)

    console = create_console()
    if not result.ok:
        _render_error(result, console)
    elif result.op == "list_panels":
        _render_panel_table(result, console)
    else:
        _render_generic(result, console)
    return get_output(console).rstrip("\n")


def _format_quiet(result: ServiceResult) -> str:
    """UIDs for panel listings, dashboard ids for connections, else status."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} - {msg}"
    if result.op == "list_panels":
        return "\n".join(str(item["uid"]) for item in result.data.get("items", []))
    if result.op == "list_connected_dashboards":
        return "\n".join(str(d) for d in result.data.get("dashboard_ids", []))
    if "uid" in result.data:
        return str(result.data["uid"])
    return f"OK: {result.op}"


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="lp.ok"), Text(f"  {result.op}", style="lp.op"))


def _format_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"))
    return str(value)


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        line = Text(f"  {key}: ", style="lp.key")
        line.append(_format_value(value))
        console.print(line)


def _render_panel_table(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    items: list[dict[str, Any]] = result.data.get("items", [])
    if not items:
        console.print("  No library panels.")
        return

    table = Table(show_edge=False, pad_edge=False)
    table.add_column("UID", style="lp.uid", no_wrap=True)
    table.add_column("Name", style="lp.name")
    table.add_column("Folder", justify="right")
    table.add_column("Updated")
    table.add_column("By", justify="right")
    for item in sorted(items, key=lambda i: (i["folder_id"], i["name"])):
        table.add_row(
            str(item["uid"]),
            str(item["name"]),
            str(item["folder_id"]),
            str(item["updated"]),
            str(item["updated_by"]),
        )
    console.print(table)


def _render_error(result: ServiceResult, console: Console) -> None:
    code = result.error.code if result.error else "ERROR"
    msg = result.error.message if result.error else "Unknown error"
    line = Text("ERROR", style="lp.error")
    line.append(f"  {result.op} [{code}] - {msg}")
    console.print(line)
