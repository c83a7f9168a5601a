"""
CLI: ``dbspine dispatch`` — inspect the generic-operation table.
"""

from __future__ import annotations

import typer

from dbspine.cli.utils import load_modules, output_json, print_table
from dbspine.core.dispatch import dispatch_table

app = typer.Typer(no_args_is_help=True)


@app.command("list")
def list_operations(
    load: list[str] = typer.Option([], "--load", "-l", help="Import a driver module first"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """List generic operations, their default, and per-type overrides."""
    load_modules(load)
    rows = [
        {
            "operation": operation,
            "default": "yes" if dispatch_table.has_default(operation) else "no",
            "overrides": ", ".join(cls.__qualname__ for cls in dispatch_table.registered_types(operation)),
        }
        for operation in dispatch_table.operations()
    ]
    if json_out:
        output_json(rows)
        return
    print_table(rows, title="Generic operations")
