"""
CLI utility helpers — output formatting and explicit module loading.
"""

from __future__ import annotations

import ast
import importlib
import json
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dbspine.core.errors import DBSpineError

console = Console()
err_console = Console(stderr=True)


# ── Module loading ───────────────────────────────────────────────────────


def load_modules(names: list[str]) -> None:
    """Import driver modules named on the command line.

    Resolution only looks at modules that are already imported, so the
    CLI imports them up front on the user's behalf.
    """
    for name in names:
        try:
            importlib.import_module(name)
        except ImportError as e:
            err_console.print(f"[bold red]Error[/bold red]: cannot import {name}: {escape(str(e))}")
            raise typer.Exit(code=1) from e


# ── Value parsing ────────────────────────────────────────────────────────


def parse_value(text: str) -> Any:
    """Python literal if ``text`` is one, else the raw string."""
    try:
        return ast.literal_eval(text)
    except (ValueError, SyntaxError):
        return text


# ── Output helpers ───────────────────────────────────────────────────────


def fail(error: DBSpineError) -> NoReturn:
    """Print a dbspine error and exit 1."""
    err_console.print(f"[bold red]Error[/bold red] ({error.category.value}): {escape(error.message)}")
    raise typer.Exit(code=1)


def output_json(payload: Any) -> None:
    console.print_json(json.dumps(payload, default=str))


def print_table(rows: list[dict[str, Any]], *, title: str = "") -> None:
    """Render a list of dicts as a Rich table."""
    if not rows:
        console.print("[dim]No items.[/dim]")
        return
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in rows[0]:
        table.add_column(col, overflow="fold")
    for row in rows:
        table.add_row(*(str(v) for v in row.values()))
    console.print(table)
