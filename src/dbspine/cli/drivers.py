"""
CLI: ``dbspine drivers`` — resolve drivers and inspect type mapping.
"""

from __future__ import annotations

import typer

from dbspine.cli.utils import console, fail, load_modules, output_json, parse_value, print_table
from dbspine.core.display import show
from dbspine.core.errors import DBSpineError
from dbspine.core.resolver import resolve_driver
from dbspine.drivers import BUILTIN_DRIVERS

app = typer.Typer(no_args_is_help=True)


@app.command("list")
def list_builtin(
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """List the built-in drivers."""
    rows = [
        {"name": name, "description": descriptor.description}
        for name, descriptor in sorted(BUILTIN_DRIVERS.items())
    ]
    if json_out:
        output_json(rows)
        return
    print_table(rows, title="Built-in drivers")


@app.command()
def resolve(
    name: str = typer.Argument(..., help="DBMS name, e.g. SQLite"),
    load: list[str] = typer.Option([], "--load", "-l", help="Import a driver module first"),
    prefix: str | None = typer.Option(None, "--prefix", help="Driver module prefix"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Resolve a driver by name and show it."""
    load_modules(load)
    try:
        driver = resolve_driver(name, ambient=BUILTIN_DRIVERS, prefix=prefix)
    except DBSpineError as e:
        if json_out:
            output_json(e.to_dict())
            raise typer.Exit(code=1) from e
        fail(e)

    if json_out:
        output_json({"name": name, "driver": type(driver).__qualname__})
        return
    show(driver)


@app.command("data-type")
def data_type(
    values: list[str] = typer.Argument(..., help="Python literals (or raw text)"),
    driver_name: str = typer.Option("ANSI", "--driver", "-d", help="Driver to ask"),
    load: list[str] = typer.Option([], "--load", "-l", help="Import a driver module first"),
) -> None:
    """Print the SQL type a driver maps VALUES to."""
    load_modules(load)
    parsed = [parse_value(v) for v in values]
    column = parsed[0] if len(parsed) == 1 else parsed
    try:
        driver = resolve_driver(driver_name, ambient=BUILTIN_DRIVERS)
        result = driver.data_type(column)
    except DBSpineError as e:
        fail(e)
    console.print(result)
