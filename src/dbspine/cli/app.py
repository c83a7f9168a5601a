"""
Root Typer application for the dbspine CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

from dbspine.cli.utils import fail
from dbspine.core.errors import ConfigError
from dbspine.core.logging import configure_logging
from dbspine.core.settings import get_settings

app = Typer(
    name="dbspine",
    help="dbspine — uniform driver interface for database clients.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from dbspine import __version__

        typer.echo(f"dbspine {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """dbspine CLI — resolve drivers and inspect generic operations."""
    try:
        settings = get_settings()
    except ConfigError as e:
        fail(e)
    configure_logging(level=settings.log_level, json_format=settings.json_logs)


# ── Sub-command registration ─────────────────────────────────────────────

from dbspine.cli.dispatch import app as dispatch_app  # noqa: E402
from dbspine.cli.drivers import app as drivers_app  # noqa: E402

app.add_typer(drivers_app, name="drivers", help="Driver resolution and type mapping.")
app.add_typer(dispatch_app, name="dispatch", help="Generic-operation dispatch table.")


if __name__ == "__main__":
    app()
