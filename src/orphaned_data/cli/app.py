"""
Root Typer application for the orphaned-data CLI.

Sub-commands live in their own modules; heavy imports (FastAPI, uvicorn,
SQLAlchemy) happen inside the commands that need them.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

import typer
from typer import Typer

from orphaned_data import __version__

app = Typer(
    name="orphaned-data",
    help="orphaned-data: find and repair posts whose type no longer exists.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        try:
            v = pkg_version("orphaned-data")
        except PackageNotFoundError:
            v = __version__
        typer.echo(f"orphaned-data {v}")
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
    """orphaned-data CLI: scan for orphaned types, delete or retype their posts."""


# ── Sub-command registration ─────────────────────────────────────────────

from orphaned_data.cli.db import app as db_app  # noqa: E402
from orphaned_data.cli.orphans import app as orphans_app  # noqa: E402
from orphaned_data.cli.serve import app as serve_app  # noqa: E402

app.add_typer(db_app, name="db", help="Database operations.")
app.add_typer(orphans_app, name="orphans", help="Orphaned types and their posts.")
app.add_typer(serve_app, name="serve", help="Start the admin server.")


if __name__ == "__main__":
    app()
