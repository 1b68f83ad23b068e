"""
CLI: ``orphaned-data db``: database management commands.
"""

from __future__ import annotations

import typer

from orphaned_data.cli.utils import make_context, output_result

app = typer.Typer(no_args_is_help=True)


@app.command()
def init(
    database: str | None = typer.Option(None, "--database", "-d", help="Database URL or path"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview without changes"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Create the WordPress tables (SQLite only, idempotent)."""
    from orphaned_data.ops.database import initialize_database
    from orphaned_data.ops.requests import DatabaseInitRequest

    ctx, info = make_context(database, dry_run=dry_run, load_acting_user=False)
    result = initialize_database(ctx, DatabaseInitRequest(backend=info.backend))
    output_result(result, as_json=json_out, title="Database Init")


@app.command("seed-demo")
def seed_demo(
    database: str | None = typer.Option(None, "--database", "-d", help="Database URL or path"),
    types: str = typer.Option(
        "old_plugin_event,wpz-portfolio",
        "--types",
        "-t",
        help="Comma-separated orphaned type names to create posts for",
    ),
    per_type: int = typer.Option(3, "--per-type", min=1, help="Posts per type"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Create tables if needed and insert demo posts, some of orphaned types."""
    from orphaned_data.ops.database import initialize_database
    from orphaned_data.ops.database import seed_demo as run_seed
    from orphaned_data.ops.requests import DatabaseInitRequest, SeedDemoRequest

    ctx, info = make_context(database, load_acting_user=False)
    if info.is_sqlite:
        init_result = initialize_database(ctx, DatabaseInitRequest(backend=info.backend))
        if not init_result.success:
            output_result(init_result)
    names = tuple(t.strip() for t in types.split(",") if t.strip())
    result = run_seed(ctx, SeedDemoRequest(orphaned_types=names, posts_per_type=per_type))
    output_result(result, as_json=json_out, title="Demo Data")
