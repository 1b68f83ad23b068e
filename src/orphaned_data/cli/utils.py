"""
CLI utility helpers: settings, context construction and output formatting.
"""

from __future__ import annotations

import json
import sys
from dataclasses import asdict
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from orphaned_data.api.settings import AdminSettings
from orphaned_data.core.capabilities import ANONYMOUS
from orphaned_data.core.connection import ConnectionInfo, create_connection
from orphaned_data.core.logging import configure_logging
from orphaned_data.core.schema import TableNames
from orphaned_data.core.types import TypeRegistry
from orphaned_data.ops.context import OperationContext
from orphaned_data.ops.result import OperationResult, PagedResult
from orphaned_data.ops.users import load_user

console = Console()
err_console = Console(stderr=True)


def load_settings() -> AdminSettings:
    """Settings from the environment and ``.env``, read fresh per command."""
    return AdminSettings()


# ── Context helper ───────────────────────────────────────────────────────


def make_context(
    database: str | None = None,
    *,
    dry_run: bool = False,
    user_id: int | None = None,
    load_acting_user: bool = True,
) -> tuple[OperationContext, ConnectionInfo]:
    """Create an ``OperationContext`` for a CLI command.

    The acting user is ``user_id`` or ``settings.default_user_id``; commands
    that run before the tables exist pass ``load_acting_user=False``.
    """
    settings = load_settings()
    configure_logging(level=settings.log_level, json_format=settings.json_logs, stream=sys.stderr)
    conn, info = create_connection(database or settings.database_url, table_prefix=settings.table_prefix)
    tables = TableNames(settings.table_prefix)
    user = ANONYMOUS
    if load_acting_user:
        user = load_user(conn, tables, user_id if user_id is not None else settings.default_user_id)
    ctx = OperationContext(
        conn=conn,
        registry=TypeRegistry.with_builtins(settings.registered_types),
        tables=tables,
        user=user,
        caller="cli",
        dry_run=dry_run,
    )
    return ctx, info


# ── Output helpers ───────────────────────────────────────────────────────


def _to_dict(obj: Any) -> dict[str, Any]:
    """Convert dataclass / dict to plain dict."""
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    if isinstance(obj, dict):
        return obj
    return {"value": str(obj)}


def fail(message: str, code: str = "ERROR") -> None:
    err_console.print(f"[bold red]Error[/bold red] ({code}): {message}")
    raise typer.Exit(code=1)


def output_result(
    result: OperationResult,
    *,
    as_json: bool = False,
    title: str = "",
) -> None:
    """Render an ``OperationResult`` to the terminal."""
    if not result.success:
        err = result.error
        fail(err.message if err else "Unknown error", err.code if err else "ERROR")

    data = result.data

    if as_json:
        payload = _to_dict(data) if not isinstance(data, list | tuple) else [_to_dict(d) for d in data]
        console.print_json(json.dumps(payload, default=str))
        return

    if isinstance(data, list):
        if not data:
            console.print("[dim]No items.[/dim]")
            return
        _print_table(data, title=title)
    else:
        _print_dict(_to_dict(data), title=title)


def output_paged(
    result: PagedResult,
    *,
    as_json: bool = False,
    title: str = "",
) -> None:
    """Render a ``PagedResult`` to the terminal with pagination info."""
    if not result.success:
        err = result.error
        fail(err.message if err else "Unknown error", err.code if err else "ERROR")

    items = result.data or []

    if as_json:
        payload = {
            "items": [_to_dict(d) for d in items],
            "total": result.total,
            "page": result.page,
            "per_page": result.per_page,
            "total_pages": result.total_pages,
        }
        console.print_json(json.dumps(payload, default=str))
        return

    if not items:
        console.print("[dim]No items.[/dim]")
        return

    _print_table(items, title=title)
    console.print(
        f"\n[dim]Showing {len(items)} of {result.total}"
        f" (page {result.page} of {result.total_pages})[/dim]"
    )


# ── Private helpers ──────────────────────────────────────────────────────


def _print_table(items: list, *, title: str = "") -> None:
    """Render a list of dataclasses/dicts as a Rich table."""
    first = _to_dict(items[0])
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in first:
        table.add_column(col, overflow="fold")
    for item in items:
        d = _to_dict(item)
        table.add_row(*(str(v) for v in d.values()))
    console.print(table)


def _print_dict(data: dict[str, Any], *, title: str = "") -> None:
    """Render a single dict as key-value pairs."""
    if title:
        console.print(f"[bold]{title}[/bold]")
    for k, v in data.items():
        console.print(f"  [cyan]{k}[/cyan]: {v}")
