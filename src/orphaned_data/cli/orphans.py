"""
CLI: ``orphaned-data orphans``: scan for orphaned types, list, delete and retype posts.

``delete`` and ``change-type`` run the same bulk processor as the admin
screen, acting as ``--user-id`` (default: ``ORPHANED_DATA_DEFAULT_USER_ID``).
"""

from __future__ import annotations

import typer

from orphaned_data.cli.utils import console, fail, make_context, output_paged, output_result

app = typer.Typer(no_args_is_help=True)


@app.command()
def scan(
    database: str | None = typer.Option(None, "--database", "-d", help="Database URL or path"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """List orphaned types with their post counts."""
    from orphaned_data.ops.orphans import list_orphaned_types, refresh_orphaned_types

    ctx, _info = make_context(database, load_acting_user=False)
    refresh_orphaned_types(ctx)
    output_result(list_orphaned_types(ctx), as_json=json_out, title="Orphaned Types")


@app.command("list")
def list_posts(
    database: str | None = typer.Option(None, "--database", "-d", help="Database URL or path"),
    type_filter: str | None = typer.Option(None, "--type", "-t", help="Only this orphaned type"),
    orderby: str = typer.Option("date", "--orderby", help="title, type or date"),
    order: str = typer.Option("desc", "--order", help="asc or desc"),
    page: int = typer.Option(1, "--page", min=1),
    per_page: int = typer.Option(20, "--per-page", min=1, max=999),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """List posts of orphaned types."""
    from orphaned_data.ops.orphans import list_orphaned_posts
    from orphaned_data.ops.requests import ListOrphanedPostsRequest

    ctx, _info = make_context(database, load_acting_user=False)
    result = list_orphaned_posts(
        ctx,
        ListOrphanedPostsRequest(
            type_filter=type_filter,
            orderby=orderby,
            order=order,
            page=page,
            per_page=per_page,
        ),
    )
    output_paged(result, as_json=json_out, title="Orphaned Posts")


def _run_bulk(
    action: str,
    ids: list[str],
    *,
    target_type: str | None,
    database: str | None,
    user_id: int | None,
    dry_run: bool,
    json_out: bool,
) -> None:
    from orphaned_data.ops.bulk import process_bulk_action
    from orphaned_data.ops.requests import BulkActionRequest

    ctx, _info = make_context(database, dry_run=dry_run, user_id=user_id)
    result = process_bulk_action(
        ctx,
        BulkActionRequest(action=action, post_ids=tuple(ids), target_type=target_type),
    )
    if result.success and result.data is None:
        fail(f"User {ctx.user.id} is not allowed to run {action!r}", "FORBIDDEN")
    if json_out:
        output_result(result, as_json=True)
        return
    outcome = result.data
    suffix = " [dim](dry run)[/dim]" if dry_run else ""
    style = "green" if outcome.affected else "yellow"
    console.print(f"[{style}]{outcome.message}[/{style}]{suffix}")
    if outcome.failed_ids:
        console.print(f"[red]Failed:[/red] {', '.join(str(i) for i in outcome.failed_ids)}")


@app.command()
def delete(
    ids: list[str] = typer.Argument(..., help="Post IDs to delete permanently"),
    database: str | None = typer.Option(None, "--database", "-d", help="Database URL or path"),
    user_id: int | None = typer.Option(None, "--user-id", "-u", help="Acting user ID"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview without changes"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Permanently delete posts (with their meta and revisions)."""
    _run_bulk(
        "delete",
        ids,
        target_type=None,
        database=database,
        user_id=user_id,
        dry_run=dry_run,
        json_out=json_out,
    )


@app.command("change-type")
def change_type(
    target: str = typer.Argument(..., help="Registered, public type to move the posts to"),
    ids: list[str] = typer.Argument(..., help="Post IDs to retype"),
    database: str | None = typer.Option(None, "--database", "-d", help="Database URL or path"),
    user_id: int | None = typer.Option(None, "--user-id", "-u", help="Acting user ID"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview without changes"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Move posts to another post type."""
    _run_bulk(
        "change_type",
        ids,
        target_type=target,
        database=database,
        user_id=user_id,
        dry_run=dry_run,
        json_out=json_out,
    )
