"""Shared helpers for repository classes."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PageSlice:
    """Pagination params used by list operations."""

    limit: int = 20
    offset: int = 0


def _order_clause(
    orderby: str | None,
    order: str | None,
    columns: dict[str, str],
    *,
    default: str,
    default_order: str = "DESC",
    tiebreaker: str | None = None,
) -> str:
    """Build an ``ORDER BY`` fragment from whitelisted sort keys.

    Unknown keys fall back to *default*; direction is ``ASC`` or ``DESC`` only.
    """
    column = columns.get(orderby or "", columns[default])
    if order and order.lower() in ("asc", "desc"):
        direction = order.upper()
    else:
        direction = default_order
    clause = f"{column} {direction}"
    if tiebreaker and tiebreaker != column:
        clause += f", {tiebreaker} {direction}"
    return clause
