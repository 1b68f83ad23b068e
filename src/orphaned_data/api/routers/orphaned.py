"""
Orphaned Data screen.

GET  /tools/orphaned-data                  render the listing
POST /tools/orphaned-data                  filter change or bulk/row action
POST /tools/orphaned-data/screen-options   store the per-page preference

Query parameters: ``paged``, ``orderby``, ``order``, ``orphaned_type``.

On POST, a submitted ``orphaned_type`` that differs from the one in the URL
(absent means ``all``) answers with a single 303 to the canonical URL with
the new filter; nothing else is processed on that request.  Otherwise the
bulk action runs and the page is rendered with its notice.

Tags:
    api, admin, orphaned-data
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from orphaned_data.admin.orphaned_table import build_orphaned_table
from orphaned_data.admin.table import build_url
from orphaned_data.api.deps import OpContext, Plugin, Settings, Templates
from orphaned_data.api.middleware.errors import operation_error_page
from orphaned_data.core.capabilities import Capability
from orphaned_data.core.errors import PermissionDeniedError
from orphaned_data.core.logging import get_logger
from orphaned_data.ops.bulk import process_bulk_action
from orphaned_data.ops.context import OperationContext
from orphaned_data.ops.orphans import ALL_TYPES, list_orphaned_posts, list_orphaned_types, resolve_type_filter
from orphaned_data.ops.preferences import MAX_PER_PAGE, get_per_page, save_per_page
from orphaned_data.ops.requests import BulkActionRequest, ListOrphanedPostsRequest, SavePerPageRequest
from orphaned_data.plugin import OrphanedDataPlugin

logger = get_logger(__name__)

router = APIRouter(prefix="/tools/orphaned-data", tags=["orphaned-data"])

FILTER_PARAM = "orphaned_type"


def _require(ctx: OperationContext, capability: Capability) -> None:
    if not ctx.user.can(capability):
        raise PermissionDeniedError(capability.value)


def _page_number(value: str | None) -> int:
    if value and value.strip().isdigit():
        return max(1, int(value))
    return 1


def _listing_query(request: Request) -> dict[str, Any]:
    """Query parameters that survive redirects and table links."""
    params = request.query_params
    return {
        FILTER_PARAM: params.get(FILTER_PARAM),
        "orderby": params.get("orderby"),
        "order": params.get("order"),
    }


# ── Rendering ────────────────────────────────────────────────────────────


def _render(
    request: Request,
    ctx: OperationContext,
    plugin: OrphanedDataPlugin,
    templates,
    *,
    default_per_page: int,
) -> HTMLResponse:
    params = request.query_params
    types_result = list_orphaned_types(ctx)
    if not types_result.success:
        return operation_error_page(request, types_result.error)
    orphaned_types = types_result.data or []
    orphaned_names = [t.name for t in orphaned_types]

    type_filter = resolve_type_filter(params.get(FILTER_PARAM), orphaned_names)
    per_page = get_per_page(ctx, default=default_per_page).data or default_per_page
    result = list_orphaned_posts(
        ctx,
        ListOrphanedPostsRequest(
            type_filter=type_filter,
            orderby=params.get("orderby"),
            order=params.get("order"),
            page=_page_number(params.get("paged")),
            per_page=per_page,
        ),
    )
    if not result.success:
        return operation_error_page(request, result.error)

    query = _listing_query(request)
    query[FILTER_PARAM] = None if type_filter == ALL_TYPES else type_filter
    table = build_orphaned_table(
        result.data or [],
        user=ctx.user,
        registry=ctx.registry,
        orphaned=orphaned_names,
        base_url=plugin.page_url,
        total_items=result.total,
        per_page=result.per_page,
        current_page=result.page,
        orderby=params.get("orderby"),
        order=params.get("order"),
        query=query,
    )

    return templates.TemplateResponse(
        request,
        "orphaned_data.html",
        {
            "title": "WPZOOM Orphaned Data",
            "user": ctx.user,
            "menu_entries": plugin.menu_entries(ctx.user),
            "assets": plugin.assets_for(plugin.SCREEN_ID),
            "notices": ctx.notices.drain(),
            "table": table,
            "orphaned_types": orphaned_types,
            "type_filter": type_filter,
            "form_action": build_url(plugin.page_url, dict(params)),
            "screen_options_action": build_url(plugin.screen_options_url, query),
            "per_page": per_page,
            "max_per_page": MAX_PER_PAGE,
        },
    )


# ── Routes ───────────────────────────────────────────────────────────────


@router.get("", response_class=HTMLResponse, name="orphaned_data_page")
def orphaned_data_page(
    request: Request,
    ctx: OpContext,
    plugin: Plugin,
    settings: Settings,
    templates: Templates,
) -> HTMLResponse:
    """Render the orphaned posts listing."""
    _require(ctx, Capability.EDIT_POSTS)
    return _render(request, ctx, plugin, templates, default_per_page=settings.default_per_page)


@router.post("", response_class=HTMLResponse, name="orphaned_data_submit")
def orphaned_data_submit(
    request: Request,
    ctx: OpContext,
    plugin: Plugin,
    settings: Settings,
    templates: Templates,
    post: Annotated[list[str] | None, Form(alias="post[]")] = None,
    action: Annotated[str, Form()] = "-1",
    target_type: Annotated[str | None, Form()] = None,
    orphaned_type: Annotated[str | None, Form()] = None,
) -> Response:
    """Apply a filter change or a bulk/row action, then render the listing."""
    _require(ctx, Capability.EDIT_POSTS)

    current = resolve_type_filter(request.query_params.get(FILTER_PARAM), ctx.orphaned_types)
    if orphaned_type is not None and orphaned_type != current:
        query = _listing_query(request)
        query[FILTER_PARAM] = None if orphaned_type == ALL_TYPES else orphaned_type
        location = build_url(plugin.page_url, query)
        logger.debug("filter_redirect", from_filter=current, to_filter=orphaned_type)
        return RedirectResponse(location, status_code=303)

    process_bulk_action(
        ctx,
        BulkActionRequest(
            action=action,
            post_ids=tuple(post or ()),
            target_type=target_type or None,
        ),
    )
    return _render(request, ctx, plugin, templates, default_per_page=settings.default_per_page)


@router.post("/screen-options", name="orphaned_data_screen_options")
def save_screen_options(
    request: Request,
    ctx: OpContext,
    plugin: Plugin,
    per_page: Annotated[str | None, Form()] = None,
) -> RedirectResponse:
    """Store the page-size preference (ignored unless within 1..999)."""
    _require(ctx, Capability.EDIT_POSTS)
    result = save_per_page(ctx, SavePerPageRequest(value=per_page))
    if not result.success and result.error is not None:
        logger.debug("per_page_ignored", value=per_page, reason=result.error.code)
    return RedirectResponse(build_url(plugin.page_url, _listing_query(request)), status_code=303)
