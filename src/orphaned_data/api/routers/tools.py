"""
Tools index.

GET /tools   the Tools page with the plugin's toolbox card

The card is shown to users who can ``edit_posts``; any signed-in user may
open the page itself.
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from orphaned_data.api.deps import CurrentUser, Plugin, Templates
from orphaned_data.core.errors import PermissionDeniedError

router = APIRouter(prefix="/tools", tags=["tools"])


@router.get("", response_class=HTMLResponse, name="tools_index")
def tools_index(
    request: Request,
    user: CurrentUser,
    plugin: Plugin,
    templates: Templates,
) -> HTMLResponse:
    """Render the Tools index."""
    if not user.exists:
        raise PermissionDeniedError("read")
    card = plugin.toolbox_card(user)
    return templates.TemplateResponse(
        request,
        "tools.html",
        {
            "title": "Tools",
            "user": user,
            "menu_entries": plugin.menu_entries(user),
            "assets": plugin.assets_for("tools"),
            "cards": [card] if card else [],
        },
    )
