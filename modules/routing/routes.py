"""
Navigation endpoints.

Guarded page routes answer with a 307 to wherever the guard sends the
user, or a minimal page descriptor when the page may render. The
navigation API answers the same question as JSON for client-side routers.
"""

import logging
from typing import Callable, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, RedirectResponse

from api.dependencies import (
    get_admin_context,
    get_browser_storage,
    get_inactivity_tracker,
    get_navigator,
    get_profile_gate,
    get_user_context,
)
from shared.storage import BrowserStorage
from modules.admin.context import AdminSessionContext
from modules.admin.guard import AdminAuthGuard
from modules.auth.context import UserSessionContext
from modules.auth.timeout import ActivityStatus, InactivityTracker

from .gate import PROFILE_GATED_PAGES, SIGNED_IN_PAGES, guard_for
from .guard import ProfileGate
from .models import GuardKind, PageView, Paths, RouteDecision
from .navigator import Navigator

logger = logging.getLogger(__name__)

router = APIRouter()
page_router = APIRouter()


async def render_page(
    path: str,
    user: UserSessionContext,
    gate: ProfileGate,
    tracker: InactivityTracker,
    navigator: Navigator,
    storage: BrowserStorage,
    edit_mode: bool = False,
):
    """Guard ``path`` and answer with a redirect or the page descriptor."""
    status = await tracker.enforce(user.identity is not None, user.sign_out)
    if status == ActivityStatus.EXPIRED:
        decision = RouteDecision.redirect(Paths.AUTH)
    else:
        decision = await gate.resolve(user.identity, path, edit_mode)

    if decision.is_redirect:
        navigator.replace(decision.path)
        logger.debug("Page %s redirected to %s", path, decision.path)
        return storage.commit(RedirectResponse(navigator.current_path, status_code=307))

    page = PageView(
        path=path,
        user=user.identity,
        session_warning=status == ActivityStatus.WARNING,
    )
    return storage.commit(JSONResponse(content=page.model_dump(mode="json")))


def _page_endpoint(path: str) -> Callable:
    async def endpoint(
        user: UserSessionContext = Depends(get_user_context),
        gate: ProfileGate = Depends(get_profile_gate),
        tracker: InactivityTracker = Depends(get_inactivity_tracker),
        navigator: Navigator = Depends(get_navigator),
        storage: BrowserStorage = Depends(get_browser_storage),
    ):
        return await render_page(path, user, gate, tracker, navigator, storage)

    endpoint.__name__ = "page" + path.replace("-", "_").replace("/", "_")
    return endpoint


for _path in sorted(PROFILE_GATED_PAGES | SIGNED_IN_PAGES):
    page_router.add_api_route(
        _path,
        _page_endpoint(_path),
        methods=["GET"],
        response_model=PageView,
    )


@page_router.get("/care-request/{request_id}", response_model=PageView)
async def care_request_page(
    request_id: str,
    user: UserSessionContext = Depends(get_user_context),
    gate: ProfileGate = Depends(get_profile_gate),
    tracker: InactivityTracker = Depends(get_inactivity_tracker),
    navigator: Navigator = Depends(get_navigator),
    storage: BrowserStorage = Depends(get_browser_storage),
):
    return await render_page(
        f"/care-request/{request_id}", user, gate, tracker, navigator, storage
    )


@page_router.get(Paths.PROFILE_SETUP, response_model=PageView)
async def profile_setup_page(
    edit: bool = Query(default=False, description="Editing an existing profile"),
    user: UserSessionContext = Depends(get_user_context),
    gate: ProfileGate = Depends(get_profile_gate),
    tracker: InactivityTracker = Depends(get_inactivity_tracker),
    navigator: Navigator = Depends(get_navigator),
    storage: BrowserStorage = Depends(get_browser_storage),
):
    """
    Profile setup.

    Sitters and shelters who already finished setup go to their dashboard
    unless ``edit=true``.
    """
    return await render_page(
        Paths.PROFILE_SETUP, user, gate, tracker, navigator, storage, edit_mode=edit
    )


@router.get("/resolve", response_model=RouteDecision)
async def resolve_navigation(
    path: str = Query(..., description="Path the client is about to render"),
    edit: bool = Query(default=False, description="Profile setup in edit mode"),
    user: UserSessionContext = Depends(get_user_context),
    admin: AdminSessionContext = Depends(get_admin_context),
    gate: ProfileGate = Depends(get_profile_gate),
    tracker: InactivityTracker = Depends(get_inactivity_tracker),
    storage: BrowserStorage = Depends(get_browser_storage),
):
    """
    Decide whether ``path`` may render for the caller.

    Returns ``{"decision": "stay"}`` or ``{"decision": "redirect", "path": ...}``.
    """
    decision: Optional[RouteDecision]
    if guard_for(path) == GuardKind.ADMIN:
        decision = await AdminAuthGuard(admin).enter()
    else:
        status = await tracker.enforce(user.identity is not None, user.sign_out)
        if status == ActivityStatus.EXPIRED:
            decision = RouteDecision.redirect(Paths.AUTH)
        else:
            decision = await gate.resolve(user.identity, path, edit)

    if decision is None:
        decision = RouteDecision.redirect(Paths.ADMIN_AUTH)
    return storage.commit(JSONResponse(content=decision.model_dump(mode="json")))
