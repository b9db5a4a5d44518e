"""
Admin API endpoints and pages.

The admin token lives in a session-scope cookie and the attempt counter
in local-scope cookies; every response, including failures, commits the
request's storage writes.
"""

import logging

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse, RedirectResponse

from api.dependencies import (
    get_admin_context,
    get_admin_inactivity_tracker,
    get_admin_login_form,
    get_browser_storage,
    get_login_counter,
)
from api.models.errors import error_response
from shared.storage import BrowserStorage
from modules.auth.timeout import ActivityStatus, InactivityTracker
from modules.routing.models import PageView, Paths

from .context import AdminSessionContext
from .exceptions import (
    AdminLockedOutError,
    AdminPermissionError,
    AdminSessionInvalidError,
    AdminSignInError,
)
from .guard import AdminAuthGuard
from .lockout import LoginAttemptCounter
from .login import AdminLoginForm
from .models import (
    ActivityLogRequest,
    AdminSessionResponse,
    AdminSignInRequest,
    CreateCoAdminRequest,
    CreateCoAdminResponse,
    LockoutState,
)

logger = logging.getLogger(__name__)

router = APIRouter()
page_router = APIRouter()


@router.post("/sign-in", response_model=AdminSessionResponse)
async def admin_sign_in(
    request: AdminSignInRequest,
    form: AdminLoginForm = Depends(get_admin_login_form),
    tracker: InactivityTracker = Depends(get_admin_inactivity_tracker),
    storage: BrowserStorage = Depends(get_browser_storage),
):
    """
    Sign in to the admin panel.

    Refused with 429 while the browser is locked out; failures report the
    attempts left before lockout.
    """
    try:
        admin = await form.submit(request.email, request.password)
    except AdminLockedOutError as e:
        return error_response(429, e, storage)
    except AdminSignInError as e:
        return error_response(401, e, storage)

    tracker.touch()
    body = AdminSessionResponse(admin=admin, redirect=Paths.ADMIN)
    return storage.commit(JSONResponse(content=body.model_dump(mode="json")))


@router.post("/sign-out", response_model=AdminSessionResponse)
async def admin_sign_out(
    admin: AdminSessionContext = Depends(get_admin_context),
    tracker: InactivityTracker = Depends(get_admin_inactivity_tracker),
    storage: BrowserStorage = Depends(get_browser_storage),
):
    """Sign out of the admin panel."""
    await admin.sign_out()
    tracker.clear()
    body = AdminSessionResponse(admin=None, redirect=Paths.ADMIN_AUTH)
    return storage.commit(JSONResponse(content=body.model_dump(mode="json")))


@router.get("/lockout", response_model=LockoutState)
async def get_lockout(
    counter: LoginAttemptCounter = Depends(get_login_counter),
    storage: BrowserStorage = Depends(get_browser_storage),
):
    """Current state of this browser's login throttle."""
    return storage.commit(JSONResponse(content=counter.state.model_dump(mode="json")))


@router.post("/co-admins", response_model=CreateCoAdminResponse, status_code=201)
async def create_co_admin(
    request: CreateCoAdminRequest,
    admin: AdminSessionContext = Depends(get_admin_context),
    storage: BrowserStorage = Depends(get_browser_storage),
):
    """
    Create a co-admin.

    Only super admins may do this; others are refused without a gateway
    call.
    """
    if not await admin.confirm_session():
        return error_response(401, AdminSessionInvalidError(), storage)
    try:
        admin_id = await admin.create_co_admin(
            request.name,
            request.email,
            request.password,
            permissions=request.permissions,
        )
    except AdminPermissionError as e:
        return error_response(403, e, storage)

    body = CreateCoAdminResponse(id=admin_id)
    return storage.commit(JSONResponse(status_code=201, content=body.model_dump()))


@router.post("/activity", status_code=204)
async def log_activity(
    request: ActivityLogRequest,
    admin: AdminSessionContext = Depends(get_admin_context),
    storage: BrowserStorage = Depends(get_browser_storage),
):
    """Record an admin action in the audit log."""
    try:
        await admin.log_activity(
            request.action,
            details=request.details,
            target_type=request.target_type,
            target_id=request.target_id,
        )
    except AdminSessionInvalidError as e:
        return error_response(401, e, storage)
    return storage.commit(Response(status_code=204))


# -------------------------------------------------------------------------
# Pages
# -------------------------------------------------------------------------


@page_router.get(Paths.ADMIN, response_model=PageView)
async def admin_panel_page(
    admin: AdminSessionContext = Depends(get_admin_context),
    tracker: InactivityTracker = Depends(get_admin_inactivity_tracker),
    storage: BrowserStorage = Depends(get_browser_storage),
):
    """
    Admin panel.

    The session is validated with the gateway once per request.
    """
    status = await tracker.enforce(admin.admin is not None, admin.sign_out)
    if status == ActivityStatus.EXPIRED:
        return storage.commit(RedirectResponse(Paths.ADMIN_AUTH, status_code=307))

    decision = await AdminAuthGuard(admin).enter()
    if decision is None or decision.is_redirect:
        return storage.commit(RedirectResponse(Paths.ADMIN_AUTH, status_code=307))

    page = PageView(path=Paths.ADMIN, session_warning=status == ActivityStatus.WARNING)
    return storage.commit(JSONResponse(content=page.model_dump(mode="json")))


@page_router.get(Paths.ADMIN_AUTH, response_model=PageView)
async def admin_auth_page(
    admin: AdminSessionContext = Depends(get_admin_context),
    storage: BrowserStorage = Depends(get_browser_storage),
):
    """Admin sign-in page; a signed-in admin is sent on to the panel."""
    if admin.admin is not None:
        return storage.commit(RedirectResponse(Paths.ADMIN, status_code=307))
    return storage.commit(JSONResponse(content=PageView(path=Paths.ADMIN_AUTH).model_dump(mode="json")))
