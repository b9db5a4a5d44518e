"""
Auth API endpoints.

Sign-up, sign-in, sign-out and the current session. Session tokens are
kept in the browser's local-scope cookies, so every response commits the
request's storage writes.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_browser_storage, get_inactivity_tracker, get_user_context
from api.models.errors import error_response
from shared.storage import BrowserStorage
from modules.routing.models import Paths

from .context import UserSessionContext
from .exceptions import SessionExpiredError, SignInError, SignUpError
from .models import SessionResponse, SignInRequest, SignUpRequest, SignUpResponse
from .timeout import ActivityStatus, InactivityTracker

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/sign-up", response_model=SignUpResponse, status_code=201)
async def sign_up(
    request: SignUpRequest,
    user: UserSessionContext = Depends(get_user_context),
    storage: BrowserStorage = Depends(get_browser_storage),
):
    """
    Register a new user.

    The role and full name are stored as user metadata and picked up
    again during profile setup.
    """
    try:
        await user.sign_up(
            request.email,
            request.password,
            full_name=request.full_name,
            user_type=request.user_type.value if request.user_type else None,
        )
    except SignUpError as e:
        return error_response(400, e, storage)

    response = JSONResponse(
        status_code=201,
        content=SignUpResponse(email=request.email).model_dump(),
    )
    return storage.commit(response)


@router.post("/sign-in", response_model=SessionResponse)
async def sign_in(
    request: SignInRequest,
    user: UserSessionContext = Depends(get_user_context),
    tracker: InactivityTracker = Depends(get_inactivity_tracker),
    storage: BrowserStorage = Depends(get_browser_storage),
):
    """
    Sign in with email and password.

    Returns the landing path chosen by the role router; the client
    replace-navigates there.
    """
    try:
        identity = await user.sign_in(request.email, request.password)
    except SignInError as e:
        return error_response(401, e, storage)

    redirect = await user.wait_for_redirect()
    tracker.touch()
    logger.info("User %s signed in, landing on %s", identity.id, redirect)

    body = SessionResponse(user=identity, redirect=redirect)
    return storage.commit(JSONResponse(content=body.model_dump(mode="json")))


@router.post("/sign-out", response_model=SessionResponse)
async def sign_out(
    user: UserSessionContext = Depends(get_user_context),
    tracker: InactivityTracker = Depends(get_inactivity_tracker),
    storage: BrowserStorage = Depends(get_browser_storage),
):
    """Sign out. The stored session is cleared even if the gateway call fails."""
    await user.sign_out()
    tracker.clear()
    body = SessionResponse(user=None, redirect=Paths.AUTH)
    return storage.commit(JSONResponse(content=body.model_dump(mode="json")))


@router.get("/session", response_model=SessionResponse)
async def get_session(
    user: UserSessionContext = Depends(get_user_context),
    tracker: InactivityTracker = Depends(get_inactivity_tracker),
    storage: BrowserStorage = Depends(get_browser_storage),
):
    """
    Get the current session.

    An idle session is ended here and answered with 401 SESSION_EXPIRED.
    """
    status = await tracker.enforce(user.identity is not None, user.sign_out)
    if status == ActivityStatus.EXPIRED:
        return error_response(401, SessionExpiredError(), storage)

    body = SessionResponse(
        user=user.identity,
        session_warning=status == ActivityStatus.WARNING,
    )
    return storage.commit(JSONResponse(content=body.model_dump(mode="json")))
