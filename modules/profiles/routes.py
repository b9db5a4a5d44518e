"""
Profile API endpoints.

The caller's profile and the two-step profile setup.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_browser_storage, get_profile_service, get_user_context
from api.models.errors import error_response
from shared.exceptions import NotFoundError, ValidationError
from shared.storage import BrowserStorage
from modules.auth.context import UserSessionContext
from modules.auth.exceptions import MissingTokenError

from .models import (
    BasicProfileRequest,
    Profile,
    ProfileSetupResponse,
    ShelterProfileRequest,
    SitterProfileRequest,
)
from .service import ProfileService

router = APIRouter()


@router.get("/me", response_model=Profile)
async def get_my_profile(
    user: UserSessionContext = Depends(get_user_context),
    service: ProfileService = Depends(get_profile_service),
    storage: BrowserStorage = Depends(get_browser_storage),
):
    """Get the current user's base profile."""
    if user.identity is None:
        return error_response(401, MissingTokenError(), storage)
    try:
        profile = await service.get_profile(user.identity)
    except NotFoundError as e:
        return error_response(404, e, storage)
    return storage.commit(JSONResponse(content=profile.model_dump(mode="json")))


@router.post("/basic", response_model=ProfileSetupResponse)
async def save_basic_profile(
    request: BasicProfileRequest,
    user: UserSessionContext = Depends(get_user_context),
    service: ProfileService = Depends(get_profile_service),
    storage: BrowserStorage = Depends(get_browser_storage),
):
    """
    Save step 1 of profile setup.

    Pet owners are sent to their dashboard; sitters and shelters stay on
    profile setup for step 2.
    """
    if user.identity is None:
        return error_response(401, MissingTokenError(), storage)
    try:
        result = await service.save_basic_profile(user.identity, request)
    except ValidationError as e:
        return error_response(422, e, storage)
    return storage.commit(JSONResponse(content=result.model_dump(mode="json")))


@router.post("/sitter", response_model=ProfileSetupResponse)
async def save_sitter_profile(
    request: SitterProfileRequest,
    user: UserSessionContext = Depends(get_user_context),
    service: ProfileService = Depends(get_profile_service),
    storage: BrowserStorage = Depends(get_browser_storage),
):
    """Save step 2 for pet sitters."""
    if user.identity is None:
        return error_response(401, MissingTokenError(), storage)
    try:
        result = await service.save_sitter_profile(user.identity, request)
    except NotFoundError as e:
        return error_response(404, e, storage)
    except ValidationError as e:
        return error_response(422, e, storage)
    return storage.commit(JSONResponse(content=result.model_dump(mode="json")))


@router.post("/shelter", response_model=ProfileSetupResponse)
async def save_shelter_profile(
    request: ShelterProfileRequest,
    user: UserSessionContext = Depends(get_user_context),
    service: ProfileService = Depends(get_profile_service),
    storage: BrowserStorage = Depends(get_browser_storage),
):
    """Save step 2 for pet shelters."""
    if user.identity is None:
        return error_response(401, MissingTokenError(), storage)
    try:
        result = await service.save_shelter_profile(user.identity, request)
    except NotFoundError as e:
        return error_response(404, e, storage)
    except ValidationError as e:
        return error_response(422, e, storage)
    return storage.commit(JSONResponse(content=result.model_dump(mode="json")))
