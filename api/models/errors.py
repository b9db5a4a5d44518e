"""
Error response models.

Standardized error responses for the API.
"""

from typing import Any, Optional

from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shared.exceptions import PetConnectError
from shared.storage import BrowserStorage


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str
    detail: Optional[str] = None
    code: Optional[str] = None
    details: dict[str, Any] = {}


def error_response(
    status_code: int,
    exc: PetConnectError,
    storage: Optional[BrowserStorage] = None,
) -> JSONResponse:
    """
    Build a JSON error response from a module exception.

    Pending storage writes are applied too, so a rejected request can
    still update the browser (a failed sign-in bumps the attempt count).
    """
    body = ErrorResponse(
        error=exc.__class__.__name__,
        detail=exc.message,
        code=exc.code,
        details=exc.details,
    )
    response = JSONResponse(status_code=status_code, content=body.model_dump())
    if storage is not None:
        storage.commit(response)
    return response
