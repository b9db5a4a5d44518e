"""API models package."""

from .errors import ErrorResponse, error_response

__all__ = [
    "ErrorResponse",
    "error_response",
]
