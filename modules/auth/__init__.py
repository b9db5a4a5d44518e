"""
Authentication module.

End-user sign-up, sign-in and session state mirrored from Supabase Auth.

Public API:
- IAuthGateway / SupabaseAuthGateway: Access to the auth subsystem
- UserSessionContext: Per-browser session state and post-sign-in redirect
- InactivityTracker: Idle sign-out after the configured timeout
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthGateway
from .gateway import SupabaseAuthGateway
from .context import UserSessionContext
from .timeout import ActivityStatus, InactivityTracker
from .models import AuthEvent, AuthSession, JWTPayload
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    SignUpError,
    SignInError,
    SessionExpiredError,
)

__all__ = [
    # Interface
    "IAuthGateway",
    "SupabaseAuthGateway",
    # Context
    "UserSessionContext",
    "ActivityStatus",
    "InactivityTracker",
    # Models
    "AuthEvent",
    "AuthSession",
    "JWTPayload",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "SignUpError",
    "SignInError",
    "SessionExpiredError",
]
