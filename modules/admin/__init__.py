"""
Admin module.

Back-office sign-in with opaque session tokens, periodic revalidation,
the route guard and the client-side login throttle.

Public API:
- IAdminGateway / SupabaseAdminGateway: Admin RPCs
- AdminSessionContext: Per-browser admin session state
- AdminAuthGuard: Guard for protected admin pages
- LoginAttemptCounter / AdminLoginForm: Sign-in with lockout
"""

from .interfaces import IAdminGateway
from .gateway import SupabaseAdminGateway
from .context import AdminSessionContext
from .guard import AdminAuthGuard
from .lockout import LoginAttemptCounter
from .login import AdminLoginForm
from .models import AdminIdentity, AdminPermissions, ClientInfo, GuardState, LockoutState
from .exceptions import (
    AdminSignInError,
    AdminSessionInvalidError,
    AdminPermissionError,
    AdminLockedOutError,
)

__all__ = [
    "IAdminGateway",
    "SupabaseAdminGateway",
    "AdminSessionContext",
    "AdminAuthGuard",
    "LoginAttemptCounter",
    "AdminLoginForm",
    "AdminIdentity",
    "AdminPermissions",
    "ClientInfo",
    "GuardState",
    "LockoutState",
    "AdminSignInError",
    "AdminSessionInvalidError",
    "AdminPermissionError",
    "AdminLockedOutError",
]
