"""
Shared infrastructure for PetConnect backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- storage: Browser storage scopes (cookies over HTTP)

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, get_supabase_auth_client, reset_client_cache
from .exceptions import (
    PetConnectError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    RateLimitedError,
    ExternalServiceError,
)
from .models import UserIdentity, UserMetadata
from .storage import BrowserStorage, ClientStorage, CookieStorage, MemoryStorage

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "get_supabase_auth_client",
    "reset_client_cache",
    "PetConnectError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "RateLimitedError",
    "ExternalServiceError",
    "UserIdentity",
    "UserMetadata",
    "BrowserStorage",
    "ClientStorage",
    "CookieStorage",
    "MemoryStorage",
]
