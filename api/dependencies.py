"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations, plus the per-request objects built from it: browser
storage, navigator, profile gate and the two session contexts.

Session contexts are created per request from the browser's storage;
nothing about the signed-in user is held at module level.
"""

from datetime import timedelta
from typing import TYPE_CHECKING, AsyncIterator

from fastapi import Depends, Request

from shared.config import Settings, get_settings
from shared.storage import BrowserStorage
from modules.admin.context import AdminSessionContext
from modules.admin.lockout import LoginAttemptCounter
from modules.admin.login import AdminLoginForm
from modules.admin.models import ClientInfo
from modules.auth.context import UserSessionContext
from modules.auth.timeout import ADMIN_LAST_ACTIVITY_KEY, InactivityTracker
from modules.profiles.service import ProfileService
from modules.routing.guard import ProfileGate
from modules.routing.navigator import Navigator

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.admin.interfaces import IAdminGateway
    from modules.auth.interfaces import IAuthGateway
    from modules.profiles.repository import ProfileRepository


class ServiceContainer:
    """
    Container for long-lived service instances.

    Repositories and the admin gateway share the cached service-role
    client and are created lazily on first access. Auth gateways are not
    cached: each browser session gets its own client.

    Use reset() to clear all cached services for testing.
    """

    def __init__(self) -> None:
        self._profile_repository: "ProfileRepository | None" = None
        self._admin_gateway: "IAdminGateway | None" = None

    @property
    def profile_repository(self) -> "ProfileRepository":
        """Get the profile repository instance."""
        if self._profile_repository is None:
            from modules.profiles.repository import ProfileRepository
            from shared.database import get_supabase_client
            self._profile_repository = ProfileRepository(get_supabase_client())
        return self._profile_repository

    @property
    def admin_gateway(self) -> "IAdminGateway":
        """Get the admin gateway instance."""
        if self._admin_gateway is None:
            from modules.admin.gateway import SupabaseAdminGateway
            from shared.database import get_supabase_client
            self._admin_gateway = SupabaseAdminGateway(get_supabase_client())
        return self._admin_gateway

    def new_auth_gateway(self) -> "IAuthGateway":
        """Create an auth gateway on a fresh anon-key client."""
        from modules.auth.gateway import SupabaseAuthGateway
        from shared.database import get_supabase_auth_client
        return SupabaseAuthGateway(get_supabase_auth_client())

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._profile_repository = None
        self._admin_gateway = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_profile_repository() -> "ProfileRepository":
    """FastAPI dependency for the profile repository."""
    return get_container().profile_repository


def get_admin_gateway() -> "IAdminGateway":
    """FastAPI dependency for the admin gateway."""
    return get_container().admin_gateway


def get_auth_gateway() -> "IAuthGateway":
    """FastAPI dependency for a per-request auth gateway."""
    return get_container().new_auth_gateway()


def get_browser_storage(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> BrowserStorage:
    """Both storage scopes of the calling browser, read from its cookies."""
    return BrowserStorage.from_request(request, settings)


def get_navigator(request: Request) -> Navigator:
    return Navigator(initial_path=request.url.path)


def get_client_info(request: Request) -> ClientInfo:
    return ClientInfo(
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )


def get_profile_gate(
    repository: "ProfileRepository" = Depends(get_profile_repository),
) -> ProfileGate:
    """One gate per request, shared by every guard that runs in it."""
    return ProfileGate(repository)


def get_profile_service(
    repository: "ProfileRepository" = Depends(get_profile_repository),
) -> ProfileService:
    return ProfileService(repository)


def get_inactivity_tracker(
    storage: BrowserStorage = Depends(get_browser_storage),
    settings: Settings = Depends(get_settings),
) -> InactivityTracker:
    return InactivityTracker(
        storage.local,
        timeout=timedelta(minutes=settings.session_timeout_minutes),
        warning=timedelta(minutes=settings.session_warning_minutes),
    )


def get_admin_inactivity_tracker(
    storage: BrowserStorage = Depends(get_browser_storage),
    settings: Settings = Depends(get_settings),
) -> InactivityTracker:
    return InactivityTracker(
        storage.local,
        timeout=timedelta(minutes=settings.session_timeout_minutes),
        warning=timedelta(minutes=settings.session_warning_minutes),
        key=ADMIN_LAST_ACTIVITY_KEY,
    )


async def get_user_context(
    gateway: "IAuthGateway" = Depends(get_auth_gateway),
    storage: BrowserStorage = Depends(get_browser_storage),
    navigator: Navigator = Depends(get_navigator),
    gate: ProfileGate = Depends(get_profile_gate),
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[UserSessionContext]:
    """FastAPI dependency for the end-user session, mounted for the request."""
    context = UserSessionContext(
        gateway,
        storage.local,
        navigator,
        gate,
        jwt_secret=settings.supabase_jwt_secret,
        redirect_url=f"{settings.frontend_url.rstrip('/')}/",
        redirect_delay=settings.sign_in_redirect_delay,
    )
    async with context:
        yield context


async def get_admin_context(
    gateway: "IAdminGateway" = Depends(get_admin_gateway),
    storage: BrowserStorage = Depends(get_browser_storage),
    client_info: ClientInfo = Depends(get_client_info),
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[AdminSessionContext]:
    """FastAPI dependency for the admin session, mounted for the request."""
    context = AdminSessionContext(
        gateway,
        storage.session,
        client_info=client_info,
        revalidate_interval=settings.admin_revalidate_interval,
    )
    async with context:
        yield context


async def get_login_counter(
    storage: BrowserStorage = Depends(get_browser_storage),
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[LoginAttemptCounter]:
    counter = LoginAttemptCounter(
        storage.local,
        max_attempts=settings.admin_max_login_attempts,
        lockout_duration=timedelta(minutes=settings.admin_lockout_minutes),
        tick=settings.admin_lockout_tick,
    )
    async with counter:
        yield counter


def get_admin_login_form(
    counter: LoginAttemptCounter = Depends(get_login_counter),
    context: AdminSessionContext = Depends(get_admin_context),
) -> AdminLoginForm:
    return AdminLoginForm(counter, context)
