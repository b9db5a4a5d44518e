"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
from typing import Any, Optional
from unittest.mock import MagicMock
import jwt  # PyJWT

from shared.models import UserIdentity, UserMetadata
from modules.auth.exceptions import InvalidTokenError
from modules.auth.models import AuthEvent, AuthSession
from modules.profiles.models import Profile


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    user_metadata: Optional[dict[str, Any]] = None,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a Supabase-style access token.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        user_metadata: Sign-up metadata (full_name, user_type)
        secret: Signing secret

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
        "user_metadata": user_metadata or {},
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def make_identity(
    user_id: str = "test-user-123",
    user_type: Optional[str] = None,
    full_name: Optional[str] = "Test User",
) -> UserIdentity:
    return UserIdentity(
        id=user_id,
        email="test@example.com",
        metadata=UserMetadata(full_name=full_name, user_type=user_type),
    )


def make_profile(
    user_id: str = "test-user-123",
    user_type: Optional[str] = "pet_owner",
    phone: Optional[str] = "9999999999",
    city: Optional[str] = "Pune",
) -> Profile:
    return Profile(
        id=user_id,
        user_type=user_type,
        full_name="Test User",
        phone=phone,
        city=city,
    )


def make_profile_repository(
    profile: Optional[Profile] = None,
    role_profile_exists: bool = False,
) -> MagicMock:
    """Mock ProfileRepository answering with fixed data."""
    repo = MagicMock()
    repo.get_profile.return_value = profile
    repo.has_role_profile.return_value = role_profile_exists
    return repo


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def identity(test_user_id: str) -> UserIdentity:
    """A signed-in user without a role in metadata."""
    return make_identity(test_user_id)


@pytest.fixture
def auth_token(test_user_id: str) -> str:
    """Create a valid access token for testing."""
    return create_test_token(user_id=test_user_id)


class FakeAuthGateway:
    """
    In-memory auth subsystem.

    Emits auth events synchronously to subscribed listeners, the way the
    Supabase client does.
    """

    def __init__(self, sessions: Optional[dict[str, Any]] = None):
        self.sessions = sessions or {}
        self.listeners = []
        self.sign_up_calls = []
        self.sign_out_calls = 0
        self.sign_in_error: Optional[Exception] = None
        self.sign_up_error: Optional[Exception] = None
        self.sign_out_error: Optional[Exception] = None
        self.refresh_result = None
        self.emit_on_sign_in = True

    def sign_up(self, email, password, metadata, redirect_to=None):
        if self.sign_up_error:
            raise self.sign_up_error
        self.sign_up_calls.append((email, password, metadata, redirect_to))

    def sign_in(self, email, password):
        if self.sign_in_error:
            raise self.sign_in_error
        session = self.sessions[email]
        if self.emit_on_sign_in:
            self._emit(AuthEvent.SIGNED_IN, session)
        return session

    def sign_out(self):
        self.sign_out_calls += 1
        if self.sign_out_error:
            raise self.sign_out_error
        self._emit(AuthEvent.SIGNED_OUT, None)

    def refresh_session(self, refresh_token):
        if self.refresh_result is None:
            raise InvalidTokenError("Invalid Refresh Token")
        return self.refresh_result

    def on_auth_state_change(self, listener):
        self.listeners.append(listener)

        def unsubscribe():
            if listener in self.listeners:
                self.listeners.remove(listener)

        return unsubscribe

    def _emit(self, event, session):
        for listener in list(self.listeners):
            listener(event, session)


def make_session(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    user_metadata: Optional[dict[str, Any]] = None,
):
    """A signed-in AuthSession carrying a real test token."""
    token = create_test_token(user_id=user_id, email=email, user_metadata=user_metadata)
    return AuthSession(
        access_token=token,
        refresh_token=f"refresh-{user_id}",
        user=UserIdentity(id=user_id, email=email, metadata=UserMetadata(**(user_metadata or {}))),
    )


def set_cookies(response) -> dict[str, str]:
    """Cookies written by a response, name -> value ("" for deletions)."""
    cookies = {}
    for header in response.headers.get_list("set-cookie"):
        name, _, rest = header.partition("=")
        cookies[name] = rest.split(";", 1)[0].strip('"')
    return cookies


class ApiHarness:
    """FastAPI app with the external collaborators replaced."""

    def __init__(self):
        from fastapi.testclient import TestClient

        from api import app
        from api.dependencies import get_admin_gateway, get_auth_gateway, get_profile_repository
        from shared.config import Settings, get_settings

        self.app = app
        self.auth_gateway = FakeAuthGateway()
        self.profiles = make_profile_repository(None)
        self.admin_gateway = MagicMock()
        self.settings = Settings(
            _env_file=None,
            supabase_jwt_secret=TEST_JWT_SECRET,
            sign_in_redirect_delay=0,
        )

        app.dependency_overrides[get_auth_gateway] = lambda: self.auth_gateway
        app.dependency_overrides[get_profile_repository] = lambda: self.profiles
        app.dependency_overrides[get_admin_gateway] = lambda: self.admin_gateway
        app.dependency_overrides[get_settings] = lambda: self.settings
        self.client = TestClient(app)

    def sign_in_as(self, user_metadata: Optional[dict[str, Any]] = None, user_id: str = "test-user-123"):
        """Put a valid access token in the browser's cookies."""
        self.client.cookies.set("sb-access-token", create_test_token(user_id=user_id, user_metadata=user_metadata))

    def close(self):
        self.app.dependency_overrides.clear()


@pytest.fixture
def api():
    harness = ApiHarness()
    yield harness
    harness.close()


ADMIN_DATA = {
    "id": "admin-1",
    "name": "Root Admin",
    "email": "admin@example.com",
    "is_super_admin": True,
}


def make_admin_gateway(admin_data: Optional[dict[str, Any]] = None, token: str = "admin-token") -> MagicMock:
    """Mock IAdminGateway that accepts any credentials and any token."""
    from modules.admin.models import AdminVerification, SessionValidation

    admin_data = admin_data or ADMIN_DATA
    gateway = MagicMock()
    gateway.verify_password_with_session.return_value = AdminVerification(
        success=True,
        session_token=token,
        admin_data=admin_data,
    )
    gateway.validate_session.return_value = SessionValidation(session_valid=True, admin_data=admin_data)
    gateway.create_admin.return_value = "admin-2"
    return gateway


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: Optional[datetime] = None):
        self.now = start or datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)
