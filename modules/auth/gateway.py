"""
Supabase implementation of the auth gateway.

Thin adapter over ``client.auth``: translates Supabase sessions and
events into this module's models and auth errors into module exceptions.
"""

import logging
from typing import Any, Callable, Optional

from supabase import AuthError as SupabaseAuthError, Client

from .exceptions import InvalidTokenError, SignInError, SignUpError
from .interfaces import AuthStateListener, IAuthGateway
from .models import AuthEvent, AuthSession
from shared.models import UserIdentity, UserMetadata

logger = logging.getLogger(__name__)


class SupabaseAuthGateway(IAuthGateway):
    """
    Auth gateway backed by a Supabase client.

    Use one instance (and one client) per browser session; listeners are
    registered on the client.
    """

    def __init__(self, client: Client):
        self._client = client

    def sign_up(
        self,
        email: str,
        password: str,
        metadata: dict[str, Optional[str]],
        redirect_to: Optional[str] = None,
    ) -> None:
        options: dict[str, Any] = {"data": metadata}
        if redirect_to:
            options["email_redirect_to"] = redirect_to
        try:
            self._client.auth.sign_up({
                "email": email,
                "password": password,
                "options": options,
            })
        except SupabaseAuthError as e:
            raise SignUpError(e.message)

    def sign_in(self, email: str, password: str) -> AuthSession:
        try:
            response = self._client.auth.sign_in_with_password({
                "email": email,
                "password": password,
            })
        except SupabaseAuthError as e:
            raise SignInError(e.message)

        session = map_session(response.session)
        if session is None:
            raise SignInError("Sign-in did not return a session")
        return session

    def sign_out(self) -> None:
        self._client.auth.sign_out()

    def refresh_session(self, refresh_token: str) -> AuthSession:
        try:
            response = self._client.auth.refresh_session(refresh_token)
        except SupabaseAuthError as e:
            raise InvalidTokenError(e.message)

        session = map_session(response.session)
        if session is None:
            raise InvalidTokenError("Refresh did not return a session")
        return session

    def on_auth_state_change(self, listener: AuthStateListener) -> Callable[[], None]:
        def callback(event: str, session: Any) -> None:
            try:
                auth_event = AuthEvent(event)
            except ValueError:
                logger.debug("Ignoring unhandled auth event %s", event)
                return
            listener(auth_event, map_session(session))

        subscription = self._client.auth.on_auth_state_change(callback)
        return subscription.unsubscribe


def map_session(session: Any) -> Optional[AuthSession]:
    """Convert a Supabase session object into an AuthSession."""
    if session is None or session.user is None:
        return None

    user = session.user
    return AuthSession(
        access_token=session.access_token,
        refresh_token=session.refresh_token or "",
        expires_at=session.expires_at,
        user=UserIdentity(
            id=str(user.id),
            email=user.email or "",
            metadata=UserMetadata(**(user.user_metadata or {})),
        ),
    )
