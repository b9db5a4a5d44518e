"""
Authentication module interface.

The session context depends on IAuthGateway, not on the Supabase client.
This enables testing with fakes and swapping the auth backend.
"""

from typing import Callable, Optional, Protocol, runtime_checkable

from .models import AuthEvent, AuthSession

AuthStateListener = Callable[[AuthEvent, Optional[AuthSession]], None]


@runtime_checkable
class IAuthGateway(Protocol):
    """
    Interface to the external auth subsystem.

    Implementations emit auth-state changes to every subscribed listener,
    synchronously, from within the call that caused them.
    """

    def sign_up(
        self,
        email: str,
        password: str,
        metadata: dict[str, Optional[str]],
        redirect_to: Optional[str] = None,
    ) -> None:
        """
        Register a new user.

        Raises:
            SignUpError: With the auth subsystem's message
        """
        ...

    def sign_in(self, email: str, password: str) -> AuthSession:
        """
        Sign in with email and password.

        Emits SIGNED_IN on success.

        Raises:
            SignInError: With the auth subsystem's message
        """
        ...

    def sign_out(self) -> None:
        """End the session. Emits SIGNED_OUT."""
        ...

    def refresh_session(self, refresh_token: str) -> AuthSession:
        """
        Exchange a refresh token for a new session.

        Emits TOKEN_REFRESHED on success.

        Raises:
            InvalidTokenError: If the refresh token is rejected
        """
        ...

    def on_auth_state_change(self, listener: AuthStateListener) -> Callable[[], None]:
        """
        Subscribe to auth-state changes.

        Returns:
            Function that cancels the subscription
        """
        ...
