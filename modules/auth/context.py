"""
End-user session context.

Mirrors the auth subsystem's session into ``{identity, session}`` and,
on a transition into signed-in, routes the user to the right page. One
context exists per browser session and is handed to whoever needs the
current user; nothing here is a module-level singleton.
"""

import asyncio
import logging
from typing import Optional

from shared.models import UserIdentity
from shared.storage import ClientStorage
from modules.routing.guard import ProfileGate
from modules.routing.navigator import Navigator
from .exceptions import AuthenticationError, ExpiredTokenError, InvalidTokenError, MissingTokenError
from .interfaces import IAuthGateway
from .models import AuthEvent, AuthSession
from .tokens import decode_access_token, identity_from_payload

logger = logging.getLogger(__name__)

ACCESS_TOKEN_KEY = "sb-access-token"
REFRESH_TOKEN_KEY = "sb-refresh-token"


class UserSessionContext:
    """
    Session state for one browser.

    Use as an async context manager: entering subscribes to auth events
    and restores the stored session; leaving unsubscribes and cancels a
    pending redirect.
    """

    def __init__(
        self,
        gateway: IAuthGateway,
        storage: ClientStorage,
        navigator: Navigator,
        gate: ProfileGate,
        jwt_secret: str,
        redirect_url: Optional[str] = None,
        redirect_delay: float = 0.1,
    ):
        self._gateway = gateway
        self._storage = storage
        self._navigator = navigator
        self._gate = gate
        self._jwt_secret = jwt_secret
        self._redirect_url = redirect_url
        self._redirect_delay = redirect_delay

        self._identity: Optional[UserIdentity] = None
        self._session: Optional[AuthSession] = None
        self._loading = True
        self._redirect_task: Optional[asyncio.Task] = None
        self._unsubscribe = None

    @property
    def identity(self) -> Optional[UserIdentity]:
        return self._identity

    @property
    def session(self) -> Optional[AuthSession]:
        return self._session

    @property
    def loading(self) -> bool:
        return self._loading

    async def __aenter__(self) -> "UserSessionContext":
        await self.mount()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.unmount()

    async def mount(self) -> None:
        self._unsubscribe = self._gateway.on_auth_state_change(self.handle_auth_event)
        await self.restore()

    async def unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        task = self._redirect_task
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def sign_up(
        self,
        email: str,
        password: str,
        full_name: str,
        user_type: Optional[str] = None,
    ) -> None:
        """
        Register a new user.

        The auth subsystem signs the user in later (after email
        confirmation), which arrives as a SIGNED_IN event.

        Raises:
            SignUpError: With the auth subsystem's message
        """
        self._gateway.sign_up(
            email,
            password,
            metadata={"full_name": full_name, "user_type": user_type},
            redirect_to=self._redirect_url,
        )
        logger.info("Sign-up submitted for %s", email)

    async def sign_in(self, email: str, password: str) -> UserIdentity:
        """
        Sign in with email and password.

        Raises:
            SignInError: With the auth subsystem's message
        """
        pending = self._redirect_task
        session = self._gateway.sign_in(email, password)
        # Gateways normally emit SIGNED_IN from inside sign_in; cover the
        # ones that do not.
        if self._redirect_task is pending:
            self.handle_auth_event(AuthEvent.SIGNED_IN, session)
        return session.user

    async def sign_out(self) -> None:
        """Sign out. Local state is cleared even if the gateway call fails."""
        try:
            self._gateway.sign_out()
        except Exception as e:
            logger.warning("Sign-out call failed, clearing local session anyway: %s", e)
        finally:
            self._clear()

    async def restore(self) -> Optional[UserIdentity]:
        """
        Load the session kept in client storage.

        An expired access token is refreshed when a refresh token is
        stored; invalid tokens and failed refreshes clear the session.
        """
        self._loading = True
        try:
            access_token = self._storage.get(ACCESS_TOKEN_KEY)
            refresh_token = self._storage.get(REFRESH_TOKEN_KEY) or ""
            if not access_token:
                self._identity = None
                self._session = None
                return None

            try:
                payload = decode_access_token(access_token, self._jwt_secret)
            except ExpiredTokenError:
                return self._refresh(refresh_token)
            except InvalidTokenError as e:
                logger.info("Discarding stored session: %s", e.message)
                self._clear()
                return None
            except MissingTokenError as e:
                logger.warning("Cannot read stored session: %s", e.message)
                return None

            self._mirror(AuthSession(
                access_token=access_token,
                refresh_token=refresh_token,
                expires_at=payload.exp,
                user=identity_from_payload(payload),
            ))
            return self._identity
        finally:
            self._loading = False

    async def wait_for_redirect(self) -> Optional[str]:
        """
        Wait for a pending post-sign-in redirect.

        Returns:
            The path navigated to, or None if no redirect was scheduled
        """
        task = self._redirect_task
        if task is None:
            return None
        await task
        return self._navigator.current_path

    # -------------------------------------------------------------------------
    # Auth events
    # -------------------------------------------------------------------------

    def handle_auth_event(self, event: AuthEvent, session: Optional[AuthSession]) -> None:
        """
        Mirror an auth-state change.

        Every SIGNED_IN schedules the redirect, even for the user already
        restored from storage; token refreshes arrive as TOKEN_REFRESHED
        and never redirect. The redirect runs as a separate task so the
        event handler returns immediately.
        """
        if event == AuthEvent.SIGNED_OUT:
            self._clear()
        elif session is not None:
            self._persist(session)
            self._mirror(session)
        self._loading = False

        if event == AuthEvent.SIGNED_IN and session is not None:
            self._schedule_redirect(session.user)

    def _schedule_redirect(self, identity: UserIdentity) -> None:
        # Events are emitted synchronously from inside an awaited gateway
        # call, so a loop is always running here.
        loop = asyncio.get_running_loop()
        if self._redirect_task is not None and not self._redirect_task.done():
            self._redirect_task.cancel()
        self._redirect_task = loop.create_task(self._redirect_after_sign_in(identity))

    async def _redirect_after_sign_in(self, identity: UserIdentity) -> None:
        await asyncio.sleep(self._redirect_delay)
        path = await self._gate.landing(identity)
        self._navigator.replace(path)

    # -------------------------------------------------------------------------
    # State helpers
    # -------------------------------------------------------------------------

    def _refresh(self, refresh_token: str) -> Optional[UserIdentity]:
        if not refresh_token:
            self._clear()
            return None
        try:
            session = self._gateway.refresh_session(refresh_token)
        except AuthenticationError as e:
            logger.info("Session refresh failed: %s", e.message)
            self._clear()
            return None
        self._persist(session)
        self._mirror(session)
        return self._identity

    def _mirror(self, session: AuthSession) -> None:
        self._session = session
        self._identity = session.user

    def _persist(self, session: AuthSession) -> None:
        self._storage.set(ACCESS_TOKEN_KEY, session.access_token)
        if session.refresh_token:
            self._storage.set(REFRESH_TOKEN_KEY, session.refresh_token)

    def _clear(self) -> None:
        self._storage.remove(ACCESS_TOKEN_KEY)
        self._storage.remove(REFRESH_TOKEN_KEY)
        self._session = None
        self._identity = None
