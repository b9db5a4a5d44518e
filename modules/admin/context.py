"""
Admin session context.

Holds the signed-in admin in memory and the opaque session token in
session-scope storage. The token is re-validated on mount and every
``revalidate_interval`` seconds while an admin is present; any failure
purges token and identity together.
"""

import asyncio
import logging
from typing import Any, Optional

from shared.storage import ClientStorage
from .exceptions import AdminPermissionError, AdminSessionInvalidError, AdminSignInError
from .interfaces import IAdminGateway
from .models import AdminIdentity, AdminPermissions, ClientInfo

logger = logging.getLogger(__name__)

ADMIN_SESSION_KEY = "admin_session_token"


class AdminSessionContext:
    """
    Admin session state for one browser.

    Use as an async context manager: entering validates the stored token
    and starts periodic revalidation; leaving cancels it.
    """

    def __init__(
        self,
        gateway: IAdminGateway,
        storage: ClientStorage,
        client_info: Optional[ClientInfo] = None,
        revalidate_interval: float = 300.0,
    ):
        self._gateway = gateway
        self._storage = storage
        self._client_info = client_info or ClientInfo()
        self._revalidate_interval = revalidate_interval

        self._admin: Optional[AdminIdentity] = None
        self._loading = True
        self._revalidation_task: Optional[asyncio.Task] = None
        # Set when mount() validated the token and no check has used it yet.
        self._mount_validated = False

    @property
    def admin(self) -> Optional[AdminIdentity]:
        return self._admin

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def token(self) -> Optional[str]:
        return self._storage.get(ADMIN_SESSION_KEY)

    async def __aenter__(self) -> "AdminSessionContext":
        await self.mount()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop_revalidation()

    async def mount(self) -> Optional[AdminIdentity]:
        """Validate the stored token, then keep re-validating while signed in."""
        self._loading = True
        try:
            token = self.token
            if token:
                try:
                    validation = self._gateway.validate_session(token)
                except Exception as e:
                    logger.warning("Admin session validation error: %s", e)
                    self._purge()
                else:
                    if validation.session_valid and validation.admin_data:
                        self._admin = AdminIdentity.from_admin_data(validation.admin_data)
                        self._mount_validated = True
                    else:
                        self._purge()
        finally:
            self._loading = False

        if self._admin is not None:
            self.start_revalidation()
        return self._admin

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def sign_in(self, email: str, password: str) -> AdminIdentity:
        """
        Verify credentials and open an admin session in one round trip.

        Raises:
            AdminSignInError: With the gateway's message
        """
        self._loading = True
        try:
            result = self._gateway.verify_password_with_session(
                email,
                password,
                ip_address=self._client_info.ip_address,
                user_agent=self._client_info.user_agent,
            )
        except Exception as e:
            raise AdminSignInError(str(e)) from e
        finally:
            self._loading = False

        if not result.success or not result.session_token or not result.admin_data:
            raise AdminSignInError(result.error_message or "Invalid credentials")

        self._storage.set(ADMIN_SESSION_KEY, result.session_token)
        self._admin = AdminIdentity.from_admin_data(result.admin_data)
        logger.info("Admin %s signed in", self._admin.id)
        self.start_revalidation()
        return self._admin

    async def sign_out(self) -> None:
        """
        Revoke the session on the server, best effort, then clear locally.

        A failed revoke never leaves the browser believing it is signed in.
        """
        await self.stop_revalidation()
        token = self.token
        try:
            if token:
                self._gateway.invalidate_session(token)
        except Exception as e:
            logger.warning("Error during admin logout: %s", e)
        finally:
            self._purge()

    async def create_co_admin(
        self,
        name: str,
        email: str,
        password: str,
        permissions: Optional[AdminPermissions] = None,
    ) -> Optional[str]:
        """
        Create a co-admin.

        Non-super admins are refused before any call is made. The gateway
        must enforce the same rule, since this check runs client side.

        Raises:
            AdminSessionInvalidError: If no admin is signed in
            AdminPermissionError: If the caller is not a super admin
        """
        admin = self._admin
        if admin is None:
            raise AdminSessionInvalidError()
        if not admin.is_super_admin:
            raise AdminPermissionError()

        permissions = permissions or AdminPermissions.defaults(is_super_admin=False)
        admin_id = self._gateway.create_admin(
            name,
            email,
            password,
            permissions=permissions.model_dump(),
            created_by=admin.id,
        )
        logger.info("Admin %s created co-admin %s", admin.id, email)
        return admin_id

    async def log_activity(
        self,
        action: str,
        details: Optional[dict[str, Any]] = None,
        target_type: Optional[str] = None,
        target_id: Optional[str] = None,
    ) -> Optional[str]:
        """Record an action by the signed-in admin in the audit log."""
        if self._admin is None:
            raise AdminSessionInvalidError()
        return self._gateway.log_activity(
            self._admin.id,
            action,
            details=details,
            target_type=target_type,
            target_id=target_id,
        )

    async def confirm_session(self) -> bool:
        """
        Check the session before a protected action.

        The first check after mount() reuses the validation mount() just
        made in the same request; every later check goes to the gateway.
        """
        if self._mount_validated and self._admin is not None:
            self._mount_validated = False
            return True
        return await self.revalidate()

    async def revalidate(self) -> bool:
        """
        Check the stored token with the gateway.

        Returns:
            True if the session is still valid; otherwise token and
            identity have been purged
        """
        token = self.token
        if not token:
            self._purge()
            return False

        try:
            validation = self._gateway.validate_session(token)
        except Exception as e:
            logger.warning("Admin session revalidation error: %s", e)
            self._purge()
            return False

        if not validation.session_valid:
            logger.info("Admin session no longer valid")
            self._purge()
            return False

        if validation.admin_data:
            self._admin = AdminIdentity.from_admin_data(validation.admin_data)
        return self._admin is not None

    # -------------------------------------------------------------------------
    # Periodic revalidation
    # -------------------------------------------------------------------------

    def start_revalidation(self) -> None:
        if self._revalidation_task is not None and not self._revalidation_task.done():
            return
        self._revalidation_task = asyncio.get_running_loop().create_task(self._revalidation_loop())

    async def stop_revalidation(self) -> None:
        task = self._revalidation_task
        self._revalidation_task = None
        if task is None or task is asyncio.current_task() or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _revalidation_loop(self) -> None:
        while self._admin is not None:
            await asyncio.sleep(self._revalidate_interval)
            if self._admin is None:
                break
            await self.revalidate()

    def _purge(self) -> None:
        self._storage.remove(ADMIN_SESSION_KEY)
        self._admin = None
        self._mount_validated = False
