"""
Admin route guard.

Re-checks the session with the gateway on every entry to a protected
admin page, so a session revoked server side cannot ride on a stale
in-memory identity. An entry in the same request as the mount reuses
the validation the mount just made.
"""

import logging
from typing import Optional

from modules.routing.models import Paths, RouteDecision
from .context import AdminSessionContext
from .models import GuardState

logger = logging.getLogger(__name__)


class AdminAuthGuard:
    def __init__(self, context: AdminSessionContext):
        self._context = context
        self._state = GuardState.VALIDATING

    @property
    def state(self) -> GuardState:
        return self._state

    async def enter(self) -> Optional[RouteDecision]:
        """
        Decide whether the protected page may render.

        Returns:
            None while the context is still loading, otherwise stay or a
            redirect to the admin sign-in page
        """
        if self._context.loading:
            self._state = GuardState.VALIDATING
            return None

        if self._context.admin is None:
            self._state = GuardState.UNAUTHORIZED
            return RouteDecision.redirect(Paths.ADMIN_AUTH)

        if await self._context.confirm_session():
            self._state = GuardState.AUTHORIZED
            return RouteDecision.stay()

        logger.info("Admin session rejected on route entry")
        self._state = GuardState.UNAUTHORIZED
        return RouteDecision.redirect(Paths.ADMIN_AUTH)
