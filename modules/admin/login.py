"""
Admin sign-in form.

Puts the attempt counter in front of the admin context: a locked form
never reaches the gateway.
"""

import logging

from .context import AdminSessionContext
from .exceptions import AdminLockedOutError, AdminSignInError
from .lockout import LoginAttemptCounter
from .models import AdminIdentity

logger = logging.getLogger(__name__)


class AdminLoginForm:
    def __init__(self, counter: LoginAttemptCounter, context: AdminSessionContext):
        self._counter = counter
        self._context = context

    async def submit(self, email: str, password: str) -> AdminIdentity:
        """
        Sign in, counting failures.

        Raises:
            AdminLockedOutError: If locked before or because of this attempt
            AdminSignInError: With the attempts left before lockout
        """
        self._counter.ensure_unlocked()

        try:
            admin = await self._context.sign_in(email, password)
        except AdminSignInError as e:
            state = self._counter.record_failure()
            if state.locked:
                raise AdminLockedOutError(state.remaining_seconds) from e
            logger.info("Admin sign-in failed; %d attempts left", state.remaining_attempts)
            raise AdminSignInError(
                f"Invalid credentials. {state.remaining_attempts} attempts remaining before lockout.",
                remaining_attempts=state.remaining_attempts,
            ) from e

        self._counter.record_success()
        return admin
