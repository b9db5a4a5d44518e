"""
Inactivity timeout.

A signed-in browser that makes no request for ``timeout`` is signed out.
During the last ``warning`` of that window the session is flagged so the
page can warn the user. The last-activity stamp lives in client storage.
"""

import logging
from datetime import timedelta
from enum import Enum
from typing import Awaitable, Callable

from shared.clock import Clock, from_epoch_ms, to_epoch_ms, utc_now
from shared.storage import ClientStorage

logger = logging.getLogger(__name__)

LAST_ACTIVITY_KEY = "last_activity_at"
ADMIN_LAST_ACTIVITY_KEY = "admin_last_activity_at"


class ActivityStatus(str, Enum):
    ACTIVE = "active"
    WARNING = "warning"
    EXPIRED = "expired"


class InactivityTracker:
    """Stamps activity and classifies how long the browser has been idle."""

    def __init__(
        self,
        storage: ClientStorage,
        timeout: timedelta = timedelta(minutes=30),
        warning: timedelta = timedelta(minutes=5),
        clock: Clock = utc_now,
        key: str = LAST_ACTIVITY_KEY,
    ):
        self._storage = storage
        self._timeout = timeout
        self._warning = warning
        self._clock = clock
        self._key = key

    def touch(self) -> None:
        """Record activity now."""
        self._storage.set(self._key, str(to_epoch_ms(self._clock())))

    def clear(self) -> None:
        self._storage.remove(self._key)

    def idle_for(self) -> timedelta:
        last = from_epoch_ms(self._storage.get(self._key))
        if last is None:
            return timedelta(0)
        return max(self._clock() - last, timedelta(0))

    def status(self) -> ActivityStatus:
        """Classify idleness. A browser with no stamp yet counts as active."""
        idle = self.idle_for()
        if idle >= self._timeout:
            return ActivityStatus.EXPIRED
        if idle >= self._timeout - self._warning:
            return ActivityStatus.WARNING
        return ActivityStatus.ACTIVE

    async def enforce(
        self,
        signed_in: bool,
        sign_out: Callable[[], Awaitable[None]],
    ) -> ActivityStatus:
        """
        Apply the timeout to one request.

        An idle session is signed out through ``sign_out`` and its stamp
        removed; an active one is stamped. Anonymous requests are left
        alone.
        """
        if not signed_in:
            return ActivityStatus.ACTIVE

        status = self.status()
        if status == ActivityStatus.EXPIRED:
            logger.info("Signing out after %s of inactivity", self.idle_for())
            await sign_out()
            self.clear()
            return status

        self.touch()
        return status
