"""
Client-side admin login throttle.

Counts failed admin sign-ins in the browser's local storage and locks the
form for a while after too many. The counter is keyed to the browser, not
to the admin or the IP: clearing storage resets it. It is a usability
measure only; real throttling has to happen in the gateway.
"""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Optional

from shared.clock import Clock, from_epoch_ms, to_epoch_ms, utc_now
from shared.storage import ClientStorage
from .exceptions import AdminLockedOutError
from .models import LockoutState

logger = logging.getLogger(__name__)

ATTEMPTS_KEY = "admin_login_attempts"
LOCKOUT_END_KEY = "admin_lockout_end"


class LoginAttemptCounter:
    """Failed-attempt counter with a timed lockout."""

    def __init__(
        self,
        storage: ClientStorage,
        clock: Clock = utc_now,
        max_attempts: int = 5,
        lockout_duration: timedelta = timedelta(minutes=15),
        tick: float = 1.0,
    ):
        self._storage = storage
        self._clock = clock
        self._max_attempts = max_attempts
        self._lockout_duration = lockout_duration
        self._tick = tick

        self._attempts = 0
        self._lockout_until: Optional[datetime] = None
        self._countdown_task: Optional[asyncio.Task] = None

    def load(self) -> LockoutState:
        """Read the counter from storage, dropping a lockout that has run out."""
        try:
            self._attempts = max(0, int(self._storage.get(ATTEMPTS_KEY) or 0))
        except ValueError:
            self._attempts = 0
        self._lockout_until = from_epoch_ms(self._storage.get(LOCKOUT_END_KEY))

        if self._lockout_until is not None and self._lockout_until <= self._clock():
            logger.debug("Admin login lockout expired; resetting counter")
            self.reset()
        return self.state

    @property
    def attempts(self) -> int:
        return self._attempts

    @property
    def lockout_until(self) -> Optional[datetime]:
        return self._lockout_until

    @property
    def is_locked(self) -> bool:
        return self._lockout_until is not None and self._lockout_until > self._clock()

    @property
    def remaining(self) -> int:
        """Whole seconds left on the lockout, rounded up."""
        if self._lockout_until is None:
            return 0
        seconds = (self._lockout_until - self._clock()).total_seconds()
        if seconds <= 0:
            return 0
        return int(-(-seconds // 1))

    @property
    def state(self) -> LockoutState:
        locked = self.is_locked
        return LockoutState(
            attempt_count=self._attempts,
            lockout_until=self._lockout_until,
            locked=locked,
            remaining_seconds=self.remaining if locked else 0,
            remaining_attempts=0 if locked else max(0, self._max_attempts - self._attempts),
        )

    def ensure_unlocked(self) -> None:
        """
        Raises:
            AdminLockedOutError: While the lockout window is open
        """
        if self.is_locked:
            raise AdminLockedOutError(self.remaining)

    def record_failure(self) -> LockoutState:
        """Count a failed sign-in; lock once the limit is reached."""
        self._attempts += 1
        self._storage.set(ATTEMPTS_KEY, str(self._attempts))

        if self._attempts >= self._max_attempts:
            self._lockout_until = self._clock() + self._lockout_duration
            self._storage.set(LOCKOUT_END_KEY, str(to_epoch_ms(self._lockout_until)))
            logger.warning(
                "Admin login locked after %d failed attempts until %s",
                self._attempts,
                self._lockout_until.isoformat(),
            )
        return self.state

    def record_success(self) -> None:
        self.reset()

    def reset(self) -> None:
        self._attempts = 0
        self._lockout_until = None
        self._storage.remove(ATTEMPTS_KEY)
        self._storage.remove(LOCKOUT_END_KEY)

    # -------------------------------------------------------------------------
    # Countdown
    # -------------------------------------------------------------------------

    def start_countdown(self) -> None:
        """Tick until the lockout runs out, then reset. No-op when unlocked."""
        if not self.is_locked:
            return
        if self._countdown_task is not None and not self._countdown_task.done():
            return
        self._countdown_task = asyncio.get_running_loop().create_task(self._countdown())

    async def stop_countdown(self) -> None:
        task = self._countdown_task
        self._countdown_task = None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _countdown(self) -> None:
        while self.is_locked:
            await asyncio.sleep(self._tick)
        if self._lockout_until is not None:
            self.reset()

    async def __aenter__(self) -> "LoginAttemptCounter":
        self.load()
        self.start_countdown()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop_countdown()
