"""LoginAttempt aggregate: failed-login counter for one email.

States:
    CLEAR         no failures recorded (or counter reset)
    ACCUMULATING  1 .. max_attempts-1 consecutive failures
    LOCKED        locked_until is in the future; attempts are rejected unchanged

An elapsed lock is cleared lazily, on the next check or attempt.
"""

from protean.fields import DateTime, Integer, String

from identity.domain import identity
from identity.lockout.events import LoginLockedOut, LoginLockReleased
from identity.lockout.policy import LockoutPolicy, LockoutState, LockoutStatus
from identity.shared.clock import as_utc, utc_now


@identity.aggregate
class LoginAttempt:
    email: String(identifier=True, max_length=254)
    attempts: Integer(default=0, min_value=0)
    last_attempt: DateTime()
    locked_until: DateTime()

    def _remaining_ms(self, now):
        locked_until = as_utc(self.locked_until)
        if locked_until is None or locked_until <= now:
            return None
        return int((locked_until - now).total_seconds() * 1000)

    def _current_status(self):
        attempts = self.attempts or 0
        state = LockoutState.ACCUMULATING if attempts > 0 else LockoutState.CLEAR
        return LockoutStatus(state=state, attempts=attempts)

    def _release_expired_lock(self, now):
        if self.locked_until is not None and self._remaining_ms(now) is None:
            self.attempts = 0
            self.locked_until = None

    def check(self, now=None):
        """Report the lock state, clearing an elapsed lock as a side effect."""
        now = as_utc(now) or utc_now()

        remaining = self._remaining_ms(now)
        if remaining is not None:
            return LockoutStatus(state=LockoutState.LOCKED, attempts=self.attempts, remaining_ms=remaining)

        if self.locked_until is not None:
            self._release_expired_lock(now)
            self.raise_(LoginLockReleased(email=self.email, released_at=now))

        return self._current_status()

    def record(self, success, policy=None, now=None):
        """Apply one authentication outcome to the counter."""
        policy = policy or LockoutPolicy()
        now = as_utc(now) or utc_now()

        remaining = self._remaining_ms(now)
        if remaining is not None:
            return LockoutStatus(state=LockoutState.LOCKED, attempts=self.attempts, remaining_ms=remaining)

        if self.locked_until is not None:
            self._release_expired_lock(now)
            self.raise_(LoginLockReleased(email=self.email, released_at=now))

        self.last_attempt = now

        if success:
            self.attempts = 0
            self.locked_until = None
            return self._current_status()

        self.attempts = (self.attempts or 0) + 1
        if self.attempts >= policy.max_attempts:
            self.locked_until = now + policy.duration
            self.raise_(
                LoginLockedOut(
                    email=self.email,
                    attempts=self.attempts,
                    locked_until=self.locked_until,
                )
            )
            return LockoutStatus(
                state=LockoutState.LOCKED,
                attempts=self.attempts,
                remaining_ms=policy.duration_ms,
            )

        return self._current_status()
