"""Login attempt tracking: commands and handler.

The counter is advisory. Callers check the lock before verifying credentials
and record the outcome afterwards, both keyed by the same email.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, String
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.lockout.attempt import LoginAttempt
from identity.lockout.policy import LockoutPolicy, LockoutState, LockoutStatus
from identity.shared.email import normalize_email
from identity.utils.logging import get_logger

logger = get_logger(__name__)


@identity.command(part_of="LoginAttempt")
class CheckLockout:
    email: String(required=True, max_length=254)


@identity.command(part_of="LoginAttempt")
class RecordLoginAttempt:
    email: String(required=True, max_length=254)
    success: Boolean(required=True)


@identity.command_handler(part_of=LoginAttempt)
class LoginAttemptHandler:
    @handle(CheckLockout)
    def check_lockout(self, command):
        repo = current_domain.repository_for(LoginAttempt)
        email = normalize_email(command.email)

        try:
            attempt = repo.get(email)
        except ObjectNotFoundError:
            return LockoutStatus(state=LockoutState.CLEAR)

        had_lock = attempt.locked_until is not None
        status = attempt.check()
        if had_lock and not status.is_locked:
            repo.add(attempt)
            logger.info("Login lockout expired", email=email)

        return status

    @handle(RecordLoginAttempt)
    def record_login_attempt(self, command):
        repo = current_domain.repository_for(LoginAttempt)
        email = normalize_email(command.email)

        try:
            attempt = repo.get(email)
        except ObjectNotFoundError:
            attempt = LoginAttempt(email=email, attempts=0)

        was_locked = attempt.check().is_locked
        status = attempt.record(bool(command.success), policy=LockoutPolicy.from_env())
        if was_locked:
            logger.warning("Login attempt rejected while locked", email=email, remaining_ms=status.remaining_ms)
            return status

        repo.add(attempt)
        if status.is_locked:
            logger.warning("Login locked out", email=email, attempts=status.attempts)
        return status
