"""Domain events for the LoginAttempt aggregate."""

from protean.fields import DateTime, Integer, String

from identity.domain import identity


@identity.event(part_of="LoginAttempt")
class LoginLockedOut:
    """Too many consecutive failed logins; the email is locked for a while."""

    __version__ = 1

    email: String(required=True)
    attempts: Integer(required=True)
    locked_until: DateTime(required=True)


@identity.event(part_of="LoginAttempt")
class LoginLockReleased:
    """An elapsed lockout was cleared and the failure counter reset."""

    __version__ = 1

    email: String(required=True)
    released_at: DateTime(required=True)
