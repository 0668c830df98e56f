"""Domain events for the UserAccount aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from identity.domain import identity


@identity.event(part_of="UserAccount")
class AccountRegistered:
    """A new user account was created and issued a referral code."""

    __version__ = 1

    account_id: Identifier(required=True)
    email: String(required=True)
    referral_code: String(required=True)
    registered_at: DateTime(required=True)


@identity.event(part_of="UserAccount")
class ReferralCredited:
    """A referrer was paid the referral bonus for a newly signed-up email."""

    __version__ = 1

    account_id: Identifier(required=True)
    referred_email: String(required=True)
    bonus_amount: Integer(required=True)
    coins: Integer(required=True)
    credited_at: DateTime(required=True)


@identity.event(part_of="UserAccount")
class ReferralReceived:
    """An account signed up through someone else's referral code."""

    __version__ = 1

    account_id: Identifier(required=True)
    times_been_referred: Integer(required=True)
