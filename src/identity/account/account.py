"""UserAccount aggregate: the referral-relevant slice of a marketplace user."""

import json
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Integer, String, Text

from identity.domain import identity
from identity.shared.email import normalize_email

# A single account can be the referred party at most this many times
MAX_TIMES_REFERRED = 10


@identity.entity(part_of="UserAccount")
class ReferralRecord:
    """One credited referral: who signed up with this account's code, and when."""

    referred_email: String(required=True, max_length=254)
    referral_date: DateTime(required=True)


@identity.aggregate
class UserAccount:
    """A customer on the platform, seen through the referral ledger.

    ``referred_emails`` is the idempotency set for referral bonuses: an email is
    credited to its referrer at most once, however many times the signup is
    replayed. ``referral_history`` keeps one dated record per credited email.
    """

    email: String(required=True, max_length=254, unique=True)
    display_name: String(max_length=100)
    coins: Integer(default=0, min_value=0)
    referral_code: String(required=True, max_length=32, unique=True)
    referred_emails: Text()  # JSON array of emails
    referral_history: HasMany(ReferralRecord)
    times_been_referred: Integer(default=0, min_value=0)
    registered_at: DateTime()

    @invariant.post
    def times_referred_cannot_exceed_cap(self):
        if (self.times_been_referred or 0) > MAX_TIMES_REFERRED:
            raise ValidationError(
                {"times_been_referred": [f"An account cannot be referred more than {MAX_TIMES_REFERRED} times"]}
            )

    @classmethod
    def register(cls, email, referral_code, display_name=None):
        from identity.account.events import AccountRegistered

        now = datetime.now(UTC)
        account = cls(
            email=normalize_email(email),
            display_name=display_name,
            referral_code=referral_code,
            referred_emails=json.dumps([]),
            coins=0,
            times_been_referred=0,
            registered_at=now,
        )
        account.raise_(
            AccountRegistered(
                account_id=account.id,
                email=account.email,
                referral_code=referral_code,
                registered_at=now,
            )
        )
        return account

    # -------------------------------------------------------------------
    # Referral bookkeeping
    # -------------------------------------------------------------------
    @property
    def referred_email_list(self):
        return json.loads(self.referred_emails) if self.referred_emails else []

    def has_referred(self, email):
        return normalize_email(email) in self.referred_email_list

    @property
    def referral_cap_reached(self):
        return (self.times_been_referred or 0) >= MAX_TIMES_REFERRED

    def credit_referral(self, referred_email, bonus_amount, credited_at=None):
        """Pay ``bonus_amount`` coins for ``referred_email`` and log it in the history."""
        from identity.account.events import ReferralCredited

        email = normalize_email(referred_email, field="referred_email")
        if bonus_amount < 0:
            raise ValidationError({"bonus_amount": ["Referral bonus cannot be negative"]})

        referred = self.referred_email_list
        if email in referred:
            raise ValidationError({"referred_email": [f"{email} has already been credited"]})

        now = credited_at or datetime.now(UTC)
        referred.append(email)
        self.referred_emails = json.dumps(referred)
        self.coins = (self.coins or 0) + bonus_amount
        self.add_referral_history(ReferralRecord(referred_email=email, referral_date=now))

        self.raise_(
            ReferralCredited(
                account_id=self.id,
                referred_email=email,
                bonus_amount=bonus_amount,
                coins=self.coins,
                credited_at=now,
            )
        )

    def record_referred(self):
        """Count one more signup of this account through a referral code."""
        from identity.account.events import ReferralReceived

        if self.referral_cap_reached:
            raise ValidationError(
                {"times_been_referred": [f"An account cannot be referred more than {MAX_TIMES_REFERRED} times"]}
            )

        self.times_been_referred = (self.times_been_referred or 0) + 1
        self.raise_(
            ReferralReceived(
                account_id=self.id,
                times_been_referred=self.times_been_referred,
            )
        )
