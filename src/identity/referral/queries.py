"""Read-side helpers for the admin referrals view."""

from protean.utils.globals import current_domain

from identity.account.account import UserAccount
from identity.shared.clock import as_utc


def _history(account):
    return sorted(account.referral_history, key=lambda record: as_utc(record.referral_date))


def referral_overview():
    """Accounts that have referred at least one signup, most recent first.

    Accounts are ordered by the date of their first credited referral, newest
    first, matching the admin dashboard listing.
    """
    # Protean caps unbounded queries at 100 records by default
    accounts = current_domain.repository_for(UserAccount)._dao.query.limit(None).all().items

    referrers = [(account, _history(account)) for account in accounts]
    referrers = [(account, history) for account, history in referrers if history]
    referrers.sort(key=lambda pair: as_utc(pair[1][0].referral_date), reverse=True)

    return [
        {
            "account_id": str(account.id),
            "email": account.email,
            "display_name": account.display_name,
            "referral_code": account.referral_code,
            "coins": account.coins,
            "referral_history": [
                {
                    "referred_email": record.referred_email,
                    "referral_date": as_utc(record.referral_date).isoformat(),
                }
                for record in history
            ],
        }
        for account, history in referrers
    ]
