"""Referral redemption: command and handler.

A new signup presents a referral code. The handler credits the code's owner
with the configured bonus, once per referred email, and counts the redemption
against the new account's lifetime cap.

The referrer and the new account are separate aggregates. Both are saved in
the same unit of work, and each carries a version token, so a concurrent
redemption that read stale state fails on commit instead of crediting twice.
"""

from enum import Enum

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from identity.account.account import UserAccount
from identity.domain import identity
from identity.referral.settings import current_bonus_amount
from identity.shared.email import normalize_email
from identity.utils.logging import get_logger

logger = get_logger(__name__)


class ReferralOutcome(Enum):
    CREDITED = "Credited"
    INVALID_CODE = "InvalidCode"
    ALREADY_REDEEMED = "AlreadyRedeemed"
    ACCOUNT_MISSING = "AccountMissing"
    CAP_EXCEEDED = "CapExceeded"

    @property
    def credited(self) -> bool:
        return self is ReferralOutcome.CREDITED


@identity.command(part_of="UserAccount")
class ProcessReferral:
    """Redeem ``referral_code`` for a newly signed-up account."""

    referral_code: String(max_length=32)
    new_user_id: Identifier(required=True)
    new_user_email: String(required=True, max_length=254)


@identity.command_handler(part_of=UserAccount)
class ProcessReferralHandler:
    @handle(ProcessReferral)
    def process_referral(self, command):
        repo = current_domain.repository_for(UserAccount)
        code = (command.referral_code or "").strip().upper()
        new_user_email = normalize_email(command.new_user_email, field="new_user_email")

        if not code:
            return self._reject(ReferralOutcome.INVALID_CODE, command)

        referrers = repo._dao.query.filter(referral_code=code).all().items
        if not referrers:
            return self._reject(ReferralOutcome.INVALID_CODE, command)

        # Re-load through the repository so the referrer is tracked by the unit of work
        referrer = repo.get(referrers[0].id)
        if str(referrer.id) == str(command.new_user_id):
            return self._reject(ReferralOutcome.INVALID_CODE, command)

        if referrer.has_referred(new_user_email):
            return self._reject(ReferralOutcome.ALREADY_REDEEMED, command)

        try:
            new_user = repo.get(command.new_user_id)
        except ObjectNotFoundError:
            return self._reject(ReferralOutcome.ACCOUNT_MISSING, command)

        if new_user.referral_cap_reached:
            return self._reject(ReferralOutcome.CAP_EXCEEDED, command)

        bonus_amount = current_bonus_amount()

        referrer.credit_referral(new_user_email, bonus_amount)
        repo.add(referrer)

        new_user.record_referred()
        repo.add(new_user)

        logger.info(
            "Referral credited",
            referrer_id=str(referrer.id),
            new_user_id=str(new_user.id),
            bonus_amount=bonus_amount,
            referrer_coins=referrer.coins,
        )
        return ReferralOutcome.CREDITED

    @staticmethod
    def _reject(outcome, command):
        logger.info(
            "Referral not credited",
            outcome=outcome.value,
            new_user_id=str(command.new_user_id),
        )
        return outcome
