"""Referral settings: the admin-controlled bonus paid per credited referral."""

from datetime import UTC, datetime

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Integer, String
from protean.utils.globals import current_domain

from identity.domain import identity

SETTINGS_KEY = "referral"
DEFAULT_BONUS_AMOUNT = 100


@identity.aggregate
class ReferralSettings:
    """Singleton settings document, stored under the ``referral`` key."""

    key: String(identifier=True, max_length=50)
    bonus_amount: Integer(default=DEFAULT_BONUS_AMOUNT, min_value=0)
    updated_at: DateTime()


@identity.command(part_of="ReferralSettings")
class UpdateReferralBonus:
    """Set the number of coins a referrer earns per credited referral."""

    bonus_amount: Integer(required=True, min_value=0)


@identity.command_handler(part_of=ReferralSettings)
class ReferralSettingsHandler:
    @handle(UpdateReferralBonus)
    def update_referral_bonus(self, command):
        repo = current_domain.repository_for(ReferralSettings)
        try:
            settings = repo.get(SETTINGS_KEY)
        except ObjectNotFoundError:
            settings = ReferralSettings(key=SETTINGS_KEY)

        settings.bonus_amount = command.bonus_amount
        settings.updated_at = datetime.now(UTC)
        repo.add(settings)
        return settings.bonus_amount


def current_bonus_amount() -> int:
    """Return the configured referral bonus, or the default when unset."""
    try:
        settings = current_domain.repository_for(ReferralSettings).get(SETTINGS_KEY)
    except ObjectNotFoundError:
        return DEFAULT_BONUS_AMOUNT

    if settings.bonus_amount is None:
        return DEFAULT_BONUS_AMOUNT
    return settings.bonus_amount
