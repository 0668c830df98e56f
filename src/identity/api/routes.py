"""FastAPI endpoints for the Identity domain: accounts, referrals, lockouts."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from identity.account.account import UserAccount
from identity.account.registration import RegisterAccount
from identity.api.schemas import (
    AccountRegisteredResponse,
    AccountResponse,
    LockoutStatusResponse,
    RecordLoginAttemptRequest,
    ReferralOverviewResponse,
    ReferralSettingsResponse,
    RegisterAccountRequest,
    UpdateReferralBonusRequest,
)
from identity.lockout.policy import format_lockout_time
from identity.lockout.tracking import CheckLockout, RecordLoginAttempt
from identity.referral.processing import ProcessReferral
from identity.referral.queries import referral_overview
from identity.referral.settings import UpdateReferralBonus, current_bonus_amount
from identity.shared.clock import as_utc
from shared.retry import process_with_retry

# ---------------------------------------------------------------------------
# Account Router
# ---------------------------------------------------------------------------
account_router = APIRouter(prefix="/accounts", tags=["accounts"])


@account_router.post("", status_code=201, response_model=AccountRegisteredResponse)
async def register_account(body: RegisterAccountRequest) -> AccountRegisteredResponse:
    """Create an account; redeem ``referral_code`` for it when one is given."""
    account_id = current_domain.process(
        RegisterAccount(email=body.email, display_name=body.display_name),
        asynchronous=False,
    )
    account = current_domain.repository_for(UserAccount).get(account_id)

    outcome = None
    if body.referral_code:
        outcome = process_with_retry(
            ProcessReferral(
                referral_code=body.referral_code,
                new_user_id=account_id,
                new_user_email=account.email,
            )
        )

    return AccountRegisteredResponse(
        account_id=account_id,
        referral_code=account.referral_code,
        referral_outcome=outcome.value if outcome else None,
    )


@account_router.get("/{account_id}", response_model=AccountResponse)
async def get_account(account_id: str) -> AccountResponse:
    account = current_domain.repository_for(UserAccount).get(account_id)
    history = sorted(account.referral_history, key=lambda record: as_utc(record.referral_date))
    return AccountResponse(
        account_id=str(account.id),
        email=account.email,
        display_name=account.display_name,
        coins=account.coins,
        referral_code=account.referral_code,
        times_been_referred=account.times_been_referred,
        referral_history=[
            {
                "referred_email": record.referred_email,
                "referral_date": as_utc(record.referral_date).isoformat(),
            }
            for record in history
        ],
    )


# ---------------------------------------------------------------------------
# Referral Router (admin)
# ---------------------------------------------------------------------------
referral_router = APIRouter(prefix="/referrals", tags=["referrals"])


@referral_router.get("", response_model=list[ReferralOverviewResponse])
async def list_referrals() -> list[ReferralOverviewResponse]:
    return [ReferralOverviewResponse(**row) for row in referral_overview()]


@referral_router.get("/settings", response_model=ReferralSettingsResponse)
async def get_referral_settings() -> ReferralSettingsResponse:
    return ReferralSettingsResponse(bonus_amount=current_bonus_amount())


@referral_router.put("/settings", response_model=ReferralSettingsResponse)
async def update_referral_settings(body: UpdateReferralBonusRequest) -> ReferralSettingsResponse:
    bonus_amount = process_with_retry(UpdateReferralBonus(bonus_amount=body.bonus_amount))
    return ReferralSettingsResponse(bonus_amount=bonus_amount)


# ---------------------------------------------------------------------------
# Lockout Router
# ---------------------------------------------------------------------------
lockout_router = APIRouter(prefix="/lockouts", tags=["lockouts"])


def _lockout_response(status) -> LockoutStatusResponse:
    return LockoutStatusResponse(
        **status.as_dict(),
        remaining=format_lockout_time(status.remaining_ms) if status.remaining_ms is not None else None,
    )


@lockout_router.get("/{email}", response_model=LockoutStatusResponse)
async def check_lockout(email: str) -> LockoutStatusResponse:
    status = process_with_retry(CheckLockout(email=email))
    return _lockout_response(status)


@lockout_router.post("/{email}/attempts", response_model=LockoutStatusResponse)
async def record_login_attempt(email: str, body: RecordLoginAttemptRequest) -> LockoutStatusResponse:
    status = process_with_retry(RecordLoginAttempt(email=email, success=body.success))
    return _lockout_response(status)
