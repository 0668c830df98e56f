"""Pydantic request/response schemas for the Identity API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Request Schemas ---


class RegisterAccountRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "email": "asha@example.com",
                    "display_name": "Asha",
                    "referral_code": "ABCD1234",
                }
            ]
        }
    }

    email: str = Field(..., max_length=254)
    display_name: str | None = Field(None, max_length=100)
    referral_code: str | None = Field(None, max_length=32)


class UpdateReferralBonusRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"bonus_amount": 150}]}}

    bonus_amount: int = Field(..., ge=0)


class RecordLoginAttemptRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"success": False}]}}

    success: bool


# --- Response Schemas ---


class AccountRegisteredResponse(BaseModel):
    account_id: str
    referral_code: str
    referral_outcome: str | None = None


class ReferralRecordResponse(BaseModel):
    referred_email: str
    referral_date: str


class AccountResponse(BaseModel):
    account_id: str
    email: str
    display_name: str | None = None
    coins: int
    referral_code: str
    times_been_referred: int
    referral_history: list[ReferralRecordResponse] = []


class ReferralOverviewResponse(BaseModel):
    account_id: str
    email: str
    display_name: str | None = None
    referral_code: str
    coins: int
    referral_history: list[ReferralRecordResponse]


class ReferralSettingsResponse(BaseModel):
    bonus_amount: int


class LockoutStatusResponse(BaseModel):
    state: str
    is_locked: bool
    attempts: int
    remaining_ms: int | None = None
    remaining: str | None = None
