from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PaymentIntentRequestSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    amount: int | None = None
    payment_method_types: list[str] | None = None
    destination: str | None = None
    platform_fee_percent: float | None = Field(default=None, alias="platformFeePercent")


class DestinationDonationRequestSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    amount: int | None = None
    charity_account_id: str | None = Field(default=None, alias="charityAccountId")
    platform_fee_percent: float = Field(default=2.5, alias="platformFeePercent")


class PaymentIntentResponseSchema(BaseModel):
    client_secret: str
    payment_intent_id: str
    platform_fee: int | None = None
    charity_amount: int | None = None
    total_amount: int | None = None


class CharityAccountRequestSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    charity_name: str | None = Field(default=None, alias="charityName")
    email: str | None = None
    country: str = "US"


class CharityAccountResponseSchema(BaseModel):
    account_id: str
    onboarding_url: str
    charity_name: str


class AccountStatusSchema(BaseModel):
    account_id: str
    charges_enabled: bool
    payouts_enabled: bool
    details_submitted: bool
    onboarding_complete: bool
    requirements: dict[str, Any] | None = None
    business_profile: dict[str, Any] | None = None


class AccountLinkRequestSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    account_id: str | None = Field(default=None, alias="accountId")


class AccountLinkResponseSchema(BaseModel):
    onboarding_url: str


class DonationRequestSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str | None = Field(default=None, alias="userId")
    charity_id: str = Field(..., alias="charityId")
    amount: float
    message: str | None = None


class DonationSchema(BaseModel):
    id: str
    charity_id: str
    amount: float
    message: str | None = None
    date: str | None = None


class ErrorBodySchema(BaseModel):
    message: str
    type: str | None = None


class ErrorResponseSchema(BaseModel):
    error: ErrorBodySchema
