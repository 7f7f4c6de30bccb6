from __future__ import annotations

from fastapi import APIRouter, Depends

from src.adapters.api.dependencies import get_donation_service
from src.adapters.api.schemas.payments import (
    AccountLinkRequestSchema,
    AccountLinkResponseSchema,
    AccountStatusSchema,
    CharityAccountRequestSchema,
    CharityAccountResponseSchema,
    DestinationDonationRequestSchema,
    DonationRequestSchema,
    DonationSchema,
    ErrorResponseSchema,
    PaymentIntentRequestSchema,
    PaymentIntentResponseSchema,
)
from src.app.services.donation_service import DonationService
from src.domain.models import PaymentIntent

router = APIRouter(
    tags=["payments"],
    responses={400: {"model": ErrorResponseSchema, "description": "Payment request rejected"}},
)


def _intent_to_schema(intent: PaymentIntent) -> PaymentIntentResponseSchema:
    return PaymentIntentResponseSchema(
        client_secret=intent.client_secret,
        payment_intent_id=intent.payment_intent_id,
        platform_fee=intent.platform_fee,
        charity_amount=intent.charity_amount,
        total_amount=intent.total_amount,
    )


@router.post(
    "/create-payment-intent",
    response_model=PaymentIntentResponseSchema,
    response_model_exclude_none=True,
)
def create_payment_intent(
    req: PaymentIntentRequestSchema,
    service: DonationService = Depends(get_donation_service),
) -> PaymentIntentResponseSchema:
    intent = service.create_payment_intent(
        amount=req.amount or 0,
        payment_method_types=req.payment_method_types,
        destination=req.destination,
        platform_fee_percent=req.platform_fee_percent,
    )
    return _intent_to_schema(intent)


@router.post(
    "/create-donation-with-destination", response_model=PaymentIntentResponseSchema
)
def create_donation_with_destination(
    req: DestinationDonationRequestSchema,
    service: DonationService = Depends(get_donation_service),
) -> PaymentIntentResponseSchema:
    intent = service.create_donation_with_destination(
        amount=req.amount or 0,
        charity_account_id=req.charity_account_id,
        platform_fee_percent=req.platform_fee_percent,
    )
    return _intent_to_schema(intent)


@router.post("/create-charity-account", response_model=CharityAccountResponseSchema)
def create_charity_account(
    req: CharityAccountRequestSchema,
    service: DonationService = Depends(get_donation_service),
) -> CharityAccountResponseSchema:
    account, link = service.create_charity_account(
        charity_name=req.charity_name, email=req.email, country=req.country
    )
    return CharityAccountResponseSchema(
        account_id=account.account_id,
        onboarding_url=link.onboarding_url,
        charity_name=req.charity_name or "",
    )


@router.get("/charity-account-status/{account_id}", response_model=AccountStatusSchema)
def charity_account_status(
    account_id: str,
    service: DonationService = Depends(get_donation_service),
) -> AccountStatusSchema:
    account = service.charity_account_status(account_id=account_id)
    return AccountStatusSchema(
        account_id=account.account_id,
        charges_enabled=account.charges_enabled,
        payouts_enabled=account.payouts_enabled,
        details_submitted=account.details_submitted,
        onboarding_complete=account.onboarding_complete,
        requirements=account.requirements,
        business_profile=account.business_profile,
    )


@router.post("/create-account-link", response_model=AccountLinkResponseSchema)
def create_account_link(
    req: AccountLinkRequestSchema,
    service: DonationService = Depends(get_donation_service),
) -> AccountLinkResponseSchema:
    link = service.create_account_link(account_id=req.account_id)
    return AccountLinkResponseSchema(onboarding_url=link.onboarding_url)


@router.post("/donations", response_model=DonationSchema)
def record_donation(
    req: DonationRequestSchema,
    service: DonationService = Depends(get_donation_service),
) -> DonationSchema:
    donation = service.record_donation(
        user_id=req.user_id,
        charity_id=req.charity_id,
        amount=req.amount,
        message=req.message,
    )
    return DonationSchema(
        id=donation.id,
        charity_id=donation.charity_id,
        amount=donation.amount,
        message=donation.message,
        date=donation.date,
    )
