from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Sequence

from src.app.ports.output import IPaymentProcessor, IRecordStore
from src.domain.exceptions import (
    CharityAccountNotReady,
    InvalidDonationRequest,
    RecordStoreError,
)
from src.domain.models import AccountLink, ConnectedAccount, Donation, PaymentIntent

logger = logging.getLogger(__name__)

MIN_AMOUNT_CENTS = 50
DEFAULT_PLATFORM_FEE_PERCENT = 2.5
CURRENCY = "usd"
PAYMENT_SOURCE = "CharitEase Mobile App"
PLATFORM_NAME = "CharitEase"


def platform_fee_cents(amount: int, fee_percent: float) -> int:
    """Platform fee in cents, rounded half up."""

    return int(math.floor(amount * (fee_percent / 100.0) + 0.5))


def _require_min_amount(amount: int | None) -> int:
    if not amount or amount < MIN_AMOUNT_CENTS:
        raise InvalidDonationRequest("Amount must be at least $0.50")
    return int(amount)


def _number(value: Any) -> float:
    """Stored running total as a number; missing or garbled totals count as 0."""

    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else 0
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return 0
    return parsed if math.isfinite(parsed) else 0


def _bump_totals(
    store: IRecordStore, table: str, record_id: str, increments: Mapping[str, float]
) -> None:
    try:
        rows = store.select(table, filters={"id": record_id}, limit=1)
        if not rows:
            logger.warning("No %s row %s to update totals for", table, record_id)
            return
        current = rows[0]
        values: dict[str, Any] = {}
        for column, inc in increments.items():
            values[column] = _number(current.get(column)) + inc
        store.update(table, values, filters={"id": record_id})
    except (RecordStoreError, TypeError, ValueError) as exc:
        logger.warning("Could not update %s totals for %s: %s", table, record_id, exc)


@dataclass(slots=True)
class DonationService:
    """Payment-intent relay and connected-account onboarding for charities.

    The processor does the real work; this layer validates requests and builds
    the fee split sent along with destination charges.
    """

    payment_processor: IPaymentProcessor
    record_store: IRecordStore | None = None
    frontend_url: str = "https://yourapp.com"

    def create_payment_intent(
        self,
        *,
        amount: int,
        payment_method_types: Sequence[str] | None = None,
        destination: str | None = None,
        platform_fee_percent: float | None = None,
    ) -> PaymentIntent:
        if destination:
            return self.create_donation_with_destination(
                amount=amount,
                charity_account_id=destination,
                platform_fee_percent=(
                    DEFAULT_PLATFORM_FEE_PERCENT
                    if platform_fee_percent is None
                    else platform_fee_percent
                ),
                payment_method_types=payment_method_types,
            )

        amount = _require_min_amount(amount)
        intent = self.payment_processor.create_payment_intent(
            amount=amount,
            currency=CURRENCY,
            metadata={"source": PAYMENT_SOURCE},
            payment_method_types=payment_method_types,
        )
        logger.info("Created payment intent %s for %d cents", intent.payment_intent_id, amount)
        return intent

    def create_donation_with_destination(
        self,
        *,
        amount: int,
        charity_account_id: str | None,
        platform_fee_percent: float = DEFAULT_PLATFORM_FEE_PERCENT,
        payment_method_types: Sequence[str] | None = None,
    ) -> PaymentIntent:
        amount = _require_min_amount(amount)
        if not charity_account_id:
            raise InvalidDonationRequest("Charity account ID is required")

        account = self.payment_processor.retrieve_account(charity_account_id)
        if not account.charges_enabled:
            raise CharityAccountNotReady(charity_account_id)

        fee = platform_fee_cents(amount, platform_fee_percent)
        charity_amount = amount - fee

        intent = self.payment_processor.create_payment_intent(
            amount=amount,
            currency=CURRENCY,
            payment_method_types=payment_method_types,
            application_fee_amount=fee,
            destination=charity_account_id,
            metadata={
                "source": PAYMENT_SOURCE,
                "charity_account": charity_account_id,
                "platform_fee": fee,
                "charity_amount": charity_amount,
                "platform_fee_percent": platform_fee_percent,
            },
        )
        logger.info(
            "Created donation intent %s: %d cents (fee %d, to charity %d)",
            intent.payment_intent_id,
            amount,
            fee,
            charity_amount,
        )
        return PaymentIntent(
            client_secret=intent.client_secret,
            payment_intent_id=intent.payment_intent_id,
            platform_fee=fee,
            charity_amount=charity_amount,
            total_amount=amount,
        )

    def _onboarding_urls(self) -> tuple[str, str]:
        base = self.frontend_url.rstrip("/")
        return (
            f"{base}/charity/onboarding/refresh",
            f"{base}/charity/onboarding/complete",
        )

    def create_charity_account(
        self, *, charity_name: str | None, email: str | None, country: str = "US"
    ) -> tuple[ConnectedAccount, AccountLink]:
        if not charity_name or not email:
            raise InvalidDonationRequest("Charity name and email are required")

        account = self.payment_processor.create_account(
            email=email,
            country=country,
            business_name=charity_name,
            metadata={"platform": PLATFORM_NAME, "charity_name": charity_name},
        )
        link = self.create_account_link(account_id=account.account_id)
        logger.info("Created connected account %s for %s", account.account_id, charity_name)
        return account, link

    def charity_account_status(self, *, account_id: str) -> ConnectedAccount:
        return self.payment_processor.retrieve_account(account_id)

    def create_account_link(self, *, account_id: str | None) -> AccountLink:
        if not account_id:
            raise InvalidDonationRequest("Account ID is required")
        refresh_url, return_url = self._onboarding_urls()
        return self.payment_processor.create_account_link(
            account_id=account_id, refresh_url=refresh_url, return_url=return_url
        )

    def record_donation(
        self,
        *,
        user_id: str | None,
        charity_id: str,
        amount: float,
        message: str | None = None,
    ) -> Donation:
        """Store a completed donation and bump the donor/charity running totals.

        The totals are best-effort: failures are logged and the donation stands.
        """

        if self.record_store is None:
            raise RuntimeError("Record store not configured")
        if not user_id:
            raise InvalidDonationRequest("You must be logged in to make a donation")
        if not charity_id:
            raise InvalidDonationRequest("Charity ID is required")
        if amount is None or amount <= 0:
            raise InvalidDonationRequest("Donation amount must be positive")

        inserted = self.record_store.insert(
            "donations",
            [
                {
                    "user_id": user_id,
                    "charity_id": charity_id,
                    "amount": amount,
                    "message": message or None,
                    "status": "completed",
                }
            ],
        )
        if not inserted or not inserted[0].get("id"):
            raise RecordStoreError("Donation was created but no ID was returned")
        row = inserted[0]

        _bump_totals(
            self.record_store,
            "users",
            user_id,
            {"total_donated": amount, "total_donations": 1},
        )
        _bump_totals(self.record_store, "charities", charity_id, {"total_raised": amount})

        created_at = row.get("created_at")
        return Donation(
            id=str(row["id"]),
            charity_id=str(row.get("charity_id", charity_id)),
            amount=row.get("amount", amount),
            message=row.get("message"),
            date=(
                created_at.split("T")[0]
                if isinstance(created_at, str) and created_at
                else date.today().isoformat()
            ),
        )
