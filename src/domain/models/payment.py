from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class PaymentIntent:
    client_secret: str
    payment_intent_id: str
    platform_fee: int | None = None
    charity_amount: int | None = None
    total_amount: int | None = None


@dataclass(frozen=True, slots=True)
class ConnectedAccount:
    """Status of a charity's connected payment account."""

    account_id: str
    charges_enabled: bool = False
    payouts_enabled: bool = False
    details_submitted: bool = False
    requirements: dict[str, Any] | None = None
    business_profile: dict[str, Any] | None = None

    @property
    def onboarding_complete(self) -> bool:
        return self.charges_enabled and self.details_submitted


@dataclass(frozen=True, slots=True)
class AccountLink:
    onboarding_url: str


@dataclass(frozen=True, slots=True)
class Donation:
    id: str
    charity_id: str
    amount: float
    message: str | None = None
    date: str | None = None
