from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from src.domain.models import AccountLink, ConnectedAccount, PaymentIntent


@dataclass(slots=True)
class FakePaymentProcessor:
    charges_enabled: bool = True
    intents: list[dict[str, Any]] = field(default_factory=list)
    links: list[dict[str, Any]] = field(default_factory=list)

    def create_payment_intent(
        self,
        *,
        amount: int,
        currency: str,
        metadata: Mapping[str, Any] | None = None,
        payment_method_types: Sequence[str] | None = None,
        application_fee_amount: int | None = None,
        destination: str | None = None,
    ) -> PaymentIntent:
        self.intents.append(
            {
                "amount": amount,
                "currency": currency,
                "metadata": dict(metadata or {}),
                "payment_method_types": payment_method_types,
                "application_fee_amount": application_fee_amount,
                "destination": destination,
            }
        )
        n = len(self.intents)
        return PaymentIntent(client_secret=f"pi_{n}_secret_x", payment_intent_id=f"pi_{n}")

    def create_account(
        self,
        *,
        email: str,
        country: str,
        business_name: str,
        metadata: Mapping[str, Any] | None = None,
    ) -> ConnectedAccount:
        return ConnectedAccount(account_id="acct_new")

    def retrieve_account(self, account_id: str) -> ConnectedAccount:
        return ConnectedAccount(
            account_id=account_id,
            charges_enabled=self.charges_enabled,
            details_submitted=self.charges_enabled,
        )

    def create_account_link(
        self, *, account_id: str, refresh_url: str, return_url: str
    ) -> AccountLink:
        self.links.append(
            {"account_id": account_id, "refresh_url": refresh_url, "return_url": return_url}
        )
        return AccountLink(onboarding_url=f"https://connect.example/{account_id}")
