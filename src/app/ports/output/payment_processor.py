from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Sequence

from src.domain.models import AccountLink, ConnectedAccount, PaymentIntent


class IPaymentProcessor(ABC):
    """Port for the third-party payment processor (payment intents + connected accounts)."""

    @abstractmethod
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
        raise NotImplementedError

    @abstractmethod
    def create_account(
        self,
        *,
        email: str,
        country: str,
        business_name: str,
        metadata: Mapping[str, Any] | None = None,
    ) -> ConnectedAccount:
        raise NotImplementedError

    @abstractmethod
    def retrieve_account(self, account_id: str) -> ConnectedAccount:
        raise NotImplementedError

    @abstractmethod
    def create_account_link(
        self, *, account_id: str, refresh_url: str, return_url: str
    ) -> AccountLink:
        raise NotImplementedError
