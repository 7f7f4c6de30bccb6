from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Sequence

import stripe

from src.adapters.runtime import stripe_client
from src.app.ports.output import IPaymentProcessor
from src.domain.exceptions import PaymentProviderError
from src.domain.models import AccountLink, ConnectedAccount, PaymentIntent

_ERROR_TYPES: tuple[tuple[type[stripe.StripeError], str], ...] = (
    (stripe.CardError, "card_error"),
    (stripe.InvalidRequestError, "invalid_request_error"),
    (stripe.APIConnectionError, "api_connection_error"),
    (stripe.AuthenticationError, "authentication_error"),
    (stripe.RateLimitError, "rate_limit_error"),
)


def _error_type(exc: stripe.StripeError) -> str:
    reported = getattr(exc.error, "type", None) if exc.error is not None else None
    if reported:
        return str(reported)
    for cls, name in _ERROR_TYPES:
        if isinstance(exc, cls):
            return name
    return "api_error"


def _payload(obj: Any) -> dict[str, Any]:
    """StripeObject -> plain dict (nested objects included)."""

    for name in ("to_dict_recursive", "to_dict"):
        convert = getattr(obj, name, None)
        if callable(convert):
            return convert()
    return dict(obj)


def _account_from_payload(data: Mapping[str, Any]) -> ConnectedAccount:
    return ConnectedAccount(
        account_id=str(data["id"]),
        charges_enabled=bool(data.get("charges_enabled")),
        payouts_enabled=bool(data.get("payouts_enabled")),
        details_submitted=bool(data.get("details_submitted")),
        requirements=data.get("requirements"),
        business_profile=data.get("business_profile"),
    )


@dataclass(slots=True)
class StripePaymentProcessor(IPaymentProcessor):
    """Stripe Connect through the official SDK.

    Env vars:
      - STRIPE_SECRET_KEY: secret API key (required)
      - STRIPE_API_BASE: API origin (default https://api.stripe.com)
      - STRIPE_MAX_NETWORK_RETRIES: retries on network errors (default 2)
    """

    client_factory: Callable[[], stripe.StripeClient] = field(default=stripe_client)
    _client: stripe.StripeClient | None = field(default=None, init=False, repr=False)

    @property
    def client(self) -> stripe.StripeClient:
        if self._client is None:
            self._client = self.client_factory()
        return self._client

    @staticmethod
    def _call(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> dict[str, Any]:
        try:
            return _payload(fn(*args, **kwargs))
        except stripe.StripeError as exc:
            raise PaymentProviderError(
                exc.user_message or str(exc) or "Payment processor error",
                type=_error_type(exc),
            ) from exc

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
        params: dict[str, Any] = {
            "amount": int(amount),
            "currency": currency,
            # Stripe metadata values are strings.
            "metadata": {k: str(v) for k, v in (metadata or {}).items()},
        }
        if payment_method_types:
            params["payment_method_types"] = list(payment_method_types)
        else:
            params["automatic_payment_methods"] = {"enabled": True}
        if application_fee_amount is not None:
            params["application_fee_amount"] = int(application_fee_amount)
        if destination:
            params["transfer_data"] = {"destination": destination}

        data = self._call(self.client.payment_intents.create, params=params)
        return PaymentIntent(
            client_secret=str(data["client_secret"]),
            payment_intent_id=str(data["id"]),
        )

    def create_account(
        self,
        *,
        email: str,
        country: str,
        business_name: str,
        metadata: Mapping[str, Any] | None = None,
    ) -> ConnectedAccount:
        data = self._call(
            self.client.accounts.create,
            params={
                "type": "standard",
                "country": country,
                "email": email,
                "business_profile": {
                    "name": business_name,
                    "product_description": "Charitable donations and fundraising",
                },
                "metadata": {k: str(v) for k, v in (metadata or {}).items()},
            },
        )
        return _account_from_payload(data)

    def retrieve_account(self, account_id: str) -> ConnectedAccount:
        return _account_from_payload(self._call(self.client.accounts.retrieve, account_id))

    def create_account_link(
        self, *, account_id: str, refresh_url: str, return_url: str
    ) -> AccountLink:
        data = self._call(
            self.client.account_links.create,
            params={
                "account": account_id,
                "refresh_url": refresh_url,
                "return_url": return_url,
                "type": "account_onboarding",
            },
        )
        return AccountLink(onboarding_url=str(data["url"]))
