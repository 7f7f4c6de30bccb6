from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest
import stripe

from src.adapters.payments.stripe_payment_processor import StripePaymentProcessor
from src.domain.exceptions import PaymentProviderError


class _FakeService:
    def __init__(self, calls: list[tuple], name: str, result: Any) -> None:
        self.calls = calls
        self.name = name
        self.result = result

    def _respond(self, method: str, *args: Any, **kwargs: Any) -> Any:
        self.calls.append((f"{self.name}.{method}", args, kwargs))
        if isinstance(self.result, Exception):
            raise self.result
        return dict(self.result)

    def create(self, **kwargs: Any) -> Any:
        return self._respond("create", **kwargs)

    def retrieve(self, account_id: str) -> Any:
        return self._respond("retrieve", account_id)


def _processor(**results: Any) -> tuple[StripePaymentProcessor, list[tuple]]:
    calls: list[tuple] = []
    client = SimpleNamespace(
        payment_intents=_FakeService(calls, "payment_intents", results.get("payment_intents", {})),
        accounts=_FakeService(calls, "accounts", results.get("accounts", {})),
        account_links=_FakeService(calls, "account_links", results.get("account_links", {})),
    )
    return StripePaymentProcessor(client_factory=lambda: client), calls


@pytest.mark.unit
def test_create_payment_intent_with_destination() -> None:
    proc, calls = _processor(payment_intents={"id": "pi_1", "client_secret": "pi_1_secret"})

    intent = proc.create_payment_intent(
        amount=1000,
        currency="usd",
        metadata={"source": "app", "platform_fee": 25},
        application_fee_amount=25,
        destination="acct_9",
    )

    assert intent.client_secret == "pi_1_secret"
    assert intent.payment_intent_id == "pi_1"
    name, _, kwargs = calls[0]
    assert name == "payment_intents.create"
    params = kwargs["params"]
    assert params["amount"] == 1000
    assert params["application_fee_amount"] == 25
    assert params["transfer_data"] == {"destination": "acct_9"}
    assert params["automatic_payment_methods"] == {"enabled": True}
    assert params["metadata"] == {"source": "app", "platform_fee": "25"}


@pytest.mark.unit
def test_explicit_payment_method_types_replace_automatic_methods() -> None:
    proc, calls = _processor(payment_intents={"id": "pi_2", "client_secret": "s"})

    proc.create_payment_intent(amount=500, currency="usd", payment_method_types=["card"])

    params = calls[0][2]["params"]
    assert params["payment_method_types"] == ["card"]
    assert "automatic_payment_methods" not in params
    assert "transfer_data" not in params


@pytest.mark.unit
def test_retrieve_account_maps_status() -> None:
    proc, calls = _processor(
        accounts={
            "id": "acct_9",
            "charges_enabled": True,
            "payouts_enabled": False,
            "details_submitted": True,
            "requirements": {"currently_due": []},
        }
    )

    account = proc.retrieve_account("acct_9")

    assert calls[0][:2] == ("accounts.retrieve", ("acct_9",))
    assert account.charges_enabled
    assert account.onboarding_complete
    assert account.requirements == {"currently_due": []}


@pytest.mark.unit
def test_create_account_and_link() -> None:
    proc, calls = _processor(
        accounts={"id": "acct_new"},
        account_links={"url": "https://connect.stripe.test/setup"},
    )

    account = proc.create_account(
        email="hi@hh.org", country="US", business_name="Helping Hands"
    )
    link = proc.create_account_link(
        account_id=account.account_id,
        refresh_url="https://app/refresh",
        return_url="https://app/done",
    )

    assert account.account_id == "acct_new"
    assert link.onboarding_url == "https://connect.stripe.test/setup"
    account_params = calls[0][2]["params"]
    assert account_params["type"] == "standard"
    assert account_params["business_profile"]["name"] == "Helping Hands"
    link_params = calls[1][2]["params"]
    assert link_params["type"] == "account_onboarding"
    assert link_params["account"] == "acct_new"


@pytest.mark.unit
def test_card_errors_keep_user_message_and_type() -> None:
    declined = stripe.CardError(
        "Your card was declined.",
        param=None,
        code="card_declined",
        json_body={"error": {"message": "Your card was declined.", "type": "card_error"}},
    )
    proc, _ = _processor(payment_intents=declined)

    with pytest.raises(PaymentProviderError) as info:
        proc.create_payment_intent(amount=1000, currency="usd")

    assert info.value.message == "Your card was declined."
    assert info.value.type == "card_error"


@pytest.mark.unit
def test_connection_errors_become_provider_errors() -> None:
    proc, _ = _processor(accounts=stripe.APIConnectionError("Network down"))

    with pytest.raises(PaymentProviderError) as info:
        proc.retrieve_account("acct_1")

    assert info.value.type == "api_connection_error"
    assert "Network down" in info.value.message


@pytest.mark.unit
def test_client_is_created_lazily_once() -> None:
    made: list[int] = []
    calls: list[tuple] = []
    client = SimpleNamespace(
        accounts=_FakeService(calls, "accounts", {"id": "acct_1"}),
    )

    def _factory() -> Any:
        made.append(1)
        return client

    proc = StripePaymentProcessor(client_factory=_factory)
    assert made == []

    proc.retrieve_account("acct_1")
    proc.retrieve_account("acct_1")
    assert made == [1]
