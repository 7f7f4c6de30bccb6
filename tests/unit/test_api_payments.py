from __future__ import annotations

import httpx
import pytest

from src.adapters.api.dependencies import get_donation_service
from src.adapters.persistence import InMemoryRecordStore
from src.app.services.donation_service import DonationService
from src.domain.exceptions import PaymentProviderError
from src.domain.models import PaymentIntent
from src.main import app

from .fakes import FakePaymentProcessor


@pytest.fixture
def processor():
    proc = FakePaymentProcessor()
    store = InMemoryRecordStore(tables={"users": [{"id": "u1"}], "charities": [{"id": "c1"}]})

    def _override() -> DonationService:
        return DonationService(payment_processor=proc, record_store=store)

    app.dependency_overrides[get_donation_service] = _override
    yield proc
    app.dependency_overrides.clear()


@pytest.mark.unit
@pytest.mark.anyio
async def test_create_payment_intent_returns_client_secret(processor) -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.post(
            "/create-payment-intent",
            json={"amount": 2500, "payment_method_types": ["card"]},
        )

    assert resp.status_code == 200
    assert resp.json() == {"client_secret": "pi_1_secret_x", "payment_intent_id": "pi_1"}
    assert processor.intents[0]["payment_method_types"] == ["card"]


@pytest.mark.unit
@pytest.mark.anyio
async def test_create_payment_intent_below_minimum_is_400(processor) -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.post("/create-payment-intent", json={"amount": 10})

    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Amount must be at least $0.50"


@pytest.mark.unit
@pytest.mark.anyio
async def test_create_payment_intent_with_destination_and_fee(processor) -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.post(
            "/create-payment-intent",
            json={"amount": 1000, "destination": "acct_c", "platformFeePercent": 5},
        )

    assert resp.status_code == 200
    body = resp.json()
    assert body["platform_fee"] == 50
    assert body["charity_amount"] == 950
    assert processor.intents[0]["destination"] == "acct_c"


@pytest.mark.unit
@pytest.mark.anyio
async def test_donation_with_destination_not_ready(processor) -> None:
    processor.charges_enabled = False
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.post(
            "/create-donation-with-destination",
            json={"amount": 1000, "charityAccountId": "acct_c"},
        )

    assert resp.status_code == 400
    assert "not ready" in resp.json()["error"]["message"]


@pytest.mark.unit
@pytest.mark.anyio
async def test_processor_error_is_relayed() -> None:
    class _Declining(FakePaymentProcessor):
        def create_payment_intent(self, **kwargs) -> PaymentIntent:
            raise PaymentProviderError("Your card was declined.", type="card_error")

    app.dependency_overrides[get_donation_service] = lambda: DonationService(
        payment_processor=_Declining()
    )
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.post("/create-payment-intent", json={"amount": 1000})
    app.dependency_overrides.clear()

    assert resp.status_code == 400
    assert resp.json() == {
        "error": {"message": "Your card was declined.", "type": "card_error"}
    }


@pytest.mark.unit
@pytest.mark.anyio
async def test_charity_account_endpoints(processor) -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        created = await client.post(
            "/create-charity-account",
            json={"charityName": "Helping Hands", "email": "hi@hh.org"},
        )
        status = await client.get("/charity-account-status/acct_new")
        link = await client.post("/create-account-link", json={"accountId": "acct_new"})
        missing = await client.post("/create-account-link", json={})

    assert created.status_code == 200
    assert created.json() == {
        "account_id": "acct_new",
        "onboarding_url": "https://connect.example/acct_new",
        "charity_name": "Helping Hands",
    }
    assert status.json()["onboarding_complete"] is True
    assert link.json() == {"onboarding_url": "https://connect.example/acct_new"}
    assert missing.status_code == 400


@pytest.mark.unit
@pytest.mark.anyio
async def test_record_donation(processor) -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.post(
            "/donations",
            json={"userId": "u1", "charityId": "c1", "amount": 20, "message": "Go"},
        )

    assert resp.status_code == 200
    assert resp.json()["charity_id"] == "c1"
    assert resp.json()["amount"] == 20


@pytest.mark.unit
@pytest.mark.anyio
async def test_unconfigured_processor_is_500(monkeypatch) -> None:
    monkeypatch.delenv("STRIPE_SECRET_KEY", raising=False)
    monkeypatch.setenv("CHARITEASE_BACKEND", "memory")

    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.post("/create-payment-intent", json={"amount": 1000})

    assert resp.status_code == 500
    assert "STRIPE_SECRET_KEY" in resp.json()["detail"]


@pytest.mark.unit
@pytest.mark.anyio
async def test_openapi_documents_payment_error_body() -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/openapi.json")

    assert resp.status_code == 200
    doc = resp.json()
    for path, method in [
        ("/create-payment-intent", "post"),
        ("/create-donation-with-destination", "post"),
        ("/create-charity-account", "post"),
        ("/charity-account-status/{account_id}", "get"),
        ("/create-account-link", "post"),
        ("/donations", "post"),
    ]:
        error = doc["paths"][path][method]["responses"]["400"]
        ref = error["content"]["application/json"]["schema"]["$ref"]
        assert ref.endswith("/ErrorResponseSchema")
    assert "ErrorBodySchema" in doc["components"]["schemas"]
