"""Tests for the checkout session client."""
import json

import httpx
import pytest

from storefront.models import GuestForm, Identity, PaymentMethod
from storefront.services.session_client import (
    CheckoutSessionClient,
    SessionCreationError,
    SessionVerificationError,
    UnsupportedPaymentMethodError,
    build_customer_payload,
)

BASE_URL = "http://payment-backend.test"


def make_client(handler, **kwargs) -> CheckoutSessionClient:
    return CheckoutSessionClient(
        backend_base_url=BASE_URL,
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_create_session_posts_expected_body():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={
            "checkout_id": "cs_1",
            "checkout_url": "https://gateway.test/checkout/cs_1",
        })

    client = make_client(handler)
    session = await client.create_session(3099, "Oslo 3-Seater Sofa", PaymentMethod.GCASH)

    assert session.checkout_id == "cs_1"
    assert session.checkout_url == "https://gateway.test/checkout/cs_1"
    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert request.url == f"{BASE_URL}/api/payments/checkout-session"
    assert json.loads(request.content) == {
        "amount": 3099,
        "description": "Oslo 3-Seater Sofa",
        "payment_method": "gcash",
    }
    assert "authorization" not in request.headers
    await client.close()


@pytest.mark.asyncio
async def test_create_session_sends_customer_and_token(guest_form):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"checkout_id": "cs_2", "checkout_url": "https://g.test/cs_2"})

    client = make_client(handler, access_token="backend-token")
    await client.create_session(
        6000,
        "Teak Dining Table",
        PaymentMethod.CARD,
        customer=build_customer_payload(form=guest_form),
    )

    body = json.loads(seen[0].content)
    assert body["payment_method"] == "card"
    assert body["customer"] == {
        "name": "Maria Santos",
        "email": "maria.santos@example.com",
        "phone": "0917 555 0100",
        "address": "12 Mabini St, Makati, Metro Manila 1200",
    }
    assert seen[0].headers["authorization"] == "Bearer backend-token"
    await client.close()


@pytest.mark.asyncio
async def test_per_call_token_overrides_default():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"checkout_id": "cs_3", "checkout_url": "https://g.test/cs_3"})

    client = make_client(handler, access_token="backend-token")
    await client.create_session(100, "Stool", PaymentMethod.MAYA, access_token="shopper-token")
    assert seen[0].headers["authorization"] == "Bearer shopper-token"
    await client.close()


@pytest.mark.asyncio
async def test_null_checkout_url_is_returned_not_raised():
    client = make_client(lambda request: httpx.Response(200, json={"checkout_id": None, "checkout_url": None}))
    session = await client.create_session(100, "Stool", PaymentMethod.GCASH)
    assert session.checkout_url is None
    await client.close()


@pytest.mark.asyncio
async def test_backend_error_raises_creation_error():
    client = make_client(lambda request: httpx.Response(500, json={"message": "boom"}))
    with pytest.raises(SessionCreationError) as exc_info:
        await client.create_session(100, "Stool", PaymentMethod.GCASH)
    assert exc_info.value.status_code == 500
    await client.close()


@pytest.mark.asyncio
async def test_non_json_response_raises_creation_error():
    client = make_client(lambda request: httpx.Response(200, text="<html>oops</html>"))
    with pytest.raises(SessionCreationError):
        await client.create_session(100, "Stool", PaymentMethod.GCASH)
    await client.close()


@pytest.mark.asyncio
async def test_online_banking_never_sent():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={})

    client = make_client(handler)
    with pytest.raises(UnsupportedPaymentMethodError):
        await client.create_session(100, "Stool", PaymentMethod.ONLINE_BANKING)
    assert calls == []
    await client.close()


@pytest.mark.asyncio
async def test_create_retries_once_on_connect_error():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) == 1:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, json={"checkout_id": "cs_4", "checkout_url": "https://g.test/cs_4"})

    client = make_client(handler)
    session = await client.create_session(100, "Stool", PaymentMethod.GCASH)
    assert session.checkout_id == "cs_4"
    assert len(calls) == 2
    await client.close()


@pytest.mark.asyncio
async def test_create_gives_up_after_retry():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)
    with pytest.raises(SessionCreationError) as exc_info:
        await client.create_session(100, "Stool", PaymentMethod.GCASH)
    assert len(calls) == 2
    assert exc_info.value.status_code is None
    await client.close()


@pytest.mark.asyncio
async def test_create_not_retried_after_read_timeout():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ReadTimeout("timed out", request=request)

    client = make_client(handler)
    with pytest.raises(SessionCreationError):
        await client.create_session(100, "Stool", PaymentMethod.GCASH)
    assert len(calls) == 1
    await client.close()


@pytest.mark.asyncio
async def test_verify_session():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={
            "checkout_id": "cs_5",
            "status": "paid",
            "payment_intent_id": "pi_5",
            "raw": {"amount": 3099},
        })

    client = make_client(handler)
    first = await client.verify_session("cs_5")
    second = await client.verify_session("cs_5")

    assert first == second
    assert first.status == "paid"
    assert first.payment_intent_id == "pi_5"
    assert all(r.method == "GET" for r in seen)
    assert seen[0].url == f"{BASE_URL}/api/payments/checkout-session/cs_5"
    await client.close()


@pytest.mark.asyncio
async def test_verify_retries_on_timeout():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) == 1:
            raise httpx.ReadTimeout("timed out", request=request)
        return httpx.Response(200, json={"checkout_id": "cs_6", "status": "active", "payment_intent_id": None})

    client = make_client(handler)
    result = await client.verify_session("cs_6")
    assert result.status == "active"
    assert len(calls) == 2
    await client.close()


@pytest.mark.asyncio
async def test_verify_not_found_raises():
    client = make_client(lambda request: httpx.Response(404, json={"detail": "Checkout session not found"}))
    with pytest.raises(SessionVerificationError):
        await client.verify_session("cs_missing")
    await client.close()


def test_customer_payload_omitted_without_identity():
    assert build_customer_payload() is None
    assert build_customer_payload(identity=Identity()) is None


def test_customer_payload_from_identity():
    payload = build_customer_payload(identity=Identity(name="Jose Reyes", email="jose@example.com"))
    assert payload.model_dump(exclude_none=True) == {"name": "Jose Reyes", "email": "jose@example.com"}


def test_customer_payload_prefers_guest_form(guest_form):
    payload = build_customer_payload(
        identity=Identity(name="Someone Else", email="else@example.com"),
        form=guest_form,
    )
    assert payload.name == "Maria Santos"


def test_customer_address_skips_blank_parts():
    form = GuestForm(name="A", email="a@b.co", phone="1", address="Lot 4 Blk 2", province="Cebu")
    assert build_customer_payload(form=form).address == "Lot 4 Blk 2, Cebu"
