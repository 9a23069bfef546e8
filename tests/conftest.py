"""Shared test fixtures."""
import pytest
import httpx
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from storefront.database import InMemoryStorage, CheckoutDraftStore, HandoffStore
from storefront.models import (
    ProductRef,
    SelectionItem,
    GuestForm,
    CheckoutDraft,
    CheckoutSession,
)
from storefront.services import CheckoutController, CheckoutSessionClient, compute_breakdown

GATEWAY_URL = "https://gateway.test/checkout/cs_test_123"


@pytest.fixture
def sample_item():
    return SelectionItem(
        product=ProductRef(
            id="sofa-001",
            name="Oslo 3-Seater Sofa",
            image="/images/oslo-sofa.jpg",
            price=1000,
        ),
        quantity=3,
        selected_color="Charcoal",
        selected_size="3-Seater",
    )


@pytest.fixture
def sample_draft(sample_item):
    breakdown = compute_breakdown(sample_item.product.price, sample_item.quantity)
    return CheckoutDraft.from_selection(sample_item, breakdown)


@pytest.fixture
def guest_form():
    return GuestForm(
        name="Maria Santos",
        email="maria.santos@example.com",
        phone="0917 555 0100",
        address="12 Mabini St",
        city="Makati",
        province="Metro Manila",
        zip="1200",
    )


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def draft_store(storage):
    return CheckoutDraftStore(storage)


@pytest.fixture
def handoff_store(storage):
    return HandoffStore(storage)


@pytest.fixture
def fake_client():
    client = AsyncMock(spec=CheckoutSessionClient)
    client.create_session.return_value = CheckoutSession(
        checkout_id="cs_test_123",
        checkout_url=GATEWAY_URL,
    )
    return client


@pytest.fixture
def controller(fake_client, draft_store, handoff_store):
    return CheckoutController(
        session_client=fake_client,
        draft_store=draft_store,
        handoff_store=handoff_store,
    )


@pytest.fixture
def backend_client():
    """Client for the mock payment backend app."""
    from payment_backend.main import app as backend_app
    return TestClient(backend_app)


@pytest.fixture
def storefront(monkeypatch):
    """Storefront app wired to the mock payment backend in-process."""
    from payment_backend.main import app as backend_app
    from storefront.main import app
    from storefront.routes import dependencies

    client = CheckoutSessionClient(
        backend_base_url="http://payment-backend.test",
        transport=httpx.ASGITransport(app=backend_app),
    )
    monkeypatch.setattr(dependencies, "session_client", client)
    monkeypatch.setattr(dependencies, "session_manager", None)

    with TestClient(app) as test_client:
        yield test_client
