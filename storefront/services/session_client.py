"""
Checkout Session Client

HTTP client for the trusted payment backend that opens and verifies
payment-gateway checkout sessions. The gateway itself is never called
directly from the storefront.
"""

import logging
from typing import Optional, Any

import httpx

from ..models.forms import GuestForm, Identity
from ..models.payment import (
    PaymentMethod,
    CustomerPayload,
    CreateCheckoutSessionRequest,
    CheckoutSession,
    VerifiedSession,
)

logger = logging.getLogger(__name__)

CHECKOUT_SESSION_PATH = "/api/payments/checkout-session"


class SessionClientError(Exception):
    """Base exception for checkout session client errors"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SessionCreationError(SessionClientError):
    """The backend could not be reached or refused to open a session"""
    pass


class SessionVerificationError(SessionClientError):
    """A session could not be verified"""
    pass


class UnsupportedPaymentMethodError(SessionClientError):
    """Raised when a deferred payment method reaches the client"""
    pass


def build_customer_payload(
    identity: Optional[Identity] = None,
    form: Optional[GuestForm] = None,
) -> Optional[CustomerPayload]:
    """
    Build the customer block sent with a session request.

    Guest form details win over a signed-in identity. Returns None when
    neither supplies anything, and the request then omits the block.
    """
    if form is not None:
        address_parts = [
            part.strip()
            for part in (form.address, form.city, form.province)
            if part and part.strip()
        ]
        address = ", ".join(address_parts)
        if form.zip.strip():
            address = f"{address} {form.zip.strip()}".strip()
        return CustomerPayload(
            name=form.name.strip(),
            email=form.email.strip(),
            phone=form.phone.strip(),
            address=address,
        )

    if identity is not None:
        payload = CustomerPayload(
            name=identity.name,
            email=identity.email,
            phone=identity.phone,
            address=identity.address,
        )
        if any(payload.model_dump().values()):
            return payload

    return None


class CheckoutSessionClient:
    """
    Client for the payment backend's checkout-session API.

    Session creation is retried only when the connection could not be
    established, so a request the backend may have processed is never
    sent twice. Verification is read-only and retried on any transport
    error.
    """

    def __init__(
        self,
        backend_base_url: str,
        access_token: Optional[str] = None,
        timeout: float = 15.0,
        create_retries: int = 1,
        verify_retries: int = 1,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize session client.

        Args:
            backend_base_url: Base URL of the payment backend
            access_token: Bearer token sent when no per-call token is given
            timeout: Seconds before a call is abandoned
            create_retries: Extra attempts after a connection failure on create
            verify_retries: Extra attempts after a transport failure on verify
            transport: Optional httpx transport (tests use MockTransport)
        """
        self.base_url = backend_base_url.rstrip("/")
        self.access_token = access_token
        self.create_retries = max(0, create_retries)
        self.verify_retries = max(0, verify_retries)
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    def _generate_headers(self, access_token: Optional[str] = None) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        token = access_token or self.access_token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
        access_token: Optional[str] = None,
        retries: int = 0,
        retry_on: tuple[type[Exception], ...] = (httpx.TransportError,),
    ) -> dict[str, Any]:
        """Make an HTTP request, retrying on the given transport errors"""
        url = f"{self.base_url}{path}"
        headers = self._generate_headers(access_token)

        attempt = 0
        while True:
            try:
                response = await self._http_client.request(
                    method=method,
                    url=url,
                    headers=headers,
                    json=body,
                )
                break
            except retry_on as e:
                if attempt >= retries:
                    raise
                attempt += 1
                logger.warning(f"{method} {url} failed ({e!r}), retrying ({attempt}/{retries})")

        if response.status_code >= 400:
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            response.raise_for_status()

        return response.json()

    async def create_session(
        self,
        amount: float,
        description: str,
        method: PaymentMethod,
        customer: Optional[CustomerPayload] = None,
        access_token: Optional[str] = None,
    ) -> CheckoutSession:
        """
        Ask the backend to open a gateway checkout session.

        A successful response may still carry a null checkout_url; the
        caller decides what that means.
        """
        method = PaymentMethod(method)
        if method == PaymentMethod.ONLINE_BANKING:
            raise UnsupportedPaymentMethodError("Online banking sessions are not supported yet")

        request = CreateCheckoutSessionRequest(
            amount=amount,
            description=description,
            payment_method=method,
            customer=customer,
        )
        logger.info(f"Creating checkout session: {method.value} {amount} for '{description}'")

        try:
            data = await self._request(
                "POST",
                CHECKOUT_SESSION_PATH,
                body=request.model_dump(mode="json", exclude_none=True),
                access_token=access_token,
                retries=self.create_retries,
                retry_on=(httpx.ConnectError,),
            )
            session = CheckoutSession.model_validate(data)
        except httpx.HTTPStatusError as e:
            raise SessionCreationError(
                f"Failed to create checkout session: {e}",
                status_code=e.response.status_code,
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise SessionCreationError(f"Failed to create checkout session: {e}") from e

        if session.checkout_url:
            logger.info(f"Checkout session {session.checkout_id} created")
        else:
            logger.warning(f"Backend returned no checkout_url for session {session.checkout_id}")
        return session

    async def verify_session(
        self,
        checkout_id: str,
        access_token: Optional[str] = None,
    ) -> VerifiedSession:
        """Look up a session's payment status. Safe to call repeatedly."""
        try:
            data = await self._request(
                "GET",
                f"{CHECKOUT_SESSION_PATH}/{checkout_id}",
                access_token=access_token,
                retries=self.verify_retries,
            )
            return VerifiedSession.model_validate(data)
        except (httpx.HTTPError, ValueError) as e:
            raise SessionVerificationError(f"Verification failed: {e}") from e
