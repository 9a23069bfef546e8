"""Shared route dependencies for the storefront"""

import re
from typing import Optional

from fastapi import Header, Request
from fastapi.responses import Response

from ..core.config import settings
from ..core.session import SessionManager, ShopperSession
from ..models.forms import Identity
from ..services.session_client import CheckoutSessionClient

SHOPPER_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")

# Initialize services (would be dependency injected in production)
session_client: Optional[CheckoutSessionClient] = None
session_manager: Optional[SessionManager] = None


def get_session_client() -> CheckoutSessionClient:
    """Get or create the payment backend client"""
    global session_client
    if session_client is None:
        session_client = CheckoutSessionClient(
            backend_base_url=settings.payment_backend_url,
            access_token=settings.backend_access_token,
            timeout=settings.session_timeout_seconds,
            create_retries=settings.session_create_retries,
        )
    return session_client


def get_session_manager() -> SessionManager:
    """Get or create the shopper session manager"""
    global session_manager
    if session_manager is None:
        session_manager = SessionManager(
            client_factory=get_session_client,
            storage_dir=settings.storage_dir,
            free_shipping_threshold=settings.free_shipping_threshold,
            handling_fee=settings.handling_fee,
            max_age_hours=settings.session_max_age_hours,
            cleanup_interval_seconds=settings.session_cleanup_interval_seconds,
        )
    return session_manager


def get_shopper(request: Request) -> ShopperSession:
    """Resolve the shopper from their cookie, starting a session if needed"""
    manager = get_session_manager()
    shopper_id = request.cookies.get(settings.shopper_cookie_name)
    if shopper_id and not SHOPPER_ID_PATTERN.match(shopper_id):
        shopper_id = None
    return manager.get_or_create_session(shopper_id)


def get_identity(
    x_user_name: Optional[str] = Header(None),
    x_user_email: Optional[str] = Header(None),
    authorization: Optional[str] = Header(None),
) -> Optional[Identity]:
    """Signed-in identity forwarded by the auth provider, if any"""
    access_token = None
    if authorization and authorization.lower().startswith("bearer "):
        access_token = authorization[7:].strip() or None

    if not (x_user_name or x_user_email or access_token):
        return None
    return Identity(name=x_user_name, email=x_user_email, access_token=access_token)


def remember_shopper(response: Response, shopper: ShopperSession) -> Response:
    """Attach the shopper cookie to an outgoing response"""
    response.set_cookie(
        settings.shopper_cookie_name,
        shopper.shopper_id,
        httponly=True,
        samesite="lax",
    )
    return response
