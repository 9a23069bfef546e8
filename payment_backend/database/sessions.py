"""Checkout session storage for the mock payment backend"""

import uuid
from datetime import datetime
from typing import Optional

from ..models import CreateSessionRequest, GatewaySession, SessionStatus


class SessionDatabase:
    """In-memory checkout session storage"""

    def __init__(self, gateway_base_url: str = "http://localhost:8002"):
        self.gateway_base_url = gateway_base_url.rstrip("/")
        self.sessions: dict[str, GatewaySession] = {}

    def create_session(self, request: CreateSessionRequest) -> GatewaySession:
        """Open a new session"""
        now = datetime.utcnow()
        checkout_id = f"cs_{uuid.uuid4().hex[:24]}"
        session = GatewaySession(
            checkout_id=checkout_id,
            checkout_url=f"{self.gateway_base_url}/checkout/{checkout_id}",
            amount=request.amount,
            description=request.description,
            payment_method=request.payment_method,
            customer=request.customer,
            created_at=now,
            updated_at=now,
        )
        self.sessions[checkout_id] = session
        return session

    def get_session(self, checkout_id: str) -> Optional[GatewaySession]:
        """Get a session by ID"""
        return self.sessions.get(checkout_id)

    def mark_paid(self, checkout_id: str) -> Optional[GatewaySession]:
        """Record a completed payment; repeating it changes nothing"""
        session = self.get_session(checkout_id)
        if not session:
            return None

        if session.status != SessionStatus.PAID:
            session.status = SessionStatus.PAID
            session.payment_intent_id = f"pi_{uuid.uuid4().hex[:24]}"
            session.updated_at = datetime.utcnow()
        return session
