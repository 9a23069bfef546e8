"""Shopper session management"""

import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional
from dataclasses import dataclass, field

from ..database.drafts import CheckoutDraftStore, HandoffStore
from ..database.storage import KeyValueStorage, InMemoryStorage, JsonFileStorage
from ..models.forms import GuestForm
from ..services.checkout_controller import CheckoutController
from ..services.session_client import CheckoutSessionClient

logger = logging.getLogger(__name__)


@dataclass
class ShopperSession:
    """Checkout state kept for one shopper across requests"""
    shopper_id: str
    created_at: datetime
    updated_at: datetime
    storage: KeyValueStorage
    controller: CheckoutController
    form: GuestForm = field(default_factory=GuestForm)

    @property
    def drafts(self) -> CheckoutDraftStore:
        return self.controller.draft_store

    @property
    def handoff(self) -> HandoffStore:
        return self.controller.handoff_store

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()


class SessionManager:
    """Manages shopper sessions"""

    def __init__(
        self,
        client_factory: Callable[[], CheckoutSessionClient],
        storage_dir: Optional[str] = None,
        free_shipping_threshold: float = 5000,
        handling_fee: float = 99,
        max_age_hours: int = 24,
        cleanup_interval_seconds: float = 600,
    ):
        self.sessions: dict[str, ShopperSession] = {}
        self.client_factory = client_factory
        self.storage_dir = storage_dir
        self.free_shipping_threshold = free_shipping_threshold
        self.handling_fee = handling_fee
        self.max_age_hours = max_age_hours
        self.cleanup_interval_seconds = cleanup_interval_seconds
        self._last_cleanup = datetime.utcnow()

    def _storage_for(self, shopper_id: str) -> KeyValueStorage:
        if self.storage_dir:
            return JsonFileStorage(Path(self.storage_dir) / f"{shopper_id}.json")
        return InMemoryStorage()

    def create_session(self, shopper_id: Optional[str] = None) -> ShopperSession:
        """Create a new session"""
        now = datetime.utcnow()
        shopper_id = shopper_id or uuid.uuid4().hex
        storage = self._storage_for(shopper_id)
        controller = CheckoutController(
            session_client=self.client_factory(),
            draft_store=CheckoutDraftStore(storage),
            handoff_store=HandoffStore(storage),
            free_shipping_threshold=self.free_shipping_threshold,
            handling_fee=self.handling_fee,
        )
        session = ShopperSession(
            shopper_id=shopper_id,
            created_at=now,
            updated_at=now,
            storage=storage,
            controller=controller,
        )
        self.sessions[shopper_id] = session
        return session

    def get_session(self, shopper_id: str) -> Optional[ShopperSession]:
        """Get session by shopper ID"""
        return self.sessions.get(shopper_id)

    def get_or_create_session(self, shopper_id: Optional[str] = None) -> ShopperSession:
        """Get existing session or create new one"""
        self._maybe_cleanup()
        if shopper_id and shopper_id in self.sessions:
            session = self.sessions[shopper_id]
            session.touch()
            return session
        # Reuse the id so file-backed storage from an earlier process is found again
        return self.create_session(shopper_id)

    def cleanup_old_sessions(self, max_age_hours: int = 24) -> int:
        """Remove sessions older than max_age_hours"""
        now = datetime.utcnow()
        old_sessions = [
            sid for sid, session in self.sessions.items()
            if (now - session.updated_at).total_seconds() > max_age_hours * 3600
        ]
        for sid in old_sessions:
            del self.sessions[sid]
        return len(old_sessions)

    def _maybe_cleanup(self) -> None:
        """Drop idle sessions at most once per cleanup interval"""
        now = datetime.utcnow()
        if (now - self._last_cleanup).total_seconds() < self.cleanup_interval_seconds:
            return
        self._last_cleanup = now
        removed = self.cleanup_old_sessions(self.max_age_hours)
        if removed:
            logger.info(f"Removed {removed} idle shopper session(s)")
