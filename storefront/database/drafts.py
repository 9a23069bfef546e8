"""Checkout draft and hand-off persistence"""

import logging
from typing import Optional

from pydantic import ValidationError

from ..models.selection import CheckoutDraft
from .storage import KeyValueStorage

logger = logging.getLogger(__name__)

DRAFT_KEY = "guest_checkout"
LAST_CHECKOUT_ID_KEY = "last_checkout_id"


class CheckoutDraftStore:
    """Holds at most one pending guest checkout"""

    def __init__(self, storage: KeyValueStorage, key: str = DRAFT_KEY):
        self.storage = storage
        self.key = key

    def save(self, draft: CheckoutDraft) -> None:
        """Persist a draft, replacing any earlier one"""
        self.storage.set(self.key, draft.model_dump_json(by_alias=True))
        logger.info(f"Saved checkout draft for {draft.product.name} x{draft.quantity}")

    def load(self) -> Optional[CheckoutDraft]:
        """
        Load the pending draft.

        Returns None when there is no draft or it cannot be parsed; callers
        send the shopper back to the landing page in that case.
        """
        raw = self.storage.get(self.key)
        if raw is None:
            return None
        try:
            return CheckoutDraft.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding malformed checkout draft: {e.error_count()} error(s)")
            return None

    def clear(self) -> None:
        """Remove the draft once its session URL is confirmed"""
        self.storage.remove(self.key)
        logger.info("Cleared checkout draft")


class HandoffStore:
    """Remembers the last checkout id for the order confirmation page"""

    def __init__(self, storage: KeyValueStorage, key: str = LAST_CHECKOUT_ID_KEY):
        self.storage = storage
        self.key = key

    def save_checkout_id(self, checkout_id: str) -> None:
        self.storage.set(self.key, checkout_id)

    def last_checkout_id(self) -> Optional[str]:
        return self.storage.get(self.key) or None
