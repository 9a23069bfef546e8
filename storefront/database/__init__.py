# Storage modules

from .storage import KeyValueStorage, InMemoryStorage, JsonFileStorage
from .drafts import CheckoutDraftStore, HandoffStore, DRAFT_KEY, LAST_CHECKOUT_ID_KEY

__all__ = [
    "KeyValueStorage",
    "InMemoryStorage",
    "JsonFileStorage",
    "CheckoutDraftStore",
    "HandoffStore",
    "DRAFT_KEY",
    "LAST_CHECKOUT_ID_KEY",
]
