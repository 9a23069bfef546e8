# Storefront Routes

from .checkout import router as checkout_router
from .confirmation import router as confirmation_router

__all__ = ["checkout_router", "confirmation_router"]
