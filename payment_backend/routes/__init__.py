# API Routes

from .payments import router as payments_router

__all__ = ["payments_router"]
