# Database modules

import os

from .sessions import SessionDatabase

# Singleton instance
session_db = SessionDatabase(
    gateway_base_url=os.getenv("GATEWAY_BASE_URL", "http://localhost:8002"),
)

__all__ = ["session_db", "SessionDatabase"]
