"""Storefront Configuration"""

from typing import Optional
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "AF Home Storefront"
    debug: bool = True
    host: str = "0.0.0.0"
    port: int = 8000

    # Payment backend
    payment_backend_url: str = "http://localhost:8001"
    backend_access_token: Optional[str] = None
    session_timeout_seconds: float = 15.0
    session_create_retries: int = 1

    # Pricing
    free_shipping_threshold: float = 5000
    handling_fee: float = 99
    currency: str = "PHP"

    # Shopper storage (None keeps drafts in memory)
    storage_dir: Optional[str] = None
    shopper_cookie_name: str = "shopper_id"
    landing_url: str = "/"
    guest_checkout_url: str = "/checkout/customer"
    session_max_age_hours: int = 24
    session_cleanup_interval_seconds: float = 600

    class Config:
        env_file = "config/.env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @property
    def backend_configured(self) -> bool:
        """Check if a payment backend URL is set"""
        return bool(self.payment_backend_url)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
