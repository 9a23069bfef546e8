"""
Storefront Application

Shopper-facing checkout service: prices selections, keeps guest checkout
drafts, opens payment-gateway sessions through the payment backend and
redirects shoppers to the gateway.
"""

import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from .routes import checkout_router, confirmation_router
from .routes import dependencies
from .core.config import settings

# Load environment variables
load_dotenv(os.path.join(os.path.dirname(__file__), "..", "config", ".env"))

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Storefront starting up...")
    logger.info(f"Payment backend: {settings.payment_backend_url}")
    logger.info(f"Draft storage: {settings.storage_dir or 'in-memory'}")

    yield

    logger.info("Storefront shutting down...")
    if dependencies.session_client:
        await dependencies.session_client.close()


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Checkout and payment session orchestration for the AF Home storefront",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(checkout_router)
app.include_router(confirmation_router)


@app.get("/")
async def home():
    """Storefront landing"""
    return {
        "message": "AF Home Storefront API",
        "docs": "/docs",
        "endpoints": {
            "buy_now": "/api/checkout/buy-now",
            "draft": "/api/checkout/draft",
            "submit": "/api/checkout/submit",
            "confirmation": "/checkout/success",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "storefront",
        "backend_configured": settings.backend_configured,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
