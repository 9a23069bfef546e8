"""
Mock Payment Backend

Stands in for the trusted backend the storefront calls to open and verify
payment-gateway checkout sessions.
"""

import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from .routes import payments_router
from .database import session_db

# Load environment variables
load_dotenv(os.path.join(os.path.dirname(__file__), "..", "config", ".env"))

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Mock payment backend starting up...")
    logger.info(f"Gateway base URL: {session_db.gateway_base_url}")
    yield
    logger.info("Mock payment backend shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Mock Payment Backend",
    description="Simulated checkout-session backend for storefront development",
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

# Include API routers
app.include_router(payments_router)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "payment-backend"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "payment_backend.main:app",
        host="0.0.0.0",
        port=8001,
        reload=True,
    )
