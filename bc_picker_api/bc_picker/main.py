"""
FastAPI application entry point.
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bc_picker.api.v1.router import router as v1_router
from bc_picker.config import get_settings, validate_credentials
from bc_picker.schemas.common import HealthResponse

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logging.getLogger("httpx").setLevel(logging.WARNING)


app = FastAPI(
    title="BigCommerce Variant Picker API",
    description="Backend for browsing BigCommerce variants and embedding them into Contentful fields",
    version="1.0.0"
)

# The host platform loads the picker views in iframes on its own origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(v1_router, prefix="/api/v1")


@app.get("/api/v1/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    """Health check endpoint."""
    configured, _ = validate_credentials(
        settings.bigcommerce_store_hash,
        settings.bigcommerce_access_token
    )
    return HealthResponse(ok=True, configured=configured)


@app.get("/", tags=["root"])
async def root():
    """Root endpoint."""
    return {
        "message": "BigCommerce Variant Picker API",
        "version": "1.0.0",
        "docs": "/docs"
    }
