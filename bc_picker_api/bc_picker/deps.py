"""
Dependency helpers for FastAPI.
"""

from fastapi import HTTPException, status

from bc_picker.config import get_settings, validate_credentials
from bc_picker.core.bigcommerce_client import BigCommerceClient


def get_catalog_client() -> BigCommerceClient:
    """
    Create BigCommerceClient from settings.

    Returns:
        BigCommerceClient instance (caller closes it).

    Raises:
        HTTPException: If credentials are not configured.
    """
    settings = get_settings()

    is_valid, error = validate_credentials(
        settings.bigcommerce_store_hash,
        settings.bigcommerce_access_token
    )
    if not is_valid:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error
        )

    return BigCommerceClient(
        store_hash=settings.bigcommerce_store_hash,
        access_token=settings.bigcommerce_access_token,
        api_base=settings.bigcommerce_api_base,
        use_cors_proxy=settings.use_cors_proxy,
        cors_proxy_url=settings.cors_proxy_url
    )
