"""
Contentful content type provisioning for stored product selections.
"""

import logging
from typing import Any, Dict, Optional, Tuple

import httpx

logger = logging.getLogger(__name__)

CONTENT_TYPE_ID = "bigcommerceProduct"
MANAGEMENT_API_BASE = "https://api.contentful.com"
MANAGEMENT_CONTENT_TYPE = "application/vnd.contentful.management.v1+json"

PRODUCT_CONTENT_TYPE: Dict[str, Any] = {
    "name": "BigCommerce Product",
    "displayField": "title",
    "fields": [
        {"id": "title", "name": "Title", "type": "Symbol", "required": True},
        {"id": "variantId", "name": "Variant ID", "type": "Integer", "required": True},
        {"id": "variantSku", "name": "Variant SKU", "type": "Symbol", "required": True},
        {"id": "productId", "name": "Product ID", "type": "Integer", "required": True},
        {"id": "productName", "name": "Product Name", "type": "Symbol", "required": True},
        {"id": "price", "name": "Price", "type": "Number", "required": True},
        {"id": "imageUrl", "name": "Image URL", "type": "Symbol", "required": False},
        {"id": "productData", "name": "Product Data", "type": "Object", "required": False},
    ],
}


class ProvisioningError(Exception):
    """Content type could not be checked, created or published."""
    pass


def create_management_client(access_token: str, transport: Optional[httpx.BaseTransport] = None) -> httpx.Client:
    """HTTP client for the Contentful Content Management API."""
    return httpx.Client(
        base_url=MANAGEMENT_API_BASE,
        timeout=30.0,
        transport=transport,
        headers={
            "Authorization": f"Bearer {access_token}",
            "Content-Type": MANAGEMENT_CONTENT_TYPE
        }
    )


def ensure_product_content_type(
    client: httpx.Client,
    space_id: str,
    environment: str = "master"
) -> Tuple[bool, Dict[str, Any]]:
    """
    Create and publish the product content type unless it already exists.

    Args:
        client: Management API client
        space_id: Contentful space ID
        environment: Environment ID

    Returns:
        (created, content_type) - created is False when it already existed

    Raises:
        ProvisioningError: On any API failure other than "not found"
    """
    path = f"/spaces/{space_id}/environments/{environment}/content_types/{CONTENT_TYPE_ID}"

    try:
        response = client.get(path)
        if response.status_code == 200:
            logger.info(f'Content type "{CONTENT_TYPE_ID}" already exists')
            return False, response.json()
        if response.status_code != 404:
            raise ProvisioningError(f"HTTP {response.status_code}: {response.text[:200]}")

        response = client.put(path, json=PRODUCT_CONTENT_TYPE)
        if response.status_code not in (200, 201):
            raise ProvisioningError(f"Create failed with HTTP {response.status_code}: {response.text[:200]}")
        created = response.json()

        version = created.get("sys", {}).get("version")
        response = client.put(
            f"{path}/published",
            headers={"X-Contentful-Version": str(version)}
        )
        if response.status_code not in (200, 201):
            raise ProvisioningError(f"Publish failed with HTTP {response.status_code}: {response.text[:200]}")

    except httpx.HTTPError as e:
        raise ProvisioningError(f"Request error: {e}") from e

    logger.info(f'Content type "{CONTENT_TYPE_ID}" created')
    return True, response.json()
