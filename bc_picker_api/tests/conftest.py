"""Pytest fixtures for catalog, codec and embed tests."""

import httpx
import pytest

from bc_picker.core.bigcommerce_client import BigCommerceClient
from bc_picker.schemas.catalog import Product, Variant


def make_variant(**overrides) -> Variant:
    data = {
        "id": 77,
        "product_id": 12,
        "sku": "V-1",
        "price": 10.0,
        "calculated_price": 8.0,
        "inventory_level": 3,
        "option_values": [
            {"id": 1, "label": "L", "option_display_name": "Size"},
            {"id": 2, "label": "Red", "option_display_name": "Color"},
        ],
    }
    data.update(overrides)
    return Variant.model_validate(data)


def make_product(**overrides) -> Product:
    data = {
        "id": 12,
        "name": "Widget",
        "sku": "W-1",
        "price": 10.0,
        "variants": [make_variant().model_dump()],
        "primary_image": {"url_thumbnail": "https://cdn.example.com/w-thumb.jpg"},
        "images": [{"url_thumbnail": "https://cdn.example.com/gallery-0.jpg"}],
    }
    data.update(overrides)
    return Product.model_validate(data)


@pytest.fixture
def product() -> Product:
    return make_product()


@pytest.fixture
def variant() -> Variant:
    return make_variant()


@pytest.fixture
def make_client():
    """Build a BigCommerceClient whose requests are answered by ``handler``."""
    def _make(handler, **kwargs) -> BigCommerceClient:
        return BigCommerceClient(
            store_hash="abc123",
            access_token="secret-token",
            transport=httpx.MockTransport(handler),
            **kwargs
        )
    return _make
