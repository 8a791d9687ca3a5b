"""
Products API endpoints (variant picker browsing).
"""

import logging
from fastapi import APIRouter, Query
from typing import Optional

from bc_picker.config import get_settings
from bc_picker.deps import get_catalog_client
from bc_picker.core.bigcommerce_client import BigCommerceError
from bc_picker.core.browse_session import BrowseSession
from bc_picker.core.variant_codec import (
    display_thumbnail,
    format_option_values,
    format_price,
    select_price,
)
from bc_picker.schemas.catalog import Product, Variant
from bc_picker.schemas.products import ProductCard, ProductListResponse, VariantCard, VariantListResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _variant_card(variant: Variant, selected_sku: Optional[str]) -> VariantCard:
    price = select_price(variant)
    return VariantCard(
        id=variant.id,
        sku=variant.sku,
        price=price,
        display_price=format_price(price, get_settings().currency_symbol),
        options_label=format_option_values(variant),
        inventory_level=variant.inventory_level,
        is_selected=selected_sku is not None and variant.sku == selected_sku
    )


def _product_card(product: Product, selected_sku: Optional[str]) -> ProductCard:
    return ProductCard(
        id=product.id,
        name=product.name,
        sku=product.sku,
        thumbnail=display_thumbnail(product),
        variants=[_variant_card(v, selected_sku) for v in product.variants]
    )


@router.get("", response_model=ProductListResponse)
async def list_products(
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=250),
    keyword: Optional[str] = Query(None),
    selected_sku: Optional[str] = Query(None)
):
    """
    List or search products with their variants.
    """
    limit = limit or get_settings().page_size
    client = get_catalog_client()

    try:
        session = BrowseSession(client, page_size=limit, selected_sku=selected_sku)
        await session.load(keyword=keyword, page=page)

        if session.error:
            logger.warning(f"Product browse failed: {session.error}")

        return ProductListResponse(
            page=page,
            limit=limit,
            keyword=keyword,
            items=[_product_card(p, session.selected_sku) for p in session.results],
            error=session.error
        )
    finally:
        await client.close()


@router.get("/{product_id}/variants", response_model=VariantListResponse)
async def list_product_variants(product_id: int, selected_sku: Optional[str] = Query(None)):
    """
    Get all variants of a product.
    """
    client = get_catalog_client()

    try:
        variants = await client.get_product_variants(product_id)
        return VariantListResponse(
            product_id=product_id,
            items=[_variant_card(v, selected_sku) for v in variants]
        )
    except BigCommerceError as e:
        logger.warning(f"Variant fetch failed for product {product_id}: {e}")
        return VariantListResponse(product_id=product_id, items=[], error=str(e))
    finally:
        await client.close()
