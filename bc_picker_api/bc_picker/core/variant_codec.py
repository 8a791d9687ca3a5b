"""
Variant selection codec.

Projects a selected (product, variant) pair into the flat record written to
host field storage, and decodes every historical record shape back into a
display view.
"""

import logging
from typing import Any, Optional

from pydantic import ValidationError

from bc_picker.schemas.catalog import Product, Variant
from bc_picker.schemas.selection import (
    DisplayView,
    FlatRecord,
    OptionPair,
    PartialImage,
    PartialOptionValue,
    PartialProduct,
    PartialVariant,
)

logger = logging.getLogger(__name__)

PLACEHOLDER_IMAGE_URL = "https://via.placeholder.com/100?text=No+Image"


class UnrecognizedRecordError(ValueError):
    """Stored value matches none of the known record shapes."""
    pass


def select_price(variant: Variant) -> Optional[float]:
    """Calculated price wins over list price."""
    if variant.calculated_price is not None:
        return variant.calculated_price
    return variant.price


def select_thumbnail(product: Product) -> str:
    """
    Thumbnail persisted with a selection.

    Primary image first, then the first gallery image, then ''.
    """
    if product.primary_image and product.primary_image.url_thumbnail:
        return product.primary_image.url_thumbnail
    if product.images and product.images[0].url_thumbnail:
        return product.images[0].url_thumbnail
    return ""


def display_thumbnail(product, placeholder: str = PLACEHOLDER_IMAGE_URL) -> str:
    """Thumbnail for a preview card (Product or PartialProduct), else a placeholder image."""
    if product is None:
        return placeholder
    primary = getattr(product, "primary_image", None)
    images = getattr(product, "images", None) or []
    if primary and primary.url_thumbnail:
        return primary.url_thumbnail
    if images and images[0].url_thumbnail:
        return images[0].url_thumbnail
    return placeholder


def format_price(price: Optional[float], currency_symbol: str = "£") -> str:
    """Format price with two decimals, '' when unknown."""
    if price is None:
        return ""
    return f"{currency_symbol}{price:.2f}"


def format_option_values(variant) -> str:
    """Format option values as 'Size: L, Color: Red'."""
    option_values = getattr(variant, "option_values", None) or []
    return ", ".join(
        f"{opt.option_display_name or ''}: {opt.label or ''}"
        for opt in option_values
    )


def encode(product: Product, variant: Variant) -> FlatRecord:
    """
    Project a selection into the flat record.

    Args:
        product: Owning product
        variant: Selected variant

    Returns:
        FlatRecord (persist via ``to_field_value()``)
    """
    return FlatRecord(
        variant_id=variant.id,
        variant_sku=variant.sku,
        product_id=product.id,
        product_name=product.name,
        price=select_price(variant),
        image_url=select_thumbnail(product),
        options=[
            OptionPair(name=opt.option_display_name or "", value=opt.label or "")
            for opt in variant.option_values
        ]
    )


def _decode_flat(raw: dict) -> DisplayView:
    variant = PartialVariant(
        id=raw.get("variantId"),
        sku=raw["variantSku"],
        price=raw.get("price"),
        option_values=[
            PartialOptionValue(option_display_name=opt.get("name"), label=opt.get("value"))
            for opt in (raw.get("options") or [])
            if isinstance(opt, dict)
        ]
    )
    image_url = raw.get("imageUrl")
    product = PartialProduct(
        id=raw.get("productId"),
        name=raw.get("productName"),
        primary_image=PartialImage(url_thumbnail=image_url) if image_url else None
    )
    return DisplayView(variant=variant, product=product)


def _decode_nested(raw: dict) -> DisplayView:
    product = raw.get("product")
    return DisplayView(
        variant=PartialVariant.model_validate(raw["variant"]),
        product=PartialProduct.model_validate(product) if product is not None else None
    )


def decode(raw: Any) -> Optional[DisplayView]:
    """
    Decode a stored field value into a display view.

    Args:
        raw: None, legacy SKU string, nested record or flat record

    Returns:
        DisplayView, or None when nothing is selected

    Raises:
        UnrecognizedRecordError: If the value matches no known shape
    """
    if raw is None or raw == "":
        return None

    if isinstance(raw, str):
        return DisplayView(variant=PartialVariant(sku=raw), product=None)

    if isinstance(raw, dict):
        try:
            if "variantSku" in raw:
                return _decode_flat(raw)
            if isinstance(raw.get("variant"), dict):
                return _decode_nested(raw)
        except ValidationError as e:
            raise UnrecognizedRecordError(f"Malformed selection record: {e.error_count()} invalid field(s)") from e

    logger.warning(f"Unrecognized selection record of type {type(raw).__name__}")
    raise UnrecognizedRecordError(f"Unrecognized selection record: {type(raw).__name__}")


def selected_sku(raw: Any) -> Optional[str]:
    """SKU of the stored selection, used to highlight the current variant."""
    view = decode(raw)
    return view.variant.sku if view else None
