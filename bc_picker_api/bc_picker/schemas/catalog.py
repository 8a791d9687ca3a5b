"""
BigCommerce catalog schemas.

Records are built from upstream API responses only and are immutable.
"""

from pydantic import BaseModel, Field
from typing import Optional, List


class ProductImage(BaseModel):
    """Product image URLs."""
    url_thumbnail: Optional[str] = None
    url_standard: Optional[str] = None

    class Config:
        frozen = True
        extra = "ignore"


class OptionValue(BaseModel):
    """Option value of a variant (e.g. Size: L)."""
    id: Optional[int] = None
    label: Optional[str] = None
    option_display_name: Optional[str] = None

    class Config:
        frozen = True
        extra = "ignore"


class Variant(BaseModel):
    """Purchasable configuration of a product, identified by SKU."""
    id: int
    product_id: int
    sku: str
    price: Optional[float] = None
    calculated_price: Optional[float] = None
    inventory_level: Optional[int] = None
    image_url: Optional[str] = None
    option_values: List[OptionValue] = Field(default_factory=list)

    class Config:
        frozen = True
        extra = "ignore"
        json_schema_extra = {
            "example": {
                "id": 77,
                "product_id": 12,
                "sku": "W-1-L-RED",
                "price": 10.0,
                "calculated_price": 8.0,
                "inventory_level": 4,
                "option_values": [
                    {"id": 1, "label": "L", "option_display_name": "Size"}
                ]
            }
        }


class Product(BaseModel):
    """Catalog product with its variants and images."""
    id: int
    name: str
    sku: Optional[str] = None
    price: Optional[float] = None
    calculated_price: Optional[float] = None
    variants: List[Variant] = Field(default_factory=list)
    primary_image: Optional[ProductImage] = None
    images: List[ProductImage] = Field(default_factory=list)

    class Config:
        frozen = True
        extra = "ignore"
