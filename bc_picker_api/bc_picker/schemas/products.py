"""
Product browsing schemas.
"""

from pydantic import BaseModel, Field
from typing import Optional, List


class VariantCard(BaseModel):
    """Variant row of the picker."""
    id: int
    sku: str
    price: Optional[float] = None
    display_price: str = ""
    options_label: str = ""
    inventory_level: Optional[int] = None
    is_selected: bool = False


class ProductCard(BaseModel):
    """Product with its variants for the picker grid."""
    id: int
    name: str
    sku: Optional[str] = None
    thumbnail: str
    variants: List[VariantCard] = Field(default_factory=list)


class ProductListResponse(BaseModel):
    """Product list response. A failed fetch yields no items and an error."""
    page: int
    limit: int
    keyword: Optional[str] = None
    items: List[ProductCard] = Field(default_factory=list)
    error: Optional[str] = None


class VariantListResponse(BaseModel):
    """Variants of one product."""
    product_id: int
    items: List[VariantCard] = Field(default_factory=list)
    error: Optional[str] = None
