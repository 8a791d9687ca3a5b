"""
Persisted selection schemas.

Three record shapes coexist in host field storage:
- legacy: a bare variant SKU string
- nested: {"variant": {...}, "product": {...}} (read-only)
- flat: the current write format (FlatRecord)

Every shape decodes into a DisplayView.
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Any

from bc_picker.schemas.catalog import Product, Variant


class OptionPair(BaseModel):
    """Option entry of a flat record."""
    name: str = ""
    value: str = ""


class FlatRecord(BaseModel):
    """Denormalized selection record, persisted with camelCase keys."""
    variant_id: int = Field(..., alias="variantId")
    variant_sku: str = Field(..., alias="variantSku")
    product_id: int = Field(..., alias="productId")
    product_name: str = Field(..., alias="productName")
    price: Optional[float] = None
    image_url: str = Field("", alias="imageUrl")
    options: List[OptionPair] = Field(default_factory=list)

    class Config:
        populate_by_name = True

    def to_field_value(self) -> dict:
        """Return the JSON object stored in the host field."""
        return self.model_dump(by_alias=True)


class PartialOptionValue(BaseModel):
    """Option value as recovered from a persisted record."""
    id: Optional[int] = None
    label: Optional[str] = None
    option_display_name: Optional[str] = None

    class Config:
        extra = "allow"


class PartialImage(BaseModel):
    url_thumbnail: Optional[str] = None
    url_standard: Optional[str] = None

    class Config:
        extra = "allow"


class PartialVariant(BaseModel):
    """Variant fields recoverable from a persisted record; absent fields stay None."""
    id: Optional[int] = None
    product_id: Optional[int] = None
    sku: Optional[str] = None
    price: Optional[float] = None
    calculated_price: Optional[float] = None
    option_values: Optional[List[PartialOptionValue]] = None

    class Config:
        extra = "allow"
        coerce_numbers_to_str = True


class PartialProduct(BaseModel):
    """Product fields recoverable from a persisted record; absent fields stay None."""
    id: Optional[int] = None
    name: Optional[str] = None
    sku: Optional[str] = None
    primary_image: Optional[PartialImage] = None
    images: Optional[List[PartialImage]] = None

    class Config:
        extra = "allow"
        coerce_numbers_to_str = True


class DisplayView(BaseModel):
    """Display-ready selection. Legacy records carry no product."""
    variant: PartialVariant
    product: Optional[PartialProduct] = None


class SelectionRequest(BaseModel):
    """Selected (product, variant) pair."""
    product: Product
    variant: Variant


class DecodeRequest(BaseModel):
    """Raw value read from a host field."""
    value: Any = None
