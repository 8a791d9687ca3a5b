"""
Rich text embed schemas.
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any

from bc_picker.schemas.catalog import Product, Variant
from bc_picker.schemas.selection import DisplayView


class EmbedRequest(BaseModel):
    """Insert a selected variant into a rich text document."""
    document: Optional[Dict[str, Any]] = Field(None, description="Current field value (may be empty)")
    product: Product
    variant: Variant
    with_price: bool = Field(False, description="Append the formatted price to the link text")
    marker: Optional[str] = Field(None, description="Prefix for the link text, e.g. an emoji")


class EmbedResponse(BaseModel):
    """Updated document and the inserted hyperlink node."""
    document: Dict[str, Any]
    fragment: Dict[str, Any]


class DocumentRequest(BaseModel):
    document: Optional[Dict[str, Any]] = None


class EmbeddedSelectionsResponse(BaseModel):
    items: List[DisplayView] = Field(default_factory=list)
