"""
Rich text embed endpoints.
"""

import logging
from fastapi import APIRouter

from bc_picker.config import get_settings
from bc_picker.core.rich_text import (
    append_to_document,
    build_embed_fragment,
    build_embed_label,
    extract_embedded_selections,
)
from bc_picker.schemas.rich_text import (
    DocumentRequest,
    EmbeddedSelectionsResponse,
    EmbedRequest,
    EmbedResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/embed", response_model=EmbedResponse)
async def embed_product(request: EmbedRequest):
    """
    Append a product link paragraph to a rich text document.
    """
    settings = get_settings()
    label = build_embed_label(
        request.product,
        request.variant,
        with_price=request.with_price,
        currency_symbol=settings.currency_symbol,
        marker=request.marker
    )
    fragment = build_embed_fragment(
        request.product,
        request.variant,
        scheme=settings.embed_uri_scheme,
        label=label
    )
    document = append_to_document(request.document, fragment)
    logger.info(f"Product {request.variant.sku} added to content")
    return EmbedResponse(document=document, fragment=fragment)


@router.post("/selections", response_model=EmbeddedSelectionsResponse, response_model_exclude_none=True)
async def embedded_selections(request: DocumentRequest):
    """
    Decode every product embedded in a rich text document.
    """
    items = extract_embedded_selections(request.document, scheme=get_settings().embed_uri_scheme)
    return EmbeddedSelectionsResponse(items=items)
