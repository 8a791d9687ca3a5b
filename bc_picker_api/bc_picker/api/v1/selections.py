"""
Selection field endpoints: encode a selection for storage, decode a stored value.
"""

import logging
from fastapi import APIRouter, HTTPException, status
from typing import Optional

from bc_picker.core.variant_codec import UnrecognizedRecordError, decode, encode
from bc_picker.schemas.selection import DecodeRequest, DisplayView, SelectionRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/encode")
async def encode_selection(request: SelectionRequest):
    """
    Build the flat record to write into the selection field.
    """
    record = encode(request.product, request.variant)
    logger.info(f"Encoded selection for variant {record.variant_sku}")
    return record.to_field_value()


@router.post("/decode", response_model=Optional[DisplayView], response_model_exclude_none=True)
async def decode_selection(request: DecodeRequest):
    """
    Decode a stored field value (legacy SKU, nested or flat record).
    """
    try:
        return decode(request.value)
    except UnrecognizedRecordError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e)
        )
