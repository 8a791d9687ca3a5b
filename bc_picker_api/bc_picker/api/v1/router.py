"""
Main API router for v1.
"""

from fastapi import APIRouter
from bc_picker.api.v1 import products, selections, rich_text

router = APIRouter()

router.include_router(products.router, prefix="/products", tags=["products"])
router.include_router(selections.router, prefix="/selections", tags=["selections"])
router.include_router(rich_text.router, prefix="/rich-text", tags=["rich-text"])
