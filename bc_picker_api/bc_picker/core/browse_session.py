"""
Browsing session state for the variant picker.

Each load is tagged with a sequence number; only the latest load may
publish results, so a slow earlier response cannot overwrite newer ones.
"""

import itertools
import logging
from typing import List, Optional

from bc_picker.core.bigcommerce_client import BigCommerceClient, BigCommerceError
from bc_picker.core.variant_codec import encode
from bc_picker.schemas.catalog import Product, Variant
from bc_picker.schemas.selection import FlatRecord

logger = logging.getLogger(__name__)


class BrowseSession:
    """
    Per-session picker state: current results, error and selected SKU.
    """

    def __init__(self, client: BigCommerceClient, page_size: int = 50, selected_sku: Optional[str] = None):
        self.client = client
        self.page_size = page_size
        self.results: List[Product] = []
        self.error: Optional[str] = None
        self.selected_sku = selected_sku
        self.loading = False
        self._sequence = itertools.count(1)
        self._latest = 0

    async def load(self, keyword: Optional[str] = None, page: int = 1) -> bool:
        """
        Load one page of products, searching when a keyword is given.

        Returns:
            True if this load published its outcome, False if it was superseded
        """
        seq = next(self._sequence)
        self._latest = seq
        self.loading = True
        self.error = None

        try:
            if keyword:
                products = await self.client.search_products(keyword, page=page, limit=self.page_size)
            else:
                products = await self.client.get_products(page=page, limit=self.page_size)
        except BigCommerceError as e:
            if seq != self._latest:
                logger.debug(f"Discarding failed load #{seq}, superseded by #{self._latest}")
                return False
            self.results = []
            self.error = str(e)
            self.loading = False
            return True

        if seq != self._latest:
            logger.debug(f"Discarding load #{seq}, superseded by #{self._latest}")
            return False

        self.results = products
        self.loading = False
        logger.debug(f"Load #{seq} published {len(products)} products")
        return True

    def is_selected(self, variant: Variant) -> bool:
        return self.selected_sku is not None and variant.sku == self.selected_sku

    def select(self, product: Product, variant: Variant) -> FlatRecord:
        """Mark a variant as selected and return the record to persist."""
        self.selected_sku = variant.sku
        return encode(product, variant)

    def reset(self):
        """Clear all session state."""
        self.results = []
        self.error = None
        self.selected_sku = None
        self.loading = False
        self._latest = next(self._sequence)
