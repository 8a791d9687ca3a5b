"""
BigCommerce catalog REST API client.

One request in, one response or one error out: no retries, no timeout,
no caching. Paging is driven by the caller through ``page``.
"""

import logging
from typing import Optional, Dict, List, Any
from urllib.parse import quote, urlencode

import httpx
from pydantic import ValidationError

from bc_picker.core.security import sanitize_dict_for_logging, sanitize_string_for_logging
from bc_picker.schemas.catalog import Product, Variant

logger = logging.getLogger(__name__)

# Characters left unescaped by JavaScript's encodeURIComponent
URI_COMPONENT_SAFE = "-_.!~*'()"

PRODUCT_INCLUDES = "variants,images,primary_image"

FETCH_ERROR_MESSAGE = (
    "Failed to fetch data from BigCommerce. This may be due to CORS restrictions. "
    "Please ensure your BigCommerce store allows requests from Contentful, "
    "or consider using a backend proxy."
)


class BigCommerceError(Exception):
    """Base exception for BigCommerce API errors."""
    pass


class UpstreamError(BigCommerceError):
    """Catalog API answered with a non-2xx status."""

    def __init__(self, status_code: int, reason: str = ""):
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"BigCommerce API error: {status_code} {reason}".rstrip())


class FetchError(BigCommerceError):
    """Network or payload failure; the message is safe to show to users."""

    def __init__(self, message: str = FETCH_ERROR_MESSAGE):
        super().__init__(message)


class BigCommerceClient:
    """
    Async BigCommerce catalog client (API v3, X-Auth-Token auth).
    """

    def __init__(
        self,
        store_hash: str,
        access_token: str,
        api_base: str = "https://api.bigcommerce.com",
        use_cors_proxy: bool = False,
        cors_proxy_url: str = "https://corsproxy.io/?",
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize BigCommerce client.

        Args:
            store_hash: Store hash (the ``stores/{hash}`` path segment)
            access_token: API account access token
            api_base: API host
            use_cors_proxy: Route requests through the CORS relay
            cors_proxy_url: Relay prefix; the target URL is appended percent-encoded
            transport: Optional httpx transport (tests)
        """
        if not store_hash or not access_token:
            raise ValueError("Must provide store_hash and access_token")

        self.store_hash = store_hash
        self.access_token = access_token
        self.base_url = f"{api_base.rstrip('/')}/stores/{store_hash}/v3"
        self.use_cors_proxy = use_cors_proxy
        self.cors_proxy_url = cors_proxy_url

        self.client = httpx.AsyncClient(
            timeout=None,
            transport=transport,
            headers={
                "X-Auth-Token": access_token,
                "Content-Type": "application/json",
                "Accept": "application/json"
            }
        )

    async def __aenter__(self) -> "BigCommerceClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def build_url(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> str:
        """
        Build the request URL, optionally wrapped by the CORS relay.

        Args:
            endpoint: Path relative to ``/stores/{hash}/v3``
            params: Query parameters (kept in insertion order)

        Returns:
            Absolute URL
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        if params:
            url = f"{url}?{urlencode(params, safe=',', quote_via=quote)}"

        if self.use_cors_proxy:
            return f"{self.cors_proxy_url}{quote(url, safe=URI_COMPONENT_SAFE)}"
        return url

    async def _request(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Issue a single GET and unwrap the ``data`` envelope.

        Raises:
            UpstreamError: On non-2xx status
            FetchError: On network, JSON or envelope failure
        """
        url = self.build_url(endpoint, params)
        safe_url = sanitize_string_for_logging(url, secrets=(self.access_token,))
        logger.debug(
            f"GET {safe_url} | Headers: {sanitize_dict_for_logging(self.client.headers)}"
        )

        try:
            response = await self.client.get(url)
        except httpx.HTTPError as e:
            logger.error(f"BigCommerce API request failed: {type(e).__name__} for {safe_url}")
            raise FetchError() from e

        if not response.is_success:
            logger.error(
                f"BigCommerce API error: {response.status_code} {response.reason_phrase} for {safe_url}"
            )
            raise UpstreamError(response.status_code, response.reason_phrase)

        try:
            body = response.json()
        except ValueError as e:
            logger.error(f"BigCommerce API returned invalid JSON for {safe_url}")
            raise FetchError() from e

        if not isinstance(body, dict) or "data" not in body:
            logger.error(f"BigCommerce API response has no 'data' envelope for {safe_url}")
            raise FetchError()

        return body["data"]

    async def get_products(self, page: int = 1, limit: int = 50) -> List[Product]:
        """
        List one page of products with variants and images.

        Args:
            page: Page number (1-based)
            limit: Items per page

        Returns:
            Products in upstream order
        """
        params = {
            "page": page,
            "limit": limit,
            "include": PRODUCT_INCLUDES
        }
        data = await self._request("/catalog/products", params=params)
        return self._parse_list(Product, data)

    async def search_products(self, keyword: str, page: int = 1, limit: int = 50) -> List[Product]:
        """
        Search products by keyword (server-side filter).

        Args:
            keyword: Search keyword
            page: Page number (1-based)
            limit: Items per page

        Returns:
            Matching products in upstream order
        """
        params = {
            "keyword": keyword,
            "page": page,
            "limit": limit,
            "include": PRODUCT_INCLUDES
        }
        data = await self._request("/catalog/products", params=params)
        return self._parse_list(Product, data)

    async def get_product_variants(self, product_id: int) -> List[Variant]:
        """
        Get all variants of a product.

        Args:
            product_id: Product ID

        Returns:
            Variant list
        """
        data = await self._request(f"/catalog/products/{product_id}/variants")
        return self._parse_list(Variant, data)

    @staticmethod
    def _parse_list(model, data: Any) -> list:
        if not isinstance(data, list):
            logger.error(f"Expected a list in 'data', got {type(data).__name__}")
            raise FetchError()
        try:
            return [model.model_validate(item) for item in data]
        except ValidationError as e:
            logger.error(f"Invalid {model.__name__} record from BigCommerce: {e.error_count()} error(s)")
            raise FetchError() from e

    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()
