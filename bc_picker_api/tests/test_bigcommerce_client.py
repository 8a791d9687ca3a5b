import logging

import httpx
import pytest

from bc_picker.core.bigcommerce_client import BigCommerceClient, FetchError, UpstreamError
from tests.conftest import make_product, make_variant


def _envelope(items):
    return {"data": items, "meta": {"pagination": {"total": len(items), "current_page": 1}}}


@pytest.mark.asyncio
async def test_get_products_unwraps_data_envelope(make_client):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        products = [make_product(id=2, name="B").model_dump(), make_product(id=1, name="A").model_dump()]
        return httpx.Response(200, json=_envelope(products))

    client = make_client(handler)
    products = await client.get_products(page=2, limit=10)
    await client.close()

    assert [p.name for p in products] == ["B", "A"]
    assert products[0].variants[0].sku == "V-1"

    request = seen[0]
    assert request.method == "GET"
    assert request.url.path == "/stores/abc123/v3/catalog/products"
    assert request.url.params["page"] == "2"
    assert request.url.params["limit"] == "10"
    assert request.url.params["include"] == "variants,images,primary_image"
    assert request.headers["X-Auth-Token"] == "secret-token"
    assert request.headers["Accept"] == "application/json"
    assert request.headers["Content-Type"] == "application/json"


@pytest.mark.asyncio
async def test_default_paging(make_client):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=_envelope([]))

    async with make_client(handler) as client:
        assert await client.get_products() == []

    assert seen[0].url.params["page"] == "1"
    assert seen[0].url.params["limit"] == "50"


@pytest.mark.asyncio
async def test_search_products_sends_keyword(make_client):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=_envelope([make_product().model_dump()]))

    async with make_client(handler) as client:
        products = await client.search_products("red shirt")

    assert len(products) == 1
    assert seen[0].url.params["keyword"] == "red shirt"
    assert b"keyword=red%20shirt" in seen[0].url.raw_path


@pytest.mark.asyncio
async def test_get_product_variants(make_client):
    seen = []

    def handler(request):
        seen.append(request)
        variants = [make_variant(id=1, sku="S").model_dump(), make_variant(id=2, sku="M").model_dump()]
        return httpx.Response(200, json=_envelope(variants))

    async with make_client(handler) as client:
        variants = await client.get_product_variants(12)

    assert [v.sku for v in variants] == ["S", "M"]
    assert seen[0].url.path == "/stores/abc123/v3/catalog/products/12/variants"


@pytest.mark.asyncio
async def test_http_500_raises_upstream_error(make_client):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(500, json={"title": "boom"})

    async with make_client(handler) as client:
        with pytest.raises(UpstreamError) as exc_info:
            await client.get_products()

    assert exc_info.value.status_code == 500
    assert "500 Internal Server Error" in str(exc_info.value)
    # a single request, never retried
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_malformed_json_raises_fetch_error(make_client):
    def handler(request):
        return httpx.Response(200, content=b"{not json", headers={"Content-Type": "application/json"})

    async with make_client(handler) as client:
        with pytest.raises(FetchError) as exc_info:
            await client.get_products()

    assert "CORS" in str(exc_info.value)


@pytest.mark.asyncio
async def test_network_error_raises_fetch_error(make_client):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with make_client(handler) as client:
        with pytest.raises(FetchError):
            await client.search_products("x")


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{"items": []}, {"data": {"id": 1}}, [1, 2], {"data": [{"id": "nope"}]}])
async def test_unexpected_payload_raises_fetch_error(make_client, body):
    def handler(request):
        return httpx.Response(200, json=body)

    async with make_client(handler) as client:
        with pytest.raises(FetchError):
            await client.get_products()


@pytest.mark.asyncio
async def test_cors_proxy_wraps_encoded_url(make_client):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=_envelope([]))

    async with make_client(handler, use_cors_proxy=True) as client:
        await client.get_products(page=1, limit=5)

    url = str(seen[0].url)
    assert url.startswith("https://corsproxy.io/?https%3A%2F%2Fapi.bigcommerce.com%2Fstores%2Fabc123%2Fv3%2Fcatalog%2Fproducts%3F")
    assert "page%3D1%26limit%3D5" in url


def test_build_url_without_proxy():
    client = BigCommerceClient("abc123", "secret-token")
    assert client.build_url("/catalog/products/5/variants") == (
        "https://api.bigcommerce.com/stores/abc123/v3/catalog/products/5/variants"
    )


def test_requires_credentials():
    with pytest.raises(ValueError):
        BigCommerceClient("", "token")


@pytest.mark.asyncio
async def test_token_is_not_logged(make_client, caplog):
    def handler(request):
        return httpx.Response(404)

    caplog.set_level(logging.DEBUG, logger="bc_picker.core.bigcommerce_client")
    async with make_client(handler) as client:
        with pytest.raises(UpstreamError):
            await client.get_products()

    assert "secret-token" not in caplog.text
    assert "404" in caplog.text
