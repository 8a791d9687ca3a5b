"""API endpoint tests using FastAPI TestClient with a mocked catalog."""

import httpx
import pytest
from fastapi.testclient import TestClient

from bc_picker.api.v1 import products as products_api
from bc_picker.config import get_settings
from bc_picker.core.bigcommerce_client import BigCommerceClient
from bc_picker.main import app
from tests.conftest import make_product, make_variant


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def catalog(monkeypatch):
    """Route catalog requests to a handler set by the test."""
    state = {"handler": None, "requests": []}

    def handler(request):
        state["requests"].append(request)
        return state["handler"](request)

    def factory():
        return BigCommerceClient("abc123", "secret-token", transport=httpx.MockTransport(handler))

    monkeypatch.setattr(products_api, "get_catalog_client", factory)
    return state


def _selection_body():
    return {
        "product": make_product().model_dump(),
        "variant": make_variant().model_dump(),
    }


def test_health(client, monkeypatch):
    settings = get_settings()
    monkeypatch.setattr(settings, "bigcommerce_store_hash", None)
    monkeypatch.setattr(settings, "bigcommerce_access_token", None)

    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json() == {"ok": True, "configured": False}


def test_products_require_credentials(client, monkeypatch):
    settings = get_settings()
    monkeypatch.setattr(settings, "bigcommerce_store_hash", None)
    monkeypatch.setattr(settings, "bigcommerce_access_token", None)

    response = client.get("/api/v1/products")

    assert response.status_code == 400
    assert "configure BigCommerce credentials" in response.json()["detail"]


def test_list_products_marks_selected_variant(client, catalog):
    variants = [make_variant(id=1, sku="S").model_dump(), make_variant(id=2, sku="M", calculated_price=None).model_dump()]
    catalog["handler"] = lambda request: httpx.Response(
        200, json={"data": [make_product(variants=variants).model_dump()], "meta": {}}
    )

    response = client.get("/api/v1/products", params={"selected_sku": "M", "limit": 10})

    assert response.status_code == 200
    body = response.json()
    assert body["error"] is None
    assert body["limit"] == 10
    card = body["items"][0]
    assert card["name"] == "Widget"
    assert card["thumbnail"] == "https://cdn.example.com/w-thumb.jpg"
    assert [(v["sku"], v["is_selected"]) for v in card["variants"]] == [("S", False), ("M", True)]
    assert card["variants"][0]["display_price"] == "£8.00"
    assert card["variants"][1]["display_price"] == "£10.00"
    assert card["variants"][0]["options_label"] == "Size: L, Color: Red"
    assert catalog["requests"][0].url.params["limit"] == "10"


def test_search_products_passes_keyword(client, catalog):
    catalog["handler"] = lambda request: httpx.Response(200, json={"data": [], "meta": {}})

    response = client.get("/api/v1/products", params={"keyword": "widget"})

    assert response.status_code == 200
    assert response.json()["items"] == []
    assert catalog["requests"][0].url.params["keyword"] == "widget"


def test_upstream_failure_yields_empty_items_and_error(client, catalog):
    catalog["handler"] = lambda request: httpx.Response(500)

    response = client.get("/api/v1/products")

    assert response.status_code == 200
    body = response.json()
    assert body["items"] == []
    assert body["error"] == "BigCommerce API error: 500 Internal Server Error"


def test_product_variants(client, catalog):
    catalog["handler"] = lambda request: httpx.Response(
        200, json={"data": [make_variant(sku="V-3").model_dump()], "meta": {}}
    )

    response = client.get("/api/v1/products/12/variants", params={"selected_sku": "V-3"})

    assert response.status_code == 200
    body = response.json()
    assert body["product_id"] == 12
    assert body["items"][0]["is_selected"] is True


def test_product_variants_fetch_error(client, catalog):
    catalog["handler"] = lambda request: httpx.Response(200, content=b"<html>")

    response = client.get("/api/v1/products/12/variants")

    assert response.status_code == 200
    assert response.json()["items"] == []
    assert "CORS" in response.json()["error"]


def test_encode_selection(client):
    response = client.post("/api/v1/selections/encode", json=_selection_body())

    assert response.status_code == 200
    body = response.json()
    assert body["variantSku"] == "V-1"
    assert body["price"] == 8.0
    assert body["options"][0] == {"name": "Size", "value": "L"}


def test_decode_selection_shapes(client):
    flat = client.post("/api/v1/selections/encode", json=_selection_body()).json()

    decoded = client.post("/api/v1/selections/decode", json={"value": flat}).json()
    assert decoded["variant"]["sku"] == "V-1"
    assert decoded["product"]["name"] == "Widget"

    legacy = client.post("/api/v1/selections/decode", json={"value": "ABC-123"}).json()
    assert legacy == {"variant": {"sku": "ABC-123"}}

    empty = client.post("/api/v1/selections/decode", json={"value": None})
    assert empty.status_code == 200
    assert empty.json() is None


def test_decode_unrecognized_selection(client):
    response = client.post("/api/v1/selections/decode", json={"value": {"foo": "bar"}})

    assert response.status_code == 422
    assert "Unrecognized" in response.json()["detail"]


def test_embed_product_into_document(client):
    body = {**_selection_body(), "document": None, "with_price": True, "marker": "🛒"}

    first = client.post("/api/v1/rich-text/embed", json=body).json()
    assert len(first["document"]["content"]) == 1
    assert first["fragment"]["content"][0]["value"] == "🛒 Widget - V-1 - £8.00"
    assert first["fragment"]["data"]["uri"].startswith("bc-product://V-1?data=")

    second = client.post("/api/v1/rich-text/embed", json={**_selection_body(), "document": first["document"]}).json()
    assert len(second["document"]["content"]) == 2
    assert second["document"]["content"][0] == first["document"]["content"][0]

    selections = client.post("/api/v1/rich-text/selections", json={"document": second["document"]}).json()
    assert [item["variant"]["sku"] for item in selections["items"]] == ["V-1", "V-1"]
