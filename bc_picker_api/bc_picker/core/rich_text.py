"""
Rich text product embeds.

A product is embedded as ``paragraph > hyperlink > text``. The hyperlink URI
carries the flat selection record: ``bc-product://<sku>?data=<json>``.
"""

import json
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote, unquote

from bc_picker.core.bigcommerce_client import URI_COMPONENT_SAFE
from bc_picker.core.variant_codec import decode, encode, format_price, select_price
from bc_picker.schemas.catalog import Product, Variant
from bc_picker.schemas.selection import DisplayView

logger = logging.getLogger(__name__)

DEFAULT_SCHEME = "bc-product"
DATA_MARKER = "?data="


class InvalidEmbedError(ValueError):
    """URI is not a product embed."""
    pass


def build_embed_label(
    product: Product,
    variant: Variant,
    with_price: bool = False,
    currency_symbol: str = "£",
    marker: Optional[str] = None
) -> str:
    """
    Visible text of an embed link: ``name - sku[ - price]``.

    Args:
        product: Owning product
        variant: Selected variant
        with_price: Append the formatted price
        currency_symbol: Currency prefix for the price
        marker: Optional prefix (e.g. an emoji)
    """
    label = f"{product.name} - {variant.sku}"
    price = select_price(variant)
    if with_price and price is not None:
        label = f"{label} - {format_price(price, currency_symbol)}"
    if marker:
        label = f"{marker} {label}"
    return label


def build_embed_uri(product: Product, variant: Variant, scheme: str = DEFAULT_SCHEME) -> str:
    """URI carrying the percent-encoded flat record."""
    payload = json.dumps(
        encode(product, variant).to_field_value(),
        ensure_ascii=False,
        separators=(",", ":")
    )
    return f"{scheme}://{variant.sku}{DATA_MARKER}{quote(payload, safe=URI_COMPONENT_SAFE)}"


def build_embed_fragment(
    product: Product,
    variant: Variant,
    scheme: str = DEFAULT_SCHEME,
    label: Optional[str] = None
) -> Dict[str, Any]:
    """
    Build the hyperlink node for a selection.

    Args:
        product: Owning product
        variant: Selected variant
        scheme: URI scheme
        label: Visible text; defaults to ``name - sku``

    Returns:
        Hyperlink node dict
    """
    return {
        "nodeType": "hyperlink",
        "data": {
            "uri": build_embed_uri(product, variant, scheme)
        },
        "content": [
            {
                "nodeType": "text",
                "value": label if label is not None else build_embed_label(product, variant),
                "marks": [],
                "data": {}
            }
        ]
    }


def append_to_document(document: Optional[Dict[str, Any]], fragment: Dict[str, Any]) -> Dict[str, Any]:
    """
    Append the fragment, wrapped in a paragraph, to a rich text document.

    The input document is not mutated. Without a content list a fresh
    single-paragraph document is returned.
    """
    paragraph = {
        "nodeType": "paragraph",
        "data": {},
        "content": [fragment]
    }

    if not document or not isinstance(document.get("content"), list):
        return {
            "nodeType": "document",
            "data": {},
            "content": [paragraph]
        }

    return {**document, "content": [*document["content"], paragraph]}


def parse_embed_uri(uri: str, scheme: str = DEFAULT_SCHEME) -> Dict[str, Any]:
    """
    Recover the flat record from an embed URI.

    Raises:
        InvalidEmbedError: If the URI is not a product embed
    """
    prefix = f"{scheme}://"
    if not isinstance(uri, str) or not uri.startswith(prefix) or DATA_MARKER not in uri:
        raise InvalidEmbedError(f"Not a {scheme} embed URI")

    encoded = uri.rsplit(DATA_MARKER, 1)[1]
    try:
        payload = json.loads(unquote(encoded))
    except ValueError as e:
        raise InvalidEmbedError("Embed payload is not valid JSON") from e

    if not isinstance(payload, dict):
        raise InvalidEmbedError("Embed payload is not an object")
    return payload


def _walk(node: Any):
    if not isinstance(node, dict):
        return
    yield node
    for child in node.get("content") or []:
        yield from _walk(child)


def extract_embedded_selections(document: Optional[Dict[str, Any]], scheme: str = DEFAULT_SCHEME) -> List[DisplayView]:
    """
    Decode every product embed of a document, in document order.

    Hyperlinks to other targets are ignored; a product link with a broken
    payload is logged and skipped.
    """
    views = []
    for node in _walk(document):
        if node.get("nodeType") != "hyperlink":
            continue
        uri = (node.get("data") or {}).get("uri", "")
        if not isinstance(uri, str) or not uri.startswith(f"{scheme}://"):
            continue
        try:
            view = decode(parse_embed_uri(uri, scheme))
        except ValueError as e:
            logger.warning(f"Skipping product embed: {e}")
            continue
        if view is not None:
            views.append(view)
    return views
