"""Shared test fixtures."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from review_sorter.common.config_loader import DEFAULT_SETTINGS
from review_sorter.models import ProductImage, ProductPrice, RatedProduct, RawProduct
from review_sorter.shopify.api_client import ShopifyAPIClient


def _make_raw(product_id="gid://shopify/Product/1", title="Test Product", metafield_value=None, **kwargs):
    """Build a RawProduct with sensible defaults."""
    kwargs.setdefault("price", ProductPrice(amount=Decimal("19.99"), currency_code="EUR"))
    return RawProduct(id=product_id, title=title, metafield_value=metafield_value, **kwargs)


def _make_rated(ratings):
    """Build RatedProducts with ids p0, p1, ... carrying the given ratings."""
    return [
        RatedProduct.from_raw(_make_raw(product_id=f"p{i}", title=f"Product {i}"), rating)
        for i, rating in enumerate(ratings)
    ]


def _product_node(product_id="gid://shopify/Product/1", title="Test Product",
                 amount="19.99", metafield_value=None, image_src=None, alt_text=None):
    """Build a products-query node as returned by the Admin API."""
    images = []
    if image_src:
        images.append({"node": {"originalSrc": image_src, "altText": alt_text}})
    return {
        "id": product_id,
        "title": title,
        "handle": title.lower().replace(" ", "-"),
        "priceRange": {"minVariantPrice": {"amount": amount, "currencyCode": "EUR"}},
        "images": {"edges": images},
        "metafield": {"value": metafield_value} if metafield_value is not None else None,
    }


@pytest.fixture
def settings():
    """Default settings without touching config files."""
    return dict(DEFAULT_SETTINGS)


@pytest.fixture
def mock_client():
    """API client double; configure graphql_request per test."""
    return MagicMock(spec=ShopifyAPIClient)


@pytest.fixture
def raw_product():
    return _make_raw(
        metafield_value='{"value": "4.5"}',
        handle="test-product",
        image=ProductImage(url="https://cdn.example.com/p1.jpg", alt_text="Front"),
    )


@pytest.fixture
def make_raw():
    """Factory for RawProduct."""
    return _make_raw


@pytest.fixture
def make_rated():
    """Factory for lists of RatedProduct from ratings."""
    return _make_rated


@pytest.fixture
def product_node():
    """Factory for Admin API product nodes."""
    return _product_node
