"""Tests for review_sorter/models/product.py"""

import dataclasses
from decimal import Decimal

import pytest

from review_sorter.models import ProductImage, ProductPrice, RatedProduct, RawProduct


class TestProductImage:
    def test_create_with_defaults(self):
        img = ProductImage(url="https://example.com/img.jpg")
        assert img.alt_text == ""


class TestRawProduct:
    def test_create_minimal(self):
        product = RawProduct(
            id="gid://shopify/Product/1",
            title="Test",
            price=ProductPrice(amount=Decimal("1.00"), currency_code="USD"),
        )
        assert product.handle == ""
        assert product.image is None
        assert product.metafield_value is None

    def test_raises_on_empty_id(self):
        with pytest.raises(ValueError, match="id is required"):
            RawProduct(id="", title="Test", price=ProductPrice(Decimal("1"), "USD"))

    def test_is_immutable(self, raw_product):
        with pytest.raises(dataclasses.FrozenInstanceError):
            raw_product.title = "Changed"


class TestRatedProduct:
    def test_from_raw_copies_fields(self, raw_product):
        rated = RatedProduct.from_raw(raw_product, 4.5)
        assert rated.rating == 4.5
        assert rated.id == raw_product.id
        assert rated.metafield_value == raw_product.metafield_value
        assert rated.image == raw_product.image

    def test_from_raw_without_rating(self, raw_product):
        assert RatedProduct.from_raw(raw_product, None).rating is None

    def test_is_a_raw_product(self, raw_product):
        assert isinstance(RatedProduct.from_raw(raw_product, 1.0), RawProduct)
