"""
Product data models.

Pure data classes for representing catalog products as returned by
the Admin API, before and after rating extraction.
"""

from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class ProductPrice:
    """Minimum variant price."""
    amount: Decimal
    currency_code: str


@dataclass(frozen=True)
class ProductImage:
    """Product image with metadata."""
    url: str
    alt_text: str = ""


@dataclass(frozen=True)
class Collection:
    """Collection offered as a scope for the product query."""
    id: str
    title: str


@dataclass(frozen=True)
class RawProduct:
    """
    Product as fetched from the catalog.

    metafield_value holds the raw metafield string, expected to be
    JSON shaped like {"value": "4.5"}. It is None when the product
    has no review metafield.
    """

    id: str
    title: str
    price: ProductPrice
    handle: str = ""
    image: Optional[ProductImage] = None
    metafield_value: Optional[str] = None

    def __post_init__(self):
        """Validate required fields after initialization."""
        if not self.id:
            raise ValueError("Product id is required")


@dataclass(frozen=True)
class RatedProduct(RawProduct):
    """RawProduct plus the rating derived from its metafield."""

    rating: Optional[float] = None

    @classmethod
    def from_raw(cls, raw: RawProduct, rating: Optional[float]) -> "RatedProduct":
        values = {f.name: getattr(raw, f.name) for f in fields(RawProduct)}
        return cls(rating=rating, **values)
