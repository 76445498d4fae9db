"""
Rating Pipeline

Interprets the admin panel's query parameters and runs one page view:
fetch products, attach ratings, order and truncate.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from ..models import RatedProduct
from ..shopify.api_client import ShopifyAPIClient
from ..shopify.catalog import fetch_products
from .extractor import rate_products
from .selector import RANDOM, SORT_ORDERS, select_products

logger = logging.getLogger(__name__)

DEFAULT_COUNT = 0
DEFAULT_SORT_ORDER = RANDOM


class InvalidParams(ValueError):
    """Query parameters that cannot be interpreted."""


@dataclass(frozen=True)
class SelectionParams:
    """Selection policy plus optional collection scope for one page view."""

    count: int = DEFAULT_COUNT
    sort_order: str = DEFAULT_SORT_ORDER
    collection_id: Optional[str] = None

    def __post_init__(self):
        if self.sort_order not in SORT_ORDERS:
            raise InvalidParams(f"Unknown sortOrder: {self.sort_order!r}")
        if self.count < 0:
            raise InvalidParams(f"count must be >= 0, got {self.count}")

    @classmethod
    def from_query(cls, query: Mapping[str, Any]) -> "SelectionParams":
        """
        Build params from URL query parameters.

        Accepts plain values or the lists produced by urllib.parse.parse_qs.
        Missing or blank values fall back to the defaults.

        Raises:
            InvalidParams: If count is not a non-negative integer or
                sortOrder is unknown
        """
        def first(name: str) -> Optional[str]:
            value = query.get(name)
            if isinstance(value, (list, tuple)):
                value = value[0] if value else None
            if value is None:
                return None
            value = str(value).strip()
            return value or None

        raw_count = first("count")
        try:
            count = int(raw_count) if raw_count is not None else DEFAULT_COUNT
        except ValueError:
            raise InvalidParams(f"count must be an integer, got {raw_count!r}") from None

        return cls(
            count=count,
            sort_order=first("sortOrder") or DEFAULT_SORT_ORDER,
            collection_id=first("collection"),
        )

    @property
    def should_fetch(self) -> bool:
        """False only for the default pair (count=0, sortOrder=random)."""
        return not (self.count == DEFAULT_COUNT and self.sort_order == DEFAULT_SORT_ORDER)

    def to_query(self) -> Dict[str, str]:
        """Query parameters that reproduce these params."""
        query = {"count": str(self.count), "sortOrder": self.sort_order}
        if self.collection_id:
            query["collection"] = self.collection_id
        return query


def load_rated_products(
    client: ShopifyAPIClient,
    params: SelectionParams,
    settings: Mapping[str, Any],
) -> List[RatedProduct]:
    """
    Run the pipeline for one page view.

    The default params short-circuit to an empty list without calling
    the API. Otherwise FetchFailed from the catalog propagates and no
    partial list is returned.
    """
    if not params.should_fetch:
        logger.debug("Default params, not fetching products yet")
        return []

    raws = fetch_products(
        client,
        first=settings["products_first"],
        collection_id=params.collection_id,
        namespace=settings["metafield_namespace"],
        key=settings["metafield_key"],
    )
    rated = rate_products(raws)
    selected = select_products(rated, params.sort_order, params.count)

    logger.info("Selected %d of %d products (%s)", len(selected), len(rated), params.sort_order)
    return selected
