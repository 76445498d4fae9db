"""
Product Selector

Orders rated products by a sort policy and truncates them to a count.
"""

import random
from typing import List, Optional, Sequence

from ..models import RatedProduct

ASCENDING = "ascending"
DESCENDING = "descending"
RANDOM = "random"

SORT_ORDERS = (ASCENDING, DESCENDING, RANDOM)


def _rating_key(product: RatedProduct) -> float:
    # Unrated products compare as 0 but are kept
    return product.rating if product.rating is not None else 0.0


def select_products(
    products: Sequence[RatedProduct],
    order: str,
    limit: int = 0,
    rng: Optional[random.Random] = None,
) -> List[RatedProduct]:
    """
    Order and truncate products.

    Sorting is stable: products with equal ratings keep their input
    order. "random" draws a uniform permutation with random.sample
    (Fisher-Yates), so every ordering is equally likely.

    Args:
        products: Rated products, left unmodified
        order: "ascending", "descending" or "random"
        limit: Keep only the first N after ordering; 0 keeps all
        rng: Random source for "random" (defaults to the module RNG)

    Returns:
        New list of products

    Raises:
        ValueError: If order is unknown or limit is negative
    """
    if order not in SORT_ORDERS:
        raise ValueError(f"Unknown sort order: {order!r}")
    if limit < 0:
        raise ValueError(f"Limit must be >= 0, got {limit}")

    if order == DESCENDING:
        ordered = sorted(products, key=_rating_key, reverse=True)
    elif order == ASCENDING:
        ordered = sorted(products, key=_rating_key)
    else:
        ordered = (rng or random).sample(list(products), len(products))

    if limit > 0:
        return ordered[:limit]
    return ordered
