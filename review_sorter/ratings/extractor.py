"""
Rating Extractor

Derives a numeric rating from a product's review metafield.

Extraction is best-effort: an absent or malformed metafield yields
no rating (None) and is logged, it never stops the rest of the list.
"""

import json
import logging
import math
import re
from typing import Any, Callable, Iterable, List, Optional, TypeVar

from ..models import RatedProduct, RawProduct

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

# Longest leading decimal literal, e.g. "4.5" in " 4.5 stars"
_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_number(value: Any) -> Optional[float]:
    """
    Leniently interpret a metafield value as a float.

    Numbers are taken as-is (booleans are not numbers, integers too large
    for a float give None). Strings are read from their longest leading
    decimal literal, so "4.5" and "4.5/5" both give 4.5.
    Anything else, or a non-finite result, gives None.
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if not match:
            return None
        number = float(match.group(1))
    else:
        return None

    return number if math.isfinite(number) else None


def extract_rating(raw: RawProduct) -> Optional[float]:
    """
    Extract the rating from a product's review metafield.

    The metafield is expected to hold JSON like {"value": "4.5"}.
    Ratings are not clamped to any scale.

    Returns:
        Parsed rating, or None if the metafield is absent, not JSON,
        has no "value" or the value is not a number
    """
    if not raw.metafield_value:
        return None

    try:
        parsed = json.loads(raw.metafield_value)
    except (ValueError, TypeError, RecursionError) as e:
        logger.warning("Error parsing metafield value for %s: %s", raw.id, e)
        return None

    if not isinstance(parsed, dict) or "value" not in parsed:
        logger.debug("Metafield for %s has no value field", raw.id)
        return None

    rating = parse_number(parsed["value"])
    if rating is None:
        logger.debug("Metafield value for %s is not a number: %r", raw.id, parsed["value"])
    return rating


def map_with_default(
    func: Callable[[T], Optional[R]],
    items: Iterable[T],
    default: Optional[R] = None,
) -> List[Optional[R]]:
    """
    Map items through a fallible function, substituting default on failure.

    A None result, or a lookup, conversion or arithmetic error from func,
    becomes default for that item; the remaining items are still processed.
    """
    results = []
    for item in items:
        try:
            value = func(item)
        except (ValueError, TypeError, KeyError, ArithmeticError, RecursionError) as e:
            logger.warning("Falling back to default for %r: %s", item, e)
            value = None
        results.append(default if value is None else value)
    return results


def rate_products(raws: Iterable[RawProduct]) -> List[RatedProduct]:
    """Attach a rating to every product, in input order."""
    raws = list(raws)
    ratings = map_with_default(extract_rating, raws)
    return [RatedProduct.from_raw(raw, rating) for raw, rating in zip(raws, ratings)]
