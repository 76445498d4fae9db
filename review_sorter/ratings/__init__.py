"""
Rating extraction, ordering and the page-view pipeline.

Modules:
    extractor - Metafield to rating, per-record fallible mapping
    selector - Sort/shuffle and truncate rated products
    pipeline - Query parameter interpretation and the full pipeline
"""

from .extractor import extract_rating, map_with_default, parse_number, rate_products
from .pipeline import InvalidParams, SelectionParams, load_rated_products
from .selector import ASCENDING, DESCENDING, RANDOM, SORT_ORDERS, select_products

__all__ = [
    # Extraction
    'extract_rating',
    'map_with_default',
    'parse_number',
    'rate_products',
    # Selection
    'ASCENDING',
    'DESCENDING',
    'RANDOM',
    'SORT_ORDERS',
    'select_products',
    # Pipeline
    'InvalidParams',
    'SelectionParams',
    'load_rated_products',
]
