"""
Shopify integration modules.

Modules:
    api_client - REST/GraphQL client for Shopify Admin API
    catalog - Product and collection queries
"""

from .api_client import ShopifyAPIClient
from .catalog import (
    FetchFailed,
    fetch_collections,
    fetch_products,
    parse_product,
)

__all__ = [
    # API Client
    'ShopifyAPIClient',
    # Catalog
    'FetchFailed',
    'fetch_collections',
    'fetch_products',
    'parse_product',
]
