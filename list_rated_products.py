#!/usr/bin/env python3
"""
List Products by Review Rating

Fetches products with their custom.Review metafield, derives a rating
for each and prints them in the requested order.

Usage:
    # Top 10 rated products
    python3 list_rated_products.py --shop STORE --sort-order descending --count 10

    # Random pick of 5 products from one collection
    python3 list_rated_products.py --sort-order random --count 5 \\
        --collection gid://shopify/Collection/123

    # Show collection ids
    python3 list_rated_products.py --list-collections

Credentials come from --shop/--token or SHOPIFY_SHOP/SHOPIFY_ACCESS_TOKEN
(a .env file next to this script is loaded automatically).
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(__file__))

from review_sorter.admin.page import format_rating
from review_sorter.common.config_loader import load_settings
from review_sorter.common.log_config import setup_logging
from review_sorter.ratings import SORT_ORDERS, InvalidParams, SelectionParams, load_rated_products
from review_sorter.shopify import FetchFailed, ShopifyAPIClient, fetch_collections

load_dotenv(Path(__file__).parent / ".env")

logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="List products sorted by review rating")
    parser.add_argument("--shop", help="Shopify shop name (default: SHOPIFY_SHOP env var)")
    parser.add_argument("--token", help="Admin API access token (default: SHOPIFY_ACCESS_TOKEN env var)")
    parser.add_argument("--sort-order", choices=SORT_ORDERS, default="random")
    parser.add_argument("--count", type=int, default=0, metavar="N",
                        help="Show only the first N products (default: 0 = all)")
    parser.add_argument("--collection", help="Collection GID to scope the query")
    parser.add_argument("--list-collections", action="store_true",
                        help="List collections and exit")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--quiet", action="store_true")
    args = parser.parse_args()

    setup_logging(verbose=args.verbose, quiet=args.quiet)
    settings = load_settings()

    try:
        params = SelectionParams(
            count=args.count,
            sort_order=args.sort_order,
            collection_id=args.collection,
        )
    except InvalidParams as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    if not args.list_collections and not params.should_fetch:
        print("Nothing to load: pass --count or a --sort-order other than random.")
        return

    shop = args.shop or os.environ.get("SHOPIFY_SHOP")
    token = args.token or os.environ.get("SHOPIFY_ACCESS_TOKEN")
    if not shop or not token:
        print("ERROR: Missing credentials. Use --shop/--token or set SHOPIFY_SHOP/SHOPIFY_ACCESS_TOKEN.")
        sys.exit(1)

    with ShopifyAPIClient(shop=shop, access_token=token) as client:
        try:
            if args.list_collections:
                collections = fetch_collections(client, first=settings["collections_first"])
                for collection in collections:
                    print(f"  {collection.id}  {collection.title}")
                return

            products = load_rated_products(client, params, settings)
        except FetchFailed as e:
            logger.error("Error fetching products: %s", e)
            print("ERROR: Failed to fetch products")
            sys.exit(1)

    print(f"\nProducts Sorted by Review Rating ({params.sort_order})")
    print("=" * 60)
    if not products:
        print("No products found.")
        return

    for i, product in enumerate(products, 1):
        print(f"  {i:>3}. {product.title}")
        print(f"       Price: {product.price.amount} {product.price.currency_code}")
        print(f"       {format_rating(product.rating, settings['rating_scale'])}")


if __name__ == "__main__":
    main()
