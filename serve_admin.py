#!/usr/bin/env python3
"""
Review Rating Admin Panel

Runs a local admin panel listing products sorted by review rating.
Pick a sort order, count and collection, then click Apply.

Usage:
    python3 serve_admin.py --shop STORE --token TOKEN [--port 8765]

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

from review_sorter.admin.server import make_server
from review_sorter.common.config_loader import load_settings
from review_sorter.common.log_config import setup_logging
from review_sorter.shopify import FetchFailed, ShopifyAPIClient, fetch_collections

load_dotenv(Path(__file__).parent / ".env")

logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="Serve the review rating admin panel")
    parser.add_argument("--shop", help="Shopify shop name (default: SHOPIFY_SHOP env var)")
    parser.add_argument("--token", help="Admin API access token (default: SHOPIFY_ACCESS_TOKEN env var)")
    parser.add_argument("--host", help="Bind address (default: from config/settings.yaml)")
    parser.add_argument("--port", type=int, help="Port (default: from config/settings.yaml)")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--quiet", action="store_true")
    args = parser.parse_args()

    setup_logging(verbose=args.verbose, quiet=args.quiet)
    settings = load_settings({"admin_host": args.host, "admin_port": args.port})

    shop = args.shop or os.environ.get("SHOPIFY_SHOP")
    token = args.token or os.environ.get("SHOPIFY_ACCESS_TOKEN")
    if not shop or not token:
        print("ERROR: Missing credentials. Use --shop/--token or set SHOPIFY_SHOP/SHOPIFY_ACCESS_TOKEN.")
        sys.exit(1)

    client = ShopifyAPIClient(shop=shop, access_token=token)
    if not client.test_connection():
        print("ERROR: Could not connect to Shopify API. Check shop name and token.")
        client.close()
        sys.exit(1)

    try:
        collections = fetch_collections(client, first=settings["collections_first"])
    except FetchFailed as e:
        logger.warning("Collection scope unavailable: %s", e)
        collections = []

    server = make_server(client, settings, collections)
    host, port = server.server_address[:2]
    print(f"\nAdmin panel: http://{host}:{port}/  (Ctrl+C to stop)")

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("\nStopping.")
    finally:
        server.server_close()
        client.close()


if __name__ == "__main__":
    main()
