"""
Catalog Queries

GraphQL queries for products (optionally scoped to a collection) and
collections, and parsing of their responses into data models.

Fetching is all-or-nothing: any failed call or malformed top-level
response raises FetchFailed and no partial list is returned.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from ..models import Collection, ProductImage, ProductPrice, RawProduct
from .api_client import ShopifyAPIClient

logger = logging.getLogger(__name__)

# Shopify rejects connection arguments above 250
MAX_PAGE_SIZE = 250


# ---------------------------------------------------------------------------
# GraphQL queries
# ---------------------------------------------------------------------------

PRODUCT_FIELDS = """
fragment ReviewedProduct on Product {
  id
  title
  handle
  priceRange {
    minVariantPrice {
      amount
      currencyCode
    }
  }
  images(first: 1) {
    edges {
      node {
        originalSrc
        altText
      }
    }
  }
  metafield(namespace: $namespace, key: $key) {
    value
  }
}
"""

PRODUCTS_QUERY = PRODUCT_FIELDS + """
query getProducts($first: Int!, $namespace: String!, $key: String!) {
  products(first: $first) {
    edges {
      node {
        ...ReviewedProduct
      }
    }
  }
}
"""

COLLECTION_PRODUCTS_QUERY = PRODUCT_FIELDS + """
query getCollectionProducts($id: ID!, $first: Int!, $namespace: String!, $key: String!) {
  collection(id: $id) {
    products(first: $first) {
      edges {
        node {
          ...ReviewedProduct
        }
      }
    }
  }
}
"""

COLLECTIONS_QUERY = """
query getCollections($first: Int!) {
  collections(first: $first) {
    edges {
      node {
        id
        title
      }
    }
  }
}
"""


class FetchFailed(Exception):
    """The catalog call failed or returned an unusable response."""


def _page_size(first: int) -> int:
    if first < 1:
        raise ValueError(f"Page size must be positive, got {first}")
    return min(first, MAX_PAGE_SIZE)


def _edges(connection: Any, what: str) -> List[Dict[str, Any]]:
    """Return the nodes of a GraphQL connection or raise FetchFailed."""
    if not isinstance(connection, dict) or not isinstance(connection.get("edges"), list):
        raise FetchFailed(f"Malformed {what} response")

    nodes = []
    for edge in connection["edges"]:
        node = edge.get("node") if isinstance(edge, dict) else None
        if not isinstance(node, dict):
            raise FetchFailed(f"Malformed {what} edge")
        nodes.append(node)
    return nodes


def parse_product(node: Dict[str, Any]) -> RawProduct:
    """
    Convert a product node into a RawProduct.

    Raises:
        FetchFailed: If id, title or price are missing or unparseable
    """
    try:
        money = node["priceRange"]["minVariantPrice"]
        price = ProductPrice(
            amount=Decimal(str(money["amount"])),
            currency_code=money["currencyCode"],
        )
        product_id = node["id"]
        title = node["title"]
    except (KeyError, TypeError, InvalidOperation) as e:
        raise FetchFailed(f"Malformed product node: {e!r}") from e

    images = node.get("images") or {}
    image_edges = (images.get("edges") or []) if isinstance(images, dict) else None
    if not isinstance(image_edges, list):
        raise FetchFailed("Malformed product images")

    image = None
    if image_edges:
        image_edge = image_edges[0]
        image_node = (image_edge.get("node") or {}) if isinstance(image_edge, dict) else None
        if not isinstance(image_node, dict):
            raise FetchFailed("Malformed product image edge")
        if image_node.get("originalSrc"):
            image = ProductImage(
                url=image_node["originalSrc"],
                alt_text=image_node.get("altText") or "",
            )

    metafield = node.get("metafield") or {}
    if not isinstance(metafield, dict):
        raise FetchFailed("Malformed product metafield")

    try:
        return RawProduct(
            id=product_id,
            title=title,
            handle=node.get("handle") or "",
            price=price,
            image=image,
            metafield_value=metafield.get("value"),
        )
    except ValueError as e:
        raise FetchFailed(str(e)) from e


def fetch_products(
    client: ShopifyAPIClient,
    first: int = 50,
    collection_id: Optional[str] = None,
    namespace: str = "custom",
    key: str = "Review",
) -> List[RawProduct]:
    """
    Fetch one page of products with their review metafield.

    Args:
        client: Authenticated Admin API client
        first: Number of products to fetch (capped at 250)
        collection_id: Collection GID to scope the query, or None for all products
        namespace: Metafield namespace
        key: Metafield key

    Returns:
        Products in catalog order

    Raises:
        FetchFailed: If the request failed or the response is malformed
    """
    variables = {"first": _page_size(first), "namespace": namespace, "key": key}

    if collection_id:
        variables["id"] = collection_id
        data = client.graphql_request(COLLECTION_PRODUCTS_QUERY, variables)
    else:
        data = client.graphql_request(PRODUCTS_QUERY, variables)

    if not isinstance(data, dict):
        raise FetchFailed("Products query failed")

    if collection_id:
        collection = data.get("collection")
        if collection is None:
            raise FetchFailed(f"Collection not found: {collection_id}")
        connection = collection.get("products") if isinstance(collection, dict) else None
    else:
        connection = data.get("products")

    products = [parse_product(node) for node in _edges(connection, "products")]
    logger.info("Fetched %d products%s", len(products),
                f" from {collection_id}" if collection_id else "")
    return products


def fetch_collections(client: ShopifyAPIClient, first: int = 50) -> List[Collection]:
    """
    Fetch collections for the scope selector.

    Raises:
        FetchFailed: If the request failed or the response is malformed
    """
    data = client.graphql_request(COLLECTIONS_QUERY, {"first": _page_size(first)})
    if not isinstance(data, dict):
        raise FetchFailed("Collections query failed")

    collections = []
    for node in _edges(data.get("collections"), "collections"):
        if "id" not in node:
            raise FetchFailed("Malformed collection node")
        collections.append(Collection(id=node["id"], title=node.get("title") or ""))

    logger.debug("Fetched %d collections", len(collections))
    return collections
