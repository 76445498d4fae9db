"""
Shopify API Client

Client for the Shopify Admin API used by the admin panel.
Handles authentication, rate limiting, retries and error reporting.
"""

import logging
import math
import time
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Dict, Optional
from urllib.parse import urljoin

import requests

logger = logging.getLogger(__name__)


class ShopifyAPIClient:
    """
    Client for the Shopify Admin API.

    Network problems never raise: every request method logs the failure
    and returns None, leaving the caller to decide what a missing
    response means.

    Usage:
        with ShopifyAPIClient(shop="my-store", access_token="shpat_xxx") as client:
            data = client.graphql_request(query, {"first": 10})
    """

    API_VERSION = "2025-01"
    MAX_RETRIES = 5
    RETRYABLE_STATUS_CODES = {429, 502, 503, 504}
    SUPPORTED_METHODS = {"GET", "POST", "PUT", "DELETE"}

    def __init__(self, shop: str, access_token: str):
        """
        Initialize the API client.

        Args:
            shop: Shop name (without .myshopify.com) or full domain
            access_token: Shopify Admin API access token
        """
        # Normalize shop name
        if ".myshopify.com" in shop:
            self.shop = shop.replace("https://", "").replace("http://", "").split(".myshopify.com")[0]
        else:
            self.shop = shop

        self.access_token = access_token
        self.base_url = f"https://{self.shop}.myshopify.com/admin/api/{self.API_VERSION}"
        self.graphql_url = f"{self.base_url}/graphql.json"

        self.session = requests.Session()
        self.session.headers.update({
            "X-Shopify-Access-Token": access_token,
            "Content-Type": "application/json",
        })

        # Rate limiting
        self.requests_made = 0
        self.last_request_time = 0.0
        self.min_request_interval = 0.5  # 2 req/sec

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def _rate_limit(self):
        """Implement rate limiting (2 requests/second max)."""
        now = time.time()
        elapsed = now - self.last_request_time

        if elapsed < self.min_request_interval:
            time.sleep(self.min_request_interval - elapsed)

        self.last_request_time = time.time()
        self.requests_made += 1

    @staticmethod
    def _retry_delay(response: requests.Response, attempt: int) -> int:
        """Seconds to wait before retrying; Retry-After may be seconds or an HTTP date."""
        header = response.headers.get("Retry-After")
        if header is None:
            return 2 ** attempt

        try:
            return max(0, int(header))
        except ValueError:
            pass

        try:
            retry_at = parsedate_to_datetime(header)
        except (TypeError, ValueError):
            return 2 ** attempt

        if retry_at.tzinfo is None:
            retry_at = retry_at.replace(tzinfo=timezone.utc)
        return max(0, math.ceil((retry_at - datetime.now(timezone.utc)).total_seconds()))

    def _send(
        self,
        method: str,
        url: str,
        label: str,
        payload: Optional[Dict] = None,
        timeout: int = 30
    ) -> Optional[requests.Response]:
        """
        Send a request, retrying on rate limiting and gateway errors.

        Returns:
            Successful response, or None on HTTP error, timeout,
            transport failure or exhausted retries
        """
        for attempt in range(self.MAX_RETRIES):
            self._rate_limit()

            try:
                response = self.session.request(method, url, json=payload, timeout=timeout)
            except requests.exceptions.Timeout:
                logger.error("Request timeout: %s", label)
                return None
            except requests.exceptions.RequestException as e:
                logger.error("Request failed: %s", e)
                return None

            if response.status_code in self.RETRYABLE_STATUS_CODES:
                retry_after = self._retry_delay(response, attempt)
                logger.warning("HTTP %d on %s, retry %d/%d in %ds...",
                               response.status_code, label, attempt + 1,
                               self.MAX_RETRIES, retry_after)
                time.sleep(retry_after)
                continue

            if response.status_code >= 400:
                logger.error("API Error %d: %s", response.status_code, response.text[:200])
                return None

            return response

        logger.error("Max retries (%d) exceeded for %s", self.MAX_RETRIES, label)
        return None

    def rest_request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict] = None,
        timeout: int = 30
    ) -> Optional[Dict]:
        """
        Make REST API request.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: API endpoint (e.g., "shop.json")
            data: Request body for POST/PUT
            timeout: Request timeout in seconds

        Returns:
            Response JSON or None on error
        """
        if method not in self.SUPPORTED_METHODS:
            raise ValueError(f"Unsupported method: {method}")

        url = urljoin(self.base_url + "/", endpoint)
        response = self._send(method, url, f"{method} {endpoint}", data, timeout)
        if response is None:
            return None

        try:
            return response.json()
        except ValueError:
            logger.error("Invalid JSON in response to %s %s", method, endpoint)
            return None

    def graphql_request(
        self,
        query: str,
        variables: Optional[Dict] = None,
        timeout: int = 30
    ) -> Optional[Dict]:
        """
        Make GraphQL API request.

        Args:
            query: GraphQL query or mutation
            variables: Query variables
            timeout: Request timeout in seconds

        Returns:
            Response data (without 'data' wrapper) or None on error
        """
        payload = {"query": query}
        if variables:
            payload["variables"] = variables

        response = self._send("POST", self.graphql_url, "GraphQL", payload, timeout)
        if response is None:
            return None

        try:
            result = response.json()
        except ValueError:
            logger.error("Invalid JSON in GraphQL response")
            return None

        if not isinstance(result, dict):
            logger.error("Unexpected GraphQL response: %r", result)
            return None

        if "errors" in result:
            logger.error("GraphQL Errors: %s", result['errors'])
            return None

        return result.get("data")

    def test_connection(self) -> bool:
        """
        Test API connection by fetching shop info.

        Returns:
            True if connection successful
        """
        result = self.rest_request("GET", "shop.json")
        if result and "shop" in result:
            shop_name = result["shop"].get("name", "Unknown")
            logger.info("Connected to: %s", shop_name)
            return True
        return False
