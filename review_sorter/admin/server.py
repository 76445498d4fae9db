"""
Admin Panel Server

Serves the product panel over a local HTTP server. Each GET of "/"
runs the rating pipeline once with the page's query parameters.
"""

import http.server
import logging
import socketserver
import urllib.parse
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from ..models import Collection
from ..ratings.pipeline import InvalidParams, SelectionParams, load_rated_products
from ..shopify.api_client import ShopifyAPIClient
from ..shopify.catalog import FetchFailed
from .page import render_error_page, render_products_page

logger = logging.getLogger(__name__)

FETCH_FAILED_MESSAGE = "Failed to fetch products"


class AdminServer(socketserver.TCPServer):
    allow_reuse_address = True


class AdminRequestHandler(http.server.BaseHTTPRequestHandler):
    """Handle admin panel page views."""

    # Set by make_server()
    client: Optional[ShopifyAPIClient] = None
    settings: Mapping[str, Any] = MappingProxyType({})
    collections: Sequence[Collection] = ()

    def do_GET(self):
        """Handle GET request (page view)."""
        parsed = urllib.parse.urlparse(self.path)
        if parsed.path != "/":
            self._send_html(404, render_error_page(f"Not found: {parsed.path}"))
            return

        status, html = self.render_page(urllib.parse.parse_qs(parsed.query))
        self._send_html(status, html)

    def render_page(self, query: Dict[str, Any]) -> Tuple[int, str]:
        """Run the pipeline for one page view and return (status, html)."""
        try:
            params = SelectionParams.from_query(query)
        except InvalidParams as e:
            logger.warning("Invalid parameters: %s", e)
            return 400, render_error_page(str(e))

        try:
            products = load_rated_products(self.client, params, self.settings)
        except FetchFailed as e:
            logger.error("Error fetching products: %s", e)
            return 500, render_error_page(FETCH_FAILED_MESSAGE)

        html = render_products_page(
            products,
            params,
            collections=self.collections,
            rating_scale=self.settings.get("rating_scale", 5),
        )
        return 200, html

    def _send_html(self, status: int, html: str):
        body = html.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-type", "text/html; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        """Route access logs through the module logger."""
        logger.debug("%s - %s", self.address_string(), format % args)


def make_server(
    client: ShopifyAPIClient,
    settings: Dict[str, Any],
    collections: Sequence[Collection] = (),
    host: Optional[str] = None,
    port: Optional[int] = None,
) -> socketserver.TCPServer:
    """
    Create the admin panel server.

    Collections for the scope selector are passed in once at startup
    so that a page view only ever makes the products call.
    """
    handler = type("BoundAdminRequestHandler", (AdminRequestHandler,), {
        "client": client,
        "settings": settings,
        "collections": tuple(collections),
    })

    host = host or settings.get("admin_host", "127.0.0.1")
    port = port if port is not None else settings.get("admin_port", 8765)

    server = AdminServer((host, port), handler)
    logger.info("Admin panel listening on http://%s:%d/", host, server.server_address[1])
    return server
