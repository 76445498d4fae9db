"""Tests for review_sorter/admin/server.py"""

import threading

import pytest
import requests

from review_sorter.admin.server import FETCH_FAILED_MESSAGE, AdminRequestHandler, make_server
from review_sorter.models import Collection


def bound_handler(client, settings, collections=()):
    """Handler instance with bound state, without a socket."""
    handler = AdminRequestHandler.__new__(AdminRequestHandler)
    handler.client = client
    handler.settings = settings
    handler.collections = collections
    return handler


def products_data(product_node, *metafields):
    nodes = [
        product_node(product_id=f"p{i}", title=f"Product {i}", metafield_value=m)
        for i, m in enumerate(metafields)
    ]
    return {"products": {"edges": [{"node": n} for n in nodes]}}


class TestRenderPage:
    def test_default_view_skips_fetch(self, mock_client, settings):
        status, html = bound_handler(mock_client, settings).render_page({})

        assert status == 200
        assert "Click Apply to load products." in html
        mock_client.graphql_request.assert_not_called()

    def test_sorted_products(self, mock_client, settings, product_node):
        mock_client.graphql_request.return_value = products_data(
            product_node, '{"value": "2"}', '{"value": "4.5"}'
        )
        handler = bound_handler(mock_client, settings)

        status, html = handler.render_page({"count": ["0"], "sortOrder": ["descending"]})

        assert status == 200
        assert html.index("Product 1") < html.index("Product 0")
        assert "Rating: 4.5/5" in html

    def test_invalid_params(self, mock_client, settings):
        status, html = bound_handler(mock_client, settings).render_page({"count": ["many"]})

        assert status == 400
        assert "count must be an integer" in html
        mock_client.graphql_request.assert_not_called()

    def test_fetch_failure(self, mock_client, settings):
        mock_client.graphql_request.return_value = None

        status, html = bound_handler(mock_client, settings).render_page({"count": ["3"]})

        assert status == 500
        assert FETCH_FAILED_MESSAGE in html
        assert "Product" not in html.split("<h2>Error</h2>")[1]

    def test_oversized_rating_renders_as_unrated(self, mock_client, settings, product_node):
        mock_client.graphql_request.return_value = products_data(
            product_node, '{"value": ' + "9" * 400 + "}", '{"value": "4"}'
        )
        handler = bound_handler(mock_client, settings)

        status, html = handler.render_page({"count": ["0"], "sortOrder": ["descending"]})

        assert status == 200
        assert "Rating: No rating/5" in html
        assert html.index("Product 1") < html.index("Product 0")

    def test_malformed_product_node_is_500(self, mock_client, settings, product_node):
        data = products_data(product_node, None)
        data["products"]["edges"][0]["node"]["images"] = {"edges": ["x"]}
        mock_client.graphql_request.return_value = data

        status, html = bound_handler(mock_client, settings).render_page({"count": ["1"]})

        assert status == 500
        assert FETCH_FAILED_MESSAGE in html

    def test_collections_in_controls(self, mock_client, settings):
        collections = (Collection(id="gid://shopify/Collection/1", title="Vitamins"),)
        _, html = bound_handler(mock_client, settings, collections).render_page({})
        assert "Vitamins" in html


class TestHandlerDefaults:
    def test_unbound_settings_are_read_only(self):
        with pytest.raises(TypeError):
            AdminRequestHandler.settings["products_first"] = 1

    def test_make_server_binds_state_per_server(self, mock_client, settings):
        srv = make_server(mock_client, settings, host="127.0.0.1", port=0)
        try:
            assert srv.RequestHandlerClass.settings is settings
            assert srv.RequestHandlerClass.client is mock_client
            assert AdminRequestHandler.client is None
        finally:
            srv.server_close()


class TestServer:
    @pytest.fixture
    def server(self, mock_client, settings):
        srv = make_server(mock_client, settings, host="127.0.0.1", port=0)
        thread = threading.Thread(target=srv.serve_forever, daemon=True)
        thread.start()
        yield srv
        srv.shutdown()
        srv.server_close()

    def url(self, server, path):
        host, port = server.server_address[:2]
        return f"http://{host}:{port}{path}"

    def test_serves_page(self, server, mock_client, product_node):
        mock_client.graphql_request.return_value = products_data(product_node, '{"value": "3"}')

        resp = requests.get(self.url(server, "/?count=1&sortOrder=ascending"), timeout=5)

        assert resp.status_code == 200
        assert resp.headers["Content-type"].startswith("text/html")
        assert "Rating: 3/5" in resp.text

    def test_unknown_path(self, server):
        resp = requests.get(self.url(server, "/favicon.ico"), timeout=5)
        assert resp.status_code == 404

    def test_fetch_failure_is_500(self, server, mock_client):
        mock_client.graphql_request.return_value = None
        resp = requests.get(self.url(server, "/?sortOrder=descending"), timeout=5)
        assert resp.status_code == 500
