"""
Admin panel.

Modules:
    page - HTML rendering of the product panel
    server - Local HTTP server running the pipeline per page view
"""

from .page import format_rating, render_error_page, render_products_page
from .server import AdminRequestHandler, make_server

__all__ = [
    'AdminRequestHandler',
    'format_rating',
    'make_server',
    'render_error_page',
    'render_products_page',
]
