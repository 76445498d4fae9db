"""
Admin Page Rendering

Renders the product panel, its controls and the error card as HTML.
Submitting the controls form reloads the page with the new state
encoded as URL query parameters (count, sortOrder, collection).
"""

from html import escape
from typing import Iterable, List, Optional, Sequence

from ..models import Collection, RatedProduct
from ..ratings.pipeline import SelectionParams
from ..ratings.selector import SORT_ORDERS

PAGE_TITLE = "Products Sorted by Review Rating"
IMAGE_SIZE = 100

_PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
body {{ font-family: -apple-system, "Segoe UI", Arial, sans-serif; background: #f1f1f1; margin: 0; padding: 24px; }}
.card {{ background: #fff; border-radius: 12px; padding: 20px; max-width: 720px; margin: 0 auto; }}
.product {{ display: flex; gap: 8px; align-items: center; margin: 12px 0; }}
.muted {{ color: #616161; font-size: 13px; }}
form {{ display: flex; gap: 12px; align-items: end; flex-wrap: wrap; }}
</style>
</head>
<body>
<div class="card">
{body}
</div>
</body>
</html>
"""


def format_rating(rating: Optional[float], scale: int = 5) -> str:
    """Format a rating for display, e.g. "Rating: 4.5/5"."""
    shown = "No rating" if rating is None else f"{rating:g}"
    return f"Rating: {shown}/{scale}"


def _page(body: str, title: str = PAGE_TITLE) -> str:
    return _PAGE_TEMPLATE.format(title=escape(title), body=body)


def _option(value: str, label: str, selected: bool) -> str:
    marker = " selected" if selected else ""
    return f'<option value="{escape(value)}"{marker}>{escape(label)}</option>'


def render_controls(params: SelectionParams, collections: Sequence[Collection] = ()) -> str:
    """Render the selection form; it submits as GET to the same page."""
    order_options = "".join(
        _option(order, order.capitalize(), order == params.sort_order)
        for order in SORT_ORDERS
    )
    collection_options = _option("", "All products", not params.collection_id) + "".join(
        _option(c.id, c.title or c.id, c.id == params.collection_id)
        for c in collections
    )

    return (
        '<form method="get" action="/">\n'
        f'<label>Sort order<br><select name="sortOrder">{order_options}</select></label>\n'
        f'<label>Count (0 = all)<br><input type="number" name="count" min="0" value="{params.count}"></label>\n'
        f'<label>Collection<br><select name="collection">{collection_options}</select></label>\n'
        '<button type="submit">Apply</button>\n'
        '</form>'
    )


def render_product(product: RatedProduct, rating_scale: int = 5) -> str:
    """Render one product row: image, title, price and rating."""
    parts: List[str] = ['<div class="product">']

    if product.image is not None:
        alt = product.image.alt_text or product.title
        parts.append(
            f'<img src="{escape(product.image.url)}" alt="{escape(alt)}" '
            f'width="{IMAGE_SIZE}" height="{IMAGE_SIZE}">'
        )

    price = f"Price: {product.price.amount} {product.price.currency_code}"
    parts.append(
        "<div>"
        f"<div>{escape(product.title)}</div>"
        f'<div class="muted">{escape(price)}</div>'
        f'<div class="muted">{escape(format_rating(product.rating, rating_scale))}</div>'
        "</div>"
    )
    parts.append("</div>")
    return "".join(parts)


def render_products_page(
    products: Iterable[RatedProduct],
    params: SelectionParams,
    collections: Sequence[Collection] = (),
    rating_scale: int = 5,
) -> str:
    """
    Render the full product panel.

    An empty list shows a hint to click Apply when the default params
    skipped the fetch, and "No products found." otherwise.
    """
    products = list(products)
    body = [f"<h2>{escape(PAGE_TITLE)}</h2>", render_controls(params, collections)]

    if products:
        body.extend(render_product(p, rating_scale) for p in products)
    elif not params.should_fetch:
        body.append("<p>Click Apply to load products.</p>")
    else:
        body.append("<p>No products found.</p>")

    return _page("\n".join(body))


def render_error_page(message: str) -> str:
    """Render the error card."""
    return _page(f"<h2>Error</h2>\n<p>{escape(message)}</p>", title="Error")
