"""Tests for review_sorter/admin/page.py"""

from review_sorter.admin.page import (
    PAGE_TITLE,
    format_rating,
    render_controls,
    render_error_page,
    render_product,
    render_products_page,
)
from review_sorter.models import Collection, ProductImage, RatedProduct
from review_sorter.ratings.pipeline import SelectionParams


class TestFormatRating:
    def test_rating(self):
        assert format_rating(4.5) == "Rating: 4.5/5"

    def test_whole_number(self):
        assert format_rating(4.0) == "Rating: 4/5"

    def test_no_rating(self):
        assert format_rating(None) == "Rating: No rating/5"

    def test_custom_scale(self):
        assert format_rating(7.0, scale=10) == "Rating: 7/10"


class TestRenderProduct:
    def test_shows_title_price_and_rating(self, make_raw):
        product = RatedProduct.from_raw(make_raw(title="Vitamin C"), 4.5)
        html = render_product(product)
        assert "Vitamin C" in html
        assert "Price: 19.99 EUR" in html
        assert "Rating: 4.5/5" in html

    def test_image_alt_falls_back_to_title(self, make_raw):
        raw = make_raw(title="Zinc", image=ProductImage(url="https://cdn.example.com/z.jpg"))
        html = render_product(RatedProduct.from_raw(raw, None))
        assert 'src="https://cdn.example.com/z.jpg"' in html
        assert 'alt="Zinc"' in html
        assert 'width="100"' in html

    def test_no_image(self, make_raw):
        html = render_product(RatedProduct.from_raw(make_raw(), None))
        assert "<img" not in html

    def test_escapes_text(self, make_raw):
        raw = make_raw(title='<script>alert("x")</script>')
        html = render_product(RatedProduct.from_raw(raw, None))
        assert "<script>" not in html
        assert "&lt;script&gt;" in html


class TestRenderControls:
    def test_selects_current_state(self):
        params = SelectionParams(3, "descending", "gid://shopify/Collection/2")
        collections = [
            Collection(id="gid://shopify/Collection/1", title="Vitamins"),
            Collection(id="gid://shopify/Collection/2", title="Skin care"),
        ]
        html = render_controls(params, collections)

        assert '<option value="descending" selected>' in html
        assert '<option value="gid://shopify/Collection/2" selected>' in html
        assert 'name="count" min="0" value="3"' in html
        assert 'method="get"' in html

    def test_all_products_selected_without_collection(self):
        html = render_controls(SelectionParams())
        assert '<option value="" selected>All products</option>' in html


class TestRenderProductsPage:
    def test_lists_products_in_order(self, make_rated):
        products = make_rated([5, 3])
        html = render_products_page(products, SelectionParams(0, "descending"))

        assert PAGE_TITLE in html
        assert html.index("Product 0") < html.index("Product 1")

    def test_hint_before_first_load(self):
        html = render_products_page([], SelectionParams())
        assert "Click Apply to load products." in html
        assert "No products found." not in html

    def test_no_products_found(self):
        html = render_products_page([], SelectionParams(0, "ascending"))
        assert "No products found." in html


class TestRenderErrorPage:
    def test_error_card(self):
        html = render_error_page("Failed to fetch products")
        assert "<h2>Error</h2>" in html
        assert "Failed to fetch products" in html
