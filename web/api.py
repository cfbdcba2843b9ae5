"""JSON API endpoints for the product catalog.

GET /api/products          one page of the catalog for the URL parameters
GET /api/products/<slug>   a single product with derived attributes
GET /api/categories        categories with product counts
"""

from typing import Tuple, Union

from flask import Blueprint, Response, jsonify, request

from catalog.query import page_window, query_catalog
from catalog.state import ViewState

from .catalog_view import get_store, product_row, rows

__all__ = ["api"]

# Create blueprint for API
api = Blueprint("api", __name__, url_prefix="/api")


@api.route("/products", methods=["GET"])
def list_products() -> Response:
    """Query the catalog.

    Accepts the same parameters as the catalog page (q, category, form,
    strength, limit, page, sort, order). Malformed values fall back to
    defaults.

    Response JSON:
        {
            "products": [...],
            "total": 37,
            "page": 2,
            "total_pages": 4,
            "page_size": 12,
            "pages": [1, 2, 3, 4],
            "query": "category=Oncology&page=2"
        }
    """
    store = get_store()
    state = ViewState.from_query_params(request.args)
    result = query_catalog(store.get_all(), state.applied, state.sort, state.pagination)

    return jsonify({
        "products": rows(result.page_items),
        "total": result.total_count,
        "page": result.page,
        "total_pages": result.total_pages,
        "page_size": result.page_size,
        "range": [result.range_start, result.range_end],
        "pages": page_window(result.page, result.total_pages),
        "query": state.to_query_string(),
    })


@api.route("/products/<slug>", methods=["GET"])
def get_product(slug: str) -> Union[Response, Tuple[Response, int]]:
    """Return one product with derived attributes and related products."""
    store = get_store()
    product = store.get_by_slug(slug)
    if product is None:
        return jsonify({"error": "Product not found", "slug": slug}), 404

    return jsonify({
        "product": product_row(product),
        "related": rows(store.get_related(product)),
    })


@api.route("/categories", methods=["GET"])
def list_categories() -> Response:
    """List categories, most populated first."""
    store = get_store()
    return jsonify({
        "categories": [
            {"name": item.name, "count": item.count} for item in store.get_category_counts()
        ]
    })
