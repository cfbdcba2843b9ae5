"""Catalog access and view helpers shared by the page routes and the API.

The product store is created once in ``create_app`` and kept in
``app.extensions["product_store"]``; routes fetch it with ``get_store()``.
"""

from typing import Any, Dict, List

from flask import current_app

from catalog.config import SENTINEL
from catalog.extraction import derive_attributes
from catalog.models import Product
from catalog.state import ViewState, reduce_state
from catalog.store import ProductStore

__all__ = ["STORE_KEY", "get_store", "product_row", "rows", "state_href"]

STORE_KEY = "product_store"


def get_store() -> ProductStore:
    """Return the product store attached to the running app."""
    return current_app.extensions[STORE_KEY]


def product_row(product: Product) -> Dict[str, Any]:
    """Flatten a product and its derived attributes for templates and JSON."""
    row = product.to_dict()
    row["dosageForm"] = product.dosage_form or SENTINEL
    row["strength"] = product.strength or SENTINEL
    row.update(derive_attributes(product).to_dict())
    return row


def state_href(base: str, state: ViewState, *events: Any) -> str:
    """URL for the view reached by applying ``events`` to ``state``."""
    for event in events:
        state = reduce_state(state, event)
    query = state.to_query_string()
    return f"{base}?{query}" if query else base


def rows(products: List[Product]) -> List[Dict[str, Any]]:
    return [product_row(p) for p in products]
