"""Pharmaceutical product catalog: store, attribute extraction, query engine."""

__version__ = "0.1.0"

# Re-export main components for convenient imports
from catalog.config import SENTINEL, WILDCARD
from catalog.csv_utils import build_catalog_csv
from catalog.extraction import (
    derive_attributes,
    extract_formulation_type,
    extract_pack_size,
    extract_pharm_spec,
    resolve_cas_id,
)
from catalog.models import FilterSpec, PaginationSpec, Product, QueryResult, SortSpec
from catalog.query import page_window, query_catalog
from catalog.state import CatalogController, ViewState
from catalog.store import CatalogLoadError, ProductStore

__all__ = [
    # Version
    "__version__",
    # Config
    "SENTINEL",
    "WILDCARD",
    # Models
    "Product",
    "FilterSpec",
    "SortSpec",
    "PaginationSpec",
    "QueryResult",
    # Store
    "ProductStore",
    "CatalogLoadError",
    # Extraction
    "extract_pharm_spec",
    "extract_pack_size",
    "extract_formulation_type",
    "resolve_cas_id",
    "derive_attributes",
    # Query and state
    "query_catalog",
    "page_window",
    "build_catalog_csv",
    "ViewState",
    "CatalogController",
]
