"""Configuration and constants for the product catalog."""

import os
from pathlib import Path
from typing import List, Tuple

__all__ = [
    "PRODUCTS_PATH",
    "SENTINEL",
    "WILDCARD",
    "DEFAULT_PAGE_SIZE",
    "PAGE_SIZE_OPTIONS",
    "DEFAULT_SORT_FIELD",
    "DEFAULT_SORT_ORDER",
    "SORT_FIELDS",
    "SORT_ORDERS",
    "DEBOUNCE_SECONDS",
    "RELATED_PRODUCTS_LIMIT",
    "FEATURED_PRODUCTS_LIMIT",
    "TOP_CATEGORIES_LIMIT",
    "PAGE_WINDOW_SIZE",
    "CSV_HEADERS",
    "CSV_FILENAME",
    "CAS_LOOKUP_TABLE",
]

_PROJECT_ROOT = Path(__file__).parent.parent

# Static product list, loaded once at startup
PRODUCTS_PATH = os.getenv("PRODUCTS_PATH", str(_PROJECT_ROOT / "data" / "products.json"))

# Display placeholder for anything we could not determine
SENTINEL = "--"

# Filter value meaning "do not filter on this dimension"
WILDCARD = "All"

# Pagination
DEFAULT_PAGE_SIZE = 12
PAGE_SIZE_OPTIONS = [12, 24, 36, 48, 96]
PAGE_WINDOW_SIZE = 5

# Sorting
DEFAULT_SORT_FIELD = "name"
DEFAULT_SORT_ORDER = "asc"
SORT_FIELDS = ("name", "category", "dosageForm", "strength")
SORT_ORDERS = ("asc", "desc")

# Search box commits after this much typing inactivity
DEBOUNCE_SECONDS = 0.5

# Page composition
RELATED_PRODUCTS_LIMIT = 6
FEATURED_PRODUCTS_LIMIT = 6
TOP_CATEGORIES_LIMIT = 5

# CSV export
CSV_HEADERS = [
    "Name",
    "Form",
    "Category",
    "Strength",
    "Pack Size",
    "Formulation Type",
    "CAS ID",
    "Pharm Spec",
]
CSV_FILENAME = "pharmaceutical-products.csv"


# =============================================================================
# CAS Registry Lookup
# =============================================================================
# Known substances in the oncology range, matched against name + details
# when a product carries no explicit CAS number. Order matters: first match wins.

CAS_LOOKUP_TABLE: List[Tuple[str, str]] = [
    (r"\bcarboplatin\b", "41575-94-4"),
    (r"\bcisplatin\b", "15663-27-1"),
    (r"\bcyclophosphamide\b", "6055-19-2"),
    (r"\bdoxorubicin hydrochloride\b", "25316-40-9"),
    (r"\bepirubicin hydrochloride\b", "56390-09-1"),
    (r"\betoposide\b", "33419-42-0"),
    (r"\bfluorouracil\b", "51-21-8"),
    (r"\bifosfamide\b", "3778-73-2"),
    (r"\birinotecan hydrochloride\b", "136572-09-3"),
    (r"\bletrozole\b", "112809-51-5"),
    (r"\bmethotrexate\b", "59-05-2"),
    (r"\bpaclitaxel\b", "33069-62-4"),
    (r"\bvinblastine sulphate\b", "143-67-9"),
    (r"\bvincristine sulphate\b", "2068-78-2"),
]
