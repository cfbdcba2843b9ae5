"""Catalog query engine: filter, sort and paginate the product list.

Everything here is a pure function of its arguments. The catalog is small
(tens to low hundreds of products), so every query recomputes from scratch.
"""

import math
import unicodedata
from typing import Iterable, List, Tuple

from catalog.config import PAGE_WINDOW_SIZE, SORT_FIELDS, WILDCARD
from catalog.models import FilterSpec, PaginationSpec, Product, QueryResult, SortSpec

__all__ = [
    "collation_key",
    "matches_filters",
    "filter_products",
    "sort_products",
    "paginate",
    "query_catalog",
    "page_window",
]


def collation_key(value: str) -> Tuple[Tuple[Tuple[int, str], ...], str, str]:
    """Sort key approximating a locale-aware string comparison.

    Primary level ignores accents and case and ranks spaces and punctuation
    before digits, digits before letters. Secondary separates accented
    forms, and the last level puts lowercase before uppercase.
    """
    value = value or ""
    decomposed = unicodedata.normalize("NFKD", value)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    primary = tuple((1 if ch.isalnum() else 0, ch) for ch in base.casefold())
    return primary, decomposed.casefold(), value.swapcase()


def _dimension_matches(selected: str, actual: str) -> bool:
    return selected == WILDCARD or actual == selected


def _text_matches(product: Product, needle: str) -> bool:
    if not needle:
        return True
    haystacks = [product.name, product.details, product.category, product.dosage_form]
    if product.strength:
        haystacks.append(product.strength)
    return any(needle in (text or "").lower() for text in haystacks)


def matches_filters(product: Product, filters: FilterSpec) -> bool:
    """True when the product satisfies every active filter dimension."""
    return (
        _dimension_matches(filters.category, product.category)
        and _dimension_matches(filters.dosage_form, product.dosage_form)
        and _dimension_matches(filters.strength, product.strength)
        and _text_matches(product, (filters.query or "").strip().lower())
    )


def filter_products(products: Iterable[Product], filters: FilterSpec) -> List[Product]:
    """Keep products matching all filters, preserving input order."""
    return [p for p in products if matches_filters(p, filters)]


def sort_products(products: Iterable[Product], sort: SortSpec) -> List[Product]:
    """Stable sort on a single column.

    Descending is the exact reverse of ascending: ``sorted(reverse=True)``
    keeps equal keys in their original relative order.
    """
    items = list(products)
    if sort.field not in SORT_FIELDS:
        return items
    return sorted(
        items,
        key=lambda p: collation_key(p.sort_value(sort.field)),
        reverse=sort.direction == "desc",
    )


def paginate(items: List[Product], pagination: PaginationSpec) -> QueryResult:
    """Slice one page out of ``items``, clamping the page into range."""
    page_size = max(1, int(pagination.page_size))
    total_count = len(items)
    total_pages = max(1, math.ceil(total_count / page_size))
    page = min(max(1, int(pagination.page)), total_pages)

    start = (page - 1) * page_size
    return QueryResult(
        page_items=items[start:start + page_size],
        total_count=total_count,
        total_pages=total_pages,
        page=page,
        page_size=page_size,
    )


def query_catalog(
    products: Iterable[Product],
    filters: FilterSpec,
    sort: SortSpec,
    pagination: PaginationSpec,
) -> QueryResult:
    """Filter, then sort, then paginate."""
    return paginate(sort_products(filter_products(products, filters), sort), pagination)


def page_window(current: int, total: int, size: int = PAGE_WINDOW_SIZE) -> List[int]:
    """Page numbers to show in the pager.

    Shows the first ``size`` pages near the start, the last ``size`` near the
    end, otherwise a window centred on ``current``.
    """
    if total <= size:
        return list(range(1, total + 1))
    half = size // 2
    if current <= half + 1:
        start = 1
    elif current >= total - half:
        start = total - size + 1
    else:
        start = current - half
    return list(range(start, start + size))
