"""Interactive catalog view state and the controller that drives it.

The view state is an immutable value. ``reduce_state(state, event)`` is the
pure transition function; ``CatalogController`` wraps it with the two side
effects the catalog page has: debouncing the search box and mirroring the
state into a shareable URL.

URL parameters: ``q``, ``category``, ``form``, ``strength``, ``limit``,
``page``, ``sort``, ``order``. Defaults are never written to the URL.
"""

import threading
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union
from urllib.parse import urlencode

from catalog.config import (
    DEBOUNCE_SECONDS,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT_FIELD,
    DEFAULT_SORT_ORDER,
    SORT_FIELDS,
    SORT_ORDERS,
    WILDCARD,
)
from catalog.csv_utils import build_catalog_csv
from catalog.logging_config import get_logger
from catalog.models import FilterSpec, PaginationSpec, Product, QueryResult, SortSpec
from catalog.query import filter_products, query_catalog, sort_products
from catalog.timers import Debouncer, Scheduler, ThreadingScheduler

__all__ = [
    "ViewState",
    "EditDraft",
    "ApplyFilters",
    "CommitSearch",
    "ClearFilters",
    "RemoveFilter",
    "ToggleSort",
    "SetPage",
    "SetPageSize",
    "Event",
    "FILTER_FIELDS",
    "reduce_state",
    "parse_positive_int",
    "CatalogController",
]

logger = get_logger("state")

FILTER_FIELDS = ("query", "category", "dosage_form", "strength")

# FilterSpec attribute -> URL parameter
_FILTER_PARAMS = {
    "query": "q",
    "category": "category",
    "dosage_form": "form",
    "strength": "strength",
}


def parse_positive_int(raw: Any, default: int) -> int:
    """Coerce a URL value to a positive int, or fall back to ``default``."""
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class ViewState:
    """Draft and applied filters plus sort and pagination."""

    draft: FilterSpec = field(default_factory=FilterSpec)
    applied: FilterSpec = field(default_factory=FilterSpec)
    sort: SortSpec = field(default_factory=SortSpec)
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def pagination(self) -> PaginationSpec:
        return PaginationSpec(page_size=self.page_size, page=self.page)

    @classmethod
    def from_query_params(cls, params: Mapping[str, Any]) -> "ViewState":
        """Hydrate from URL query parameters; bad values become defaults."""

        def text(key: str, default: str) -> str:
            value = params.get(key)
            if value is None:
                return default
            value = str(value)
            return value if value else default

        filters = FilterSpec(
            query=text("q", ""),
            category=text("category", WILDCARD),
            dosage_form=text("form", WILDCARD),
            strength=text("strength", WILDCARD),
        )

        sort_field = text("sort", DEFAULT_SORT_FIELD)
        if sort_field not in SORT_FIELDS:
            sort_field = DEFAULT_SORT_FIELD
        order = text("order", DEFAULT_SORT_ORDER).lower()
        if order not in SORT_ORDERS:
            order = DEFAULT_SORT_ORDER

        return cls(
            draft=filters,
            applied=filters,
            sort=SortSpec(field=sort_field, direction=order),
            page=parse_positive_int(params.get("page"), 1),
            page_size=parse_positive_int(params.get("limit"), DEFAULT_PAGE_SIZE),
        )

    def to_query_params(self) -> Dict[str, str]:
        """Non-default applied values, in a fixed parameter order."""
        params: Dict[str, str] = {}
        if self.applied.query:
            params["q"] = self.applied.query
        for attr in ("category", "dosage_form", "strength"):
            value = getattr(self.applied, attr)
            if value != WILDCARD:
                params[_FILTER_PARAMS[attr]] = value
        if self.page_size != DEFAULT_PAGE_SIZE:
            params["limit"] = str(self.page_size)
        if self.page != 1:
            params["page"] = str(self.page)
        if self.sort.field != DEFAULT_SORT_FIELD:
            params["sort"] = self.sort.field
        if self.sort.direction != DEFAULT_SORT_ORDER:
            params["order"] = self.sort.direction
        return params

    def to_query_string(self) -> str:
        return urlencode(self.to_query_params())


# ---------- EVENTS ----------


@dataclass(frozen=True)
class EditDraft:
    """The user typed or selected something; only the draft changes."""

    field: str
    value: str


@dataclass(frozen=True)
class ApplyFilters:
    pass


@dataclass(frozen=True)
class CommitSearch:
    """Debounce window elapsed after the last search keystroke."""


@dataclass(frozen=True)
class ClearFilters:
    pass


@dataclass(frozen=True)
class RemoveFilter:
    """Drop a single active filter chip."""

    field: str


@dataclass(frozen=True)
class ToggleSort:
    field: str


@dataclass(frozen=True)
class SetPage:
    page: Any


@dataclass(frozen=True)
class SetPageSize:
    page_size: Any


Event = Union[
    EditDraft, ApplyFilters, CommitSearch, ClearFilters, RemoveFilter, ToggleSort, SetPage, SetPageSize
]


def reduce_state(state: ViewState, event: Event) -> ViewState:
    """Return the state after ``event``. Unknown or invalid events are no-ops."""
    if isinstance(event, EditDraft):
        if event.field not in FILTER_FIELDS:
            return state
        value = event.value or ("" if event.field == "query" else WILDCARD)
        return replace(state, draft=replace(state.draft, **{event.field: value}))

    if isinstance(event, ApplyFilters):
        return replace(state, applied=state.draft, page=1)

    if isinstance(event, CommitSearch):
        if state.draft.query == state.applied.query:
            return state
        return replace(state, applied=state.draft, page=1)

    if isinstance(event, ClearFilters):
        return replace(state, draft=FilterSpec(), applied=FilterSpec(), sort=SortSpec(), page=1)

    if isinstance(event, RemoveFilter):
        if event.field not in FILTER_FIELDS:
            return state
        reset = "" if event.field == "query" else WILDCARD
        return replace(
            state,
            draft=replace(state.draft, **{event.field: reset}),
            applied=replace(state.applied, **{event.field: reset}),
            page=1,
        )

    if isinstance(event, ToggleSort):
        if event.field not in SORT_FIELDS:
            return state
        if state.sort.field == event.field:
            direction = "desc" if state.sort.direction == "asc" else "asc"
            return replace(state, sort=SortSpec(field=event.field, direction=direction))
        return replace(state, sort=SortSpec(field=event.field, direction="asc"))

    if isinstance(event, SetPage):
        return replace(state, page=parse_positive_int(event.page, state.page))

    if isinstance(event, SetPageSize):
        size = parse_positive_int(event.page_size, 0)
        if not size:
            return state
        return replace(state, page_size=size, page=1)

    return state


class CatalogController:
    """Drives the query engine from user events.

    Args:
        products: The full product list (never modified).
        scheduler: Timer implementation for the search debounce.
        replace_url: Called with the new query string whenever the URL-visible
            state changes. It should replace the current history entry.
        params: Initial URL query parameters.
        debounce_seconds: Search inactivity window before the query applies.
    """

    def __init__(
        self,
        products: Iterable[Product],
        scheduler: Optional[Scheduler] = None,
        replace_url: Optional[Callable[[str], None]] = None,
        params: Optional[Mapping[str, Any]] = None,
        debounce_seconds: float = DEBOUNCE_SECONDS,
    ):
        self.products: List[Product] = list(products)
        self._replace_url = replace_url
        self._lock = threading.RLock()
        self._state = ViewState.from_query_params(params or {})
        # Query string currently in the address bar
        self._url = urlencode(list(params.items())) if params else ""
        self._debouncer = Debouncer(
            scheduler or ThreadingScheduler(),
            debounce_seconds,
            lambda: self.dispatch(CommitSearch()),
            lock=self._lock,
        )
        self._sync_url()

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def url(self) -> str:
        return self._url or ""

    @property
    def search_pending(self) -> bool:
        return self._debouncer.pending

    def dispatch(self, event: Event) -> ViewState:
        """Apply an event and run its side effects. Returns the new state."""
        with self._lock:
            state = reduce_state(self._state, event)
            self._state = state

            if state.draft.query == state.applied.query:
                self._debouncer.cancel()
            elif isinstance(event, EditDraft):
                self._debouncer.trigger()

            if isinstance(event, CommitSearch) and state.applied.query:
                logger.debug("Search committed: %r", state.applied.query)

            self._sync_url()
            return state

    def _sync_url(self) -> None:
        url = self._state.to_query_string()
        if url == self._url:
            return
        self._url = url
        if self._replace_url is not None:
            self._replace_url(url)

    def result(self) -> QueryResult:
        """The visible page for the current applied state."""
        state = self._state
        return query_catalog(self.products, state.applied, state.sort, state.pagination)

    def export_csv(self) -> str:
        """CSV of every product matching the applied filters, in view order."""
        state = self._state
        rows = sort_products(filter_products(self.products, state.applied), state.sort)
        return build_catalog_csv(rows)
