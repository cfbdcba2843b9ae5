"""Data models for the product catalog."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from catalog.config import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT_FIELD,
    DEFAULT_SORT_ORDER,
    SENTINEL,
    WILDCARD,
)

__all__ = [
    "Product",
    "ProductAttributes",
    "CategoryCount",
    "CatalogSummary",
    "FilterSpec",
    "SortSpec",
    "PaginationSpec",
    "QueryResult",
]


def _text(value: Any) -> str:
    """Coerce a raw JSON value to a stripped string ("" for null)."""
    if value is None:
        return ""
    return str(value).strip()


@dataclass(frozen=True)
class Product:
    """A single catalog entry as stored in the static product file.

    Products are immutable after load; every display attribute beyond these
    fields is derived on demand by ``catalog.extraction``.
    """

    id: Union[int, str]
    slug: str
    name: str
    category: str
    details: str
    dosage_form: str = ""
    strength: str = ""
    cas_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        """Build a product from a camelCase JSON record."""
        cas_id = _text(data.get("casId")) or None
        return cls(
            id=data["id"],
            slug=_text(data.get("slug")),
            name=_text(data.get("name")),
            category=_text(data.get("category")),
            details=_text(data.get("details")),
            dosage_form=_text(data.get("dosageForm")),
            strength=_text(data.get("strength")),
            cas_id=cas_id,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize back to the camelCase shape of the data file."""
        return {
            "id": self.id,
            "slug": self.slug,
            "name": self.name,
            "category": self.category,
            "dosageForm": self.dosage_form,
            "strength": self.strength,
            "details": self.details,
            "casId": self.cas_id or SENTINEL,
        }

    def sort_value(self, sort_field: str) -> str:
        """Return the raw value for a sortable column ("" when missing)."""
        if sort_field == "name":
            return self.name or ""
        if sort_field == "category":
            return self.category or ""
        if sort_field == "dosageForm":
            return self.dosage_form or ""
        if sort_field == "strength":
            return self.strength or ""
        return ""


@dataclass(frozen=True)
class ProductAttributes:
    """Display attributes derived from a product's free text."""

    pack_size: str = SENTINEL
    pharm_spec: str = SENTINEL
    formulation_type: str = SENTINEL
    cas_id: str = SENTINEL

    def to_dict(self) -> Dict[str, str]:
        return {
            "packSize": self.pack_size,
            "pharmSpec": self.pharm_spec,
            "formulationType": self.formulation_type,
            "casId": self.cas_id,
        }


@dataclass(frozen=True)
class CategoryCount:
    name: str
    count: int


@dataclass(frozen=True)
class CatalogSummary:
    """Headline numbers for the catalog hero section."""

    product_count: int
    category_count: int
    strength_count: int
    dosage_form_count: int
    top_categories: List[CategoryCount] = field(default_factory=list)


@dataclass(frozen=True)
class FilterSpec:
    query: str = ""
    category: str = WILDCARD
    dosage_form: str = WILDCARD
    strength: str = WILDCARD

    def is_default(self) -> bool:
        return self == FilterSpec()


@dataclass(frozen=True)
class SortSpec:
    field: str = DEFAULT_SORT_FIELD
    direction: str = DEFAULT_SORT_ORDER


@dataclass(frozen=True)
class PaginationSpec:
    page_size: int = DEFAULT_PAGE_SIZE
    page: int = 1


@dataclass
class QueryResult:
    """One visible page of the catalog plus the counts around it."""

    page_items: List[Product]
    total_count: int
    total_pages: int
    page: int
    page_size: int

    @property
    def range_start(self) -> int:
        """1-based index of the first row shown (0 when nothing matched)."""
        if self.total_count == 0:
            return 0
        return (self.page - 1) * self.page_size + 1

    @property
    def range_end(self) -> int:
        return min(self.page * self.page_size, self.total_count)
