"""Read-only product repository backed by the static JSON product file.

The store is built once at process start and handed to whoever needs it
(the Flask app keeps it in ``app.extensions``). Nothing here mutates the
product list after construction.
"""

from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd

from catalog.config import PRODUCTS_PATH, RELATED_PRODUCTS_LIMIT, TOP_CATEGORIES_LIMIT
from catalog.logging_config import get_logger, log_catalog_event
from catalog.models import CatalogSummary, CategoryCount, Product

__all__ = ["ProductStore", "CatalogLoadError", "REQUIRED_COLUMNS"]

logger = get_logger("store")

REQUIRED_COLUMNS = ["id", "slug", "name", "category", "details"]


class CatalogLoadError(ValueError):
    """Raised when the product file is missing or violates catalog invariants."""


class ProductStore:
    """Immutable, insertion-ordered collection of products."""

    def __init__(self, products: Iterable[Product]):
        self._products: Tuple[Product, ...] = tuple(products)
        self._by_slug: Dict[str, Product] = {}
        seen_ids = set()
        for product in self._products:
            if product.slug in self._by_slug:
                raise CatalogLoadError(f"Duplicate product slug: {product.slug!r}")
            if product.id in seen_ids:
                raise CatalogLoadError(f"Duplicate product id: {product.id!r}")
            if not product.category:
                raise CatalogLoadError(f"Product {product.slug!r} has no category")
            if not product.details:
                raise CatalogLoadError(f"Product {product.slug!r} has no details")
            self._by_slug[product.slug] = product
            seen_ids.add(product.id)

    @classmethod
    def from_json(cls, path: str = PRODUCTS_PATH) -> "ProductStore":
        """Load the product list from a JSON array of records.

        Args:
            path: Path to the products JSON file.

        Returns:
            A populated store.

        Raises:
            CatalogLoadError: If the file cannot be read or a record is invalid.
        """
        try:
            df = pd.read_json(path, orient="records", dtype=False)
        except (OSError, ValueError) as e:
            logger.error("Failed to read product file %s: %s", path, e)
            raise CatalogLoadError(f"Could not read product file {path}: {e}") from e

        missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing and not df.empty:
            raise CatalogLoadError(f"Product file {path} is missing columns: {missing}")

        for col in ("slug", "id"):
            if col in df.columns:
                dupes = df.loc[df[col].duplicated(), col].tolist()
                if dupes:
                    raise CatalogLoadError(f"Duplicate product {col} values in {path}: {dupes}")

        # NaN -> None so optional fields (casId, strength) load as empty
        df = df.astype(object).where(pd.notna(df), None)
        products = [Product.from_dict(record) for record in df.to_dict(orient="records")]
        store = cls(products)

        log_catalog_event(
            "catalog_loaded",
            {"message": f"Loaded {len(store)} products from {path}", "path": str(path), "count": len(store)},
            logger_name=logger.name,
        )
        return store

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self):
        return iter(self._products)

    def get_all(self) -> List[Product]:
        """Return every product in file order."""
        return list(self._products)

    def get_by_slug(self, slug: str) -> Optional[Product]:
        """Exact slug lookup; ``None`` means "not found", not an error."""
        return self._by_slug.get(slug)

    def get_category_counts(self) -> List[CategoryCount]:
        """Count products per category, most populated first.

        Ties keep the order in which categories first appear in the file.
        """
        counts: Dict[str, int] = {}
        for product in self._products:
            counts[product.category] = counts.get(product.category, 0) + 1
        ordered = sorted(counts.items(), key=lambda item: item[1], reverse=True)
        return [CategoryCount(name=name, count=count) for name, count in ordered]

    def get_related(self, product: Product, limit: int = RELATED_PRODUCTS_LIMIT) -> List[Product]:
        """Other products from the same category, in file order."""
        related = [
            item
            for item in self._products
            if item.slug != product.slug and item.category == product.category
        ]
        return related[:limit]

    def dosage_form_options(self) -> List[str]:
        return sorted({p.dosage_form for p in self._products if p.dosage_form})

    def strength_options(self) -> List[str]:
        return sorted({p.strength for p in self._products if p.strength})

    def summary(self, top: int = TOP_CATEGORIES_LIMIT) -> CatalogSummary:
        """Headline numbers shown above the catalog table."""
        categories = self.get_category_counts()
        return CatalogSummary(
            product_count=len(self._products),
            category_count=len(categories),
            strength_count=len(self.strength_options()),
            dosage_form_count=len(self.dosage_form_options()),
            top_categories=categories[:top],
        )
