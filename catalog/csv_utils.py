"""CSV export of the filtered catalog."""

import csv
import io
import os
from typing import Iterable, List

from catalog.config import CSV_HEADERS, SENTINEL
from catalog.extraction import derive_attributes
from catalog.logging_config import log_catalog_event
from catalog.models import Product

__all__ = [
    "product_to_row",
    "build_catalog_csv",
    "export_products_to_csv",
]


def product_to_row(product: Product) -> List[str]:
    """Convert a product into a CSV row, deriving attributes fresh."""
    attrs = derive_attributes(product)
    return [
        product.name,
        product.dosage_form or SENTINEL,
        product.category,
        product.strength or SENTINEL,
        attrs.pack_size,
        attrs.formulation_type,
        attrs.cas_id,
        attrs.pharm_spec,
    ]


def build_catalog_csv(products: Iterable[Product]) -> str:
    """Render products as CSV text with a header row.

    Fields containing commas, quotes or newlines are quoted by the csv
    module, so free-text values survive a round trip through a spreadsheet.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for product in products:
        writer.writerow(product_to_row(product))
    return buffer.getvalue()


def export_products_to_csv(products: Iterable[Product], csv_path: str) -> int:
    """Write the catalog CSV to a file.

    Args:
        products: Products to export (already filtered and sorted)
        csv_path: Path for the output CSV file

    Returns:
        Number of products exported
    """
    rows = list(products)
    os.makedirs(os.path.dirname(csv_path) or ".", exist_ok=True)
    with open(csv_path, "w", newline="", encoding="utf-8") as f:
        f.write(build_catalog_csv(rows))

    log_catalog_event(
        "csv_export",
        {"message": f"Exported {len(rows)} products to {csv_path}", "rows": len(rows), "path": csv_path},
    )
    print(f"Exported {len(rows)} products to {csv_path}")
    return len(rows)
