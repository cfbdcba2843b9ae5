"""Command-line interface for the product catalog."""

import argparse
import logging
from typing import List, Optional

from catalog.config import CSV_FILENAME, PRODUCTS_PATH, SORT_FIELDS, SORT_ORDERS, WILDCARD
from catalog.csv_utils import export_products_to_csv
from catalog.extraction import derive_attributes
from catalog.logging_config import setup_logging
from catalog.models import FilterSpec, SortSpec
from catalog.query import filter_products, sort_products
from catalog.store import ProductStore

__all__ = ["main", "parse_args", "show_stats", "show_product"]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Pharmaceutical product catalog tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show catalog statistics
  python -m catalog.cli --stats

  # List categories with product counts
  python -m catalog.cli --list-categories

  # Export every oncology injection to CSV, sorted by strength
  python -m catalog.cli --export-csv data/oncology.csv --category Oncology --form Injection --sort strength

  # Show one product with its derived attributes
  python -m catalog.cli --show methotrexate-injection-50-mg
        """,
    )

    parser.add_argument(
        "--products",
        default=PRODUCTS_PATH,
        help=f"Product JSON file (default: {PRODUCTS_PATH})",
    )

    # Info commands
    parser.add_argument("--stats", action="store_true", help="Show catalog statistics and exit")
    parser.add_argument(
        "--list-categories",
        action="store_true",
        help="List categories with product counts and exit",
    )
    parser.add_argument("--show", metavar="SLUG", help="Show a single product and its derived attributes")

    # Export options
    parser.add_argument(
        "--export-csv",
        metavar="PATH",
        nargs="?",
        const=CSV_FILENAME,
        help=f"Export the filtered catalog to CSV (default file: {CSV_FILENAME})",
    )
    parser.add_argument("--query", "-q", default="", help="Free-text search")
    parser.add_argument("--category", default=WILDCARD, help="Category filter (default: All)")
    parser.add_argument("--form", default=WILDCARD, help="Dosage form filter (default: All)")
    parser.add_argument("--strength", default=WILDCARD, help="Strength filter (default: All)")
    parser.add_argument("--sort", choices=list(SORT_FIELDS), default="name", help="Sort column")
    parser.add_argument("--order", choices=list(SORT_ORDERS), default="asc", help="Sort direction")

    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser.parse_args(argv)


def show_stats(store: ProductStore) -> None:
    """Display catalog statistics."""
    summary = store.summary()

    print(f"\n{'='*50}")
    print("Product catalog")
    print(f"{'='*50}")
    print(f"\nTotal products:  {summary.product_count}")
    print(f"Categories:      {summary.category_count}")
    print(f"Dosage forms:    {summary.dosage_form_count}")
    print(f"Strengths:       {summary.strength_count}")

    print("\nTop categories:")
    for item in summary.top_categories:
        print(f"  {item.name}: {item.count}")
    print()


def show_product(store: ProductStore, slug: str) -> bool:
    """Print one product; returns False when the slug is unknown."""
    product = store.get_by_slug(slug)
    if product is None:
        print(f"No product with slug '{slug}'")
        return False

    attrs = derive_attributes(product)
    print(f"\n{product.name}")
    print(f"  Category:         {product.category}")
    print(f"  Dosage form:      {product.dosage_form or '--'}")
    print(f"  Strength:         {product.strength or '--'}")
    print(f"  Pack size:        {attrs.pack_size}")
    print(f"  Formulation type: {attrs.formulation_type}")
    print(f"  CAS ID:           {attrs.cas_id}")
    print(f"  Pharm spec:       {attrs.pharm_spec}")
    print(f"\n  {product.details}\n")
    return True


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    args = parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.WARNING, log_to_file=False)

    store = ProductStore.from_json(args.products)

    if args.list_categories:
        print("Available categories:")
        for item in store.get_category_counts():
            print(f"  {item.name}: {item.count}")
        return 0

    if args.stats:
        show_stats(store)
        return 0

    if args.show:
        return 0 if show_product(store, args.show) else 1

    if args.export_csv:
        filters = FilterSpec(
            query=args.query,
            category=args.category,
            dosage_form=args.form,
            strength=args.strength,
        )
        rows = sort_products(filter_products(store.get_all(), filters), SortSpec(args.sort, args.order))
        export_products_to_csv(rows, args.export_csv)
        return 0

    show_stats(store)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
