"""Tests for CSV export."""

import csv
import io
import logging

from catalog.config import CSV_HEADERS
from catalog.csv_utils import build_catalog_csv, export_products_to_csv, product_to_row


class TestBuildCatalogCsv:
    """CSV text generation."""

    def test_header(self, sample_products):
        first_line = build_catalog_csv(sample_products).splitlines()[0]
        assert first_line == "Name,Form,Category,Strength,Pack Size,Formulation Type,CAS ID,Pharm Spec"

    def test_empty_product_list(self):
        assert build_catalog_csv([]) == ",".join(CSV_HEADERS) + "\n"

    def test_empty_strength_shows_sentinel(self, sample_products):
        salts = next(p for p in sample_products if p.name == "Oral Rehydration Salts")
        row = product_to_row(salts)
        assert row[1] == "Powder"
        assert row[3] == "--"

    def test_fields_with_commas_are_quoted(self, make_product):
        product = make_product('Saline, "Normal"', details="Bottle of 500 ml", dosage_form="Infusion", strength="0.9%")
        text = build_catalog_csv([product])

        assert '"Saline, ""Normal"""' in text
        rows = list(csv.reader(io.StringIO(text)))
        assert rows[1][0] == 'Saline, "Normal"'
        assert len(rows[1]) == len(CSV_HEADERS)

    def test_deterministic(self, store):
        products = store.get_all()
        assert build_catalog_csv(products) == build_catalog_csv(products)

    def test_derived_columns(self, store):
        text = build_catalog_csv([store.get_by_slug("methotrexate-tablets-2-5-mg")])
        row = list(csv.reader(io.StringIO(text)))[1]
        assert row == ["Methotrexate Tablets", "Tablet", "Oncology", "2.5 mg", "10 x 10's", "Tablet", "59-05-2", "IP"]


class TestExportToFile:
    """Writing CSV files."""

    def test_writes_file(self, tmp_path, sample_products):
        path = tmp_path / "out" / "catalog.csv"
        count = export_products_to_csv(sample_products, str(path))

        assert count == len(sample_products)
        assert path.read_text(encoding="utf-8") == build_catalog_csv(sample_products)

    def test_file_export_is_logged(self, tmp_path, sample_products, caplog):
        path = tmp_path / "catalog.csv"
        with caplog.at_level(logging.INFO, logger="catalog"):
            export_products_to_csv(sample_products, str(path))

        events = [r for r in caplog.records if getattr(r, "event_type", None) == "csv_export"]
        assert len(events) == 1
        assert events[0].event_data == {"rows": len(sample_products), "path": str(path)}

    def test_building_text_does_not_log(self, sample_products, caplog):
        with caplog.at_level(logging.DEBUG, logger="catalog"):
            build_catalog_csv(sample_products)
        assert caplog.records == []
