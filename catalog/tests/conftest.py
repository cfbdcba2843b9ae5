"""Shared fixtures for the catalog test suite."""

import json
from pathlib import Path

import pytest

from catalog.models import Product
from catalog.store import ProductStore


@pytest.fixture
def repo_root():
    """Return the project root."""
    return Path(__file__).resolve().parents[2]


@pytest.fixture
def products_path(repo_root):
    """Path to the shipped product file."""
    return repo_root / "data" / "products.json"


@pytest.fixture
def store(products_path):
    """Store loaded from the shipped product file."""
    return ProductStore.from_json(str(products_path))


@pytest.fixture
def make_product():
    """Factory for products with sensible defaults."""
    counter = {"next": 1}

    def _make(name="Test Product", category="Oncology", details="Test details", **kwargs):
        pid = kwargs.pop("id", counter["next"])
        counter["next"] += 1
        slug = kwargs.pop("slug", f"{name.lower().replace(' ', '-')}-{pid}")
        return Product(id=pid, slug=slug, name=name, category=category, details=details, **kwargs)

    return _make


@pytest.fixture
def sample_products(make_product):
    """Small mixed catalog covering every filter dimension."""
    return [
        make_product("Paclitaxel Injection", "Oncology", "Liquid injection, 100 mg vial", dosage_form="Injection", strength="100 mg"),
        make_product("albendazole Tablets", "Anthelmintic", "Chewable tablets USP, 1 x 1's", dosage_form="Tablet", strength="400 mg"),
        make_product("Cisplatin Injection", "Oncology", "Liquid injection BP", dosage_form="Injection", strength="50 mg"),
        make_product("Letrozole Tablets", "Oncology", "Film coated tablets, 3 x 10's", dosage_form="Tablet", strength="2.5 mg"),
        make_product("Oral Rehydration Salts", "Other", "Pouch of 20.5 g", dosage_form="Powder", strength=""),
        make_product("Éfavirenz Tablets", "Anti-viral", "Film coated tablets IP", dosage_form="Tablet", strength="600 mg"),
    ]


@pytest.fixture
def write_products(tmp_path):
    """Write a list of product records to a temporary JSON file."""

    def _write(records, name="products.json"):
        path = tmp_path / name
        path.write_text(json.dumps(records), encoding="utf-8")
        return str(path)

    return _write
