"""Tests for catalog filtering, sorting and pagination."""

import pytest

from catalog.models import FilterSpec, PaginationSpec, SortSpec
from catalog.query import (
    collation_key,
    filter_products,
    page_window,
    paginate,
    query_catalog,
    sort_products,
)


def names(products):
    return [p.name for p in products]


class TestFiltering:
    """Filters are AND-ed; 'All' disables a dimension."""

    def test_default_filters_keep_everything(self, sample_products):
        assert filter_products(sample_products, FilterSpec()) == sample_products

    def test_category_equality(self, sample_products):
        result = filter_products(sample_products, FilterSpec(category="Oncology"))
        assert names(result) == ["Paclitaxel Injection", "Cisplatin Injection", "Letrozole Tablets"]

    def test_dimensions_are_anded(self, sample_products):
        result = filter_products(sample_products, FilterSpec(category="Oncology", dosage_form="Tablet"))
        assert names(result) == ["Letrozole Tablets"]

    def test_text_query_is_trimmed_and_case_insensitive(self, sample_products):
        result = filter_products(sample_products, FilterSpec(query="  CISPLATIN "))
        assert names(result) == ["Cisplatin Injection"]

    def test_text_query_searches_details_and_strength(self, sample_products):
        assert names(filter_products(sample_products, FilterSpec(query="pouch"))) == ["Oral Rehydration Salts"]
        assert names(filter_products(sample_products, FilterSpec(query="2.5 mg"))) == ["Letrozole Tablets"]

    def test_no_match(self, sample_products):
        assert filter_products(sample_products, FilterSpec(category="Steroids")) == []

    def test_result_is_subset_satisfying_predicates(self, store):
        filters = FilterSpec(query="tablets", category="Oncology", dosage_form="Tablet")
        result = query_catalog(store.get_all(), filters, SortSpec(), PaginationSpec(page_size=100))

        for product in result.page_items:
            assert product in store.get_all()
            assert product.category == "Oncology"
            assert product.dosage_form == "Tablet"
            haystack = " ".join([product.name, product.details, product.category, product.dosage_form, product.strength])
            assert "tablets" in haystack.lower()


class TestSorting:
    """Stable single-column sort."""

    def test_name_ascending_ignores_case_and_accents(self, sample_products):
        result = sort_products(sample_products, SortSpec("name", "asc"))
        assert names(result) == [
            "albendazole Tablets",
            "Cisplatin Injection",
            "Éfavirenz Tablets",
            "Letrozole Tablets",
            "Oral Rehydration Salts",
            "Paclitaxel Injection",
        ]

    def test_descending_is_reverse_of_ascending_for_unique_keys(self, sample_products):
        asc = sort_products(sample_products, SortSpec("name", "asc"))
        desc = sort_products(sample_products, SortSpec("name", "desc"))
        assert desc == list(reversed(asc))

    def test_equal_keys_keep_relative_order_in_both_directions(self, sample_products):
        asc = sort_products(sample_products, SortSpec("category", "asc"))
        desc = sort_products(sample_products, SortSpec("category", "desc"))

        oncology_order = ["Paclitaxel Injection", "Cisplatin Injection", "Letrozole Tablets"]
        assert [p.name for p in asc if p.category == "Oncology"] == oncology_order
        assert [p.name for p in desc if p.category == "Oncology"] == oncology_order
        assert desc[0].category == "Other"
        assert asc[0].category == "Anthelmintic"

    def test_missing_value_sorts_as_empty(self, sample_products):
        result = sort_products(sample_products, SortSpec("strength", "asc"))
        assert result[0].name == "Oral Rehydration Salts"

    def test_unknown_field_keeps_input_order(self, sample_products):
        assert sort_products(sample_products, SortSpec("price", "asc")) == sample_products

    def test_collation_lowercase_before_uppercase(self):
        assert sorted(["B", "a", "A", "b"], key=collation_key) == ["a", "A", "b", "B"]

    def test_collation_punctuation_before_digits_and_letters(self):
        values = ["b", "~c", "1", "_a", "[x"]
        assert sorted(values, key=collation_key) == ["[x", "_a", "~c", "1", "b"]

    def test_collation_punctuation_inside_names(self):
        assert sorted(["Co-trimoxazole", "Co trimoxazole", "Coal"], key=collation_key) == [
            "Co trimoxazole",
            "Co-trimoxazole",
            "Coal",
        ]


class TestPagination:
    """Page slicing and clamping."""

    @pytest.fixture
    def many(self, make_product):
        return [make_product(f"Product {i:02d}") for i in range(37)]

    def test_total_pages(self, many):
        result = paginate(many, PaginationSpec(page_size=12, page=1))
        assert result.total_count == 37
        assert result.total_pages == 4
        assert len(result.page_items) == 12

    def test_page_clamped_to_last(self, many):
        result = paginate(many, PaginationSpec(page_size=12, page=10))
        assert result.page == 4
        assert len(result.page_items) == 1
        assert (result.range_start, result.range_end) == (37, 37)

    def test_page_clamped_to_first(self, many):
        assert paginate(many, PaginationSpec(page_size=12, page=0)).page == 1

    def test_empty_result_has_one_page(self):
        result = paginate([], PaginationSpec(page_size=12, page=3))
        assert result.total_pages == 1
        assert result.page == 1
        assert result.page_items == []
        assert (result.range_start, result.range_end) == (0, 0)

    def test_range(self, many):
        result = paginate(many, PaginationSpec(page_size=12, page=2))
        assert (result.range_start, result.range_end) == (13, 24)

    def test_query_catalog_sorts_before_paginating(self, many):
        result = query_catalog(many, FilterSpec(), SortSpec("name", "desc"), PaginationSpec(page_size=5))
        assert result.page_items[0].name == "Product 36"


class TestPageWindow:
    """Pager page-number window."""

    def test_fewer_pages_than_window(self):
        assert page_window(1, 3) == [1, 2, 3]

    def test_near_start(self):
        assert page_window(2, 10) == [1, 2, 3, 4, 5]

    def test_near_end(self):
        assert page_window(9, 10) == [6, 7, 8, 9, 10]

    def test_centred(self):
        assert page_window(6, 10) == [4, 5, 6, 7, 8]
