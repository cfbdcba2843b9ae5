"""Test the JSON API blueprint."""


class TestProductsEndpoint:
    """GET /api/products"""

    def test_default_page(self, client):
        response = client.get("/api/products")
        assert response.status_code == 200

        data = response.json
        assert data["total"] == 34
        assert data["total_pages"] == 3
        assert data["page"] == 1
        assert data["page_size"] == 12
        assert data["range"] == [1, 12]
        assert data["pages"] == [1, 2, 3]
        assert data["query"] == ""
        assert len(data["products"]) == 12

    def test_rows_include_derived_attributes(self, client):
        data = client.get("/api/products?q=albendazole+tablets").json
        product = data["products"][0]

        assert product["slug"] == "albendazole-tablets-400-mg"
        assert product["casId"] == "54965-21-8"
        assert product["packSize"] == "1 x 1's"
        assert product["pharmSpec"] == "USP"
        assert product["formulationType"] == "Chewable"

    def test_pagination_clamped(self, client):
        data = client.get("/api/products?limit=5&page=100").json
        assert data["page"] == 7
        assert data["total_pages"] == 7
        assert data["range"] == [31, 34]
        assert data["query"] == "limit=5&page=100"

    def test_filters_and_sort(self, client):
        data = client.get("/api/products?category=Ophthalmology&sort=name&order=desc").json
        assert [p["name"] for p in data["products"]] == ["Timolol Maleate Eye Drops", "Ciprofloxacin Eye Drops"]
        assert data["query"] == "category=Ophthalmology&order=desc"

    def test_empty_strength_shown_as_sentinel(self, client):
        data = client.get("/api/products?category=Other").json
        assert data["products"][0]["strength"] == "--"


class TestProductEndpoint:
    """GET /api/products/<slug>"""

    def test_found(self, client):
        data = client.get("/api/products/cisplatin-injection-50-mg").json
        assert data["product"]["casId"] == "15663-27-1"
        assert len(data["related"]) == 6
        assert all(p["category"] == "Oncology" for p in data["related"])

    def test_not_found(self, client):
        response = client.get("/api/products/unknown")
        assert response.status_code == 404
        assert response.json == {"error": "Product not found", "slug": "unknown"}


class TestCategoriesEndpoint:
    """GET /api/categories"""

    def test_counts(self, client):
        categories = client.get("/api/categories").json["categories"]
        assert categories[0] == {"name": "Oncology", "count": 8}
        assert sum(c["count"] for c in categories) == 34
