"""
Component tests for the catalog endpoints.

API route -> CatalogService -> ProductRepo -> sqlite, no mocking.
"""
from decimal import Decimal

from fastapi.testclient import TestClient


class TestListProducts:
    def test_lists_all_products_in_wire_format(self, test_client: TestClient, catalog):
        response = test_client.get("/api/products")

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 4

        leche = next(p for p in data if p["nombre"] == "Leche entera 1L")
        assert leche["_id"] == str(catalog["Leche entera 1L"])
        assert leche["categoria"] == "Lácteos"
        assert Decimal(leche["precio"]) == Decimal("4200")
        assert leche["descripcion"] == "Leche entera pasteurizada"
        assert leche["imagen"] == "leche.jpg"

    def test_todos_means_no_filter(self, test_client: TestClient, catalog):
        response = test_client.get("/api/products", params={"categoria": "Todos"})
        assert response.status_code == 200
        assert len(response.json()) == 4

    def test_filter_by_category(self, test_client: TestClient, catalog):
        response = test_client.get("/api/products", params={"categoria": "Lácteos"})

        assert response.status_code == 200
        names = [p["nombre"] for p in response.json()]
        assert names == ["Leche entera 1L", "Queso campesino"]

    def test_search_is_case_insensitive_substring(self, test_client: TestClient, catalog):
        response = test_client.get("/api/products", params={"busqueda": "PAN"})

        assert response.status_code == 200
        assert [p["nombre"] for p in response.json()] == ["Pan tajado"]

    def test_search_folds_accented_capitals(self, test_client: TestClient, catalog):
        response = test_client.get("/api/products", params={"busqueda": "LÁCTEOS"})

        assert response.status_code == 200
        assert [p["nombre"] for p in response.json()] == ["Leche entera 1L", "Queso campesino"]

    def test_search_wildcards_are_literal(self, test_client: TestClient, catalog):
        for term in ("%", "_", "Pan%", "L_che"):
            response = test_client.get("/api/products", params={"busqueda": term})

            assert response.status_code == 200
            assert response.json() == [], term

    def test_search_matches_description(self, test_client: TestClient, catalog):
        response = test_client.get("/api/products", params={"busqueda": "colombiano"})
        assert [p["nombre"] for p in response.json()] == ["Café molido 500g"]

    def test_category_and_search_combined(self, test_client: TestClient, catalog):
        response = test_client.get("/api/products", params={"categoria": "Panadería", "busqueda": "queso"})

        assert response.status_code == 200
        assert response.json() == []

    def test_unknown_category_is_empty(self, test_client: TestClient, catalog):
        response = test_client.get("/api/products", params={"categoria": "Juguetes"})
        assert response.status_code == 200
        assert response.json() == []

    def test_categories(self, test_client: TestClient):
        response = test_client.get("/api/products/categories")

        assert response.status_code == 200
        categories = response.json()
        assert categories[0] == "Todos"
        assert "Lácteos" in categories


class TestHealthAndCors:
    def test_health(self, test_client: TestClient):
        response = test_client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_allowed_origin(self, test_client: TestClient):
        response = test_client.get("/api/health", headers={"Origin": "http://localhost:5173"})

        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
        assert response.headers["access-control-allow-credentials"] == "true"

    def test_vercel_preview_origin(self, test_client: TestClient):
        origin = "https://ec-don-pico-front-git-feature.vercel.app"
        response = test_client.get("/api/health", headers={"Origin": origin})

        assert response.headers["access-control-allow-origin"] == origin

    def test_any_vercel_origin(self, test_client: TestClient):
        origin = "http://donpico-preview.vercel.app"
        response = test_client.get("/api/health", headers={"Origin": origin})

        assert response.headers["access-control-allow-origin"] == origin

    def test_lookalike_vercel_domain_is_not_allowed(self, test_client: TestClient):
        response = test_client.get("/api/health", headers={"Origin": "https://evil.vercel.app.example.com"})

        assert "access-control-allow-origin" not in response.headers

    def test_foreign_origin_gets_no_cors_headers(self, test_client: TestClient):
        response = test_client.get("/api/health", headers={"Origin": "https://evil.example.com"})

        assert response.status_code == 200
        assert "access-control-allow-origin" not in response.headers

    def test_preflight(self, test_client: TestClient):
        response = test_client.options(
            "/api/orders",
            headers={
                "Origin": "https://ec-don-pico-front.vercel.app",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "content-type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "https://ec-don-pico-front.vercel.app"
