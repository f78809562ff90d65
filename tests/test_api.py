"""HTTP tests for the product endpoints and error mapping."""

from fastapi.testclient import TestClient

from catalog.api.dependencies import get_product_service
from catalog.errors import StorageError


def _create(client, category="tools", name="hammer"):
    response = client.post("/api/v1/products", json={"category": category, "name": name})
    assert response.status_code == 201
    return response.json()


def test_create_and_get_product(client):
    created = _create(client)
    assert created["id"] > 0
    assert set(created) == {"id", "category", "name"}

    response = client.get(f"/api/v1/products/{created['id']}")
    assert response.status_code == 200
    assert response.json() == created


def test_get_missing_product_is_404(client):
    response = client.get("/api/v1/products/12345")
    assert response.status_code == 404
    assert response.json()["detail"]["error"] == "not_found"


def test_update_product(client):
    created = _create(client)
    response = client.put(
        f"/api/v1/products/{created['id']}",
        json={"category": "hardware", "name": "mallet"},
    )
    assert response.status_code == 200
    assert response.json() == {"id": created["id"], "category": "hardware", "name": "mallet"}


def test_update_requires_both_fields(client):
    created = _create(client)
    response = client.put(f"/api/v1/products/{created['id']}", json={"name": "mallet"})
    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["error"] == "validation_error"
    assert "category" in detail["field_errors"]


def test_update_missing_product_is_404(client):
    response = client.put("/api/v1/products/999", json={"category": "a", "name": "b"})
    assert response.status_code == 404


def test_delete_product(client):
    created = _create(client)
    response = client.delete(f"/api/v1/products/{created['id']}")
    assert response.status_code == 200
    assert response.json() == {"deleted": True}

    assert client.get(f"/api/v1/products/{created['id']}").status_code == 404
    assert client.delete(f"/api/v1/products/{created['id']}").status_code == 404


def test_list_products_by_category(client):
    _create(client, "tools", "hammer")
    _create(client, "tools", "wrench")
    _create(client, "garden", "rake")

    response = client.get("/api/v1/products", params={"category": "tools", "page": 0, "size": 10})
    assert response.status_code == 200
    body = response.json()
    assert body["total_pages"] == 1
    assert body["total_elements"] == 2
    assert body["page_index"] == 0
    assert sorted(item["name"] for item in body["items"]) == ["hammer", "wrench"]


def test_list_uses_default_page_size(client):
    for i in range(12):
        _create(client, "tools", f"tool-{i}")
    body = client.get("/api/v1/products", params={"category": "tools"}).json()
    assert len(body["items"]) == 10
    assert body["total_pages"] == 2


def test_list_rejects_bad_page_size(client):
    response = client.get("/api/v1/products", params={"category": "tools", "size": 0})
    assert response.status_code == 422
    assert "size" in response.json()["detail"]["field_errors"]


def test_list_unique_categories(client):
    for category in ("tools", "garden", "tools"):
        _create(client, category)
    response = client.get("/api/v1/products/categories")
    assert response.status_code == 200
    assert response.json() == ["garden", "tools"]


def test_non_integer_id_is_validation_error(client):
    response = client.get("/api/v1/products/abc")
    assert response.status_code == 422
    assert response.json()["detail"]["error"] == "validation_error"


def test_storage_failure_is_500_without_cause(client):
    class FailingService:
        def get_by_id(self, product_id):
            raise StorageError("find_by_id failed: connection refused secret-host", operation="find_by_id")

    client.app.dependency_overrides[get_product_service] = lambda: FailingService()
    response = client.get("/api/v1/products/1")
    assert response.status_code == 500
    detail = response.json()["detail"]
    assert detail["error"] == "storage_failure"
    assert "secret-host" not in detail["message"]


def test_unclassified_failure_is_generic_500(client):
    class BrokenService:
        def list_unique_categories(self):
            raise RuntimeError("boom")

    client.app.dependency_overrides[get_product_service] = lambda: BrokenService()
    safe_client = TestClient(client.app, raise_server_exceptions=False)
    response = safe_client.get("/api/v1/products/categories")
    assert response.status_code == 500
    assert response.json() == {"detail": {"error": "internal_error", "message": "Internal server error"}}


def test_health_reports_store(client):
    assert client.get("/health").json() == {"status": "ok", "store": "memory"}


def test_end_to_end_scenario(client):
    hammer = _create(client, "tools", "hammer")
    _create(client, "tools", "wrench")

    body = client.get("/api/v1/products", params={"category": "tools", "page": 0, "size": 10}).json()
    assert len(body["items"]) == 2
    assert body["total_pages"] == 1
    assert body["total_elements"] == 2

    categories = client.get("/api/v1/products/categories").json()
    assert categories.count("tools") == 1

    assert client.delete(f"/api/v1/products/{hammer['id']}").json() == {"deleted": True}
    assert client.get(f"/api/v1/products/{hammer['id']}").status_code == 404


def test_api_on_sql_store(config, sql_store):
    from catalog.api.main import create_app

    sql_client = TestClient(create_app(config=config, store=sql_store))
    assert sql_client.get("/health").json()["store"] == "sql"

    created = _create(sql_client, "tools", "hammer")
    updated = sql_client.put(f"/api/v1/products/{created['id']}", json={"category": "tools", "name": "claw hammer"})
    assert updated.json()["name"] == "claw hammer"
    assert sql_client.get("/api/v1/products", params={"category": "tools"}).json()["total_elements"] == 1


def test_out_of_range_id_on_sql_store_is_404(config, sql_store):
    from catalog.api.main import create_app

    sql_client = TestClient(create_app(config=config, store=sql_store))
    huge = 2 ** 70

    assert sql_client.get(f"/api/v1/products/{huge}").status_code == 404
    assert sql_client.put(f"/api/v1/products/{huge}", json={"category": "a", "name": "b"}).status_code == 404
    response = sql_client.delete(f"/api/v1/products/{huge}")
    assert response.status_code == 404
    assert response.json()["detail"]["error"] == "not_found"


def test_huge_page_on_sql_store_is_empty_page(config, sql_store):
    from catalog.api.main import create_app

    sql_client = TestClient(create_app(config=config, store=sql_store))
    _create(sql_client, "tools", "hammer")

    response = sql_client.get("/api/v1/products", params={"category": "tools", "page": 10 ** 18, "size": 50})
    assert response.status_code == 200
    body = response.json()
    assert body["items"] == []
    assert body["total_elements"] == 1
    assert body["total_pages"] == 1
