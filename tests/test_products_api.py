import json
from pathlib import Path

from fastapi.testclient import TestClient

from fakes import FakeSupabase, failing_store, make_settings
from shopfront.core.security import sign_token
from shopfront.main import create_app
from shopfront.repositories.fallback_store import FallbackStore
from shopfront.repositories.local_store import LocalFileStore
from shopfront.repositories.remote_store import RemoteStore


def create(client: TestClient, headers: dict, data: dict) -> dict:
    res = client.post("/api/products", json=data, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()["data"]


def test_list_products_empty(client: TestClient):
    res = client.get("/api/products")

    assert res.status_code == 200
    assert res.json()["data"] == []


def test_create_keeps_numeric_types(client: TestClient, auth_headers, product_data):
    res = client.post("/api/products", json=product_data, headers=auth_headers)

    assert res.status_code == 201, res.text
    product = res.json()["data"]
    assert product["price"] == 99.99
    assert product["stock"] == 10
    assert isinstance(product["price"], float)
    assert isinstance(product["stock"], int)
    assert product["id"]
    assert product["created_at"]


def test_create_coerces_numeric_strings(client: TestClient, auth_headers, product_data):
    product = create(client, auth_headers, {**product_data, "price": "12.50", "stock": "3"})

    assert product["price"] == 12.5
    assert product["stock"] == 3


def test_create_with_unparseable_price_stores_null(client: TestClient, auth_headers, product_data):
    product = create(client, auth_headers, {**product_data, "price": "abc"})

    assert product["price"] is None


def test_create_then_get_round_trip(client: TestClient, auth_headers, product_data):
    created = create(client, auth_headers, product_data)

    res = client.get(f"/api/products/{created['id']}")

    assert res.status_code == 200
    fetched = res.json()["data"]
    for field, value in product_data.items():
        assert fetched[field] == value
    assert fetched["id"] == created["id"]
    assert fetched["created_at"] == created["created_at"]


def test_create_ignores_unknown_fields(client: TestClient, auth_headers, product_data):
    created = create(client, auth_headers, {**product_data, "color": "red"})

    assert "color" not in created


def test_create_requires_all_fields(client: TestClient, auth_headers, product_data):
    res = client.post(
        "/api/products", json={**product_data, "stock": 0}, headers=auth_headers
    )

    assert res.status_code == 400
    assert res.json()["error"] == "Missing required fields"


def test_create_without_token_is_rejected_and_stores_nothing(
    client: TestClient, settings, product_data
):
    res = client.post("/api/products", json=product_data)

    assert res.status_code == 401
    assert "error" in res.json()
    assert client.get("/api/products").json()["data"] == []
    assert not settings.products_path.exists()


def test_invalid_token_is_rejected(client: TestClient, product_data):
    res = client.post(
        "/api/products", json=product_data, headers={"Authorization": "Bearer nope"}
    )

    assert res.status_code == 401
    assert res.json()["error"] == "Invalid token"


def test_token_signed_with_other_secret_is_rejected(client: TestClient, product_data):
    token = sign_token({"id": "1", "email": "a@b.co"}, "another-secret")
    res = client.post(
        "/api/products", json=product_data, headers={"Authorization": f"Bearer {token}"}
    )

    assert res.status_code == 401


def test_get_missing_product(client: TestClient):
    res = client.get("/api/products/does-not-exist")

    assert res.status_code == 404
    assert res.json()["error"] == "Product not found"


def test_put_replaces_product(client: TestClient, auth_headers, product_data):
    created = create(client, auth_headers, product_data)
    replacement = {"name": "New", "description": "Replaced", "price": 5, "stock": 1}

    res = client.put(f"/api/products/{created['id']}", json=replacement, headers=auth_headers)

    assert res.status_code == 200, res.text
    updated = res.json()["data"]
    for field, value in replacement.items():
        assert updated[field] == value
    assert updated["updated_at"]


def test_put_requires_all_fields(client: TestClient, auth_headers, product_data):
    created = create(client, auth_headers, product_data)

    res = client.put(
        f"/api/products/{created['id']}",
        json={"name": "Updated Product", "price": 149.99},
        headers=auth_headers,
    )

    assert res.status_code == 400


def test_put_missing_product(client: TestClient, auth_headers, product_data):
    res = client.put("/api/products/404", json=product_data, headers=auth_headers)

    assert res.status_code == 404


def test_patch_changes_only_given_fields(client: TestClient, auth_headers, product_data):
    created = create(client, auth_headers, product_data)

    res = client.patch(
        f"/api/products/{created['id']}", json={"price": 149.99}, headers=auth_headers
    )

    assert res.status_code == 200, res.text
    patched = res.json()["data"]
    assert patched["price"] == 149.99
    assert patched["name"] == product_data["name"]
    assert patched["description"] == product_data["description"]
    assert patched["stock"] == product_data["stock"]


def test_patch_rejects_unknown_keys(client: TestClient, auth_headers, product_data):
    created = create(client, auth_headers, product_data)

    res = client.patch(
        f"/api/products/{created['id']}",
        json={"price": 1, "color": "red"},
        headers=auth_headers,
    )

    assert res.status_code == 400
    # nothing was applied
    assert client.get(f"/api/products/{created['id']}").json()["data"]["price"] == 99.99


def test_create_rejects_object_name_and_stores_nothing(
    client: TestClient, settings, auth_headers, product_data
):
    res = client.post(
        "/api/products", json={**product_data, "name": {"en": "Mouse"}}, headers=auth_headers
    )

    assert res.status_code == 400
    assert res.json()["error"] == "Invalid field type"
    assert not settings.products_path.exists()
    listed = client.get("/api/products")
    assert listed.status_code == 200
    assert listed.json()["data"] == []


def test_put_rejects_list_description(client: TestClient, auth_headers, product_data):
    created = create(client, auth_headers, product_data)

    res = client.put(
        f"/api/products/{created['id']}",
        json={**product_data, "description": ["a", "b"]},
        headers=auth_headers,
    )

    assert res.status_code == 400
    fetched = client.get(f"/api/products/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["data"]["description"] == product_data["description"]


def test_patch_rejects_list_description_and_catalog_stays_readable(
    client: TestClient, auth_headers, product_data
):
    created = create(client, auth_headers, product_data)

    res = client.patch(
        f"/api/products/{created['id']}",
        json={"description": ["a", "b"]},
        headers=auth_headers,
    )

    assert res.status_code == 400
    assert client.get(f"/api/products/{created['id']}").status_code == 200
    listed = client.get("/api/products")
    assert listed.status_code == 200
    assert listed.json()["data"][0]["description"] == product_data["description"]


def test_numeric_name_is_shown_as_text(client: TestClient, auth_headers, product_data):
    created = create(client, auth_headers, {**product_data, "name": 1984})

    assert created["name"] == "1984"


def test_patch_rejects_empty_body(client: TestClient, auth_headers, product_data):
    created = create(client, auth_headers, product_data)

    res = client.patch(f"/api/products/{created['id']}", json={}, headers=auth_headers)

    assert res.status_code == 400


def test_patch_missing_product(client: TestClient, auth_headers):
    res = client.patch("/api/products/404", json={"price": 1}, headers=auth_headers)

    assert res.status_code == 404


def test_delete_then_get_is_404(client: TestClient, auth_headers, product_data):
    created = create(client, auth_headers, product_data)

    res = client.delete(f"/api/products/{created['id']}", headers=auth_headers)
    assert res.status_code == 200
    assert res.json()["message"]

    assert client.get(f"/api/products/{created['id']}").status_code == 404
    assert client.delete(f"/api/products/{created['id']}", headers=auth_headers).status_code == 404


def test_delete_requires_token(client: TestClient, auth_headers, product_data):
    created = create(client, auth_headers, product_data)

    assert client.delete(f"/api/products/{created['id']}").status_code == 401


def test_products_file_is_wrapped(client: TestClient, settings, auth_headers, product_data):
    create(client, auth_headers, product_data)

    raw = json.loads(settings.products_path.read_text(encoding="utf-8"))
    assert raw["products"][0]["name"] == product_data["name"]


def test_malformed_json_body_is_400(client: TestClient, auth_headers):
    res = client.post(
        "/api/products",
        content=b"{not json",
        headers={**auth_headers, "Content-Type": "application/json"},
    )

    assert res.status_code == 400
    assert "error" in res.json()


def test_security_headers(client: TestClient):
    res = client.get("/api/products")

    assert res.headers["X-Content-Type-Options"] == "nosniff"
    assert "X-Data-Source" not in res.headers


def test_root_and_health(client: TestClient):
    assert "/api/products" in client.get("/").json()["endpoints"]
    assert client.get("/health").json()["data_source"] == "local"


# -------- Remote mode --------


def test_remote_failure_falls_back_to_local_file(tmp_path: Path, settings, auth_headers, product_data):
    local = LocalFileStore(tmp_path / "products.json", wrapper_key="products")
    app = create_app(
        settings,
        product_store=FallbackStore(failing_store(), local),
        user_store=LocalFileStore(tmp_path / "users.json"),
    )
    client = TestClient(app)

    res = client.post("/api/products", json=product_data, headers=auth_headers)

    assert res.status_code == 201, res.text
    assert res.headers["X-Data-Source"] == "local-fallback"
    assert local.get_by_id(res.json()["data"]["id"])["name"] == product_data["name"]


def test_remote_store_serves_requests_when_healthy(tmp_path: Path, settings, auth_headers, product_data):
    fake = FakeSupabase()
    local = LocalFileStore(tmp_path / "products.json", wrapper_key="products")
    app = create_app(
        settings,
        product_store=FallbackStore(RemoteStore(lambda: fake, "products"), local),
        user_store=LocalFileStore(tmp_path / "users.json"),
    )
    client = TestClient(app)

    created = create(client, auth_headers, product_data)
    res = client.get(f"/api/products/{created['id']}")

    assert res.status_code == 200
    assert "X-Data-Source" not in res.headers
    assert fake.tables["products"][0]["id"] == created["id"]
    # writes that the remote store served never reach the local file
    assert local.get_all() == []


def test_remote_mode_without_supabase_config_falls_back(tmp_path: Path, auth_headers, product_data):
    client = TestClient(create_app(make_settings(tmp_path, DATA_SOURCE="remote")))

    res = client.post("/api/products", json=product_data, headers=auth_headers)

    assert res.status_code == 201, res.text
    assert res.headers["X-Data-Source"] == "local-fallback"
    assert client.get("/api/products").json()["data"][0]["name"] == product_data["name"]
