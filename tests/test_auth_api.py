import json
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from fastapi.testclient import TestClient

from shopfront.core.errors import ConflictError
from shopfront.core.security import verify_token

USER = {"email": "test@example.com", "password": "password123", "name": "Test User"}


def register(client: TestClient, **overrides):
    return client.post("/api/auth/register", json={**USER, **overrides})


def test_register_returns_token_for_new_user(client: TestClient, settings):
    res = register(client)

    assert res.status_code == 201, res.text
    body = res.json()
    data = body["data"]
    assert body["message"]
    assert data["user"] == {"id": data["user"]["id"], "email": USER["email"], "name": USER["name"]}

    claims = verify_token(data["token"], settings.jwt_secret)
    assert claims["id"] == data["user"]["id"]
    assert claims["email"] == USER["email"]


def test_register_never_returns_password_hash(client: TestClient):
    body = register(client).json()

    assert "password_hash" not in body["data"]["user"]
    assert USER["password"] not in str(body)


def test_register_duplicate_email(client: TestClient):
    assert register(client).status_code == 201

    res = register(client, name="Someone Else")
    assert res.status_code == 400
    assert res.json()["error"] == "User already exists"


def test_register_invalid_email(client: TestClient):
    res = register(client, email="invalid-email")

    assert res.status_code == 400
    assert res.json()["error"] == "Invalid email"


def test_register_short_password(client: TestClient):
    res = register(client, password="123")

    assert res.status_code == 400
    assert res.json()["error"] == "Invalid password"


def test_register_missing_fields(client: TestClient):
    res = client.post("/api/auth/register", json={"email": USER["email"]})

    assert res.status_code == 400
    assert res.json()["error"] == "Missing required fields"


def test_register_non_object_body(client: TestClient):
    res = client.post("/api/auth/register", json=["not", "an", "object"])

    assert res.status_code == 400
    assert "error" in res.json()


def test_login_with_valid_credentials(client: TestClient, settings):
    registered = register(client).json()["data"]

    res = client.post(
        "/api/auth/login", json={"email": USER["email"], "password": USER["password"]}
    )

    assert res.status_code == 200, res.text
    data = res.json()["data"]
    assert data["user"]["id"] == registered["user"]["id"]
    claims = verify_token(data["token"], settings.jwt_secret)
    assert claims["id"] == registered["user"]["id"]
    assert claims["email"] == USER["email"]


def test_login_wrong_password(client: TestClient):
    register(client)

    res = client.post("/api/auth/login", json={"email": USER["email"], "password": "wrongpassword"})

    assert res.status_code == 401
    assert res.json()["error"] == "Invalid credentials"


def test_login_unknown_user(client: TestClient):
    res = client.post(
        "/api/auth/login", json={"email": "nonexistent@example.com", "password": "password123"}
    )

    assert res.status_code == 401
    assert res.json()["error"] == "Invalid credentials"


def test_login_missing_fields(client: TestClient):
    res = client.post("/api/auth/login", json={"email": USER["email"]})

    assert res.status_code == 400


def test_users_file_is_bare_array(client: TestClient, settings):
    register(client)

    raw = settings.users_path.read_text(encoding="utf-8")
    assert raw.lstrip().startswith("[")


def test_login_non_object_body(client: TestClient):
    res = client.post("/api/auth/login", json="test@example.com")

    assert res.status_code == 400
    assert res.json()["message"] == "Request body must be a JSON object"


def test_concurrent_registrations_create_one_user(client: TestClient, settings):
    service = client.app.state.auth_service
    workers = 8
    barrier = threading.Barrier(workers)

    def attempt():
        barrier.wait()
        try:
            return service.register_user(dict(USER))
        except ConflictError as exc:
            return exc

    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(lambda _: attempt(), range(workers)))

    conflicts = [r for r in results if isinstance(r, ConflictError)]
    assert len(conflicts) == workers - 1

    users = json.loads(settings.users_path.read_text(encoding="utf-8"))
    assert [u["email"] for u in users] == [USER["email"]]


@pytest.mark.parametrize("body", [None, ["a"], "text", 42])
def test_register_rejects_non_object_bodies(client: TestClient, body):
    res = client.post("/api/auth/register", json=body)

    assert res.status_code == 400
