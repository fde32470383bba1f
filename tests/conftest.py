from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from fakes import TEST_SECRET, make_settings
from shopfront.core.config import Settings
from shopfront.core.security import sign_token
from shopfront.main import create_app


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return make_settings(tmp_path)


@pytest.fixture
def client(settings: Settings) -> TestClient:
    # Local mode, isolated data directory per test
    return TestClient(create_app(settings))


@pytest.fixture
def auth_headers() -> dict[str, str]:
    token = sign_token({"id": "test-user-id", "email": "test@example.com"}, TEST_SECRET)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def product_data() -> dict:
    return {
        "name": "Test Product",
        "description": "Test Description",
        "price": 99.99,
        "stock": 10,
    }
