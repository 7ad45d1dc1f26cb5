import os

# Must be set before restaurant_api is imported: settings are read at import time.
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from restaurant_api.database import AppContext
from restaurant_api.main import create_app


@pytest.fixture
def mongo_db():
    return AsyncMongoMockClient()["restaurant_test"]


@pytest.fixture
def context(mongo_db):
    return AppContext(mongo_db, timeout=5)


@pytest.fixture
def client(mongo_db):
    app = create_app(database=mongo_db)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def signup_payload():
    return {
        "first_name": "John",
        "last_name": "Doe",
        "email": "john@b.com",
        "phone": "5550001",
        "password": "SecurePass123",
    }


@pytest.fixture
def auth_headers(client, signup_payload):
    response = client.post("/users/signup", json=signup_payload)
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}
