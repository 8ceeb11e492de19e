# tests/conftest.py
import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-vTp2XS-CAW7-JhpHt")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import mongomock
import pytest
from fastapi.testclient import TestClient

from ezgest.config.database import db_connection
from ezgest.main import create_app
from ezgest.models.users import RegisterRequest
from ezgest.services.credential_service import credential_service


@pytest.fixture
def db():
    """Fresh in-memory database bound to the shared connection manager"""
    db_connection.bind(mongomock.MongoClient())
    yield db_connection.get_database()
    db_connection.disconnect()


@pytest.fixture
def client(db):
    return TestClient(create_app(use_lifespan=False))


def make_user(db, email, password="secret1", nome="Alice", cognome="Rossi"):
    credential_service.register(db, RegisterRequest(
        nome=nome, cognome=cognome, dob="1990-01-01", email=email, password=password
    ))
    return db.users.find_one({"email": email})


def register(client, email, password="secret1", nome="Alice", cognome="Rossi"):
    response = client.post("/api/register", json={
        "nome": nome, "cognome": cognome, "dob": "1990-01-01", "email": email, "password": password
    })
    assert response.status_code == 200
    return response.json()


def login(client, email, password="secret1"):
    response = client.post("/api/login", json={"email": email, "password": password})
    assert response.status_code == 200
    return response.json()


def auth_headers(client, email, password="secret1"):
    token = login(client, email, password)["token"]
    return {"Authorization": f"Bearer {token}"}
