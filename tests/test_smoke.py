import pytest
from fastapi.testclient import TestClient
from app import app

@pytest.fixture()
def client():
    return TestClient(app)

def test_root(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["alg"] == "HKDF-SHA256+HMAC-SHA256"

def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["ok"] is True
