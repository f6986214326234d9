import pytest
from fastapi.testclient import TestClient

from app import app
from paysign.config import settings

GOLDEN_HELLO = "04d64ad05f6d6c026058ad26c2effcec97dea2675e250b3fb7c6db7a44a5394b"
GOLDEN_AB = "f6a56d5723318ac981fd7057d2082b82b13fa56e03a6d57a30ff59929749e2cb"


@pytest.fixture()
def client(monkeypatch):
    monkeypatch.setattr(settings, "signing_secrets", ["secretA", "secretB"])
    monkeypatch.setattr(settings, "signing_salt", "")
    monkeypatch.setattr(settings, "signing_info", "payload-signing")
    return TestClient(app)


def test_sign_string(client):
    r = client.post("/sign", json={"payload": "hello"})
    assert r.status_code == 200
    body = r.json()
    assert body["signature"] == GOLDEN_HELLO
    assert body["info"] == "payload-signing"


def test_sign_structured(client):
    r = client.post("/sign", json={"payload": {"b": 2, "a": 1}})
    assert r.status_code == 200
    assert r.json()["signature"] == GOLDEN_AB


def test_verify_ok(client):
    r = client.post("/verify", json={"payload": {"a": 1, "b": 2}, "signature": GOLDEN_AB})
    assert r.status_code == 200
    assert r.json() == {"valid": True, "reason_codes": []}


def test_verify_mismatch(client):
    r = client.post("/verify", json={"payload": {"a": 1, "b": 3}, "signature": GOLDEN_AB})
    assert r.status_code == 200
    assert r.json() == {"valid": False, "reason_codes": ["signature_mismatch"]}


def test_verify_bad_format(client):
    r = client.post("/verify", json={"payload": "hello", "signature": "XYZ"})
    assert r.status_code == 200
    assert r.json() == {"valid": False, "reason_codes": ["bad_signature_format"]}


def test_unconfigured_secrets(client, monkeypatch):
    monkeypatch.setattr(settings, "signing_secrets", [])
    r = client.post("/sign", json={"payload": "hello"})
    assert r.status_code == 503
    assert r.json()["detail"] == "signing_not_configured"


def test_uncanonicalizable_payload(client):
    r = client.post("/sign", json={"payload": {"n": 2**70}})
    assert r.status_code == 422
    assert r.json()["detail"] == "payload_not_canonicalizable"


def test_body_too_large(client, monkeypatch):
    monkeypatch.setattr(settings, "max_body_bytes", 32)
    r = client.post("/sign", json={"payload": "x" * 100})
    assert r.status_code == 413


def test_metrics(client):
    client.post("/sign", json={"payload": "hello"})
    r = client.get("/metrics")
    assert r.status_code == 200
    assert "paysign_signatures_total" in r.text


def test_lone_surrogate_payload(client):
    r = client.post("/sign", content=b'{"payload":"\\ud800"}', headers={"content-type": "application/json"})
    assert r.status_code == 422
    assert r.json()["detail"] == "payload_not_canonicalizable"

    r = client.post("/sign", content=b'{"payload":{"a":"\\ud800"}}', headers={"content-type": "application/json"})
    assert r.status_code == 422
    assert r.json()["detail"] == "payload_not_canonicalizable"


def test_metrics_use_route_template(client):
    client.post("/sign", json={"payload": "hello"})
    r = client.get("/metrics")
    assert 'path="/sign"' in r.text


def test_size_limit_applies_before_routing(client, monkeypatch):
    monkeypatch.setattr(settings, "max_body_bytes", 32)
    r = client.post("/verify", content=b"x" * 64, headers={"content-type": "application/json"})
    assert r.status_code == 413
