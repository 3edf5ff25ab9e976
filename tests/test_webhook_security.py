"""Callback verification once N8N_WEBHOOK_SECRET is configured."""

import hashlib
import hmac
import json

import pytest

from propdoc.config import settings

SECRET = "n8n-shared-secret"


@pytest.fixture(autouse=True)
def webhook_secret(monkeypatch):
    monkeypatch.setattr(settings, "N8N_WEBHOOK_SECRET", SECRET)


def signed(body):
    raw = json.dumps(body).encode()
    signature = hmac.new(SECRET.encode(), raw, hashlib.sha256).hexdigest()
    return raw, {"X-N8N-Signature": signature, "Content-Type": "application/json"}


def test_unsigned_callback_rejected(client, make_document):
    document = make_document()
    response = client.post("/api/webhook/document-status", json={"documentId": document["id"], "status": "signed"})
    assert response.status_code == 401


def test_bad_signature_rejected(client, make_document):
    document = make_document()
    raw, headers = signed({"documentId": document["id"], "status": "signed"})
    headers["X-N8N-Signature"] = "0" * 64
    assert client.post("/api/webhook/document-status", content=raw, headers=headers).status_code == 401


def test_hmac_signed_callback_accepted(client, auth_headers, make_document):
    document = make_document()
    raw, headers = signed({"documentId": document["id"], "status": "signed"})
    response = client.post("/api/webhook/document-status", content=raw, headers=headers)
    assert response.status_code == 200
    assert client.get(f"/api/documents/{document['id']}", headers=auth_headers).json()["status"] == "signed"


def test_shared_secret_header_accepted(client, make_document):
    document = make_document()
    response = client.post(
        "/api/webhook/audit-log",
        json={"documentId": document["id"], "action": "viewed", "actor": "buyer@example.com"},
        headers={"X-N8N-Secret": SECRET},
    )
    assert response.status_code == 200
