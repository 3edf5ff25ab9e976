"""A failing database write reaches the caller as a 500."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from propdoc.main import app
from propdoc.services import audit_service


@pytest.fixture
def break_audit(monkeypatch):
    """Call to make every later audit write fail as a locked database would."""
    def _raise(*args, **kwargs):
        raise OperationalError("INSERT INTO audit_logs", {}, Exception("database is locked"))

    def _break():
        monkeypatch.setattr(audit_service, "record", _raise)
    return _break


@pytest.fixture
def quiet_client(client):
    """Same overrides as ``client`` but unhandled errors become responses."""
    return TestClient(app, raise_server_exceptions=False)


def test_approve_answers_internal_error(quiet_client, auth_headers, make_document, break_audit):
    document = make_document()
    break_audit()
    response = quiet_client.post(f"/api/documents/{document['id']}/approve-signing", headers=auth_headers)
    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}


def test_create_document_answers_internal_error(quiet_client, auth_headers, make_template, break_audit):
    template = make_template()
    break_audit()
    response = quiet_client.post(
        "/api/documents",
        json={"templateId": template["id"], "metadata": {"buyerName": "Jane"}},
        headers=auth_headers,
    )
    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}


def test_status_webhook_answers_failure(quiet_client, make_document, break_audit):
    document = make_document()
    break_audit()
    response = quiet_client.post("/api/webhook/document-status", json={"documentId": document["id"], "status": "signed"})
    assert response.status_code == 500
    assert response.json() == {"success": False}


def test_audit_webhook_answers_failure(quiet_client, make_document, break_audit):
    document = make_document()
    break_audit()
    response = quiet_client.post(
        "/api/webhook/audit-log",
        json={"documentId": document["id"], "action": "email_sent", "actor": "n8n"},
    )
    assert response.status_code == 500
    assert response.json() == {"success": False}
