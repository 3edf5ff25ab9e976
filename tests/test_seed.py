from propdoc.models.document import Document
from propdoc.models.template import Template
from propdoc.models.user import User
from propdoc.services.document_service import render_document_html
from propdoc.services.seed_service import seed_database


def test_seed_runs_once(db):
    assert seed_database(db) is True
    assert seed_database(db) is False
    assert db.query(User).count() == 1
    assert db.query(Template).count() == 1
    assert db.query(Document).count() == 1


def test_seeded_document_renders(db):
    seed_database(db)
    document = db.query(Document).first()
    html = render_document_html(db, document.id)
    assert "between Jane Smith (the Seller) and John Doe (the Buyer)" in html
    assert "for 500000" in html


def test_seeded_admin_can_sign_in(client, session_factory):
    session = session_factory()
    try:
        seed_database(session)
    finally:
        session.close()
    response = client.post("/api/auth/signin", json={"email": "admin@example.com", "password": "admin123"})
    assert response.status_code == 200


def test_home(client):
    assert client.get("/").json() == {"message": "PropDoc API running"}
