import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from propdoc.main import app
from propdoc.database import Base, get_db
from propdoc.services.n8n_service import GatewayResult, get_gateway


class FakeGateway:
    """Stands in for the n8n workflow and records every call."""

    def __init__(self):
        self.calls = []
        self.fail = False
        self.sign_status_body = {}
        self.on_sign_status = None

    def _result(self, operation, body=None):
        if self.fail:
            return GatewayResult(operation, False, None, None, "Cannot connect to host")
        return GatewayResult(operation, True, 200, body)

    def operations(self):
        return [operation for operation, _ in self.calls]

    async def create_template(self, template):
        self.calls.append(("create-template", template))
        return self._result("create-template")

    async def document_generate(self, document_id, metadata, template_id):
        self.calls.append(("document-generate", {"documentId": document_id, **metadata, "templateId": template_id}))
        return self._result("document-generate")

    async def approve_signing(self, document_id):
        self.calls.append(("approves-signing", {"documentId": document_id}))
        return self._result("approves-signing")

    async def sign_status(self, document_id):
        self.calls.append(("sign-status", {"documentId": document_id}))
        if self.on_sign_status:
            self.on_sign_status(document_id)
        return self._result("sign-status", self.sign_status_body)


@pytest.fixture
def engine(tmp_path):
    """File-backed SQLite so separate sessions get separate connections."""
    engine = create_engine(f"sqlite:///{tmp_path / 'propdoc-test.db'}", connect_args={"check_same_thread": False})
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def client(session_factory, gateway):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_gateway] = lambda: gateway
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    response = client.post(
        "/api/auth/signup",
        json={"email": "agent@example.com", "password": "s3cret", "name": "Test Agent"},
    )
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def make_template(client, auth_headers):
    def _make(content="<p>{{buyerName}} buys from {{sellerName}}</p>", name="Sale Deed"):
        response = client.post(
            "/api/templates",
            json={"name": name, "documentType": "Sales Contract", "content": content},
            headers=auth_headers,
        )
        assert response.status_code == 201
        return response.json()
    return _make


@pytest.fixture
def make_document(client, auth_headers, make_template):
    def _make(metadata=None, template_id=None):
        if template_id is None:
            template_id = make_template()["id"]
        response = client.post(
            "/api/documents",
            json={"templateId": template_id, "metadata": metadata or {"buyerName": "Jane", "sellerName": "John"}},
            headers=auth_headers,
        )
        assert response.status_code == 201
        return response.json()
    return _make
