"""
Document lifecycle: pending -> approved -> signed | declined.

Local state always wins over delivery to n8n. A status change is committed
first and the workflow is notified afterwards; a failed notification is
logged and stored as a failed transaction but never undone or raised.
Out-of-order transitions (pending -> signed, declined -> approved...) are
accepted, since n8n may report them, and logged as warnings.
"""
import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session, joinedload
from sqlalchemy.orm.exc import StaleDataError

from propdoc.exceptions import ConflictError, NotFoundError
from propdoc.models.document import Document, DocumentStatus, EXPECTED_TRANSITIONS
from propdoc.schemas.document import DocumentInput
from propdoc.services import audit_service
from propdoc.services.audit_service import SYSTEM_ACTOR
from propdoc.services.n8n_service import N8nGateway
from propdoc.services.renderer import normalize_metadata, render_document
from propdoc.services.template_service import get_template


def list_documents(db: Session):
    return (
        db.query(Document)
        .options(joinedload(Document.template))
        .order_by(Document.created_at.desc(), Document.id.desc())
        .all()
    )


def get_document(db: Session, document_id: int) -> Document:
    document = (
        db.query(Document)
        .options(joinedload(Document.template))
        .filter(Document.id == document_id)
        .first()
    )
    if not document:
        raise NotFoundError("Document not found", "document", document_id)
    return document


def _commit_status(db: Session, document: Document, status: DocumentStatus, n8n_id: Optional[str] = None):
    """Write a new status guarded by the row version; raises ConflictError on a stale row."""
    current = document.status
    if status != current and status not in EXPECTED_TRANSITIONS[current]:
        logging.warning(f"Document {document.id}: unexpected transition {current.value} -> {status.value}")
    document.status = status
    if n8n_id:
        document.n8n_id = n8n_id
    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        raise ConflictError(f"Document {document.id} was modified concurrently", document.id)
    logging.info(f"Document {document.id} status {current.value} -> {status.value}")


async def create_document(
    db: Session,
    gateway: N8nGateway,
    payload: DocumentInput,
    actor: str,
    request_meta: Dict[str, Any] = None,
) -> Document:
    # Raises NotFoundError before anything is written
    get_template(db, payload.template_id)

    document = Document(
        template_id=payload.template_id,
        meta=normalize_metadata(payload.metadata),
        status=DocumentStatus.PENDING,
    )
    db.add(document)
    db.commit()
    db.refresh(document)
    document_id = document.id

    audit_service.record(db, document_id, "created", actor, request_meta)

    result = await gateway.document_generate(document_id, document.meta, document.template_id)
    audit_service.record_gateway_result(db, document_id, result)
    return get_document(db, document_id)


async def approve_document(
    db: Session,
    gateway: N8nGateway,
    document_id: int,
    actor: str,
    request_meta: Dict[str, Any] = None,
) -> Document:
    """
    Mark a document approved and ask n8n to start the signing flow.

    The current status is not checked; approving twice is allowed.
    """
    document = get_document(db, document_id)
    _commit_status(db, document, DocumentStatus.APPROVED)
    audit_service.record(db, document_id, "approved", actor, request_meta)

    result = await gateway.approve_signing(document_id)
    audit_service.record_gateway_result(db, document_id, result)
    return get_document(db, document_id)


async def check_sign_status(db: Session, gateway: N8nGateway, document_id: int) -> Document:
    """
    Poll n8n for the signing status and adopt it if it differs.

    Never fails because of n8n: unreachable, non-2xx or unusable answers
    leave the stored document as it is.
    """
    document = get_document(db, document_id)
    result = await gateway.sign_status(document_id)

    remote_status = result.body.get("status") if result.ok and isinstance(result.body, dict) else None
    if not remote_status:
        audit_service.record_gateway_result(db, document_id, result)
        return get_document(db, document_id)

    try:
        new_status = DocumentStatus(remote_status)
    except ValueError:
        logging.warning(f"n8n returned unknown status {remote_status!r} for document {document_id}")
        audit_service.record_gateway_result(db, document_id, result)
        return get_document(db, document_id)

    if new_status != document.status:
        try:
            _commit_status(db, document, new_status)
            audit_service.record(
                db, document_id, f"status_change_to_{new_status.value}", SYSTEM_ACTOR, {"source": "sign-status"}
            )
            logging.info(f"Updated document {document_id} status to {new_status.value} from n8n")
        except ConflictError:
            # A callback got there first; its write stands
            logging.warning(f"Document {document_id} changed while polling n8n, keeping stored status")

    audit_service.record_gateway_result(db, document_id, result)
    return get_document(db, document_id)


def apply_status_callback(db: Session, document_id: int, status: DocumentStatus, n8n_id: Optional[str] = None) -> Document:
    """Status pushed by n8n. Retried once if the row changed under us."""
    for attempt in range(2):
        document = get_document(db, document_id)
        try:
            _commit_status(db, document, status, n8n_id)
            break
        except ConflictError:
            if attempt:
                raise
            logging.warning(f"Retrying status callback for document {document_id}")

    audit_service.record(db, document_id, f"status_change_to_{status.value}", SYSTEM_ACTOR, {"n8nId": n8n_id})
    return get_document(db, document_id)


def render_document_html(db: Session, document_id: int, escape: bool = True) -> Optional[str]:
    return render_document(get_document(db, document_id), escape=escape)
