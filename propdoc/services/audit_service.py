"""
Audit Service - append-only audit trail and transaction log.

Audit rows record what happened to a document and who did it; transaction
rows record the outcome of each call made to the n8n workflow. Neither is
ever updated or deleted. Storage errors are not caught here.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from propdoc.models.audit_log import AuditLog
from propdoc.models.transaction import Transaction, TransactionStatus

SYSTEM_ACTOR = "System"
UNKNOWN_ACTOR = "Unknown User"


def record(db: Session, document_id: int, action: str, actor: str, metadata: Optional[Dict[str, Any]] = None) -> AuditLog:
    """
    Append one audit row for a document and commit it.

    Args:
        document_id: ID of the document the action was taken against
        action: free-text tag, e.g. "created", "approved", "status_change_to_signed"
        actor: user email, or SYSTEM_ACTOR for n8n callbacks
        metadata: extra context (IP, n8n id...)
    """
    entry = AuditLog(document_id=document_id, action=action, actor=actor, meta=metadata)
    db.add(entry)
    db.commit()
    db.refresh(entry)
    logging.info(f"Audit: document {document_id} {action} by {actor}")
    return entry


def record_transaction(db: Session, document_id: Optional[int], status: TransactionStatus, operation: str = None) -> Transaction:
    transaction = Transaction(document_id=document_id, status=status, operation=operation)
    db.add(transaction)
    db.commit()
    db.refresh(transaction)
    return transaction


def record_gateway_result(db: Session, document_id: Optional[int], result) -> Transaction:
    """Store the outcome of an n8n call as a success/failed transaction."""
    status = TransactionStatus.SUCCESS if result.ok else TransactionStatus.FAILED
    return record_transaction(db, document_id, status, result.operation)


def list_audit_logs(db: Session, document_id: int):
    return (
        db.query(AuditLog)
        .filter(AuditLog.document_id == document_id)
        .order_by(AuditLog.timestamp.asc(), AuditLog.id.asc())
        .all()
    )


def list_transactions(db: Session):
    return db.query(Transaction).order_by(Transaction.timestamp.desc(), Transaction.id.desc()).all()
