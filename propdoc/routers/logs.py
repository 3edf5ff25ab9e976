from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from propdoc.database import get_db
from propdoc.dependencies import get_current_user
from propdoc.schemas.document import AuditLogOutput, TransactionOutput
from propdoc.services import audit_service

router = APIRouter(prefix="/api", tags=["Logs"], dependencies=[Depends(get_current_user)])

@router.get("/transactions", response_model=List[TransactionOutput])
def list_transactions(db: Session = Depends(get_db)):
    return audit_service.list_transactions(db)

@router.get("/audit-logs/{document_id}", response_model=List[AuditLogOutput])
def list_audit_logs(document_id: int, db: Session = Depends(get_db)):
    """Audit trail of one document, oldest entry first."""
    return audit_service.list_audit_logs(db, document_id)
