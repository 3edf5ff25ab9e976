from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from propdoc.database import Base
import enum

class DocumentStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    SIGNED = "signed"
    DECLINED = "declined"

# Intended flow; anything else is accepted but logged
EXPECTED_TRANSITIONS = {
    DocumentStatus.PENDING: {DocumentStatus.APPROVED},
    DocumentStatus.APPROVED: {DocumentStatus.SIGNED, DocumentStatus.DECLINED},
    DocumentStatus.SIGNED: set(),
    DocumentStatus.DECLINED: set(),
}

class Document(Base):
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, index=True)
    template_id = Column(Integer, ForeignKey("templates.id"), nullable=False)
    status = Column(
        Enum(DocumentStatus, name="document_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=DocumentStatus.PENDING,
    )
    meta = Column("metadata", JSON, nullable=False)  # buyer, seller, property, financial
    n8n_id = Column(String, nullable=True)  # ID returned by n8n, if any
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __mapper_args__ = {"version_id_col": version}

    template = relationship("Template", back_populates="documents")
    audit_logs = relationship("AuditLog", back_populates="document", order_by="AuditLog.id")
    transactions = relationship("Transaction", back_populates="document")
