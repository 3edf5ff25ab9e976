from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from propdoc.database import Base

class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    document_id = Column(Integer, ForeignKey("documents.id"), nullable=False)
    action = Column(String, nullable=False)  # created, approved, status_change_to_signed...
    actor = Column(String, nullable=False)  # user email or "System"
    timestamp = Column(DateTime(timezone=True), server_default=func.now())
    meta = Column("metadata", JSON, nullable=True)  # IP, n8n id, etc

    document = relationship("Document", back_populates="audit_logs")
