from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import AliasChoices, Field
from propdoc.models.document import DocumentStatus
from propdoc.models.transaction import TransactionStatus
from propdoc.schemas.base import CamelModel
from propdoc.schemas.template import TemplateOutput

# ORM attribute is "meta" ("metadata" is taken by SQLAlchemy); wire name is "metadata"
METADATA_FIELD = dict(validation_alias="meta", serialization_alias="metadata")

class DocumentInput(CamelModel):
    template_id: int
    metadata: Dict[str, Any] = Field(..., description="Buyer, seller, property and financial details")

class DocumentOutput(CamelModel):
    id: int
    template_id: int
    status: DocumentStatus
    meta: Dict[str, Any] = Field(default_factory=dict, **METADATA_FIELD)
    n8n_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("n8n_id", "n8nId"), serialization_alias="n8nId")
    version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    template: Optional[TemplateOutput] = None

class RenderedDocumentOutput(CamelModel):
    document_id: int
    html: Optional[str] = None

class AuditLogOutput(CamelModel):
    id: int
    document_id: int
    action: str
    actor: str
    timestamp: Optional[datetime] = None
    meta: Optional[Any] = Field(default=None, **METADATA_FIELD)

class TransactionOutput(CamelModel):
    id: int
    document_id: Optional[int] = None
    status: TransactionStatus
    operation: Optional[str] = None
    timestamp: Optional[datetime] = None
