from typing import Any, Optional
from pydantic import Field
from propdoc.models.document import DocumentStatus
from propdoc.schemas.base import CamelModel

class DocumentStatusCallback(CamelModel):
    """Body n8n posts when the signing status changes."""
    document_id: Optional[int] = None
    status: Optional[DocumentStatus] = None
    n8n_id: Optional[str] = Field(default=None, alias="n8nId")

class AuditLogCallback(CamelModel):
    document_id: int
    action: str = Field(..., min_length=1)
    actor: str = Field(..., min_length=1)
    meta: Optional[Any] = Field(default=None, alias="metadata")

class WebhookOutput(CamelModel):
    success: bool
