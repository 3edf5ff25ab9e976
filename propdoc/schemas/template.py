from datetime import datetime
from typing import Optional
from pydantic import Field
from propdoc.schemas.base import CamelModel

class TemplateInput(CamelModel):
    name: str = Field(..., min_length=1)
    document_type: str = Field(..., min_length=1, description="e.g. Sales Contract")
    content: str = Field(..., description="HTML with {{placeholder}} tokens")

class TemplateUpdateInput(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    document_type: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = None

class TemplateOutput(CamelModel):
    id: int
    name: str
    document_type: str
    content: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
