from typing import Any, Dict, List
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from propdoc.database import get_db
from propdoc.dependencies import get_current_user, actor_of, request_meta
from propdoc.exceptions import ConflictError, NotFoundError
from propdoc.schemas.document import DocumentInput, DocumentOutput, RenderedDocumentOutput
from propdoc.services import document_service
from propdoc.services.n8n_service import N8nGateway, get_gateway

router = APIRouter(prefix="/api/documents", tags=["Documents"])

@router.get("", response_model=List[DocumentOutput])
def list_documents(db: Session = Depends(get_db), user: Dict[str, Any] = Depends(get_current_user)):
    return document_service.list_documents(db)

@router.post("", status_code=status.HTTP_201_CREATED, response_model=DocumentOutput)
async def create_document(
    payload: DocumentInput,
    request: Request,
    db: Session = Depends(get_db),
    gateway: N8nGateway = Depends(get_gateway),
    user: Dict[str, Any] = Depends(get_current_user),
):
    """
    Creates a document in "pending" and sends its data to n8n (document-generate).

    Example payload:
    {
      "templateId": 1,
      "metadata": {
        "seller": {"name": "John", "pan": "ABCDE1234F"},
        "buyer": {"name": "Jane"},
        "property": {"address": "12 MG Road"},
        "financial": {"saleAmount": 500000}
      }
    }
    """
    try:
        return await document_service.create_document(db, gateway, payload, actor_of(user), request_meta(request))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.get("/{document_id}", response_model=DocumentOutput)
def get_document(document_id: int, db: Session = Depends(get_db), user: Dict[str, Any] = Depends(get_current_user)):
    try:
        return document_service.get_document(db, document_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.get("/{document_id}/render", response_model=RenderedDocumentOutput)
def render_document(
    document_id: int,
    raw: bool = False,
    db: Session = Depends(get_db),
    user: Dict[str, Any] = Depends(get_current_user),
):
    """Renders the document HTML. Values are HTML-escaped unless ?raw=true."""
    try:
        html = document_service.render_document_html(db, document_id, escape=not raw)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return RenderedDocumentOutput(document_id=document_id, html=html)

@router.post("/{document_id}/approve-signing", response_model=DocumentOutput)
async def approve_signing(
    document_id: int,
    request: Request,
    db: Session = Depends(get_db),
    gateway: N8nGateway = Depends(get_gateway),
    user: Dict[str, Any] = Depends(get_current_user),
):
    try:
        return await document_service.approve_document(db, gateway, document_id, actor_of(user), request_meta(request))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))

@router.get("/{document_id}/sign-status", response_model=DocumentOutput)
async def check_sign_status(
    document_id: int,
    db: Session = Depends(get_db),
    gateway: N8nGateway = Depends(get_gateway),
    user: Dict[str, Any] = Depends(get_current_user),
):
    try:
        return await document_service.check_sign_status(db, gateway, document_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
