import hmac
import hashlib
import logging
from fastapi import APIRouter, Request, HTTPException, status, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from propdoc.config import settings
from propdoc.database import get_db
from propdoc.exceptions import ConflictError, NotFoundError
from propdoc.schemas.webhook import DocumentStatusCallback, AuditLogCallback, WebhookOutput
from propdoc.services import audit_service
from propdoc.services.document_service import apply_status_callback, get_document

router = APIRouter(prefix="/api/webhook", tags=["Webhook"])

def verify_hmac_signature(raw_body: bytes, signature: str, secret: str) -> bool:
    if not signature:
        return False
    calculated_signature = hmac.new(
        secret.encode('utf-8'),
        raw_body,
        hashlib.sha256
    ).hexdigest()
    return hmac.compare_digest(calculated_signature.encode(), signature.encode())

async def verify_n8n_signature(request: Request):
    """
    Callbacks from n8n carry either X-N8N-Signature (hex HMAC-SHA256 of the
    raw body) or X-N8N-Secret. Without N8N_WEBHOOK_SECRET nothing is checked.
    """
    secret = settings.N8N_WEBHOOK_SECRET
    if not secret:
        logging.warning(f"N8N_WEBHOOK_SECRET not set, accepting unauthenticated callback on {request.url.path}")
        return

    raw_body = await request.body()
    if verify_hmac_signature(raw_body, request.headers.get("X-N8N-Signature"), secret):
        return
    shared = request.headers.get("X-N8N-Secret")
    if shared and hmac.compare_digest(shared.encode(), secret.encode()):
        return

    logging.warning("Webhook call with missing or invalid n8n signature.")
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized webhook source.")

@router.post("/document-status", response_model=WebhookOutput, dependencies=[Depends(verify_n8n_signature)])
def document_status_webhook(payload: DocumentStatusCallback, db: Session = Depends(get_db)):
    logging.info(f"Webhook received from n8n: {payload.model_dump(by_alias=True)}")

    if payload.document_id is None or payload.status is None:
        logging.warning("documentId or status missing from the payload, nothing to update.")
        return {"success": True}

    try:
        apply_status_callback(db, payload.document_id, payload.status, payload.n8n_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception:
        logging.exception("Error processing n8n document-status webhook")
        return JSONResponse(status_code=500, content={"success": False})
    return {"success": True}

@router.post("/audit-log", response_model=WebhookOutput, dependencies=[Depends(verify_n8n_signature)])
def audit_log_webhook(payload: AuditLogCallback, db: Session = Depends(get_db)):
    try:
        get_document(db, payload.document_id)
        audit_service.record(db, payload.document_id, payload.action, payload.actor, payload.meta)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        logging.exception("Error processing n8n audit-log webhook")
        return JSONResponse(status_code=500, content={"success": False})
    return {"success": True}
