from typing import Any, Dict
from fastapi import Header, HTTPException, Request, status
from propdoc.exceptions import AuthError
from propdoc.services.audit_service import UNKNOWN_ACTOR
from propdoc.services.auth_service import decode_token

def get_current_user(authorization: str = Header(None)) -> Dict[str, Any]:
    """Bearer token check: 401 when absent, 403 when invalid or expired."""
    token = authorization.split(" ", 1)[1].strip() if authorization and " " in authorization else None
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    try:
        return decode_token(token)
    except AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

def actor_of(user: Dict[str, Any]) -> str:
    return user.get("email") or UNKNOWN_ACTOR

def request_meta(request: Request) -> Dict[str, Any]:
    return {"ip": request.client.host if request.client else None}
