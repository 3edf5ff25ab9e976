from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from propdoc.database import get_db
from propdoc.exceptions import AuthError
from propdoc.schemas.auth import SignupInput, SigninInput, AuthOutput, UserOutput
from propdoc.services.auth_service import create_user, authenticate, issue_token

router = APIRouter(prefix="/api/auth", tags=["Auth"])

@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=AuthOutput)
def signup(payload: SignupInput, db: Session = Depends(get_db)):
    try:
        user = create_user(db, payload.email, payload.password, payload.name)
    except AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return AuthOutput(user=UserOutput.model_validate(user), token=issue_token(user))

@router.post("/signin", response_model=AuthOutput)
def signin(payload: SigninInput, db: Session = Depends(get_db)):
    try:
        user = authenticate(db, payload.email, payload.password)
    except AuthError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return AuthOutput(user=UserOutput.model_validate(user), token=issue_token(user))
