"""User accounts, password hashing and bearer tokens."""

import hashlib
import hmac
import logging
import secrets
from typing import Any, Dict, Optional

from itsdangerous import BadData, SignatureExpired, URLSafeTimedSerializer
from sqlalchemy.orm import Session

from propdoc.config import settings
from propdoc.exceptions import AuthError
from propdoc.models.user import User

PBKDF2_ITERATIONS = 100000
TOKEN_SALT = "propdoc-auth"


def hash_password(password: str) -> str:
    """Hash a password with a random salt."""
    salt = secrets.token_hex(16)
    hash_obj = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), PBKDF2_ITERATIONS)
    return f"{salt}:{hash_obj.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    try:
        salt, stored_hash = password_hash.split(":")
    except ValueError:
        return False
    hash_obj = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), PBKDF2_ITERATIONS)
    return hmac.compare_digest(hash_obj.hex(), stored_hash)


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(settings.JWT_SECRET, salt=TOKEN_SALT)


def issue_token(user: User) -> str:
    """Issue a signed, timestamped bearer token carrying the user id and e-mail."""
    return _serializer().dumps({"id": user.id, "email": user.email})


def decode_token(token: str, max_age: int = None) -> Dict[str, Any]:
    """
    Return the token payload, or raise AuthError (403) if it is forged or expired.

    Tokens are valid for TOKEN_TTL_HOURS unless ``max_age`` (seconds) says otherwise.
    """
    if max_age is None:
        max_age = settings.TOKEN_TTL_HOURS * 3600
    try:
        return _serializer().loads(token, max_age=max_age)
    except SignatureExpired:
        raise AuthError("Token expired", status_code=403)
    except BadData:
        raise AuthError("Invalid token", status_code=403)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def create_user(db: Session, email: str, password: str, name: str) -> User:
    if get_user_by_email(db, email):
        raise AuthError("User already exists", status_code=400)
    user = User(email=email, password_hash=hash_password(password), name=name)
    db.add(user)
    db.commit()
    db.refresh(user)
    logging.info(f"User {user.id} signed up ({email})")
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        raise AuthError("Invalid email or password", status_code=401)
    return user
