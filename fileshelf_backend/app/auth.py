# fileshelf_backend/app/auth.py
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from .core.config import settings
from .database import get_db
from . import models

logger = logging.getLogger("fileshelf.auth")
logger.setLevel(logging.INFO)

# -----------------------------
# Password hashing
# -----------------------------
_pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return _pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return _pwd_context.hash(password)


# -----------------------------
# JWT
# -----------------------------
def create_access_token(
    data: dict,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a signed JWT for `data` with an 'exp' claim.
    The caller passes {"sub": user.username}.
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta if expires_delta
        else timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def get_user_by_username(db: Session, username: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.username == username).first()


def authenticate_user(db: Session, username: str, password: str) -> Optional[models.User]:
    user = get_user_by_username(db, username.strip())
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


# -----------------------------
# Bearer token dependency for protected routes
# -----------------------------
_bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials = Depends(_bearer_scheme),
) -> models.User:
    """
    - Extracts "Bearer <token>" from Authorization header
    - Verifies the JWT
    - Loads that user from DB
    - Raises 401 if any check fails
    """
    if credentials is None:
        logger.warning("get_current_user: no credentials provided")
        raise _unauthorized("Not authenticated")

    try:
        payload = jwt.decode(
            credentials.credentials, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
    except JWTError as e:
        logger.warning("get_current_user: JWT decode failed: %s", e)
        raise _unauthorized("Invalid token")

    username: Optional[str] = payload.get("sub")
    if username is None:
        logger.warning("get_current_user: 'sub' missing in JWT payload")
        raise _unauthorized("Invalid token payload")

    user = get_user_by_username(db, username)
    if not user:
        logger.warning("get_current_user: user %s not found in DB", username)
        raise _unauthorized("User not found")

    return user
