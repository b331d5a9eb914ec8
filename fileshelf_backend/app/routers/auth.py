"""
Authentication endpoints.

Handles:
- register (username/password -> create user + return JWT)
- login (username/password -> verify + return JWT)
- logout (stateless; the client just discards the token)

All requests/returns are JSON, not form-encoded.
"""

from datetime import datetime
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from .. import models, schemas, auth
from ..core.config import settings
from ..database import get_db

logger = logging.getLogger("fileshelf.router.auth")

# Longer passwords are rejected before hashing.
MAX_PW_LEN = 72

router = APIRouter(prefix="/auth", tags=["auth"])


def _token_response(user: models.User) -> schemas.AuthResponse:
    access_token = auth.create_access_token(data={"sub": user.username})
    return schemas.AuthResponse(
        access_token=access_token,
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        user=schemas.UserRead.model_validate(user),
    )


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=schemas.AuthResponse)
def register_user(
    body: schemas.UserCreate,
    db: Session = Depends(get_db),
):
    """Create a user and return a JWT so the client is logged in straight away."""
    username = body.username.strip()
    if not username:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username and password are required",
        )

    if auth.get_user_by_username(db, username):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already registered",
        )

    if len(body.password.encode("utf-8")) > MAX_PW_LEN:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password too long. Maximum {MAX_PW_LEN} characters allowed.",
        )

    new_user = models.User(
        username=username,
        password_hash=auth.get_password_hash(body.password),
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    logger.info("register success for %s (id=%s)", new_user.username, new_user.id)
    return _token_response(new_user)


@router.post("/login", response_model=schemas.AuthResponse)
def login_user(
    creds: schemas.UserCreate,
    db: Session = Depends(get_db),
):
    user = auth.authenticate_user(db, creds.username, creds.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    user.last_login = datetime.utcnow()
    db.commit()
    db.refresh(user)
    return _token_response(user)


@router.post("/logout", status_code=status.HTTP_200_OK)
def logout_dummy():
    """
    Stateless logout.
    The client should just delete the stored JWT.
    """
    return {"detail": "Logged out"}
