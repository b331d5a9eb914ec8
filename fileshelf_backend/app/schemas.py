from __future__ import annotations

import base64
import binascii
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import MAX_FILENAME_LENGTH


# =========================
# Auth / Tokens
# =========================
class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    # seconds until expiry
    expires_in: Optional[int] = None


# =========================
# Users
# =========================
class UserBase(BaseModel):
    username: str = Field(..., min_length=1, max_length=150)


class UserCreate(UserBase):
    password: str = Field(..., min_length=1)


class UserRead(UserBase):
    model_config = ConfigDict(from_attributes=True)

    id: int


class AuthResponse(Token):
    user: UserRead


# =========================
# Files
# =========================
def split_data_url(value: str) -> tuple[Optional[str], str]:
    """
    Split ``data:<mime>;base64,<payload>`` into ``(mime, payload)``.
    A bare base64 string comes back as ``(None, value)``.
    """
    if not value.startswith("data:"):
        return None, value
    header, sep, payload = value.partition(",")
    if not sep or not header.endswith(";base64"):
        raise ValueError("data URL must be base64 encoded")
    return header[len("data:"):-len(";base64")] or None, payload


class UploadedFile(BaseModel):
    name: str = Field(..., min_length=1, max_length=MAX_FILENAME_LENGTH)
    mimetype: str = Field(..., min_length=1, max_length=255)
    base64: str = Field(..., min_length=1)

    @field_validator("base64")
    @classmethod
    def _must_decode(cls, value: str) -> str:
        _, payload = split_data_url(value)
        try:
            base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"invalid base64 payload: {e}") from e
        # stored and echoed verbatim
        return value


class FileUploadRequest(BaseModel):
    description: str = ""
    file: UploadedFile


class FileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    description: str
    filename: str
    mimetype: str
    src: str
