"""Upload workflow: resolve a unique filename, then persist the record.

Resolving and inserting are two steps, so a concurrent upload of the same
name can win the race. The unique ``(user_id, filename)`` constraint
catches that; we roll back, take a fresh snapshot and resolve again.
"""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from . import models, schemas
from .core.config import settings
from .naming import resolve_filename
from .repository import FileRepository

logger = logging.getLogger("fileshelf.uploads")
logger.setLevel(logging.INFO)


class UploadConflictError(Exception):
    """Every attempt to store the upload lost a race for its filename."""

    def __init__(self, filename: str, attempts: int):
        super().__init__(f"could not store {filename!r} after {attempts} attempts")
        self.filename = filename
        self.attempts = attempts


def store_upload(
    db: Session,
    user: models.User,
    payload: schemas.FileUploadRequest,
    max_attempts: Optional[int] = None,
) -> models.File:
    """Persist ``payload`` for ``user`` under a filename unique to that user."""
    repo = FileRepository(db)
    attempts = max(1, max_attempts or settings.UPLOAD_MAX_ATTEMPTS)
    desired = payload.file.name

    for attempt in range(1, attempts + 1):
        existing = repo.filenames_for_user(user.id)
        filename = resolve_filename(desired, existing)
        if filename != desired:
            logger.info("user=%s: %r taken, storing as %r", user.username, desired, filename)

        try:
            return repo.insert_file(
                user_id=user.id,
                description=payload.description,
                filename=filename,
                mimetype=payload.file.mimetype,
                src=payload.file.base64,
            )
        except IntegrityError:
            db.rollback()
            logger.warning(
                "user=%s: %r was claimed concurrently (attempt %s/%s), re-resolving",
                user.username, filename, attempt, attempts,
            )
        except Exception:
            db.rollback()
            raise

    raise UploadConflictError(desired, attempts)
