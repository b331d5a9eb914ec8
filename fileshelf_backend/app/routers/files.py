from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import models, schemas, auth
from ..database import get_db
from ..repository import FileRepository
from ..uploads import UploadConflictError, store_upload

logger = logging.getLogger("fileshelf.files")

router = APIRouter(prefix="/api/files", tags=["files"])


@router.get("", response_model=List[schemas.FileOut])
def list_files(
    db: Session = Depends(get_db),
    current_user: models.User = Depends(auth.get_current_user),
):
    return FileRepository(db).list_for_user(current_user.id)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=schemas.FileOut)
def upload_file(
    body: schemas.FileUploadRequest,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(auth.get_current_user),
):
    """
    Store the upload under a filename unique to the current user and
    echo the stored record back.
    """
    try:
        return store_upload(db, current_user, body)
    except UploadConflictError as e:
        logger.warning("upload gave up: %s", e)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Could not find a free filename for {e.filename!r}, try again",
        )
    except SQLAlchemyError as e:
        logger.exception("Failed to store upload %r: %s", body.file.name, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to store uploaded file",
        )
