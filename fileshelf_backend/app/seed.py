"""Seed fixtures.

``reset_to_seed`` puts the database back into a known state: every file
record is removed, the seed users exist, and ``SEED_FILES`` are stored for
them. Used by the tests and by ``reset_seed.py``.
"""
import logging
from typing import Dict, List

from sqlalchemy.orm import Session

from . import models
from .auth import get_password_hash, get_user_by_username
from .core.config import settings
from .repository import FileRepository

logger = logging.getLogger("fileshelf.seed")

PIXEL_GIF = "data:image/gif;base64,R0lGODlhAQABAIAAAP///wAAACH5BAEAAAAALAAAAAABAAEAAAICRAEAOw=="

SEED_USERS = ["testuser"]

SEED_FILES: List[Dict[str, str]] = [
    {
        "username": "testuser",
        "description": "Self portrait",
        "filename": "self-portrait.gif",
        "mimetype": "image/gif",
        "src": PIXEL_GIF,
    },
    {
        "username": "testuser",
        "description": "Starry night study",
        "filename": "starry-night.gif",
        "mimetype": "image/gif",
        "src": PIXEL_GIF,
    },
    {
        "username": "testuser",
        "description": "Second pass at the same study",
        "filename": "starry-night(1).gif",
        "mimetype": "image/gif",
        "src": PIXEL_GIF,
    },
]


def ensure_user(db: Session, username: str) -> models.User:
    user = get_user_by_username(db, username)
    if user is None:
        user = models.User(
            username=username,
            password_hash=get_password_hash(settings.SEED_PASSWORD),
        )
        db.add(user)
        db.commit()
        db.refresh(user)
    return user


def reset_to_seed(db: Session) -> List[models.File]:
    repo = FileRepository(db)
    removed = repo.delete_all()

    users = {name: ensure_user(db, name) for name in SEED_USERS}
    rows = repo.bulk_insert_files(
        {**{k: v for k, v in f.items() if k != "username"}, "user_id": users[f["username"]].id}
        for f in SEED_FILES
    )
    logger.info("reset_to_seed: removed %s file(s), stored %s seed file(s)", removed, len(rows))
    return rows
