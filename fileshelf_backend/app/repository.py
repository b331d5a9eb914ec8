"""Per-user file persistence.

Every query is scoped by ``user_id``; the ``(user_id, filename)`` pair is
the storage key, so two users may hold the same filename.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Set

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from . import models

logger = logging.getLogger("fileshelf.repository")

FILE_FIELDS = ("user_id", "description", "filename", "mimetype", "src")


class FileRepository:
    def __init__(self, db: Session):
        self.db = db

    def insert_file(
        self,
        *,
        user_id: int,
        description: str,
        filename: str,
        mimetype: str,
        src: str,
    ) -> models.File:
        """Insert one record and commit. Raises IntegrityError on a duplicate name."""
        record = models.File(
            user_id=user_id,
            description=description,
            filename=filename,
            mimetype=mimetype,
            src=src,
        )
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        logger.info("stored file id=%s user_id=%s filename=%r", record.id, user_id, filename)
        return record

    def bulk_insert_files(self, records: Iterable[dict]) -> List[models.File]:
        """Insert many records in a single transaction."""
        rows = [models.File(**{k: r[k] for k in FILE_FIELDS}) for r in records]
        self.db.add_all(rows)
        self.db.commit()
        for row in rows:
            self.db.refresh(row)
        return rows

    def get_total(self) -> int:
        return self.db.scalar(select(func.count(models.File.id))) or 0

    def count_for_user(self, user_id: int) -> int:
        return self.db.scalar(
            select(func.count(models.File.id)).where(models.File.user_id == user_id)
        ) or 0

    def list_for_user(self, user_id: int) -> List[models.File]:
        return (
            self.db.query(models.File)
            .filter(models.File.user_id == user_id)
            .order_by(models.File.id.asc())
            .all()
        )

    def filenames_for_user(self, user_id: int) -> Set[str]:
        """Snapshot of the names a user already owns."""
        return set(
            self.db.scalars(
                select(models.File.filename).where(models.File.user_id == user_id)
            )
        )

    def delete_all(self) -> int:
        deleted = self.db.query(models.File).delete()
        self.db.commit()
        return deleted
