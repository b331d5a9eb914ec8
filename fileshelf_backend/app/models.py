"""SQLAlchemy models for FileShelf.

Users own files; a filename is unique per owner, which the
``uq_files_user_filename`` constraint enforces at the storage layer.
"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, ForeignKey, Text, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from .database import Base

# longest filename a client may upload; the column leaves room for a "(n)" suffix
MAX_FILENAME_LENGTH = 255
FILENAME_COLUMN_LENGTH = MAX_FILENAME_LENGTH + 32


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(150), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    last_login = Column(DateTime, nullable=True)
    files = relationship("File", back_populates="owner", cascade="all, delete-orphan")


class File(Base):
    __tablename__ = "files"
    __table_args__ = (
        UniqueConstraint("user_id", "filename", name="uq_files_user_filename"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    description = Column(Text, nullable=False, default="")
    filename = Column(String(FILENAME_COLUMN_LENGTH), nullable=False)
    mimetype = Column(String(255), nullable=False)
    # the uploaded base64 / data URL, echoed back untouched
    src = Column(Text, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)

    owner = relationship("User", back_populates="files")
