"""Database configuration and session management for FileShelf.

This module defines the SQLAlchemy engine and session maker.  It reads
configuration from environment variables with sensible defaults, and
exports a dependency that yields a database session per request.
"""
import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from sqlalchemy.pool import StaticPool


def get_database_url() -> str:
    """
    Default to a SQLite file next to the package:
    <repo_root>/fileshelf_backend/fileshelf.db

    DATABASE_URL wins when it is set.
    """
    app_dir = os.path.dirname(os.path.abspath(__file__))            # .../fileshelf_backend/app
    backend_dir = os.path.abspath(os.path.join(app_dir, ".."))      # .../fileshelf_backend
    db_path = os.path.join(backend_dir, "fileshelf.db")

    return os.getenv("DATABASE_URL", f"sqlite:///{db_path}")


def build_engine(url: str):
    """Create an engine; SQLite needs check_same_thread=False under FastAPI."""
    kwargs = {}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        # an in-memory database only lives as long as its single connection
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


DATABASE_URL = get_database_url()
engine = build_engine(DATABASE_URL)


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


# Create a configured "Session" class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None) -> None:
    """Create all tables that do not exist yet."""
    from . import models  # noqa: F401  (register the mappers)

    Base.metadata.create_all(bind=bind or engine)


def get_db():
    """FastAPI dependency that provides a database session per request.

    Yields a SQLAlchemy session and ensures it is closed after the request
    is complete, even if an exception occurs.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
