"""
FileShelf Backend Package

This package contains the FastAPI application and supporting modules for
user authentication, per-user file storage and API routes.
"""

from .main import app  # noqa: F401
