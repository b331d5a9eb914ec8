import os

# keep the app's own engine off disk; every test gets a fresh in-memory db below
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from fileshelf_backend.app.auth import create_access_token
from fileshelf_backend.app.database import build_engine, get_db, init_db
from fileshelf_backend.app.main import app
from fileshelf_backend.app.seed import PIXEL_GIF, ensure_user, reset_to_seed


@pytest.fixture()
def session_factory():
    engine = build_engine("sqlite://")
    init_db(engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def seeded(db):
    return reset_to_seed(db)


@pytest.fixture()
def testuser(db, seeded):
    return ensure_user(db, "testuser")


@pytest.fixture()
def testuser2(db):
    return ensure_user(db, "testuser2")


def bearer(username):
    return {"Authorization": f"Bearer {create_access_token({'sub': username})}"}


@pytest.fixture()
def auth_headers(testuser):
    return bearer(testuser.username)


def build_upload_data(base_name="bobby-tables", ext="jpg", mimetype="image/jpg", src=PIXEL_GIF):
    return {
        "description": "A portrait of an artist",
        "file": {
            "name": f"{base_name}.{ext}",
            "mimetype": mimetype,
            "base64": src,
        },
    }


def file_record(user, filename, src=PIXEL_GIF):
    return {
        "user_id": user.id,
        "description": "A portrait of an artist",
        "filename": filename,
        "mimetype": "image/jpg",
        "src": src,
    }
