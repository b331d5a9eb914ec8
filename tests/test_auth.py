from datetime import timedelta

from fileshelf_backend.app import auth


def register(client, username="alice", password="s3cret-pass"):
    return client.post("/auth/register", json={"username": username, "password": password})


def test_register_returns_token_and_user(client):
    r = register(client)
    assert r.status_code == 201, r.text
    data = r.json()
    assert data["token_type"] == "bearer"
    assert data["user"]["username"] == "alice"
    assert isinstance(data["user"]["id"], int)

    files = client.get("/api/files", headers={"Authorization": f"Bearer {data['access_token']}"})
    assert files.status_code == 200
    assert files.json() == []


def test_register_rejects_duplicate_username(client):
    assert register(client).status_code == 201
    r = register(client)
    assert r.status_code == 400
    assert r.json()["detail"] == "Username already registered"


def test_register_rejects_overlong_password(client):
    r = register(client, password="x" * 73)
    assert r.status_code == 400


def test_register_rejects_blank_username(client):
    assert register(client, username="   ").status_code == 400


def test_login_with_valid_credentials(client):
    register(client)
    r = client.post("/auth/login", json={"username": "alice", "password": "s3cret-pass"})
    assert r.status_code == 200
    assert r.json()["access_token"]


def test_login_with_wrong_password(client):
    register(client)
    r = client.post("/auth/login", json={"username": "alice", "password": "nope"})
    assert r.status_code == 401


def test_login_unknown_user(client):
    r = client.post("/auth/login", json={"username": "nobody", "password": "nope"})
    assert r.status_code == 401


def test_logout_is_stateless(client):
    r = client.post("/auth/logout")
    assert r.status_code == 200
    assert r.json() == {"detail": "Logged out"}


def test_expired_token_is_rejected(client, testuser):
    token = auth.create_access_token({"sub": testuser.username}, expires_delta=timedelta(seconds=-1))
    r = client.get("/api/files", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401


def test_token_without_subject_is_rejected(client, testuser):
    token = auth.create_access_token({"role": "user"})
    r = client.get("/api/files", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401


def test_password_hashing_round_trip():
    hashed = auth.get_password_hash("hunter2")
    assert hashed != "hunter2"
    assert auth.verify_password("hunter2", hashed)
    assert not auth.verify_password("hunter3", hashed)
