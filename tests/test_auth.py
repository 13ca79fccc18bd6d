import uuid
from conftest import auth


def _signup(client, email=None, password="password123"):
    unique_id = str(uuid.uuid4())[:8]
    return client.post("/api/auth/signup", json={
        "name": f"user {unique_id}",
        "email": email or f"signup_{unique_id}@example.com",
        "password": password
    })


def test_signup_success(client):
    """Test : créer un utilisateur avec succès"""
    response = _signup(client, email="alice@example.com")
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "success"
    assert body["data"]["user"]["email"] == "alice@example.com"
    assert "token" in body["data"]
    assert "passwordHash" not in body["data"]["user"]


def test_signup_duplicate_email(client):
    _signup(client, email="dup@example.com")
    response = _signup(client, email="dup@example.com")
    assert response.status_code == 409
    assert response.json() == {"status": "error", "message": "User already exist with this Email"}


def test_signup_short_password_is_validation_error(client):
    response = _signup(client, password="short")
    assert response.status_code == 400
    assert response.json()["status"] == "error"


def test_login_and_me(client):
    _signup(client, email="bob@example.com")
    response = client.post("/api/auth/login", json={"email": "bob@example.com", "password": "password123"})
    assert response.status_code == 200
    token = response.json()["data"]["token"]

    me = client.get("/api/auth/me", headers=auth(token))
    assert me.status_code == 200
    assert me.json()["data"]["user"]["email"] == "bob@example.com"


def test_login_wrong_password(client):
    _signup(client, email="carol@example.com")
    response = client.post("/api/auth/login", json={"email": "carol@example.com", "password": "wrongpass123"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid Email or Password"


def test_refresh_token(client):
    _signup(client, email="dave@example.com")
    login = client.post("/api/auth/login", json={"email": "dave@example.com", "password": "password123"}).json()
    response = client.post("/api/auth/refresh", json={"refreshToken": login["data"]["refreshToken"]})
    assert response.status_code == 200
    assert response.json()["data"]["token"]


def test_refresh_rejects_access_token(client, user_factory):
    _, token = user_factory()
    response = client.post("/api/auth/refresh", json={"refreshToken": token})
    assert response.status_code == 401


def test_missing_token(client):
    response = client.get("/api/boards")
    assert response.status_code == 401
    assert response.json() == {"status": "error", "message": "Invalid User"}


def test_invalid_token(client):
    response = client.get("/api/boards", headers=auth("not-a-jwt"))
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token"


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json()["status"] == "error"
