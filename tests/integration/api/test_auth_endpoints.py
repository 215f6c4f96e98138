"""Integration tests for registration, login, profile and logout."""

import pytest

CREDENTIALS = {"username": "alice", "password": "password123"}


@pytest.mark.asyncio
async def test_register_returns_created_user(client):
    response = await client.post("/register", json=CREDENTIALS)

    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "User registered successfully"
    assert data["user"]["username"] == "alice"
    assert data["user"]["id"]
    assert "createdAt" in data["user"]
    assert "password" not in response.text


@pytest.mark.asyncio
async def test_register_duplicate_username(client):
    await client.post("/register", json=CREDENTIALS)

    response = await client.post("/register", json={"username": "alice", "password": "other"})

    assert response.status_code == 400
    assert response.json() == {"error": "Conflict", "message": "Username already exists"}


@pytest.mark.asyncio
async def test_register_short_username(client):
    response = await client.post("/register", json={"username": "abc", "password": "x"})

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "Validation error"
    assert data["details"][0]["field"] == "username"


@pytest.mark.asyncio
async def test_register_missing_password(client):
    response = await client.post("/register", json={"username": "alice"})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_login_sets_session_cookie(client):
    await client.post("/register", json=CREDENTIALS)

    response = await client.post("/login", json=CREDENTIALS)

    assert response.status_code == 200
    assert response.json() == {"message": "Login successful", "username": "alice"}
    cookie = response.headers["set-cookie"].lower()
    assert cookie.startswith("token=")
    assert "httponly" in cookie
    assert "max-age=3600" in cookie
    assert "samesite=lax" in cookie


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "credentials",
    [
        {"username": "alice", "password": "wrong-password"},
        {"username": "alice", "password": "password124"},
        {"username": "mallory", "password": "password123"},
    ],
)
async def test_login_invalid_credentials(client, credentials):
    await client.post("/register", json=CREDENTIALS)

    response = await client.post("/login", json=credentials)

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid credentials"
    assert "set-cookie" not in response.headers


@pytest.mark.asyncio
async def test_profile_with_session_cookie(client):
    await client.post("/register", json=CREDENTIALS)
    login = await client.post("/login", json=CREDENTIALS)
    token = login.cookies["token"]

    response = await client.get("/profile", headers={"Cookie": f"token={token}"})

    assert response.status_code == 200
    data = response.json()
    assert data["loggedIn"] is True
    assert data["username"] == "alice"
    assert data["userId"]


@pytest.mark.asyncio
async def test_profile_with_bearer_token(client, make_user, headers_for):
    alice = await make_user("alice")

    response = await client.get("/profile", headers=headers_for(alice))

    assert response.status_code == 200
    assert response.json()["userId"] == alice.id


@pytest.mark.asyncio
async def test_profile_without_session(client):
    response = await client.get("/profile")

    assert response.status_code == 401
    assert response.json()["loggedIn"] is False


@pytest.mark.asyncio
async def test_profile_with_invalid_token(client):
    response = await client.get("/profile", headers={"Cookie": "token=garbage"})

    assert response.status_code == 401
    assert response.json() == {"loggedIn": False, "error": "Invalid token"}


@pytest.mark.asyncio
async def test_logout_clears_cookie(client):
    response = await client.post("/logout")

    assert response.status_code == 200
    assert response.json() == {"message": "Logged out successfully"}
    cookie = response.headers["set-cookie"].lower()
    assert cookie.startswith("token=")
    assert "max-age=0" in cookie
