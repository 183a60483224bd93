"""
TASKTRACK API - Authentication Tests

Register, login, logout and the session cookie gate.
"""

from datetime import timedelta

import asyncio

from tasktrack.auth.service import AuthService


class TestRegister:
    """Tests for POST /api/auth/register."""

    def test_register_success(self, client, user_payload):
        response = client.post("/api/auth/register", json=user_payload)
        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "User registered successfully"
        assert data["user"]["name"] == user_payload["name"]
        assert data["user"]["email"] == user_payload["email"]
        assert "id" in data["user"]
        assert "password_hash" not in data["user"]
        assert "phone" not in data["user"]

    def test_register_sets_session_cookie(self, client, user_payload):
        response = client.post("/api/auth/register", json=user_payload)
        cookie = response.headers["set-cookie"]
        assert cookie.startswith("token=")
        assert "HttpOnly" in cookie
        assert "Max-Age=604800" in cookie
        assert "samesite=lax" in cookie.lower()
        # Local development does not mark the cookie Secure
        assert "Secure" not in cookie

    def test_register_missing_field(self, client, user_payload):
        del user_payload["phone"]
        response = client.post("/api/auth/register", json=user_payload)
        assert response.status_code == 400
        assert response.json()["message"] == "All fields are required"

    def test_register_empty_field(self, client, user_payload):
        user_payload["name"] = ""
        response = client.post("/api/auth/register", json=user_payload)
        assert response.status_code == 400

    def test_register_duplicate_email(self, client, user_payload):
        client.post("/api/auth/register", json=user_payload)
        response = client.post(
            "/api/auth/register",
            json={**user_payload, "name": "Other", "phone": "555-9999"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Email already in use"

    def test_register_duplicate_email_differs_in_case(self, client, user_payload):
        client.post("/api/auth/register", json=user_payload)
        response = client.post(
            "/api/auth/register",
            json={**user_payload, "email": "TEST@Example.com", "phone": "555-9999"},
        )
        assert response.status_code == 400

    def test_register_duplicate_phone(self, client, user_payload):
        client.post("/api/auth/register", json=user_payload)
        response = client.post(
            "/api/auth/register",
            json={**user_payload, "email": "other@example.com"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Phone number already in use"

    def test_email_checked_before_phone(self, client, user_payload):
        client.post("/api/auth/register", json=user_payload)
        response = client.post("/api/auth/register", json=user_payload)
        assert response.json()["message"] == "Email already in use"

    def test_password_not_stored_plaintext(self, client, user_payload, user_repository):
        client.post("/api/auth/register", json=user_payload)
        user = asyncio.run(user_repository.get_by_email(user_payload["email"]))
        assert user is not None
        assert user.password_hash != user_payload["password"]
        # bcrypt hashes start with $2a$ or $2b$
        assert user.password_hash.startswith("$2")


class TestLogin:
    """Tests for POST /api/auth/login."""

    def test_login_success(self, make_client, user_payload):
        make_client().post("/api/auth/register", json=user_payload)

        client = make_client()
        response = client.post(
            "/api/auth/login",
            json={"email": user_payload["email"], "password": user_payload["password"]},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Login successful"
        assert data["user"]["email"] == user_payload["email"]
        assert "token" in response.cookies

    def test_login_missing_fields(self, client):
        response = client.post("/api/auth/login", json={"email": "a@example.com"})
        assert response.status_code == 400
        assert response.json()["message"] == "Email and password are required"

    def test_wrong_password_and_unknown_email_look_the_same(self, client, user_payload):
        client.post("/api/auth/register", json=user_payload)

        wrong_password = client.post(
            "/api/auth/login",
            json={"email": user_payload["email"], "password": "wrongpassword"},
        )
        unknown_email = client.post(
            "/api/auth/login",
            json={"email": "nobody@example.com", "password": "wrongpassword"},
        )
        assert wrong_password.status_code == 401
        assert unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json()
        assert wrong_password.json()["message"] == "Invalid email or password"


class TestLogout:
    def test_logout_clears_cookie(self, auth_client):
        response = auth_client.post("/api/auth/logout")
        assert response.status_code == 200
        assert response.json()["message"] == "Logged out successfully"
        assert 'token=""' in response.headers["set-cookie"] or "Max-Age=0" in response.headers["set-cookie"]

        assert auth_client.get("/api/auth/me").status_code == 401

    def test_logout_without_session(self, client):
        assert client.post("/api/auth/logout").status_code == 200


class TestGetMe:
    """Tests for GET /api/auth/me (protected endpoint)."""

    def test_get_me_success(self, auth_client, user_payload):
        response = auth_client.get("/api/auth/me")
        assert response.status_code == 200
        user = response.json()["user"]
        assert user["name"] == user_payload["name"]
        assert user["email"] == user_payload["email"]

    def test_get_me_without_cookie(self, client):
        response = client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.json()["message"] == "Authentication required"

    def test_get_me_invalid_token(self, client):
        client.cookies.set("token", "invalid_token_here")
        response = client.get("/api/auth/me")
        assert response.status_code == 403
        assert response.json()["message"] == "Invalid or expired token"

    def test_get_me_expired_token(self, auth_client, auth_service, user_payload, user_repository):
        user = asyncio.run(user_repository.get_by_email(user_payload["email"]))
        expired = auth_service.create_access_token(user.id, expires_delta=timedelta(seconds=-1))
        auth_client.cookies.clear()
        auth_client.cookies.set("token", expired)
        assert auth_client.get("/api/auth/me").status_code == 403

    def test_token_signed_with_other_key(self, client, user_payload, user_repository, monkeypatch):
        client.post("/api/auth/register", json=user_payload)
        user = asyncio.run(user_repository.get_by_email(user_payload["email"]))

        from tasktrack.config import settings
        monkeypatch.setattr(settings, "JWT_SECRET_KEY", "another-secret-key-of-sufficient-length")
        forged = AuthService(user_repository).create_access_token(user.id)
        monkeypatch.undo()

        client.cookies.clear()
        client.cookies.set("token", forged)
        assert client.get("/api/auth/me").status_code == 403

    def test_deleted_user_invalidates_token(self, auth_client, user_payload, user_repository):
        user = asyncio.run(user_repository.get_by_email(user_payload["email"]))
        user_repository.remove(user.id)

        response = auth_client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.json()["message"] == "User not found"


class TestAuthService:
    def test_session_token_lasts_seven_days(self, auth_service):
        from jose import jwt
        from tasktrack.config import settings

        token = auth_service.create_access_token("user-1")
        claims = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        assert claims["sub"] == "user-1"
        assert claims["exp"] - claims["iat"] == 7 * 24 * 60 * 60

    def test_long_password_round_trips(self, auth_service):
        password = "x" * 200
        hashed = auth_service.hash_password(password)
        assert auth_service.verify_password(password, hashed)
        assert not auth_service.verify_password("x" * 199, hashed)
