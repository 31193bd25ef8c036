from fastapi.testclient import TestClient

from novelverse.core.auth import create_access_token


class TestAuth:
    """Test cases for registration, login and the current user"""

    def test_register(self, client: TestClient, db_storage):
        """Test registering a new reader"""
        response = client.post(
            "/api/register",
            json={
                "username": "newreader",
                "email": "newreader@example.com",
                "password": "password123",
                "is_admin": True,
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["data"]["username"] == "newreader"
        assert data["data"]["is_admin"] is False
        assert "hashed_password" not in data["data"]
        assert "password" not in data["data"]

        # Default reading settings exist right away
        user_settings = db_storage.get_user_settings(data["data"]["id"])
        assert user_settings is not None
        assert user_settings.font_size == 18

    def test_register_duplicate_username(self, client: TestClient, test_user):
        """Test registering with a taken username"""
        response = client.post(
            "/api/register",
            json={
                "username": test_user.username,
                "email": "fresh@example.com",
                "password": "password123",
            },
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Username already registered"

    def test_register_duplicate_email(self, client: TestClient, test_user):
        """Test registering with a taken email"""
        response = client.post(
            "/api/register",
            json={
                "username": "someoneelse",
                "email": test_user.email,
                "password": "password123",
            },
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Email already registered"

    def test_register_validation(self, client: TestClient):
        """Test short passwords and bad emails are rejected with 400"""
        response = client.post(
            "/api/register",
            json={"username": "shorty", "email": "not-an-email", "password": "123"},
        )
        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["message"]
        assert len(data["errors"]) == 2

    def test_login(self, client: TestClient, test_user, test_user_data):
        """Test logging in with valid credentials"""
        response = client.post(
            "/api/login",
            json={
                "username": test_user_data["username"],
                "password": test_user_data["password"],
            },
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["token_type"] == "bearer"
        assert data["access_token"]

        me = client.get(
            "/api/user", headers={"Authorization": f"Bearer {data['access_token']}"}
        )
        assert me.status_code == 200
        assert me.json()["data"]["id"] == test_user.id

    def test_login_wrong_password(self, client: TestClient, test_user):
        """Test logging in with a wrong password"""
        response = client.post(
            "/api/login", json={"username": test_user.username, "password": "wrong"}
        )
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    def test_login_unknown_user(self, client: TestClient):
        response = client.post(
            "/api/login", json={"username": "ghost", "password": "whatever"}
        )
        assert response.status_code == 401

    def test_current_user_requires_auth(self, client: TestClient):
        """Test that a missing token is a 401"""
        response = client.get("/api/user")
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_invalid_token(self, client: TestClient):
        response = client.get(
            "/api/user", headers={"Authorization": "Bearer not-a-token"}
        )
        assert response.status_code == 401

    def test_token_for_unknown_user(self, client: TestClient, db_session):
        response = client.get(
            "/api/user",
            headers={"Authorization": f"Bearer {create_access_token(9999)}"},
        )
        assert response.status_code == 401

    def test_update_profile(self, client: TestClient, auth_headers, test_user):
        """Test updating own profile"""
        response = client.put(
            "/api/user",
            json={"bio": "Night owl", "avatar": "https://img.example.com/me.png"},
            headers=auth_headers,
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["bio"] == "Night owl"
        assert data["avatar"] == "https://img.example.com/me.png"
        assert data["email"] == test_user.email

    def test_update_profile_password(
        self, client: TestClient, auth_headers, test_user
    ):
        response = client.put(
            "/api/user", json={"password": "brandnew123"}, headers=auth_headers
        )
        assert response.status_code == 200

        login = client.post(
            "/api/login",
            json={"username": test_user.username, "password": "brandnew123"},
        )
        assert login.status_code == 200

    def test_update_profile_email_taken(
        self, client: TestClient, auth_headers, test_user_2
    ):
        response = client.put(
            "/api/user", json={"email": test_user_2.email}, headers=auth_headers
        )
        assert response.status_code == 400

    def test_logout(self, client: TestClient, auth_headers):
        response = client.post("/api/logout", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["success"] is True
