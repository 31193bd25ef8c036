from fastapi.testclient import TestClient

from novelverse.models.user_settings import UserSettings


class TestUserSettings:
    """Test cases for reading settings endpoints"""

    def test_get_defaults(self, client: TestClient, auth_headers, test_user):
        response = client.get("/api/user-settings", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user_id"] == test_user.id
        assert data["theme"] == "dark"
        assert data["font_size"] == 18
        assert data["font_family"] == "serif"
        assert data["line_spacing"] == 150
        assert data["background_color"] == "dark"

    def test_get_creates_missing_settings(
        self, client: TestClient, db_session, auth_headers, test_user
    ):
        """Test settings are recreated lazily when the row is missing"""
        db_session.query(UserSettings).delete()
        db_session.commit()

        response = client.get("/api/user-settings", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["data"]["font_size"] == 18

    def test_update_settings(self, client: TestClient, auth_headers):
        response = client.put(
            "/api/user-settings",
            json={"font_size": 22, "theme": "light"},
            headers=auth_headers,
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["font_size"] == 22
        assert data["theme"] == "light"
        assert data["line_spacing"] == 150

        again = client.get("/api/user-settings", headers=auth_headers).json()["data"]
        assert again["font_size"] == 22

    def test_update_settings_out_of_range(self, client: TestClient, auth_headers):
        response = client.put(
            "/api/user-settings", json={"font_size": 40}, headers=auth_headers
        )
        assert response.status_code == 400

    def test_settings_require_auth(self, client: TestClient):
        assert client.get("/api/user-settings").status_code == 401
        assert client.put("/api/user-settings", json={}).status_code == 401
