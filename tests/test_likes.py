from fastapi.testclient import TestClient


class TestLikes:
    """Test cases for like endpoints and the like counter"""

    def test_like_toggle(self, client: TestClient, auth_headers, test_novel):
        response = client.post(
            "/api/likes", json={"novel_id": test_novel.id}, headers=auth_headers
        )
        assert response.status_code == 201
        assert response.json()["data"]["novel_id"] == test_novel.id

        novel = client.get(f"/api/novels/{test_novel.id}").json()["data"]
        assert novel["likes"] == 1
        status_url = f"/api/novels/{test_novel.id}/is-liked"
        assert client.get(status_url, headers=auth_headers).json()["data"] == {
            "is_liked": True
        }

        response = client.delete(f"/api/likes/{test_novel.id}", headers=auth_headers)
        assert response.status_code == 204

        novel = client.get(f"/api/novels/{test_novel.id}").json()["data"]
        assert novel["likes"] == 0
        assert client.get(status_url, headers=auth_headers).json()["data"] == {
            "is_liked": False
        }

    def test_like_twice(self, client: TestClient, auth_headers, test_novel):
        first = client.post(
            "/api/likes", json={"novel_id": test_novel.id}, headers=auth_headers
        ).json()["data"]
        second = client.post(
            "/api/likes", json={"novel_id": test_novel.id}, headers=auth_headers
        ).json()["data"]

        assert second["id"] == first["id"]
        assert client.get(f"/api/novels/{test_novel.id}").json()["data"]["likes"] == 1

    def test_unlike_without_like(self, client: TestClient, auth_headers, test_novel):
        response = client.delete(f"/api/likes/{test_novel.id}", headers=auth_headers)
        assert response.status_code == 204
        assert client.get(f"/api/novels/{test_novel.id}").json()["data"]["likes"] == 0

    def test_unlike_twice(self, client: TestClient, auth_headers, test_novel):
        client.post("/api/likes", json={"novel_id": test_novel.id}, headers=auth_headers)

        statuses = [
            client.delete(f"/api/likes/{test_novel.id}", headers=auth_headers).status_code
            for _ in range(2)
        ]
        assert statuses == [204, 204]
        assert client.get(f"/api/novels/{test_novel.id}").json()["data"]["likes"] == 0

    def test_like_unknown_novel(self, client: TestClient, auth_headers):
        response = client.post("/api/likes", json={"novel_id": 99999}, headers=auth_headers)
        assert response.status_code == 404

    def test_list_likes(
        self, client: TestClient, auth_headers, auth_headers_2, test_novel, test_novel_2
    ):
        client.post("/api/likes", json={"novel_id": test_novel.id}, headers=auth_headers)
        client.post(
            "/api/likes", json={"novel_id": test_novel_2.id}, headers=auth_headers_2
        )

        likes = client.get("/api/likes", headers=auth_headers).json()["data"]
        assert [like["novel"]["id"] for like in likes] == [test_novel.id]

    def test_likes_require_auth(self, client: TestClient, test_novel):
        assert client.get("/api/likes").status_code == 401
        assert client.delete(f"/api/likes/{test_novel.id}").status_code == 401
