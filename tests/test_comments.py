from fastapi.testclient import TestClient


class TestComments:
    """Test cases for comments and the derived novel rating"""

    def test_post_comment_updates_rating(
        self, client: TestClient, auth_headers, auth_headers_2, test_novel, test_user
    ):
        response = client.post(
            f"/api/novels/{test_novel.id}/comments",
            json={"content": "Loved it", "rating": 4},
            headers=auth_headers,
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["user_id"] == test_user.id
        assert data["novel_id"] == test_novel.id

        client.post(
            f"/api/novels/{test_novel.id}/comments",
            json={"content": "Not for me", "rating": 2},
            headers=auth_headers_2,
        )

        novel = client.get(f"/api/novels/{test_novel.id}").json()["data"]
        assert novel["rating"] == 3
        assert novel["review_count"] == 2

    def test_post_comment_without_rating(
        self, client: TestClient, auth_headers, test_novel
    ):
        response = client.post(
            f"/api/novels/{test_novel.id}/comments",
            json={"content": "Following"},
            headers=auth_headers,
        )
        assert response.status_code == 201
        assert response.json()["data"]["rating"] == 0

    def test_post_comment_rating_out_of_range(
        self, client: TestClient, auth_headers, test_novel
    ):
        response = client.post(
            f"/api/novels/{test_novel.id}/comments",
            json={"content": "Too much", "rating": 6},
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_post_comment_requires_auth(self, client: TestClient, test_novel):
        response = client.post(
            f"/api/novels/{test_novel.id}/comments", json={"content": "Anon"}
        )
        assert response.status_code == 401

    def test_post_comment_unknown_novel(self, client: TestClient, auth_headers):
        response = client.post(
            "/api/novels/99999/comments", json={"content": "?"}, headers=auth_headers
        )
        assert response.status_code == 404

    def test_list_comments(self, client: TestClient, auth_headers, test_novel):
        for content in ("First", "Second"):
            client.post(
                f"/api/novels/{test_novel.id}/comments",
                json={"content": content},
                headers=auth_headers,
            )

        response = client.get(f"/api/novels/{test_novel.id}/comments")
        assert response.status_code == 200
        assert [c["content"] for c in response.json()["data"]] == ["Second", "First"]

    def test_delete_own_comment(self, client: TestClient, auth_headers, test_novel):
        comment = client.post(
            f"/api/novels/{test_novel.id}/comments",
            json={"content": "Oops", "rating": 1},
            headers=auth_headers,
        ).json()["data"]

        response = client.delete(f"/api/comments/{comment['id']}", headers=auth_headers)
        assert response.status_code == 204

        novel = client.get(f"/api/novels/{test_novel.id}").json()["data"]
        assert novel["rating"] == 0
        assert novel["review_count"] == 0

    def test_delete_someone_elses_comment(
        self, client: TestClient, auth_headers, auth_headers_2, test_novel
    ):
        comment = client.post(
            f"/api/novels/{test_novel.id}/comments",
            json={"content": "Mine"},
            headers=auth_headers,
        ).json()["data"]

        response = client.delete(
            f"/api/comments/{comment['id']}", headers=auth_headers_2
        )
        assert response.status_code == 403

    def test_admin_can_delete_any_comment(
        self, client: TestClient, auth_headers, admin_headers, test_novel
    ):
        comment = client.post(
            f"/api/novels/{test_novel.id}/comments",
            json={"content": "Spam"},
            headers=auth_headers,
        ).json()["data"]

        response = client.delete(f"/api/comments/{comment['id']}", headers=admin_headers)
        assert response.status_code == 204

    def test_delete_missing_comment(self, client: TestClient, auth_headers):
        response = client.delete("/api/comments/99999", headers=auth_headers)
        assert response.status_code == 404
