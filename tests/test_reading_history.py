from fastapi.testclient import TestClient


class TestReadingHistory:
    """Test cases for reading progress endpoints"""

    def test_record_progress(
        self, client: TestClient, auth_headers, test_novel, test_chapter, test_user
    ):
        response = client.post(
            "/api/reading-history",
            json={
                "novel_id": test_novel.id,
                "chapter_id": test_chapter.id,
                "progress": 40,
            },
            headers=auth_headers,
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["progress"] == 40
        assert data["user_id"] == test_user.id
        assert "last_read" in data

    def test_progress_is_upserted(
        self, client: TestClient, auth_headers, test_novel, test_chapter
    ):
        payload = {"novel_id": test_novel.id, "chapter_id": test_chapter.id}
        first = client.post(
            "/api/reading-history", json=dict(payload, progress=10), headers=auth_headers
        ).json()["data"]
        second = client.post(
            "/api/reading-history", json=dict(payload, progress=90), headers=auth_headers
        ).json()["data"]
        assert second["id"] == first["id"]

        history = client.get("/api/reading-history", headers=auth_headers).json()["data"]
        assert len(history) == 1
        assert history[0]["progress"] == 90
        assert history[0]["novel"]["title"] == test_novel.title
        assert history[0]["chapter"]["title"] == test_chapter.title

    def test_progress_out_of_range(
        self, client: TestClient, auth_headers, test_novel, test_chapter
    ):
        response = client.post(
            "/api/reading-history",
            json={
                "novel_id": test_novel.id,
                "chapter_id": test_chapter.id,
                "progress": 101,
            },
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_unknown_chapter(self, client: TestClient, auth_headers, test_novel):
        response = client.post(
            "/api/reading-history",
            json={"novel_id": test_novel.id, "chapter_id": 99999, "progress": 5},
            headers=auth_headers,
        )
        assert response.status_code == 404

    def test_chapter_of_other_novel(
        self, client: TestClient, auth_headers, test_novel_2, test_chapter
    ):
        response = client.post(
            "/api/reading-history",
            json={"novel_id": test_novel_2.id, "chapter_id": test_chapter.id},
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_history_requires_auth(self, client: TestClient):
        assert client.get("/api/reading-history").status_code == 401
