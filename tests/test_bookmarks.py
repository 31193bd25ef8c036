from fastapi.testclient import TestClient

from novelverse.schemas.chapter import ChapterCreate


class TestBookmarks:
    """Test cases for bookmark endpoints"""

    def test_create_bookmark(
        self, client: TestClient, auth_headers, test_novel, test_chapter, test_user
    ):
        response = client.post(
            "/api/bookmarks",
            json={"novel_id": test_novel.id, "chapter_id": test_chapter.id},
            headers=auth_headers,
        )
        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["data"]["novel_id"] == test_novel.id
        assert data["data"]["chapter_id"] == test_chapter.id
        assert data["data"]["user_id"] == test_user.id

    def test_rebookmark_moves_chapter(
        self, client: TestClient, auth_headers, db_storage, test_novel, test_chapter
    ):
        """Test bookmarking twice keeps one bookmark and updates the chapter"""
        later = db_storage.create_chapter(
            ChapterCreate(
                novel_id=test_novel.id, title="Later", content="...", chapter_number=2
            )
        )
        first = client.post(
            "/api/bookmarks",
            json={"novel_id": test_novel.id, "chapter_id": test_chapter.id},
            headers=auth_headers,
        ).json()["data"]
        second = client.post(
            "/api/bookmarks",
            json={"novel_id": test_novel.id, "chapter_id": later.id},
            headers=auth_headers,
        ).json()["data"]

        assert second["id"] == first["id"]
        assert second["chapter_id"] == later.id

        bookmarks = client.get("/api/bookmarks", headers=auth_headers).json()["data"]
        assert len(bookmarks) == 1
        assert bookmarks[0]["novel"]["id"] == test_novel.id
        assert bookmarks[0]["chapter_id"] == later.id

    def test_bookmark_unknown_novel(self, client: TestClient, auth_headers):
        response = client.post(
            "/api/bookmarks", json={"novel_id": 99999}, headers=auth_headers
        )
        assert response.status_code == 404

    def test_bookmark_unknown_chapter(self, client: TestClient, auth_headers, test_novel):
        response = client.post(
            "/api/bookmarks",
            json={"novel_id": test_novel.id, "chapter_id": 99999},
            headers=auth_headers,
        )
        assert response.status_code == 404

    def test_bookmark_chapter_of_other_novel(
        self, client: TestClient, auth_headers, test_novel_2, test_chapter
    ):
        response = client.post(
            "/api/bookmarks",
            json={"novel_id": test_novel_2.id, "chapter_id": test_chapter.id},
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_is_bookmarked(self, client: TestClient, auth_headers, test_novel):
        url = f"/api/novels/{test_novel.id}/is-bookmarked"
        assert client.get(url, headers=auth_headers).json()["data"] == {
            "is_bookmarked": False
        }

        client.post("/api/bookmarks", json={"novel_id": test_novel.id}, headers=auth_headers)
        assert client.get(url, headers=auth_headers).json()["data"] == {
            "is_bookmarked": True
        }

    def test_delete_bookmark(self, client: TestClient, auth_headers, test_novel):
        client.post("/api/bookmarks", json={"novel_id": test_novel.id}, headers=auth_headers)

        response = client.delete(f"/api/bookmarks/{test_novel.id}", headers=auth_headers)
        assert response.status_code == 204

        response = client.delete(f"/api/bookmarks/{test_novel.id}", headers=auth_headers)
        assert response.status_code == 204
        assert client.get("/api/bookmarks", headers=auth_headers).json()["data"] == []

    def test_bookmarks_require_auth(self, client: TestClient, test_novel):
        assert client.get("/api/bookmarks").status_code == 401
        assert (
            client.post("/api/bookmarks", json={"novel_id": test_novel.id}).status_code
            == 401
        )
        assert client.get(f"/api/novels/{test_novel.id}/is-bookmarked").status_code == 401
