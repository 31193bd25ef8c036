"""
Storage contract tests for bookmarks, reading history, likes and settings.
"""
import pytest

from novelverse.core.constants import Genre
from novelverse.schemas.chapter import ChapterCreate
from novelverse.schemas.novel import NovelCreate
from novelverse.schemas.user import UserCreate
from novelverse.schemas.user_settings import UserSettingsUpdate


@pytest.fixture
def reader(storage):
    return storage.create_user(
        UserCreate(username="reader", email="reader@example.com", password="secret123")
    )


@pytest.fixture
def other_reader(storage):
    return storage.create_user(
        UserCreate(username="other", email="other@example.com", password="secret456")
    )


@pytest.fixture
def novel(storage):
    return storage.create_novel(
        NovelCreate(
            title="The Ember Throne",
            author="Mara Vell",
            description="A burning kingdom.",
            genre=Genre.FANTASY,
            tags=["dragons"],
        )
    )


@pytest.fixture
def chapters(storage, novel):
    return [
        storage.create_chapter(
            ChapterCreate(
                novel_id=novel.id,
                title=f"Chapter {number}",
                content="...",
                chapter_number=number,
            )
        )
        for number in (1, 2)
    ]


class TestBookmarkStorage:
    """One bookmark per user and novel"""

    def test_bookmark_is_idempotent(self, storage, reader, novel, chapters):
        first = storage.create_bookmark(reader.id, novel.id, chapters[0].id)
        second = storage.create_bookmark(reader.id, novel.id, chapters[1].id)

        assert second.id == first.id
        assert second.chapter_id == chapters[1].id
        bookmarks = storage.get_bookmarks(reader.id)
        assert len(bookmarks) == 1
        assert bookmarks[0].chapter_id == chapters[1].id

    def test_bookmark_without_chapter(self, storage, reader, novel):
        bookmark = storage.create_bookmark(reader.id, novel.id)
        assert bookmark.chapter_id is None
        assert storage.is_bookmarked(reader.id, novel.id) is True

    def test_bookmarks_are_enriched_with_novel(self, storage, reader, novel):
        storage.create_bookmark(reader.id, novel.id)

        bookmark = storage.get_bookmarks(reader.id)[0]
        assert bookmark.novel.id == novel.id
        assert bookmark.novel.title == "The Ember Throne"

    def test_bookmarks_are_per_user(self, storage, reader, other_reader, novel):
        storage.create_bookmark(reader.id, novel.id)

        assert storage.is_bookmarked(other_reader.id, novel.id) is False
        assert storage.get_bookmarks(other_reader.id) == []

    def test_delete_bookmark(self, storage, reader, novel):
        storage.create_bookmark(reader.id, novel.id)

        assert storage.delete_bookmark(reader.id, novel.id) is True
        assert storage.is_bookmarked(reader.id, novel.id) is False
        assert storage.delete_bookmark(reader.id, novel.id) is False


class TestReadingHistoryStorage:
    """Reading progress upserts"""

    def test_upsert_updates_progress_and_last_read(self, storage, reader, novel, chapters):
        first = storage.update_reading_history(reader.id, novel.id, chapters[0].id, 10)
        second = storage.update_reading_history(reader.id, novel.id, chapters[0].id, 60)

        assert second.id == first.id
        assert second.progress == 60
        assert second.last_read >= first.last_read
        assert len(storage.get_reading_history(reader.id)) == 1

    def test_history_is_most_recent_first(self, storage, reader, novel, chapters):
        storage.update_reading_history(reader.id, novel.id, chapters[0].id, 100)
        storage.update_reading_history(reader.id, novel.id, chapters[1].id, 20)

        history = storage.get_reading_history(reader.id)
        assert [h.chapter_id for h in history] == [chapters[1].id, chapters[0].id]

    def test_history_is_enriched(self, storage, reader, novel, chapters):
        storage.update_reading_history(reader.id, novel.id, chapters[0].id, 45)

        entry = storage.get_reading_history(reader.id)[0]
        assert entry.novel.id == novel.id
        assert entry.chapter.id == chapters[0].id
        assert entry.chapter.title == "Chapter 1"
        assert entry.progress == 45


class TestLikeStorage:
    """Likes and the denormalized like counter"""

    def test_like_toggle(self, storage, reader, novel):
        storage.create_like(reader.id, novel.id)
        assert storage.get_novel(novel.id).likes == 1
        assert storage.is_liked(reader.id, novel.id) is True

        assert storage.delete_like(reader.id, novel.id) is True
        assert storage.get_novel(novel.id).likes == 0
        assert storage.is_liked(reader.id, novel.id) is False

        assert storage.delete_like(reader.id, novel.id) is False
        assert storage.get_novel(novel.id).likes == 0

    def test_like_twice_returns_existing(self, storage, reader, novel):
        first = storage.create_like(reader.id, novel.id)
        second = storage.create_like(reader.id, novel.id)

        assert second.id == first.id
        assert storage.get_novel(novel.id).likes == 1

    def test_likes_counted_across_users(self, storage, reader, other_reader, novel):
        storage.create_like(reader.id, novel.id)
        storage.create_like(other_reader.id, novel.id)
        assert storage.get_novel(novel.id).likes == 2

        storage.delete_like(reader.id, novel.id)
        assert storage.get_novel(novel.id).likes == 1

    def test_get_likes_enriched(self, storage, reader, novel):
        storage.create_like(reader.id, novel.id)

        likes = storage.get_likes(reader.id)
        assert len(likes) == 1
        assert likes[0].novel.id == novel.id
        assert likes[0].novel.likes == 1


class TestUserSettingsStorage:
    """Per-user reading settings"""

    def test_partial_update_keeps_other_fields(self, storage, reader):
        updated = storage.update_user_settings(
            reader.id, UserSettingsUpdate(font_size=22, theme="sepia")
        )

        assert updated.font_size == 22
        assert updated.theme == "sepia"
        assert updated.font_family == "serif"
        assert updated.line_spacing == 150
        assert storage.get_user_settings(reader.id).font_size == 22

    def test_update_is_an_upsert(self, storage, reader):
        before = storage.get_user_settings(reader.id)
        after = storage.update_user_settings(reader.id, UserSettingsUpdate(font_size=14))
        assert after.id == before.id
