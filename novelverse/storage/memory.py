"""
Dictionary-backed storage for tests and local development.

Mirrors ``DatabaseStorage`` record for record. It is process-local and
not synchronized, so it must not be shared across worker processes.
"""

import itertools
import logging
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from novelverse.core.auth import get_password_hash
from novelverse.core.constants import (
    DEFAULT_SHOWCASE_LIMIT,
    DEFAULT_USER_SETTINGS,
    Genre,
)
from novelverse.schemas.bookmark import BookmarkResponse, BookmarkWithNovel
from novelverse.schemas.chapter import ChapterCreate, ChapterResponse, ChapterUpdate
from novelverse.schemas.comment import CommentCreate, CommentResponse
from novelverse.schemas.like import LikeResponse, LikeWithNovel
from novelverse.schemas.novel import (
    NovelCreate,
    NovelResponse,
    NovelUpdate,
    PlatformStats,
)
from novelverse.schemas.reading_history import (
    ReadingHistoryResponse,
    ReadingHistoryWithDetails,
)
from novelverse.schemas.user import UserCreate, UserInDB, UserUpdate
from novelverse.schemas.user_settings import UserSettingsResponse, UserSettingsUpdate
from novelverse.storage.base import NovelStorage, aggregate_rating, novel_matches

logger = logging.getLogger(__name__)


def _newest_first(records, attr: str):
    return sorted(records, key=lambda r: (getattr(r, attr), r.id), reverse=True)


class MemoryStorage(NovelStorage):
    def __init__(self):
        self.users: Dict[int, UserInDB] = {}
        self.novels: Dict[int, NovelResponse] = {}
        self.chapters: Dict[int, ChapterResponse] = {}
        self.comments: Dict[int, CommentResponse] = {}
        self.bookmarks: Dict[Tuple[int, int], BookmarkResponse] = {}
        self.reading_history: Dict[Tuple[int, int, int], ReadingHistoryResponse] = {}
        self.likes: Dict[Tuple[int, int], LikeResponse] = {}
        self.user_settings: Dict[int, UserSettingsResponse] = {}
        self._ids = {
            name: itertools.count(1)
            for name in (
                "user",
                "novel",
                "chapter",
                "comment",
                "bookmark",
                "reading_history",
                "like",
                "user_settings",
            )
        }

    def _next_id(self, name: str) -> int:
        return next(self._ids[name])

    def _refresh_rating(self, novel_id: int) -> None:
        novel = self.novels.get(novel_id)
        if novel is None:
            return
        ratings = [c.rating for c in self.comments.values() if c.novel_id == novel_id]
        rating, review_count = aggregate_rating(ratings)
        self.novels[novel_id] = novel.model_copy(
            update={"rating": rating, "review_count": review_count}
        )

    def _refresh_likes(self, novel_id: int) -> None:
        novel = self.novels.get(novel_id)
        if novel is None:
            return
        count = sum(1 for key in self.likes if key[1] == novel_id)
        self.novels[novel_id] = novel.model_copy(update={"likes": count})

    def _touch_novel(self, novel_id: int) -> None:
        novel = self.novels.get(novel_id)
        if novel is not None:
            self.novels[novel_id] = novel.model_copy(
                update={"updated_at": datetime.utcnow()}
            )

    # Users
    def get_user(self, id: int) -> Optional[UserInDB]:
        return self.users.get(id)

    def get_user_by_username(self, username: str) -> Optional[UserInDB]:
        return next((u for u in self.users.values() if u.username == username), None)

    def get_user_by_email(self, email: str) -> Optional[UserInDB]:
        return next((u for u in self.users.values() if u.email == email), None)

    def create_user(self, user_in: UserCreate) -> UserInDB:
        user = UserInDB(
            id=self._next_id("user"),
            username=user_in.username,
            email=user_in.email,
            avatar=user_in.avatar,
            bio=user_in.bio,
            hashed_password=get_password_hash(user_in.password),
            is_admin=user_in.is_admin,
            created_at=datetime.utcnow(),
        )
        self.users[user.id] = user
        self.user_settings[user.id] = UserSettingsResponse(
            id=self._next_id("user_settings"), user_id=user.id, **DEFAULT_USER_SETTINGS
        )
        logger.info(f"Created user: {user.username} (ID: {user.id})")
        return user

    def update_user(self, id: int, user_in: UserUpdate) -> Optional[UserInDB]:
        user = self.users.get(id)
        if user is None:
            return None
        update_data = user_in.model_dump(exclude_unset=True)
        for field in ("avatar", "bio"):
            if update_data.get(field) == "":
                update_data[field] = None
        if "password" in update_data:
            update_data["hashed_password"] = get_password_hash(
                update_data.pop("password")
            )
        user = user.model_copy(update=update_data)
        self.users[id] = user
        return user

    # Novels
    def get_novels(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        genre: Optional[Genre] = None,
    ) -> List[NovelResponse]:
        novels = self.novels.values()
        if genre is not None:
            novels = [n for n in novels if n.genre == genre]
        novels = _newest_first(novels, "updated_at")
        start = offset or 0
        end = start + limit if limit is not None else None
        return novels[start:end]

    def get_novel(self, id: int) -> Optional[NovelResponse]:
        return self.novels.get(id)

    def _showcase(self, flag: str, limit: int) -> List[NovelResponse]:
        novels = [n for n in self.novels.values() if getattr(n, flag)]
        novels.sort(key=lambda n: (n.rating, n.created_at, n.id), reverse=True)
        return novels[:limit]

    def get_featured_novels(
        self, limit: int = DEFAULT_SHOWCASE_LIMIT
    ) -> List[NovelResponse]:
        return self._showcase("is_featured", limit)

    def get_trending_novels(
        self, limit: int = DEFAULT_SHOWCASE_LIMIT
    ) -> List[NovelResponse]:
        return self._showcase("is_trending", limit)

    def get_recent_novels(
        self, limit: int = DEFAULT_SHOWCASE_LIMIT
    ) -> List[NovelResponse]:
        return self.get_novels(limit=limit)

    def create_novel(
        self, novel_in: NovelCreate, created_by: Optional[int] = None
    ) -> NovelResponse:
        now = datetime.utcnow()
        novel = NovelResponse(
            id=self._next_id("novel"),
            rating=0,
            review_count=0,
            likes=0,
            created_by=created_by,
            created_at=now,
            updated_at=now,
            **novel_in.model_dump(),
        )
        self.novels[novel.id] = novel
        logger.info(f"Created novel: {novel.title} (ID: {novel.id})")
        return novel

    def update_novel(self, id: int, novel_in: NovelUpdate) -> Optional[NovelResponse]:
        novel = self.novels.get(id)
        if novel is None:
            return None
        update_data = novel_in.model_dump(exclude_unset=True)
        update_data["updated_at"] = datetime.utcnow()
        novel = novel.model_copy(update=update_data)
        self.novels[id] = novel
        return novel

    def delete_novel(self, id: int) -> bool:
        if id not in self.novels:
            return False
        self.chapters = {k: c for k, c in self.chapters.items() if c.novel_id != id}
        self.comments = {k: c for k, c in self.comments.items() if c.novel_id != id}
        self.bookmarks = {k: b for k, b in self.bookmarks.items() if k[1] != id}
        self.likes = {k: like for k, like in self.likes.items() if k[1] != id}
        self.reading_history = {
            k: h for k, h in self.reading_history.items() if k[1] != id
        }
        del self.novels[id]
        logger.info(f"Deleted novel {id} and its dependent records")
        return True

    def search_novels(self, query: str) -> List[NovelResponse]:
        matches = [n for n in self.novels.values() if novel_matches(n, query)]
        return _newest_first(matches, "updated_at")

    # Chapters
    def get_chapters(self, novel_id: int) -> List[ChapterResponse]:
        chapters = [c for c in self.chapters.values() if c.novel_id == novel_id]
        return sorted(chapters, key=lambda c: (c.chapter_number, c.id))

    def get_chapter(self, id: int) -> Optional[ChapterResponse]:
        return self.chapters.get(id)

    def create_chapter(self, chapter_in: ChapterCreate) -> ChapterResponse:
        now = datetime.utcnow()
        chapter = ChapterResponse(
            id=self._next_id("chapter"),
            created_at=now,
            updated_at=now,
            **chapter_in.model_dump(),
        )
        self.chapters[chapter.id] = chapter
        self._touch_novel(chapter.novel_id)
        return chapter

    def update_chapter(
        self, id: int, chapter_in: ChapterUpdate
    ) -> Optional[ChapterResponse]:
        chapter = self.chapters.get(id)
        if chapter is None:
            return None
        update_data = chapter_in.model_dump(exclude_unset=True)
        update_data["updated_at"] = datetime.utcnow()
        chapter = chapter.model_copy(update=update_data)
        self.chapters[id] = chapter
        self._touch_novel(chapter.novel_id)
        return chapter

    def delete_chapter(self, id: int) -> bool:
        chapter = self.chapters.pop(id, None)
        if chapter is None:
            return False
        self.bookmarks = {
            k: b for k, b in self.bookmarks.items() if b.chapter_id != id
        }
        self.reading_history = {
            k: h for k, h in self.reading_history.items() if k[2] != id
        }
        self._touch_novel(chapter.novel_id)
        return True

    # Comments
    def get_comments(self, novel_id: int) -> List[CommentResponse]:
        comments = [c for c in self.comments.values() if c.novel_id == novel_id]
        return _newest_first(comments, "created_at")

    def get_comment(self, id: int) -> Optional[CommentResponse]:
        return self.comments.get(id)

    def create_comment(self, comment_in: CommentCreate) -> CommentResponse:
        comment = CommentResponse(
            id=self._next_id("comment"),
            created_at=datetime.utcnow(),
            **comment_in.model_dump(),
        )
        self.comments[comment.id] = comment
        self._refresh_rating(comment.novel_id)
        return comment

    def delete_comment(self, id: int) -> bool:
        comment = self.comments.pop(id, None)
        if comment is None:
            return False
        self._refresh_rating(comment.novel_id)
        return True

    # Bookmarks
    def get_bookmarks(self, user_id: int) -> List[BookmarkWithNovel]:
        bookmarks = [b for b in self.bookmarks.values() if b.user_id == user_id]
        return [
            BookmarkWithNovel(**b.model_dump(), novel=self.novels[b.novel_id])
            for b in _newest_first(bookmarks, "created_at")
            if b.novel_id in self.novels
        ]

    def create_bookmark(
        self, user_id: int, novel_id: int, chapter_id: Optional[int] = None
    ) -> BookmarkResponse:
        key = (user_id, novel_id)
        bookmark = self.bookmarks.get(key)
        if bookmark is not None:
            bookmark = bookmark.model_copy(update={"chapter_id": chapter_id})
        else:
            bookmark = BookmarkResponse(
                id=self._next_id("bookmark"),
                user_id=user_id,
                novel_id=novel_id,
                chapter_id=chapter_id,
                created_at=datetime.utcnow(),
            )
        self.bookmarks[key] = bookmark
        return bookmark

    def delete_bookmark(self, user_id: int, novel_id: int) -> bool:
        return self.bookmarks.pop((user_id, novel_id), None) is not None

    def is_bookmarked(self, user_id: int, novel_id: int) -> bool:
        return (user_id, novel_id) in self.bookmarks

    # Reading history
    def get_reading_history(self, user_id: int) -> List[ReadingHistoryWithDetails]:
        entries = [h for h in self.reading_history.values() if h.user_id == user_id]
        return [
            ReadingHistoryWithDetails(
                **h.model_dump(),
                novel=self.novels[h.novel_id],
                chapter=self.chapters[h.chapter_id],
            )
            for h in _newest_first(entries, "last_read")
            if h.novel_id in self.novels and h.chapter_id in self.chapters
        ]

    def update_reading_history(
        self, user_id: int, novel_id: int, chapter_id: int, progress: int
    ) -> ReadingHistoryResponse:
        key = (user_id, novel_id, chapter_id)
        now = datetime.utcnow()
        entry = self.reading_history.get(key)
        if entry is not None:
            entry = entry.model_copy(update={"progress": progress, "last_read": now})
        else:
            entry = ReadingHistoryResponse(
                id=self._next_id("reading_history"),
                user_id=user_id,
                novel_id=novel_id,
                chapter_id=chapter_id,
                progress=progress,
                last_read=now,
            )
        self.reading_history[key] = entry
        return entry

    # Likes
    def get_likes(self, user_id: int) -> List[LikeWithNovel]:
        likes = [like for like in self.likes.values() if like.user_id == user_id]
        return [
            LikeWithNovel(**like.model_dump(), novel=self.novels[like.novel_id])
            for like in _newest_first(likes, "created_at")
            if like.novel_id in self.novels
        ]

    def create_like(self, user_id: int, novel_id: int) -> LikeResponse:
        key = (user_id, novel_id)
        if key in self.likes:
            return self.likes[key]
        like = LikeResponse(
            id=self._next_id("like"),
            user_id=user_id,
            novel_id=novel_id,
            created_at=datetime.utcnow(),
        )
        self.likes[key] = like
        self._refresh_likes(novel_id)
        return like

    def delete_like(self, user_id: int, novel_id: int) -> bool:
        if self.likes.pop((user_id, novel_id), None) is None:
            return False
        self._refresh_likes(novel_id)
        return True

    def is_liked(self, user_id: int, novel_id: int) -> bool:
        return (user_id, novel_id) in self.likes

    # User settings
    def get_user_settings(self, user_id: int) -> Optional[UserSettingsResponse]:
        return self.user_settings.get(user_id)

    def update_user_settings(
        self, user_id: int, settings_in: UserSettingsUpdate
    ) -> UserSettingsResponse:
        update_data = settings_in.model_dump(exclude_unset=True)
        current = self.user_settings.get(user_id)
        if current is None:
            current = UserSettingsResponse(
                id=self._next_id("user_settings"),
                user_id=user_id,
                **{**DEFAULT_USER_SETTINGS, **update_data},
            )
        else:
            current = current.model_copy(update=update_data)
        self.user_settings[user_id] = current
        return current

    # Admin
    def get_stats(self, top: int = 5) -> PlatformStats:
        novels = list(self.novels.values())
        return PlatformStats(
            total_novels=len(novels),
            total_chapters=len(self.chapters),
            total_users=len(self.users),
            total_comments=len(self.comments),
            total_views=sum(n.views for n in novels),
            total_likes=sum(n.likes for n in novels),
            top_novels=sorted(novels, key=lambda n: (n.views, n.id), reverse=True)[:top],
        )
