"""
Persistence contract shared by every storage backend.

Both implementations return pydantic records (never ORM instances) so
routers behave the same whichever backend is configured.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Tuple

from novelverse.core.constants import DEFAULT_SHOWCASE_LIMIT, Genre
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


def aggregate_rating(ratings: Iterable[int]) -> Tuple[int, int]:
    """
    Derive (rating, review_count) from the ratings of a novel's comments.

    Every comment counts as a review. Unrated comments (0) are left out of
    the mean, which is rounded half up: [2, 3] -> 3.
    """
    ratings = list(ratings)
    rated = [r for r in ratings if r and r > 0]
    if not rated:
        return 0, len(ratings)
    total, count = sum(rated), len(rated)
    return (2 * total + count) // (2 * count), len(ratings)


def novel_matches(novel, query: str) -> bool:
    """Case-insensitive substring match over title, author, description, genre and tags."""
    needle = query.lower()
    genre = novel.genre.value if isinstance(novel.genre, Genre) else novel.genre
    fields = [novel.title, novel.author, novel.description, genre, *(novel.tags or [])]
    return any(needle in field.lower() for field in fields if field)


class NovelStorage(ABC):
    """Storage operations for users, the novel catalog and reader activity."""

    # Users
    @abstractmethod
    def get_user(self, id: int) -> Optional[UserInDB]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[UserInDB]: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[UserInDB]: ...

    @abstractmethod
    def create_user(self, user_in: UserCreate) -> UserInDB:
        """Create a user with a hashed password and default reading settings."""

    @abstractmethod
    def update_user(self, id: int, user_in: UserUpdate) -> Optional[UserInDB]: ...

    # Novels
    @abstractmethod
    def get_novels(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        genre: Optional[Genre] = None,
    ) -> List[NovelResponse]:
        """Most recently updated first, filtered before paging."""

    @abstractmethod
    def get_novel(self, id: int) -> Optional[NovelResponse]: ...

    @abstractmethod
    def get_featured_novels(
        self, limit: int = DEFAULT_SHOWCASE_LIMIT
    ) -> List[NovelResponse]: ...

    @abstractmethod
    def get_trending_novels(
        self, limit: int = DEFAULT_SHOWCASE_LIMIT
    ) -> List[NovelResponse]: ...

    @abstractmethod
    def get_recent_novels(
        self, limit: int = DEFAULT_SHOWCASE_LIMIT
    ) -> List[NovelResponse]: ...

    @abstractmethod
    def create_novel(
        self, novel_in: NovelCreate, created_by: Optional[int] = None
    ) -> NovelResponse: ...

    @abstractmethod
    def update_novel(
        self, id: int, novel_in: NovelUpdate
    ) -> Optional[NovelResponse]: ...

    @abstractmethod
    def delete_novel(self, id: int) -> bool:
        """Delete a novel together with everything that references it."""

    @abstractmethod
    def search_novels(self, query: str) -> List[NovelResponse]: ...

    # Chapters
    @abstractmethod
    def get_chapters(self, novel_id: int) -> List[ChapterResponse]: ...

    @abstractmethod
    def get_chapter(self, id: int) -> Optional[ChapterResponse]: ...

    @abstractmethod
    def create_chapter(self, chapter_in: ChapterCreate) -> ChapterResponse: ...

    @abstractmethod
    def update_chapter(
        self, id: int, chapter_in: ChapterUpdate
    ) -> Optional[ChapterResponse]: ...

    @abstractmethod
    def delete_chapter(self, id: int) -> bool: ...

    # Comments
    @abstractmethod
    def get_comments(self, novel_id: int) -> List[CommentResponse]: ...

    @abstractmethod
    def get_comment(self, id: int) -> Optional[CommentResponse]: ...

    @abstractmethod
    def create_comment(self, comment_in: CommentCreate) -> CommentResponse: ...

    @abstractmethod
    def delete_comment(self, id: int) -> bool: ...

    # Bookmarks
    @abstractmethod
    def get_bookmarks(self, user_id: int) -> List[BookmarkWithNovel]: ...

    @abstractmethod
    def create_bookmark(
        self, user_id: int, novel_id: int, chapter_id: Optional[int] = None
    ) -> BookmarkResponse: ...

    @abstractmethod
    def delete_bookmark(self, user_id: int, novel_id: int) -> bool: ...

    @abstractmethod
    def is_bookmarked(self, user_id: int, novel_id: int) -> bool: ...

    # Reading history
    @abstractmethod
    def get_reading_history(self, user_id: int) -> List[ReadingHistoryWithDetails]: ...

    @abstractmethod
    def update_reading_history(
        self, user_id: int, novel_id: int, chapter_id: int, progress: int
    ) -> ReadingHistoryResponse: ...

    # Likes
    @abstractmethod
    def get_likes(self, user_id: int) -> List[LikeWithNovel]: ...

    @abstractmethod
    def create_like(self, user_id: int, novel_id: int) -> LikeResponse: ...

    @abstractmethod
    def delete_like(self, user_id: int, novel_id: int) -> bool: ...

    @abstractmethod
    def is_liked(self, user_id: int, novel_id: int) -> bool: ...

    # User settings
    @abstractmethod
    def get_user_settings(self, user_id: int) -> Optional[UserSettingsResponse]: ...

    @abstractmethod
    def update_user_settings(
        self, user_id: int, settings_in: UserSettingsUpdate
    ) -> UserSettingsResponse: ...

    # Admin
    @abstractmethod
    def get_stats(self, top: int = 5) -> PlatformStats: ...
