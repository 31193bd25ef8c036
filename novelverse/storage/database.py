"""
SQLAlchemy implementation of the storage contract.

Every public write runs in a single transaction: it commits once on
success and rolls back on any exception. Derived novel counters are
recomputed from their source rows while the novel row is locked.
"""

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, List, Optional

from sqlalchemy.orm import Session

from novelverse.core.constants import (
    DEFAULT_SHOWCASE_LIMIT,
    DEFAULT_USER_SETTINGS,
    Genre,
)
from novelverse.crud import (
    crud_bookmark,
    crud_chapter,
    crud_comment,
    crud_like,
    crud_novel,
    crud_reading_history,
    crud_user,
    crud_user_settings,
)
from novelverse.models.novel import Novel
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


class DatabaseStorage(NovelStorage):
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _transaction(self) -> Iterator[Session]:
        try:
            yield self.db
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def _refresh_rating(self, novel: Novel) -> None:
        ratings = crud_comment.get_ratings(self.db, novel_id=novel.id)
        novel.rating, novel.review_count = aggregate_rating(ratings)
        logger.debug(
            f"Novel {novel.id} rating={novel.rating} reviews={novel.review_count}"
        )

    def _refresh_likes(self, novel: Novel) -> None:
        novel.likes = crud_like.count_by_novel(self.db, novel_id=novel.id)
        logger.debug(f"Novel {novel.id} likes={novel.likes}")

    def _touch_novel(self, novel_id: int) -> None:
        novel = crud_novel.get(self.db, id=novel_id)
        if novel is not None:
            novel.updated_at = datetime.utcnow()

    # ===============================
    # USERS
    # ===============================
    def get_user(self, id: int) -> Optional[UserInDB]:
        user = crud_user.get(self.db, id=id)
        return UserInDB.model_validate(user) if user else None

    def get_user_by_username(self, username: str) -> Optional[UserInDB]:
        user = crud_user.get_by_username(self.db, username=username)
        return UserInDB.model_validate(user) if user else None

    def get_user_by_email(self, email: str) -> Optional[UserInDB]:
        user = crud_user.get_by_email(self.db, email=email)
        return UserInDB.model_validate(user) if user else None

    def create_user(self, user_in: UserCreate) -> UserInDB:
        with self._transaction() as db:
            user = crud_user.create(db, obj_in=user_in)
            crud_user_settings.create(
                db, obj_in={"user_id": user.id, **DEFAULT_USER_SETTINGS}
            )
            result = UserInDB.model_validate(user)
        logger.info(f"Created user: {result.username} (ID: {result.id})")
        return result

    def update_user(self, id: int, user_in: UserUpdate) -> Optional[UserInDB]:
        with self._transaction() as db:
            user = crud_user.get(db, id=id)
            if user is None:
                return None
            user = crud_user.update(db, db_obj=user, obj_in=user_in)
            return UserInDB.model_validate(user)

    # ===============================
    # NOVELS
    # ===============================
    def get_novels(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        genre: Optional[Genre] = None,
    ) -> List[NovelResponse]:
        novels = crud_novel.get_filtered(self.db, genre=genre, skip=offset, limit=limit)
        return [NovelResponse.model_validate(n) for n in novels]

    def get_novel(self, id: int) -> Optional[NovelResponse]:
        novel = crud_novel.get(self.db, id=id)
        return NovelResponse.model_validate(novel) if novel else None

    def get_featured_novels(
        self, limit: int = DEFAULT_SHOWCASE_LIMIT
    ) -> List[NovelResponse]:
        novels = crud_novel.get_featured(self.db, limit=limit)
        return [NovelResponse.model_validate(n) for n in novels]

    def get_trending_novels(
        self, limit: int = DEFAULT_SHOWCASE_LIMIT
    ) -> List[NovelResponse]:
        novels = crud_novel.get_trending(self.db, limit=limit)
        return [NovelResponse.model_validate(n) for n in novels]

    def get_recent_novels(
        self, limit: int = DEFAULT_SHOWCASE_LIMIT
    ) -> List[NovelResponse]:
        return self.get_novels(limit=limit)

    def create_novel(
        self, novel_in: NovelCreate, created_by: Optional[int] = None
    ) -> NovelResponse:
        now = datetime.utcnow()
        data = novel_in.model_dump()
        data.update(
            rating=0,
            review_count=0,
            likes=0,
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )
        with self._transaction() as db:
            novel = crud_novel.create(db, obj_in=data)
            result = NovelResponse.model_validate(novel)
        logger.info(f"Created novel: {result.title} (ID: {result.id})")
        return result

    def update_novel(self, id: int, novel_in: NovelUpdate) -> Optional[NovelResponse]:
        update_data = novel_in.model_dump(exclude_unset=True)
        update_data["updated_at"] = datetime.utcnow()
        with self._transaction() as db:
            novel = crud_novel.get(db, id=id)
            if novel is None:
                return None
            novel = crud_novel.update(db, db_obj=novel, obj_in=update_data)
            return NovelResponse.model_validate(novel)

    def delete_novel(self, id: int) -> bool:
        with self._transaction() as db:
            if crud_novel.get_for_update(db, id=id) is None:
                return False
            chapters = crud_chapter.remove_by_novel(db, novel_id=id)
            comments = crud_comment.remove_by_novel(db, novel_id=id)
            bookmarks = crud_bookmark.remove_by_novel(db, novel_id=id)
            likes = crud_like.remove_by_novel(db, novel_id=id)
            history = crud_reading_history.remove_by_novel(db, novel_id=id)
            crud_novel.remove_by_id(db, id=id)
        logger.info(
            f"Deleted novel {id} with {chapters} chapters, {comments} comments, "
            f"{bookmarks} bookmarks, {likes} likes and {history} history entries"
        )
        return True

    def search_novels(self, query: str) -> List[NovelResponse]:
        candidates = crud_novel.search_candidates(self.db, query=query)
        # Tag hits on the serialized list are narrowed to real element matches
        return [
            NovelResponse.model_validate(n)
            for n in candidates
            if novel_matches(n, query)
        ]

    # ===============================
    # CHAPTERS
    # ===============================
    def get_chapters(self, novel_id: int) -> List[ChapterResponse]:
        chapters = crud_chapter.get_by_novel(self.db, novel_id=novel_id)
        return [ChapterResponse.model_validate(c) for c in chapters]

    def get_chapter(self, id: int) -> Optional[ChapterResponse]:
        chapter = crud_chapter.get(self.db, id=id)
        return ChapterResponse.model_validate(chapter) if chapter else None

    def create_chapter(self, chapter_in: ChapterCreate) -> ChapterResponse:
        now = datetime.utcnow()
        data = chapter_in.model_dump()
        data.update(created_at=now, updated_at=now)
        with self._transaction() as db:
            chapter = crud_chapter.create(db, obj_in=data)
            self._touch_novel(chapter.novel_id)
            return ChapterResponse.model_validate(chapter)

    def update_chapter(
        self, id: int, chapter_in: ChapterUpdate
    ) -> Optional[ChapterResponse]:
        update_data = chapter_in.model_dump(exclude_unset=True)
        update_data["updated_at"] = datetime.utcnow()
        with self._transaction() as db:
            chapter = crud_chapter.get(db, id=id)
            if chapter is None:
                return None
            chapter = crud_chapter.update(db, db_obj=chapter, obj_in=update_data)
            self._touch_novel(chapter.novel_id)
            return ChapterResponse.model_validate(chapter)

    def delete_chapter(self, id: int) -> bool:
        with self._transaction() as db:
            chapter = crud_chapter.get(db, id=id)
            if chapter is None:
                return False
            novel_id = chapter.novel_id
            bookmarks = crud_bookmark.remove_by_chapter(db, chapter_id=id)
            history = crud_reading_history.remove_by_chapter(db, chapter_id=id)
            crud_chapter.remove(db, id=id)
            self._touch_novel(novel_id)
        logger.info(
            f"Deleted chapter {id} of novel {novel_id} "
            f"({bookmarks} bookmarks, {history} history entries)"
        )
        return True

    # ===============================
    # COMMENTS
    # ===============================
    def get_comments(self, novel_id: int) -> List[CommentResponse]:
        comments = crud_comment.get_by_novel(self.db, novel_id=novel_id)
        return [CommentResponse.model_validate(c) for c in comments]

    def get_comment(self, id: int) -> Optional[CommentResponse]:
        comment = crud_comment.get(self.db, id=id)
        return CommentResponse.model_validate(comment) if comment else None

    def create_comment(self, comment_in: CommentCreate) -> CommentResponse:
        with self._transaction() as db:
            novel = crud_novel.get_for_update(db, id=comment_in.novel_id)
            comment = crud_comment.create(
                db, obj_in={**comment_in.model_dump(), "created_at": datetime.utcnow()}
            )
            if novel is not None:
                self._refresh_rating(novel)
            return CommentResponse.model_validate(comment)

    def delete_comment(self, id: int) -> bool:
        with self._transaction() as db:
            comment = crud_comment.get(db, id=id)
            if comment is None:
                return False
            novel = crud_novel.get_for_update(db, id=comment.novel_id)
            crud_comment.remove(db, id=id)
            if novel is not None:
                self._refresh_rating(novel)
        return True

    # ===============================
    # BOOKMARKS
    # ===============================
    def get_bookmarks(self, user_id: int) -> List[BookmarkWithNovel]:
        bookmarks = crud_bookmark.get_by_user_with_novel(self.db, user_id=user_id)
        return [BookmarkWithNovel.model_validate(b) for b in bookmarks]

    def create_bookmark(
        self, user_id: int, novel_id: int, chapter_id: Optional[int] = None
    ) -> BookmarkResponse:
        with self._transaction() as db:
            # Serializes concurrent upserts of the same novel
            crud_novel.get_for_update(db, id=novel_id)
            bookmark = crud_bookmark.get_by_user_and_novel(
                db, user_id=user_id, novel_id=novel_id
            )
            if bookmark is not None:
                bookmark = crud_bookmark.update(
                    db, db_obj=bookmark, obj_in={"chapter_id": chapter_id}
                )
            else:
                bookmark = crud_bookmark.create(
                    db,
                    obj_in={
                        "user_id": user_id,
                        "novel_id": novel_id,
                        "chapter_id": chapter_id,
                        "created_at": datetime.utcnow(),
                    },
                )
            return BookmarkResponse.model_validate(bookmark)

    def delete_bookmark(self, user_id: int, novel_id: int) -> bool:
        with self._transaction() as db:
            return crud_bookmark.remove_by_user_and_novel(
                db, user_id=user_id, novel_id=novel_id
            )

    def is_bookmarked(self, user_id: int, novel_id: int) -> bool:
        return (
            crud_bookmark.get_by_user_and_novel(self.db, user_id=user_id, novel_id=novel_id)
            is not None
        )

    # ===============================
    # READING HISTORY
    # ===============================
    def get_reading_history(self, user_id: int) -> List[ReadingHistoryWithDetails]:
        entries = crud_reading_history.get_by_user_with_details(self.db, user_id=user_id)
        return [ReadingHistoryWithDetails.model_validate(e) for e in entries]

    def update_reading_history(
        self, user_id: int, novel_id: int, chapter_id: int, progress: int
    ) -> ReadingHistoryResponse:
        now = datetime.utcnow()
        with self._transaction() as db:
            crud_novel.get_for_update(db, id=novel_id)
            entry = crud_reading_history.get_entry(
                db, user_id=user_id, novel_id=novel_id, chapter_id=chapter_id
            )
            if entry is not None:
                entry = crud_reading_history.update(
                    db, db_obj=entry, obj_in={"progress": progress, "last_read": now}
                )
            else:
                entry = crud_reading_history.create(
                    db,
                    obj_in={
                        "user_id": user_id,
                        "novel_id": novel_id,
                        "chapter_id": chapter_id,
                        "progress": progress,
                        "last_read": now,
                    },
                )
            return ReadingHistoryResponse.model_validate(entry)

    # ===============================
    # LIKES
    # ===============================
    def get_likes(self, user_id: int) -> List[LikeWithNovel]:
        likes = crud_like.get_by_user_with_novel(self.db, user_id=user_id)
        return [LikeWithNovel.model_validate(like) for like in likes]

    def create_like(self, user_id: int, novel_id: int) -> LikeResponse:
        with self._transaction() as db:
            novel = crud_novel.get_for_update(db, id=novel_id)
            like = crud_like.get_by_user_and_novel(db, user_id=user_id, novel_id=novel_id)
            if like is None:
                like = crud_like.create(
                    db,
                    obj_in={
                        "user_id": user_id,
                        "novel_id": novel_id,
                        "created_at": datetime.utcnow(),
                    },
                )
                if novel is not None:
                    self._refresh_likes(novel)
            return LikeResponse.model_validate(like)

    def delete_like(self, user_id: int, novel_id: int) -> bool:
        with self._transaction() as db:
            novel = crud_novel.get_for_update(db, id=novel_id)
            like = crud_like.get_by_user_and_novel(db, user_id=user_id, novel_id=novel_id)
            if like is None:
                return False
            crud_like.remove(db, id=like.id)
            if novel is not None:
                self._refresh_likes(novel)
        return True

    def is_liked(self, user_id: int, novel_id: int) -> bool:
        return (
            crud_like.get_by_user_and_novel(self.db, user_id=user_id, novel_id=novel_id)
            is not None
        )

    # ===============================
    # USER SETTINGS
    # ===============================
    def get_user_settings(self, user_id: int) -> Optional[UserSettingsResponse]:
        user_settings = crud_user_settings.get_by_user(self.db, user_id=user_id)
        return UserSettingsResponse.model_validate(user_settings) if user_settings else None

    def update_user_settings(
        self, user_id: int, settings_in: UserSettingsUpdate
    ) -> UserSettingsResponse:
        with self._transaction() as db:
            user_settings = crud_user_settings.get_by_user(db, user_id=user_id)
            if user_settings is None:
                data = {**DEFAULT_USER_SETTINGS, **settings_in.model_dump(exclude_unset=True)}
                user_settings = crud_user_settings.create(
                    db, obj_in={"user_id": user_id, **data}
                )
            else:
                user_settings = crud_user_settings.update(
                    db, db_obj=user_settings, obj_in=settings_in
                )
            return UserSettingsResponse.model_validate(user_settings)

    # ===============================
    # ADMIN
    # ===============================
    def get_stats(self, top: int = 5) -> PlatformStats:
        return PlatformStats(
            total_novels=crud_novel.count(self.db),
            total_chapters=crud_chapter.count(self.db),
            total_users=crud_user.count(self.db),
            total_comments=crud_comment.count(self.db),
            total_views=crud_novel.total_views(self.db),
            total_likes=crud_novel.total_likes(self.db),
            top_novels=[
                NovelResponse.model_validate(n)
                for n in crud_novel.get_most_viewed(self.db, limit=top)
            ],
        )
