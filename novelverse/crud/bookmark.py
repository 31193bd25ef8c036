from typing import List, Optional

from sqlalchemy.orm import Session, contains_eager

from novelverse.crud.base import CRUDBase
from novelverse.models.bookmark import Bookmark
from novelverse.schemas.bookmark import BookmarkCreate


class CRUDBookmark(CRUDBase[Bookmark, BookmarkCreate, BookmarkCreate]):
    def get_by_user_and_novel(
        self, db: Session, *, user_id: int, novel_id: int
    ) -> Optional[Bookmark]:
        return (
            db.query(Bookmark)
            .filter(Bookmark.user_id == user_id, Bookmark.novel_id == novel_id)
            .first()
        )

    def get_by_user_with_novel(self, db: Session, *, user_id: int) -> List[Bookmark]:
        """Bookmarks joined to their novel; rows without a novel are not returned."""
        return (
            db.query(Bookmark)
            .join(Bookmark.novel)
            .options(contains_eager(Bookmark.novel))
            .filter(Bookmark.user_id == user_id)
            .order_by(Bookmark.created_at.desc(), Bookmark.id.desc())
            .all()
        )

    def remove_by_user_and_novel(
        self, db: Session, *, user_id: int, novel_id: int
    ) -> bool:
        deleted = (
            db.query(Bookmark)
            .filter(Bookmark.user_id == user_id, Bookmark.novel_id == novel_id)
            .delete()
        )
        return deleted > 0

    def remove_by_novel(self, db: Session, *, novel_id: int) -> int:
        return db.query(Bookmark).filter(Bookmark.novel_id == novel_id).delete()

    def remove_by_chapter(self, db: Session, *, chapter_id: int) -> int:
        return db.query(Bookmark).filter(Bookmark.chapter_id == chapter_id).delete()


crud_bookmark = CRUDBookmark(Bookmark)
