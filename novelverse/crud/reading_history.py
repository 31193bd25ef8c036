from typing import List, Optional

from sqlalchemy.orm import Session, contains_eager

from novelverse.crud.base import CRUDBase
from novelverse.models.reading_history import ReadingHistory
from novelverse.schemas.reading_history import ReadingHistoryCreate


class CRUDReadingHistory(
    CRUDBase[ReadingHistory, ReadingHistoryCreate, ReadingHistoryCreate]
):
    def get_entry(
        self, db: Session, *, user_id: int, novel_id: int, chapter_id: int
    ) -> Optional[ReadingHistory]:
        return (
            db.query(ReadingHistory)
            .filter(
                ReadingHistory.user_id == user_id,
                ReadingHistory.novel_id == novel_id,
                ReadingHistory.chapter_id == chapter_id,
            )
            .first()
        )

    def get_by_user_with_details(
        self, db: Session, *, user_id: int
    ) -> List[ReadingHistory]:
        """Most recently read first, joined to novel and chapter."""
        return (
            db.query(ReadingHistory)
            .join(ReadingHistory.novel)
            .join(ReadingHistory.chapter)
            .options(
                contains_eager(ReadingHistory.novel),
                contains_eager(ReadingHistory.chapter),
            )
            .filter(ReadingHistory.user_id == user_id)
            .order_by(ReadingHistory.last_read.desc(), ReadingHistory.id.desc())
            .all()
        )

    def remove_by_novel(self, db: Session, *, novel_id: int) -> int:
        return (
            db.query(ReadingHistory)
            .filter(ReadingHistory.novel_id == novel_id)
            .delete()
        )

    def remove_by_chapter(self, db: Session, *, chapter_id: int) -> int:
        return (
            db.query(ReadingHistory)
            .filter(ReadingHistory.chapter_id == chapter_id)
            .delete()
        )


crud_reading_history = CRUDReadingHistory(ReadingHistory)
