from typing import List

from sqlalchemy.orm import Session

from novelverse.crud.base import CRUDBase
from novelverse.models.chapter import Chapter
from novelverse.schemas.chapter import ChapterCreate, ChapterUpdate


class CRUDChapter(CRUDBase[Chapter, ChapterCreate, ChapterUpdate]):
    def get_by_novel(self, db: Session, *, novel_id: int) -> List[Chapter]:
        """Get chapters of a novel ordered by chapter number."""
        return (
            db.query(Chapter)
            .filter(Chapter.novel_id == novel_id)
            .order_by(Chapter.chapter_number, Chapter.id)
            .all()
        )

    def remove_by_novel(self, db: Session, *, novel_id: int) -> int:
        return db.query(Chapter).filter(Chapter.novel_id == novel_id).delete()


crud_chapter = CRUDChapter(Chapter)
