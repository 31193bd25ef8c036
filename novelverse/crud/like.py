from typing import List, Optional

from sqlalchemy.orm import Session, contains_eager

from novelverse.crud.base import CRUDBase
from novelverse.models.like import Like
from novelverse.schemas.like import LikeCreate


class CRUDLike(CRUDBase[Like, LikeCreate, LikeCreate]):
    def get_by_user_and_novel(
        self, db: Session, *, user_id: int, novel_id: int
    ) -> Optional[Like]:
        return (
            db.query(Like)
            .filter(Like.user_id == user_id, Like.novel_id == novel_id)
            .first()
        )

    def get_by_user_with_novel(self, db: Session, *, user_id: int) -> List[Like]:
        return (
            db.query(Like)
            .join(Like.novel)
            .options(contains_eager(Like.novel))
            .filter(Like.user_id == user_id)
            .order_by(Like.created_at.desc(), Like.id.desc())
            .all()
        )

    def count_by_novel(self, db: Session, *, novel_id: int) -> int:
        return db.query(Like).filter(Like.novel_id == novel_id).count()

    def remove_by_novel(self, db: Session, *, novel_id: int) -> int:
        return db.query(Like).filter(Like.novel_id == novel_id).delete()


crud_like = CRUDLike(Like)
