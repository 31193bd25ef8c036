from typing import List

from sqlalchemy.orm import Session

from novelverse.crud.base import CRUDBase
from novelverse.models.comment import Comment
from novelverse.schemas.comment import CommentCreate, CommentBase


class CRUDComment(CRUDBase[Comment, CommentCreate, CommentBase]):
    def get_by_novel(self, db: Session, *, novel_id: int) -> List[Comment]:
        """Newest comments first."""
        return (
            db.query(Comment)
            .filter(Comment.novel_id == novel_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
            .all()
        )

    def get_ratings(self, db: Session, *, novel_id: int) -> List[int]:
        """Ratings of every comment on a novel, zeros included."""
        rows = db.query(Comment.rating).filter(Comment.novel_id == novel_id).all()
        return [rating or 0 for (rating,) in rows]

    def remove_by_novel(self, db: Session, *, novel_id: int) -> int:
        return db.query(Comment).filter(Comment.novel_id == novel_id).delete()


crud_comment = CRUDComment(Comment)
