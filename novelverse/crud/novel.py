import json
import logging
from typing import List, Optional

from sqlalchemy import String, cast, func, or_
from sqlalchemy.orm import Session

from novelverse.core.constants import Genre
from novelverse.crud.base import CRUDBase
from novelverse.models.novel import Novel
from novelverse.schemas.novel import NovelCreate, NovelUpdate

logger = logging.getLogger(__name__)


def _like_pattern(query: str) -> str:
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class CRUDNovel(CRUDBase[Novel, NovelCreate, NovelUpdate]):
    def get_for_update(self, db: Session, *, id: int) -> Optional[Novel]:
        """Fetch a novel and lock its row until the transaction ends."""
        return db.query(Novel).filter(Novel.id == id).with_for_update().first()

    def get_filtered(
        self,
        db: Session,
        *,
        genre: Optional[Genre] = None,
        skip: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Novel]:
        query = db.query(Novel)
        if genre is not None:
            query = query.filter(Novel.genre == genre)
        query = query.order_by(Novel.updated_at.desc(), Novel.id.desc())
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def get_featured(self, db: Session, *, limit: int) -> List[Novel]:
        return (
            db.query(Novel)
            .filter(Novel.is_featured.is_(True))
            .order_by(Novel.rating.desc(), Novel.created_at.desc(), Novel.id.desc())
            .limit(limit)
            .all()
        )

    def get_trending(self, db: Session, *, limit: int) -> List[Novel]:
        return (
            db.query(Novel)
            .filter(Novel.is_trending.is_(True))
            .order_by(Novel.rating.desc(), Novel.created_at.desc(), Novel.id.desc())
            .limit(limit)
            .all()
        )

    def get_most_viewed(self, db: Session, *, limit: int) -> List[Novel]:
        return (
            db.query(Novel)
            .order_by(Novel.views.desc(), Novel.id.desc())
            .limit(limit)
            .all()
        )

    def search_candidates(self, db: Session, *, query: str) -> List[Novel]:
        """
        Coarse case-insensitive match over the text columns, genre and the
        serialized tag list. Callers refine tag hits per element.
        """
        pattern = _like_pattern(query)
        # Tags are stored as JSON text, so match the needle as JSON encodes it
        tag_pattern = _like_pattern(json.dumps(query, ensure_ascii=False)[1:-1])
        return (
            db.query(Novel)
            .filter(
                or_(
                    Novel.title.ilike(pattern, escape="\\"),
                    Novel.author.ilike(pattern, escape="\\"),
                    Novel.description.ilike(pattern, escape="\\"),
                    cast(Novel.genre, String).ilike(pattern, escape="\\"),
                    cast(Novel.tags, String).ilike(tag_pattern, escape="\\"),
                )
            )
            .order_by(Novel.updated_at.desc(), Novel.id.desc())
            .all()
        )

    def total_views(self, db: Session) -> int:
        return db.query(func.coalesce(func.sum(Novel.views), 0)).scalar() or 0

    def total_likes(self, db: Session) -> int:
        return db.query(func.coalesce(func.sum(Novel.likes), 0)).scalar() or 0

    def remove_by_id(self, db: Session, *, id: int) -> bool:
        return db.query(Novel).filter(Novel.id == id).delete() > 0


crud_novel = CRUDNovel(Novel)
