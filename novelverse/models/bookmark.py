from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from novelverse.core.database import Base


class Bookmark(Base):
    __tablename__ = "bookmarks"

    id = Column(Integer, primary_key=True, index=True)

    # Foreign Keys with proper cascade deletion
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    novel_id = Column(
        Integer, ForeignKey("novels.id", ondelete="CASCADE"), nullable=False, index=True
    )
    chapter_id = Column(
        Integer, ForeignKey("chapters.id", ondelete="CASCADE"), nullable=True
    )

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    novel = relationship("Novel")

    # Constraints - One bookmark per user per novel
    __table_args__ = (
        UniqueConstraint("user_id", "novel_id", name="unique_user_novel_bookmark"),
    )

    def __repr__(self):
        return f"<Bookmark(id={self.id}, user_id={self.user_id}, novel_id={self.novel_id}, chapter_id={self.chapter_id})>"
