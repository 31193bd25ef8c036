from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from novelverse.core.database import Base


class ReadingHistory(Base):
    __tablename__ = "reading_history"

    id = Column(Integer, primary_key=True, index=True)

    # Foreign Keys with proper cascade deletion
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    novel_id = Column(
        Integer, ForeignKey("novels.id", ondelete="CASCADE"), nullable=False, index=True
    )
    chapter_id = Column(
        Integer, ForeignKey("chapters.id", ondelete="CASCADE"), nullable=False
    )

    progress = Column(Integer, nullable=False, default=0)  # percentage 0-100
    last_read = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    # Relationships
    novel = relationship("Novel")
    chapter = relationship("Chapter")

    __table_args__ = (
        UniqueConstraint(
            "user_id", "novel_id", "chapter_id", name="unique_user_chapter_history"
        ),
    )

    def __repr__(self):
        return f"<ReadingHistory(id={self.id}, user_id={self.user_id}, chapter_id={self.chapter_id}, progress={self.progress}%)>"
