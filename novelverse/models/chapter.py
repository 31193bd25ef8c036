from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from novelverse.core.database import Base


class Chapter(Base):
    __tablename__ = "chapters"

    id = Column(Integer, primary_key=True, index=True)
    novel_id = Column(
        Integer, ForeignKey("novels.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    # Ordering key within a novel; duplicates are tolerated
    chapter_number = Column(Integer, nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<Chapter(id={self.id}, title='{self.title}', chapter_number={self.chapter_number})>"
