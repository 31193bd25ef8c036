from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text

from novelverse.core.database import Base


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    novel_id = Column(
        Integer, ForeignKey("novels.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content = Column(Text, nullable=False)
    rating = Column(Integer, nullable=False, default=0)  # 0 means "no rating"

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<Comment(id={self.id}, novel_id={self.novel_id}, rating={self.rating})>"
