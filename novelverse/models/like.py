from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from novelverse.core.database import Base


class Like(Base):
    __tablename__ = "likes"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    novel_id = Column(
        Integer, ForeignKey("novels.id", ondelete="CASCADE"), nullable=False, index=True
    )

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    novel = relationship("Novel")

    # Constraints - One like per user per novel
    __table_args__ = (
        UniqueConstraint("user_id", "novel_id", name="unique_user_novel_like"),
    )

    def __repr__(self):
        return f"<Like(id={self.id}, user_id={self.user_id}, novel_id={self.novel_id})>"
