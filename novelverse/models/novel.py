from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
)
from novelverse.core.constants import Genre
from novelverse.core.database import Base


class Novel(Base):
    __tablename__ = "novels"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, index=True)
    author = Column(String, nullable=False, index=True)
    cover_image = Column(String, nullable=True)
    description = Column(Text, nullable=False)
    genre = Column(
        Enum(Genre, name="genre", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        index=True,
    )
    tags = Column(JSON, nullable=False, default=list)

    # Derived from comments and likes, maintained by the storage layer
    rating = Column(Integer, nullable=False, default=0)
    review_count = Column(Integer, nullable=False, default=0)
    likes = Column(Integer, nullable=False, default=0)

    is_featured = Column(Boolean, nullable=False, default=False)
    is_trending = Column(Boolean, nullable=False, default=False)
    views = Column(Integer, nullable=False, default=0)

    created_by = Column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<Novel(id={self.id}, title='{self.title}')>"
