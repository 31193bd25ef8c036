from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from novelverse.core.constants import Genre


class NovelBase(BaseModel):
    title: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)
    cover_image: Optional[str] = None
    description: str = Field(..., min_length=1)
    genre: Genre
    tags: List[str] = Field(default_factory=list)
    is_featured: bool = False
    is_trending: bool = False
    views: int = Field(0, ge=0)


class NovelCreate(NovelBase):
    pass


class NovelUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    author: Optional[str] = Field(None, min_length=1)
    cover_image: Optional[str] = None
    description: Optional[str] = Field(None, min_length=1)
    genre: Optional[Genre] = None
    tags: Optional[List[str]] = None
    is_featured: Optional[bool] = None
    is_trending: Optional[bool] = None
    views: Optional[int] = Field(None, ge=0)

    @field_validator(
        "title",
        "author",
        "description",
        "genre",
        "tags",
        "is_featured",
        "is_trending",
        "views",
        mode="before",
    )
    @classmethod
    def reject_null(cls, value):
        # Only cover_image may be cleared
        if value is None:
            raise ValueError("Field may not be null")
        return value


class NovelResponse(NovelBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    rating: int = 0
    review_count: int = 0
    likes: int = 0
    created_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class PlatformStats(BaseModel):
    total_novels: int
    total_chapters: int
    total_users: int
    total_comments: int
    total_views: int
    total_likes: int
    top_novels: List[NovelResponse] = Field(default_factory=list)
