from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from novelverse.schemas.novel import NovelResponse


class BookmarkCreate(BaseModel):
    novel_id: int
    chapter_id: Optional[int] = None


class BookmarkResponse(BookmarkCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    created_at: datetime


class BookmarkWithNovel(BookmarkResponse):
    novel: NovelResponse


class BookmarkStatus(BaseModel):
    is_bookmarked: bool
