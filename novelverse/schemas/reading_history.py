from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from novelverse.core.constants import MAX_PROGRESS
from novelverse.schemas.chapter import ChapterResponse
from novelverse.schemas.novel import NovelResponse


class ReadingHistoryCreate(BaseModel):
    novel_id: int
    chapter_id: int
    progress: int = Field(0, ge=0, le=MAX_PROGRESS)


class ReadingHistoryResponse(ReadingHistoryCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    last_read: datetime


class ReadingHistoryWithDetails(ReadingHistoryResponse):
    novel: NovelResponse
    chapter: ChapterResponse
