from datetime import datetime

from pydantic import BaseModel, ConfigDict

from novelverse.schemas.novel import NovelResponse


class LikeCreate(BaseModel):
    novel_id: int


class LikeResponse(LikeCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    created_at: datetime


class LikeWithNovel(LikeResponse):
    novel: NovelResponse


class LikeStatus(BaseModel):
    is_liked: bool
