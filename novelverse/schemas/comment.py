from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from novelverse.core.constants import MAX_RATING


class CommentBase(BaseModel):
    content: str = Field(..., min_length=1)
    # 0 means the comment carries no star rating
    rating: int = Field(0, ge=0, le=MAX_RATING)


class CommentCreate(CommentBase):
    novel_id: int
    user_id: int


class CommentResponse(CommentBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    novel_id: int
    user_id: int
    created_at: datetime
