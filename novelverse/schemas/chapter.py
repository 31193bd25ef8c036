from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChapterBase(BaseModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    chapter_number: int = Field(..., ge=0)


class ChapterCreate(ChapterBase):
    novel_id: int


class ChapterUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = Field(None, min_length=1)
    chapter_number: Optional[int] = Field(None, ge=0)

    @field_validator("title", "content", "chapter_number", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("Field may not be null")
        return value


class ChapterResponse(ChapterBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    novel_id: int
    created_at: datetime
    updated_at: datetime
