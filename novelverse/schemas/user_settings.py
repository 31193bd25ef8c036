from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserSettingsBase(BaseModel):
    theme: str = Field("dark", min_length=1, max_length=32)
    font_size: int = Field(18, ge=12, le=32)
    font_family: str = Field("serif", min_length=1, max_length=32)
    line_spacing: int = Field(150, ge=100, le=250)  # percent of font size
    background_color: str = Field("dark", min_length=1, max_length=32)


class UserSettingsUpdate(BaseModel):
    theme: Optional[str] = Field(None, min_length=1, max_length=32)
    font_size: Optional[int] = Field(None, ge=12, le=32)
    font_family: Optional[str] = Field(None, min_length=1, max_length=32)
    line_spacing: Optional[int] = Field(None, ge=100, le=250)
    background_color: Optional[str] = Field(None, min_length=1, max_length=32)

    @field_validator(
        "theme", "font_size", "font_family", "line_spacing", "background_color",
        mode="before",
    )
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("Field may not be null")
        return value


class UserSettingsResponse(UserSettingsBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
