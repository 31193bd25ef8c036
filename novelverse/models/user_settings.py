from sqlalchemy import Column, ForeignKey, Integer, String

from novelverse.core.database import Base


class UserSettings(Base):
    __tablename__ = "user_settings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    theme = Column(String, nullable=False, default="dark")
    font_size = Column(Integer, nullable=False, default=18)
    font_family = Column(String, nullable=False, default="serif")
    line_spacing = Column(Integer, nullable=False, default=150)
    background_color = Column(String, nullable=False, default="dark")

    def __repr__(self):
        return f"<UserSettings(id={self.id}, user_id={self.user_id}, theme='{self.theme}')>"
