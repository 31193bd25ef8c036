from .bookmark import Bookmark
from .chapter import Chapter
from .comment import Comment
from .like import Like
from .novel import Novel
from .reading_history import ReadingHistory
from .user import User
from .user_settings import UserSettings

__all__ = [
    "User",
    "UserSettings",
    "Novel",
    "Chapter",
    "Comment",
    "Bookmark",
    "ReadingHistory",
    "Like",
]
