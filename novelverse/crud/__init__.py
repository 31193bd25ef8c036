from .bookmark import crud_bookmark
from .chapter import crud_chapter
from .comment import crud_comment
from .like import crud_like
from .novel import crud_novel
from .reading_history import crud_reading_history
from .user import crud_user
from .user_settings import crud_user_settings

__all__ = [
    "crud_user",
    "crud_user_settings",
    "crud_novel",
    "crud_chapter",
    "crud_comment",
    "crud_bookmark",
    "crud_reading_history",
    "crud_like",
]
