from fastapi import APIRouter

from novelverse.api.endpoints import (
    admin,
    auth,
    bookmarks,
    chapters,
    comments,
    likes,
    novels,
    reading_history,
    user_settings,
)

api_router = APIRouter()

api_router.include_router(auth.router, tags=["authentication"])
api_router.include_router(novels.router, prefix="/novels", tags=["novels"])
api_router.include_router(chapters.router, tags=["chapters"])
api_router.include_router(comments.router, tags=["comments"])
api_router.include_router(bookmarks.router, tags=["bookmarks"])
api_router.include_router(
    reading_history.router, prefix="/reading-history", tags=["reading-history"]
)
api_router.include_router(likes.router, tags=["likes"])
api_router.include_router(
    user_settings.router, prefix="/user-settings", tags=["user-settings"]
)
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
