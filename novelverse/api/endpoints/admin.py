from typing import Any

from fastapi import APIRouter, Depends, Query

from novelverse.api.deps import get_current_admin_user, get_storage
from novelverse.schemas.novel import PlatformStats
from novelverse.schemas.response import Messages, SuccessResponse
from novelverse.schemas.user import UserInDB
from novelverse.storage import NovelStorage

router = APIRouter()


@router.get("/stats", response_model=SuccessResponse[PlatformStats])
def read_platform_stats(
    storage: NovelStorage = Depends(get_storage),
    top: int = Query(5, ge=1, le=50, description="Number of most viewed novels"),
    current_user: UserInDB = Depends(get_current_admin_user),
) -> Any:
    """
    Platform totals for the admin dashboard (Admin only).
    """
    return SuccessResponse(message=Messages.STATS_RETRIEVED, data=storage.get_stats(top))
