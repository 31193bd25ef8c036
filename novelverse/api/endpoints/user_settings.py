from typing import Any

from fastapi import APIRouter, Depends

from novelverse.api.deps import get_current_user, get_storage
from novelverse.schemas.response import Messages, SuccessResponse, UpdateResponse
from novelverse.schemas.user import UserInDB
from novelverse.schemas.user_settings import UserSettingsResponse, UserSettingsUpdate
from novelverse.storage import NovelStorage

router = APIRouter()


@router.get("", response_model=SuccessResponse[UserSettingsResponse])
def read_user_settings(
    storage: NovelStorage = Depends(get_storage),
    current_user: UserInDB = Depends(get_current_user),
) -> Any:
    """
    Get current user's reading settings, creating the defaults on first access.
    """
    user_settings = storage.get_user_settings(current_user.id)
    if user_settings is None:
        user_settings = storage.update_user_settings(
            current_user.id, UserSettingsUpdate()
        )
    return SuccessResponse(message=Messages.SETTINGS_RETRIEVED, data=user_settings)


@router.put("", response_model=UpdateResponse[UserSettingsResponse])
def update_user_settings(
    *,
    storage: NovelStorage = Depends(get_storage),
    settings_in: UserSettingsUpdate,
    current_user: UserInDB = Depends(get_current_user),
) -> Any:
    user_settings = storage.update_user_settings(current_user.id, settings_in)
    return UpdateResponse(message=Messages.SETTINGS_UPDATED, data=user_settings)
