from typing import Any

from fastapi import APIRouter, Depends, status

from novelverse.api.deps import get_current_user, get_storage
from novelverse.core.exceptions import ChapterNotFound, ChapterNotInNovel, NovelNotFound
from novelverse.schemas.reading_history import (
    ReadingHistoryCreate,
    ReadingHistoryResponse,
    ReadingHistoryWithDetails,
)
from novelverse.schemas.response import CreateResponse, ListResponse, Messages
from novelverse.schemas.user import UserInDB
from novelverse.storage import NovelStorage

router = APIRouter()


@router.get("", response_model=ListResponse[ReadingHistoryWithDetails])
def read_reading_history(
    storage: NovelStorage = Depends(get_storage),
    current_user: UserInDB = Depends(get_current_user),
) -> Any:
    """
    Get current user's reading history, most recently read first.
    """
    history = storage.get_reading_history(current_user.id)
    return ListResponse(
        message=Messages.READING_HISTORY_RETRIEVED,
        data=history,
        meta={"total": len(history)},
    )


@router.post(
    "",
    response_model=CreateResponse[ReadingHistoryResponse],
    status_code=status.HTTP_201_CREATED,
)
def update_reading_history(
    *,
    storage: NovelStorage = Depends(get_storage),
    history_in: ReadingHistoryCreate,
    current_user: UserInDB = Depends(get_current_user),
) -> Any:
    """
    Record reading progress for a chapter (create or update).
    """
    if not storage.get_novel(history_in.novel_id):
        raise NovelNotFound(history_in.novel_id)

    chapter = storage.get_chapter(history_in.chapter_id)
    if not chapter:
        raise ChapterNotFound(history_in.chapter_id)
    if chapter.novel_id != history_in.novel_id:
        raise ChapterNotInNovel(chapter.id, history_in.novel_id)

    entry = storage.update_reading_history(
        current_user.id, history_in.novel_id, history_in.chapter_id, history_in.progress
    )
    return CreateResponse(message=Messages.READING_HISTORY_UPDATED, data=entry)
