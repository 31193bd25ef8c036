from typing import Any

from fastapi import APIRouter, Depends, Response, status

from novelverse.api.deps import get_current_admin_user, get_storage
from novelverse.core.exceptions import ChapterNotFound, NovelNotFound
from novelverse.schemas.chapter import (
    ChapterBase,
    ChapterCreate,
    ChapterResponse,
    ChapterUpdate,
)
from novelverse.schemas.response import (
    CreateResponse,
    ListResponse,
    Messages,
    SuccessResponse,
    UpdateResponse,
)
from novelverse.schemas.user import UserInDB
from novelverse.storage import NovelStorage

router = APIRouter()


@router.get("/novels/{novel_id}/chapters", response_model=ListResponse[ChapterResponse])
def read_chapters(novel_id: int, storage: NovelStorage = Depends(get_storage)) -> Any:
    """
    Get the chapters of a novel in reading order.
    """
    if not storage.get_novel(novel_id):
        raise NovelNotFound(novel_id)

    chapters = storage.get_chapters(novel_id)
    return ListResponse(
        message=Messages.CHAPTERS_RETRIEVED,
        data=chapters,
        meta={"novel_id": novel_id, "total": len(chapters)},
    )


@router.post(
    "/novels/{novel_id}/chapters",
    response_model=CreateResponse[ChapterResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_chapter(
    *,
    storage: NovelStorage = Depends(get_storage),
    novel_id: int,
    chapter_in: ChapterBase,
    current_user: UserInDB = Depends(get_current_admin_user),
) -> Any:
    """
    Add a chapter to a novel (Admin only).
    """
    if not storage.get_novel(novel_id):
        raise NovelNotFound(novel_id)

    chapter = storage.create_chapter(
        ChapterCreate(novel_id=novel_id, **chapter_in.model_dump())
    )
    return CreateResponse(message=Messages.CHAPTER_CREATED, data=chapter)


@router.get("/chapters/{chapter_id}", response_model=SuccessResponse[ChapterResponse])
def read_chapter(chapter_id: int, storage: NovelStorage = Depends(get_storage)) -> Any:
    chapter = storage.get_chapter(chapter_id)
    if not chapter:
        raise ChapterNotFound(chapter_id)
    return SuccessResponse(message=Messages.CHAPTER_RETRIEVED, data=chapter)


@router.put("/chapters/{chapter_id}", response_model=UpdateResponse[ChapterResponse])
def update_chapter(
    *,
    storage: NovelStorage = Depends(get_storage),
    chapter_id: int,
    chapter_in: ChapterUpdate,
    current_user: UserInDB = Depends(get_current_admin_user),
) -> Any:
    """
    Update a chapter (Admin only).
    """
    chapter = storage.update_chapter(chapter_id, chapter_in)
    if not chapter:
        raise ChapterNotFound(chapter_id)
    return UpdateResponse(message=Messages.CHAPTER_UPDATED, data=chapter)


@router.delete(
    "/chapters/{chapter_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_chapter(
    *,
    storage: NovelStorage = Depends(get_storage),
    chapter_id: int,
    current_user: UserInDB = Depends(get_current_admin_user),
) -> Response:
    """
    Delete a chapter and the bookmarks and history entries pointing at it (Admin only).
    """
    if not storage.delete_chapter(chapter_id):
        raise ChapterNotFound(chapter_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
