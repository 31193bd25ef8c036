from typing import Any

from fastapi import APIRouter, Depends, Response, status

from novelverse.api.deps import get_current_user, get_storage
from novelverse.core.exceptions import (
    ChapterNotFound,
    ChapterNotInNovel,
    NovelNotFound,
)
from novelverse.schemas.bookmark import (
    BookmarkCreate,
    BookmarkResponse,
    BookmarkStatus,
    BookmarkWithNovel,
)
from novelverse.schemas.response import (
    CreateResponse,
    ListResponse,
    Messages,
    SuccessResponse,
)
from novelverse.schemas.user import UserInDB
from novelverse.storage import NovelStorage

router = APIRouter()


@router.get("/bookmarks", response_model=ListResponse[BookmarkWithNovel])
def read_bookmarks(
    storage: NovelStorage = Depends(get_storage),
    current_user: UserInDB = Depends(get_current_user),
) -> Any:
    """
    Get current user's bookmarks with their novels.
    """
    bookmarks = storage.get_bookmarks(current_user.id)
    return ListResponse(
        message=Messages.BOOKMARKS_RETRIEVED,
        data=bookmarks,
        meta={"total": len(bookmarks)},
    )


@router.post(
    "/bookmarks",
    response_model=CreateResponse[BookmarkResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_bookmark(
    *,
    storage: NovelStorage = Depends(get_storage),
    bookmark_in: BookmarkCreate,
    current_user: UserInDB = Depends(get_current_user),
) -> Any:
    """
    Bookmark a novel, optionally at a chapter. Re-bookmarking moves the chapter.
    """
    if not storage.get_novel(bookmark_in.novel_id):
        raise NovelNotFound(bookmark_in.novel_id)

    if bookmark_in.chapter_id is not None:
        chapter = storage.get_chapter(bookmark_in.chapter_id)
        if not chapter:
            raise ChapterNotFound(bookmark_in.chapter_id)
        if chapter.novel_id != bookmark_in.novel_id:
            raise ChapterNotInNovel(chapter.id, bookmark_in.novel_id)

    bookmark = storage.create_bookmark(
        current_user.id, bookmark_in.novel_id, bookmark_in.chapter_id
    )
    return CreateResponse(message=Messages.BOOKMARK_SAVED, data=bookmark)


@router.delete(
    "/bookmarks/{novel_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_bookmark(
    *,
    storage: NovelStorage = Depends(get_storage),
    novel_id: int,
    current_user: UserInDB = Depends(get_current_user),
) -> Response:
    """
    Remove the bookmark. Removing a bookmark that is not there still succeeds.
    """
    storage.delete_bookmark(current_user.id, novel_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/novels/{novel_id}/is-bookmarked", response_model=SuccessResponse[BookmarkStatus]
)
def read_bookmark_status(
    *,
    storage: NovelStorage = Depends(get_storage),
    novel_id: int,
    current_user: UserInDB = Depends(get_current_user),
) -> Any:
    return SuccessResponse(
        message=Messages.DATA_RETRIEVED,
        data=BookmarkStatus(
            is_bookmarked=storage.is_bookmarked(current_user.id, novel_id)
        ),
    )
