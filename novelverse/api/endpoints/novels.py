from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from novelverse.api.deps import get_current_admin_user, get_storage
from novelverse.core.constants import DEFAULT_SHOWCASE_LIMIT, Genre
from novelverse.core.exceptions import NovelNotFound
from novelverse.core.settings import settings
from novelverse.schemas.novel import NovelCreate, NovelResponse, NovelUpdate
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


@router.get("", response_model=ListResponse[NovelResponse])
def read_novels(
    storage: NovelStorage = Depends(get_storage),
    limit: Optional[int] = Query(None, ge=1, le=settings.MAX_PAGE_SIZE),
    offset: Optional[int] = Query(None, ge=0),
    genre: Optional[Genre] = Query(None, description="Filter by genre"),
) -> Any:
    """
    Retrieve novels, most recently updated first.
    """
    novels = storage.get_novels(limit=limit, offset=offset, genre=genre)
    return ListResponse(
        message=Messages.NOVELS_RETRIEVED,
        data=novels,
        meta={"count": len(novels), "limit": limit, "offset": offset or 0},
    )


@router.get("/featured", response_model=ListResponse[NovelResponse])
def read_featured_novels(
    storage: NovelStorage = Depends(get_storage),
    limit: int = Query(DEFAULT_SHOWCASE_LIMIT, ge=1, le=settings.MAX_PAGE_SIZE),
) -> Any:
    return ListResponse(
        message=Messages.NOVELS_RETRIEVED, data=storage.get_featured_novels(limit)
    )


@router.get("/trending", response_model=ListResponse[NovelResponse])
def read_trending_novels(
    storage: NovelStorage = Depends(get_storage),
    limit: int = Query(DEFAULT_SHOWCASE_LIMIT, ge=1, le=settings.MAX_PAGE_SIZE),
) -> Any:
    return ListResponse(
        message=Messages.NOVELS_RETRIEVED, data=storage.get_trending_novels(limit)
    )


@router.get("/recent", response_model=ListResponse[NovelResponse])
def read_recent_novels(
    storage: NovelStorage = Depends(get_storage),
    limit: int = Query(DEFAULT_SHOWCASE_LIMIT, ge=1, le=settings.MAX_PAGE_SIZE),
) -> Any:
    return ListResponse(
        message=Messages.NOVELS_RETRIEVED, data=storage.get_recent_novels(limit)
    )


@router.get("/search", response_model=ListResponse[NovelResponse])
def search_novels(
    storage: NovelStorage = Depends(get_storage),
    query: Optional[str] = Query(None, description="Title, author, genre or tag"),
) -> Any:
    """
    Case-insensitive search across title, author, description, genre and tags.
    """
    if query is None or not query.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=Messages.SEARCH_QUERY_REQUIRED,
        )

    novels = storage.search_novels(query.strip())
    return ListResponse(
        message=Messages.SEARCH_COMPLETED,
        data=novels,
        meta={"query": query.strip(), "count": len(novels)},
    )


@router.get("/{novel_id}", response_model=SuccessResponse[NovelResponse])
def read_novel(novel_id: int, storage: NovelStorage = Depends(get_storage)) -> Any:
    novel = storage.get_novel(novel_id)
    if not novel:
        raise NovelNotFound(novel_id)
    return SuccessResponse(message=Messages.NOVEL_RETRIEVED, data=novel)


@router.post(
    "",
    response_model=CreateResponse[NovelResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_novel(
    *,
    storage: NovelStorage = Depends(get_storage),
    novel_in: NovelCreate,
    current_user: UserInDB = Depends(get_current_admin_user),
) -> Any:
    """
    Create new novel (Admin only).
    """
    novel = storage.create_novel(novel_in, created_by=current_user.id)
    return CreateResponse(message=Messages.NOVEL_CREATED, data=novel)


@router.put("/{novel_id}", response_model=UpdateResponse[NovelResponse])
def update_novel(
    *,
    storage: NovelStorage = Depends(get_storage),
    novel_id: int,
    novel_in: NovelUpdate,
    current_user: UserInDB = Depends(get_current_admin_user),
) -> Any:
    """
    Update a novel (Admin only). Only the fields sent are changed.
    """
    novel = storage.update_novel(novel_id, novel_in)
    if not novel:
        raise NovelNotFound(novel_id)
    return UpdateResponse(message=Messages.NOVEL_UPDATED, data=novel)


@router.delete(
    "/{novel_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response
)
def delete_novel(
    *,
    storage: NovelStorage = Depends(get_storage),
    novel_id: int,
    current_user: UserInDB = Depends(get_current_admin_user),
) -> Response:
    """
    Delete a novel with its chapters, comments, bookmarks, likes and history (Admin only).
    """
    if not storage.delete_novel(novel_id):
        raise NovelNotFound(novel_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
