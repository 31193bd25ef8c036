from typing import Any

from fastapi import APIRouter, Depends, Response, status

from novelverse.api.deps import get_current_user, get_storage
from novelverse.core.exceptions import NovelNotFound
from novelverse.schemas.like import LikeCreate, LikeResponse, LikeStatus, LikeWithNovel
from novelverse.schemas.response import (
    CreateResponse,
    ListResponse,
    Messages,
    SuccessResponse,
)
from novelverse.schemas.user import UserInDB
from novelverse.storage import NovelStorage

router = APIRouter()


@router.get("/likes", response_model=ListResponse[LikeWithNovel])
def read_likes(
    storage: NovelStorage = Depends(get_storage),
    current_user: UserInDB = Depends(get_current_user),
) -> Any:
    likes = storage.get_likes(current_user.id)
    return ListResponse(
        message=Messages.LIKES_RETRIEVED, data=likes, meta={"total": len(likes)}
    )


@router.post(
    "/likes",
    response_model=CreateResponse[LikeResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_like(
    *,
    storage: NovelStorage = Depends(get_storage),
    like_in: LikeCreate,
    current_user: UserInDB = Depends(get_current_user),
) -> Any:
    """
    Like a novel. Liking an already liked novel returns the existing like.
    """
    if not storage.get_novel(like_in.novel_id):
        raise NovelNotFound(like_in.novel_id)

    like = storage.create_like(current_user.id, like_in.novel_id)
    return CreateResponse(message=Messages.LIKE_ADDED, data=like)


@router.delete(
    "/likes/{novel_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_like(
    *,
    storage: NovelStorage = Depends(get_storage),
    novel_id: int,
    current_user: UserInDB = Depends(get_current_user),
) -> Response:
    storage.delete_like(current_user.id, novel_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/novels/{novel_id}/is-liked", response_model=SuccessResponse[LikeStatus])
def read_like_status(
    *,
    storage: NovelStorage = Depends(get_storage),
    novel_id: int,
    current_user: UserInDB = Depends(get_current_user),
) -> Any:
    return SuccessResponse(
        message=Messages.DATA_RETRIEVED,
        data=LikeStatus(is_liked=storage.is_liked(current_user.id, novel_id)),
    )
