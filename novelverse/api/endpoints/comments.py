from typing import Any

from fastapi import APIRouter, Depends, Response, status

from novelverse.api.deps import get_current_user, get_storage
from novelverse.core.exceptions import (
    CommentNotFound,
    InsufficientPermissions,
    NovelNotFound,
)
from novelverse.schemas.comment import CommentBase, CommentCreate, CommentResponse
from novelverse.schemas.response import CreateResponse, ListResponse, Messages
from novelverse.schemas.user import UserInDB
from novelverse.storage import NovelStorage

router = APIRouter()


@router.get("/novels/{novel_id}/comments", response_model=ListResponse[CommentResponse])
def read_comments(novel_id: int, storage: NovelStorage = Depends(get_storage)) -> Any:
    """
    Get the comments on a novel, newest first.
    """
    if not storage.get_novel(novel_id):
        raise NovelNotFound(novel_id)

    comments = storage.get_comments(novel_id)
    return ListResponse(
        message=Messages.COMMENTS_RETRIEVED,
        data=comments,
        meta={"novel_id": novel_id, "total": len(comments)},
    )


@router.post(
    "/novels/{novel_id}/comments",
    response_model=CreateResponse[CommentResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_comment(
    *,
    storage: NovelStorage = Depends(get_storage),
    novel_id: int,
    comment_in: CommentBase,
    current_user: UserInDB = Depends(get_current_user),
) -> Any:
    """
    Post a comment, optionally with a 1-5 star rating.
    """
    if not storage.get_novel(novel_id):
        raise NovelNotFound(novel_id)

    comment = storage.create_comment(
        CommentCreate(
            novel_id=novel_id, user_id=current_user.id, **comment_in.model_dump()
        )
    )
    return CreateResponse(message=Messages.COMMENT_CREATED, data=comment)


@router.delete(
    "/comments/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_comment(
    *,
    storage: NovelStorage = Depends(get_storage),
    comment_id: int,
    current_user: UserInDB = Depends(get_current_user),
) -> Response:
    """
    Delete a comment. Only its author or an admin may do this.
    """
    comment = storage.get_comment(comment_id)
    if not comment:
        raise CommentNotFound(comment_id)

    # Check if user owns this comment
    if comment.user_id != current_user.id and not current_user.is_admin:
        raise InsufficientPermissions()

    storage.delete_comment(comment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
