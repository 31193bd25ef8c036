import logging
from datetime import timedelta
from typing import Any

from fastapi import APIRouter, Depends, status

from novelverse.api.deps import get_current_user, get_storage
from novelverse.core.auth import create_access_token, verify_password
from novelverse.core.exceptions import DuplicateEmail, DuplicateUsername, InvalidCredentials
from novelverse.core.settings import settings
from novelverse.schemas.response import CreateResponse, Messages, SuccessResponse
from novelverse.schemas.token import Token
from novelverse.schemas.user import (
    UserCreate,
    UserInDB,
    UserLogin,
    UserRegister,
    UserResponse,
    UserUpdate,
)
from novelverse.storage import NovelStorage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/register",
    response_model=CreateResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
def register(
    *,
    storage: NovelStorage = Depends(get_storage),
    user_in: UserRegister,
) -> Any:
    """
    Create new user. Self-registered accounts are never admins.
    """
    if storage.get_user_by_username(user_in.username):
        raise DuplicateUsername()
    if storage.get_user_by_email(user_in.email):
        raise DuplicateEmail()

    user = storage.create_user(UserCreate(**user_in.model_dump(), is_admin=False))
    return CreateResponse(
        message=Messages.REGISTER_SUCCESS, data=UserResponse.model_validate(user)
    )


@router.post("/login", response_model=SuccessResponse[Token])
def login(user_in: UserLogin, storage: NovelStorage = Depends(get_storage)) -> Any:
    """
    JSON login endpoint, returns a bearer access token
    """
    user = storage.get_user_by_username(user_in.username)
    if not user or not verify_password(user_in.password, user.hashed_password):
        logger.warning(f"Failed login attempt for username: {user_in.username}")
        raise InvalidCredentials()

    expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    access_token = create_access_token(user.id, expires_delta=expires)
    return SuccessResponse(
        message=Messages.LOGIN_SUCCESSFUL,
        data=Token(
            access_token=access_token,
            token_type="bearer",
            expires_in=int(expires.total_seconds()),
        ),
    )


@router.post("/logout", response_model=SuccessResponse[dict])
def logout(current_user: UserInDB = Depends(get_current_user)) -> Any:
    """
    Tokens are stateless; the client discards its copy.
    """
    return SuccessResponse(message=Messages.LOGOUT_SUCCESS, data={})


@router.get("/user", response_model=SuccessResponse[UserResponse])
def read_current_user(current_user: UserInDB = Depends(get_current_user)) -> Any:
    return SuccessResponse(
        message=Messages.USER_RETRIEVED, data=UserResponse.model_validate(current_user)
    )


@router.put("/user", response_model=SuccessResponse[UserResponse])
def update_current_user(
    *,
    storage: NovelStorage = Depends(get_storage),
    user_in: UserUpdate,
    current_user: UserInDB = Depends(get_current_user),
) -> Any:
    """
    Update own profile (email, avatar, bio, password).
    """
    if user_in.email is not None and user_in.email != current_user.email:
        if storage.get_user_by_email(user_in.email):
            raise DuplicateEmail()

    user = storage.update_user(current_user.id, user_in)
    return SuccessResponse(
        message=Messages.USER_UPDATED, data=UserResponse.model_validate(user)
    )
