from functools import lru_cache
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from novelverse.core.auth import decode_access_token
from novelverse.core.database import get_db
from novelverse.core.exceptions import InsufficientPermissions, NotAuthenticated
from novelverse.core.settings import settings
from novelverse.schemas.user import UserInDB
from novelverse.storage import DatabaseStorage, MemoryStorage, NovelStorage

# Missing credentials are reported as 401 by get_current_user
bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache()
def get_memory_storage() -> MemoryStorage:
    """Process-wide in-memory store used when STORAGE_BACKEND=memory."""
    return MemoryStorage()


def get_storage(db: Session = Depends(get_db)) -> NovelStorage:
    if settings.uses_memory_storage:
        return get_memory_storage()
    return DatabaseStorage(db)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    storage: NovelStorage = Depends(get_storage),
) -> UserInDB:
    if credentials is None:
        raise NotAuthenticated()

    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        raise NotAuthenticated()

    user = storage.get_user(user_id)
    if user is None:
        raise NotAuthenticated()
    return user


def get_current_admin_user(
    current_user: UserInDB = Depends(get_current_user),
) -> UserInDB:
    if not current_user.is_admin:
        raise InsufficientPermissions()
    return current_user
