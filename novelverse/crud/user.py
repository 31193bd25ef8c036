import logging
from typing import Any, Dict, Optional, Union

from sqlalchemy.orm import Session

from novelverse.core.auth import get_password_hash
from novelverse.crud.base import CRUDBase
from novelverse.models.user import User
from novelverse.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):
    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    def get_by_username(self, db: Session, *, username: str) -> Optional[User]:
        return db.query(User).filter(User.username == username).first()

    def create(self, db: Session, *, obj_in: UserCreate) -> User:
        db_obj = User(
            username=obj_in.username,
            email=obj_in.email,
            hashed_password=get_password_hash(obj_in.password),
            avatar=obj_in.avatar,
            bio=obj_in.bio,
            is_admin=obj_in.is_admin,
        )
        db.add(db_obj)
        db.flush()
        db.refresh(db_obj)
        return db_obj

    def update(
        self, db: Session, *, db_obj: User, obj_in: Union[UserUpdate, Dict[str, Any]]
    ) -> User:
        if isinstance(obj_in, dict):
            update_data = dict(obj_in)
        else:
            update_data = obj_in.model_dump(exclude_unset=True)

        # Convert empty strings to None for optional fields
        for field in ("avatar", "bio"):
            if field in update_data and update_data[field] == "":
                update_data[field] = None

        if "password" in update_data:
            update_data["hashed_password"] = get_password_hash(
                update_data.pop("password")
            )

        logger.info(f"Updating user: {db_obj.username} (ID: {db_obj.id})")
        return super().update(db, db_obj=db_obj, obj_in=update_data)


crud_user = CRUDUser(User)
