from typing import Optional

from sqlalchemy.orm import Session

from novelverse.crud.base import CRUDBase
from novelverse.models.user_settings import UserSettings
from novelverse.schemas.user_settings import UserSettingsBase, UserSettingsUpdate


class CRUDUserSettings(CRUDBase[UserSettings, UserSettingsBase, UserSettingsUpdate]):
    def get_by_user(self, db: Session, *, user_id: int) -> Optional[UserSettings]:
        return db.query(UserSettings).filter(UserSettings.user_id == user_id).first()


crud_user_settings = CRUDUserSettings(UserSettings)
