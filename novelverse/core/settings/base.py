from typing import List, Optional

from pydantic_settings import BaseSettings as PydanticBaseSettings


class BaseSettings(PydanticBaseSettings):
    # ===============================
    # APPLICATION SETTINGS
    # ===============================
    PROJECT_NAME: str = "NovelVerse API"
    VERSION: str = "1.0.0"
    DESCRIPTION: str = "Novel reading and publishing platform API"

    # ===============================
    # API SETTINGS
    # ===============================
    API_PREFIX: str = "/api"

    # ===============================
    # STORAGE SETTINGS
    # ===============================
    # "database" (SQLAlchemy) or "memory" (process-local, for development)
    STORAGE_BACKEND: str = "database"
    CREATE_TABLES_ON_STARTUP: bool = True

    # ===============================
    # JWT ALGORITHM
    # ===============================
    ALGORITHM: str = "HS256"

    # ===============================
    # PAGINATION SETTINGS
    # ===============================
    MAX_PAGE_SIZE: int = 100

    # ===============================
    # BOOTSTRAP ADMIN ACCOUNT
    # ===============================
    FIRST_ADMIN_USERNAME: Optional[str] = "admin"
    FIRST_ADMIN_EMAIL: str = "admin@novelverse.com"
    FIRST_ADMIN_PASSWORD: Optional[str] = None

    # ===============================
    # LOGGING SETTINGS
    # ===============================
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    BACKEND_CORS_ORIGINS: List[str] = []

    # ===============================
    # COMPUTED PROPERTIES
    # ===============================
    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def is_testing(self) -> bool:
        return self.ENVIRONMENT == "testing"

    @property
    def uses_memory_storage(self) -> bool:
        return self.STORAGE_BACKEND.lower() == "memory"

    model_config = {
        "case_sensitive": True,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }
