from typing import Optional

from .base import BaseSettings


class TestingSettings(BaseSettings):
    ENVIRONMENT: str = "testing"
    DEBUG: bool = False

    PROJECT_NAME: str = "NovelVerse API - Testing"

    DATABASE_URL: str = "sqlite:///:memory:"
    DATABASE_ECHO: bool = False

    SECRET_KEY: str = "testing-secret-key-not-for-real-deployments-32-chars"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Tests create their own tables and accounts
    CREATE_TABLES_ON_STARTUP: bool = False
    FIRST_ADMIN_PASSWORD: Optional[str] = None

    LOG_LEVEL: str = "WARNING"
    LOG_FILE: Optional[str] = None

    model_config = {
        "case_sensitive": True,
        "env_file": ".env.test",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }
