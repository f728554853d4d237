# backend/config.py
from functools import lru_cache
from pathlib import Path
from typing import ClassVar, Optional

from pydantic_settings import BaseSettings

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"


class Settings(BaseSettings):
    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    DATABASE_URL: str = "sqlite:///./database_sos.db"

    # bcrypt cost factor; every +1 doubles the hashing time
    BCRYPT_ROUNDS: int = 12

    # Extra CORS origin for a deployed frontend
    FRONTEND_URL: Optional[str] = None

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file: ClassVar[str] = str(env_path)


@lru_cache
def get_settings() -> Settings:
    return Settings()
