import os
from pydantic_settings import BaseSettings

from dotenv import load_dotenv
load_dotenv()


class Settings(BaseSettings):
    PROJECT_NAME: str = "Production Sync API"
    API_V1_PREFIX: str = "/api/v1"

    # For local dev you can use sqlite:
    # SQLALCHEMY_DATABASE_URI: str = "sqlite:///./app.db"
    SQLALCHEMY_DATABASE_URI: str = os.getenv(
        "DATABASE_URL", "sqlite:///./app.db"
    )

    REDIS_URL: str = "redis://localhost:6379"
    SYNC_QUEUE_NAME: str = "sync_queue"

    # Per-scene advisory lock around schedule reconciliation
    RECONCILE_LOCK_ENABLED: bool = False
    RECONCILE_LOCK_TIMEOUT: int = 30

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
