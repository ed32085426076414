from pydantic import Field
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    # Base
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "HQ Data Warehouse Dispatch API"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Database
    DATABASE_URL: str = "sqlite:///./dispatch.db"

    # Dispatch
    SAFE_PEOPLE_LIMIT: int = 40000
    FETCH_BATCH_SIZE: int = Field(100, ge=1)
    SEND_RATE_LIMIT: int = Field(10, ge=1)
    SEND_RATE_INTERVAL_MS: int = Field(1000, ge=0)
    SEND_TIMEOUT_SECONDS: float = 30.0
    SEND_SOURCE_TAG: str = "hq-data-warehouse"
    RECORD_DELIVERY_OUTCOME: bool = False

    # Ingestion
    ENRICHMENT_AUDIT_LOG: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

settings = Settings()
