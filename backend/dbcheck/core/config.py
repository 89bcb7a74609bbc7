from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    DATABASE_URL: Optional[str] = None
    PROBE_WORKERS: Optional[int] = Field(None, ge=1)  # None: one worker per table
    DIAGNOSTIC_TIMEOUT_S: Optional[float] = Field(30.0, gt=0)
    QUICK_CHECK_TIMEOUT_S: float = Field(5.0, gt=0)
    ORPHAN_BATCH_SIZE: int = Field(1000, ge=1)
    POOL_SIZE: int = Field(5, ge=1)
    LOG_LEVEL: str = "INFO"

def get_settings() -> Settings:
    return Settings()
