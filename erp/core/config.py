from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    APP_NAME: str = "College ERP"

    SUPABASE_URL: str = ""
    SUPABASE_KEY: str = ""
    SUPABASE_SERVICE_KEY: str = ""

    CORS_ORIGINS: str = "http://localhost:8080"

    LOG_LEVEL: str = "INFO"

    PROOF_BUCKET: str = "leave-proofs"
    MAX_PROOF_BYTES: int = 5 * 1024 * 1024

    # Persist login sessions across restarts when set
    SESSION_FILE: Optional[str] = None

    # IANA zone used for "today" and calendar-day comparisons; server local when unset
    TIMEZONE: Optional[str] = None

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
