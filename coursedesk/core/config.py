from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    PROJECT_NAME: str = "Course Catalog Admin"
    VERSION: str = "1.0.0"

    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./coursedesk.db"
    AUTO_CREATE_TABLES: bool = True

    # Cache windows are in milliseconds
    CACHE_DEFAULT_TTL_MS: int = 5 * 60 * 1000
    CACHE_DERIVED_TTL_MS: int = 2 * 60 * 1000

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = ""

    # Dashboard client
    API_BASE_URL: str = "http://localhost:8000"
    REFRESH_DELAY_SECONDS: float = 1.0

    class Config:
        env_file = ".env"

settings = Settings()
