from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    # Environment
    ENVIRONMENT: str = "development"  # development, staging, production
    DEBUG: bool = False  # adds error_type and traceback to 500 bodies outside production

    # Application
    APP_NAME: str = "Campaign Analytics API"
    APP_VERSION: str = "1.0.0"

    # Server (5001 avoids the macOS AirPlay receiver on 5000)
    HOST: str = "0.0.0.0"
    PORT: int = 5001

    # CORS (comma-separated string, will be split)
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:3001,http://127.0.0.1:3000,http://127.0.0.1:3001"

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS_ORIGINS string into list"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    # Uploads
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_SIZE_MB: int = 10

    @property
    def max_upload_size_bytes(self) -> int:
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_REQUESTS: bool = True

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def expose_error_details(self) -> bool:
        return self.DEBUG and not self.is_production

    class Config:
        env_file = ".env"

settings = Settings()
