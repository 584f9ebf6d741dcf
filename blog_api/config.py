from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str
    DATABASE_ADMIN_URL: Optional[str] = None  # service-role connection, falls back to DATABASE_URL

    # API
    API_TITLE: str = "Blog API"
    API_VERSION: str = "1.0.0"
    API_PREFIX: str = ""
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    PORT: int = 3001
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # Security
    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7

    # Uploads
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_SIZE: int = 5 * 1024 * 1024  # 5MB

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    class Config:
        env_file = ".env"
        case_sensitive = True

# Create settings instance
settings = Settings()
