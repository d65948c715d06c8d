from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Base
    APP_ENV: str = "dev"  # dev | staging | prod
    APP_NAME: str = "PYQ Archive API"
    APP_VERSION: str = "0.1.0"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Uploads
    UPLOAD_PATH: str = "./uploads"
    MAX_UPLOAD_MB: int = 10
    MAX_FILES_PER_UPLOAD: int = 10

    # Catalog
    SEED_SAMPLE_DATA: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache
def get_settings() -> Settings:
    return Settings()
