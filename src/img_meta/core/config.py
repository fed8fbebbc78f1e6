from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "img-meta"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # Pipeline
    CONCURRENCY_LIMIT: int = 20
    DEFAULT_EXTENSIONS: str = "jpg,jpeg,png,ico"

    # Report
    OUTPUT_FORMAT: str = "data"

    class Config:
        env_file = ".env"
        env_prefix = "IMG_META_"
        extra = "ignore"

configs = Settings()
