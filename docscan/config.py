from pydantic_settings import BaseSettings
from pydantic import Field

class Settings(BaseSettings):
    app_name: str = "DocScan"
    app_env: str = Field("dev", alias="APP_ENV")
    secret_key: str = Field("dev-secret-change-me", alias="SECRET_KEY")
    access_token_expire_minutes: int = Field(480, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    database_url: str = Field("sqlite:///./docscan.db", alias="DATABASE_URL")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    daily_credits: int = Field(20, alias="DAILY_CREDITS")
    similarity_threshold: float = Field(0.2, alias="SIMILARITY_THRESHOLD")

    admin_username: str = Field("admin", alias="ADMIN_USERNAME")
    admin_password: str = Field("admin", alias="ADMIN_PASSWORD")
    admin_credits: int = Field(9999, alias="ADMIN_CREDITS")

    # empty string disables the on-disk copy of uploaded documents
    corpus_dir: str = Field("uploads", alias="CORPUS_DIR")
    max_upload_mb: int = Field(10, alias="MAX_UPLOAD_MB")

    rate_limit_window_seconds: int = Field(60, alias="RATE_LIMIT_WINDOW_SECONDS")
    rate_limit_max_calls: int = Field(30, alias="RATE_LIMIT_MAX_CALLS")

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()
