from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "lexisense"
    db_username: str = "lexisense"
    db_password: str = "secret"
    db_pool_max_size: int = Field(default=10, ge=1)
    db_connect_timeout_seconds: float = Field(default=10.0, gt=0)

    analysis_provider: str = "openai"

    openai_api_key: str = ""
    openai_model_name: str = "gpt-4o"
    openai_base_url: str = ""
    openai_timeout_seconds: int = Field(default=60, gt=0)

    extraction_temperature: float = 0.1
    extraction_max_attempts: int = Field(default=3, ge=1)
    extraction_backoff_initial_seconds: float = Field(default=1.0, ge=0)
    extraction_backoff_max_seconds: float = Field(default=10.0, ge=0)
    schema_retry_enabled: bool = True

    max_chunk_chars: int = Field(default=80_000, gt=0)
    max_concurrent_chunks: int = Field(default=1, ge=1, le=4)
    chat_max_chars: int = Field(default=100_000, gt=0)
    chat_fallback_message: str = "Unable to generate a response for this question."

    pdf_engine: str = "pdfplumber"
    files_root: str = "/app/files"
    max_text_chars: int = Field(default=1_000_000, gt=0)
    min_text_chars: int = Field(default=10, ge=0)
