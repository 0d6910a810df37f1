from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "casedocs"
    db_username: str = "casedocs"
    db_password: str = "secret"

    job_poll_interval_seconds: int = 5
    max_processing_attempts: int = 3
    max_concurrent_jobs: int = 4

    pdf_engine: str = "pdfplumber"
    scanned_chars_per_page_threshold: int = 100

    storage_backend: str = "s3"
    files_root: str = "/app/files"
    s3_bucket: str = "casedocs-documents"

    aws_region: str = "us-east-1"
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""

    ocr_provider: str = "textract"
    ocr_fallback_engine: str = "none"
    ocr_timeout_seconds: int = 60
