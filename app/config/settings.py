from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "healthreport"
    db_username: str = "healthreport"
    db_password: str = "secret"
    db_pool_max_size: int = 10

    api_host: str = "0.0.0.0"
    api_port: int = 8000
    parse_field_name: str = "file"

    pdf_primary_engine: str = "pdfplumber"
    pdf_fallback_engine: str = "pymupdf"
    max_upload_bytes: int = 100 * 1024 * 1024

    ocr_language: str = "eng"
    ocr_config: str = "--psm 3"
    tesseract_cmd: str = ""

    aggregator_max_workers: int = 4
    merge_strategy: str = "first_completed"
