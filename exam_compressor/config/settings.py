from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    upload_dir: Path = Path("temp_uploads")
    output_dir: Path = Path("compressed_files")

    server_host: str = "127.0.0.1"
    server_port: int = 8080
    cors_allow_origins: list[str] = ["*"]

    compression_workers: int = 4
    upload_chunk_size: int = 64 * 1024

    pdf_engine: str = "pypdf"

    download_url_prefix: str = "/api/download"
