"""Configuration management for docsync.

All configuration values can be overridden via environment variables or .env file.

Environment Variables:
    DOCUMENTS_DIR: Directory holding the Markdown documents (default: ./data/documents)
    INDEX_FILENAME: Name of the index manifest inside DOCUMENTS_DIR
                    (default: documents-index.json)
    VERSIONS_DIRNAME: Name of the snapshot directory inside DOCUMENTS_DIR
                      (default: .versions)
    DOCUMENT_EXTENSION: Recognized document extension (default: .md)
    SYNC_INTERVAL_SECONDS: Seconds between background reconciliations (default: 30)
                           Set to 0 to disable the background task
    MAX_VERSIONS_PER_DOCUMENT: Snapshots retained per document (default: unbounded)
    DEFAULT_EDITOR: Attribution recorded when a write names no editor (default: User)
    API_HOST: HTTP bind address (default: 0.0.0.0)
    API_PORT: HTTP port (default: 3002)
    LOG_LEVEL: Logging level (default: INFO)
    LOG_FORMAT: Logging format, "text" or "json" (default: text)
    ENVIRONMENT: Environment name (default: development)
    DEBUG: Enable debug mode (default: false)
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings for docsync.

    Defaults are provided for development convenience.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage layout
    documents_dir: Path = Path("./data/documents")
    index_filename: str = "documents-index.json"
    versions_dirname: str = ".versions"
    document_extension: str = ".md"

    # Sync and history
    sync_interval_seconds: float = 30.0
    max_versions_per_document: Optional[int] = None
    default_editor: str = "User"

    # HTTP server
    api_host: str = "0.0.0.0"
    api_port: int = 3002

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "text"

    # Environment configuration
    environment: str = "development"
    debug: bool = False

    def background_sync_enabled(self) -> bool:
        return self.sync_interval_seconds > 0


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance (singleton pattern)."""
    return Settings()
