# parking_manager/config.py
"""
Application configuration using Pydantic-Settings.
All settings can be overridden via environment variables or .env file.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # ── Database ──────────────────────────────────────────────────────────
    DATABASE_URL: str = "sqlite:///./parking_manager.db"

    # ── Network ───────────────────────────────────────────────────────────
    BACKEND_HOST: str = "0.0.0.0"
    BACKEND_PORT: int = 8080

    # ── Security ──────────────────────────────────────────────────────────
    API_KEY: Optional[str] = None   # Set in .env to enable auth on API endpoints

    # ── Persisted document ────────────────────────────────────────────────
    STORAGE_KEY: str = "parqueadero-slud-data"
    APP_VERSION: str = "1.0.0"

    # ── Parking rules ─────────────────────────────────────────────────────
    MAX_PARKING_SPACES: int = 300

    # ── Spreadsheet import ────────────────────────────────────────────────
    IMPORT_MAX_BYTES: int = 5 * 1024 * 1024   # 5MB, same limit as the web importer

    # ── Backups ───────────────────────────────────────────────────────────
    BACKUP_DIR: str = "backups"
    BACKUP_KEEP: int = 10

    # ── Logging ───────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"           # Empty string disables the rotating file
    LOG_FILE: str = "parking.log"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
