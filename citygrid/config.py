# citygrid/config.py
"""
Application configuration using Pydantic-Settings.
All settings can be overridden via environment variables or .env file.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # ── Database ──────────────────────────────────────────────────────────
    DATABASE_URL: str = "sqlite:///./citygrid.db"
    STORE_BACKEND: str = "sql"      # sql | memory

    # ── Network ───────────────────────────────────────────────────────────
    BACKEND_HOST: str = "0.0.0.0"
    BACKEND_PORT: int = 8080

    # ── Security ──────────────────────────────────────────────────────────
    API_KEY: Optional[str] = None   # Set in .env to enable auth on API endpoints
    ENABLE_DEV_LEDGER: bool = False  # Exposes faucet + height advance; never on a shared deployment

    # ── Governance ────────────────────────────────────────────────────────
    ADMIN_IDENTITY: str = "city-admin"
    POWER_RATE: int = 10            # Price per reserved energy unit
    MIN_PARKING_FEE: int = 1000     # Parking fee floor (cost × duration)

    # ── Limits ────────────────────────────────────────────────────────────
    MAX_ALLOCATION: int = 1_000_000
    MAX_COST: int = 1_000_000
    MAX_ASSETS: int = 1_000_000
    MAX_LOCATION_LENGTH: int = 100
    MAX_VEHICLE_ID_LENGTH: int = 20
    MAX_DEVICE_LABEL_LENGTH: int = 50
    MAX_IDENTITY_LENGTH: int = 128  # Matches the identity columns
    MAX_DURATION: int = 1_000_000

    # ── Logging ───────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None   # Defaults to <repo>/logs
    LOG_FILE: str = "citygrid.log"
    LOG_MAX_BYTES: int = 5 * 1024 * 1024
    LOG_BACKUP_COUNT: int = 10

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
