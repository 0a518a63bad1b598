# stockroom/core/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Store (in-memory SQLite unless told otherwise)
    DATABASE_URL: str = "sqlite://"
    SEED_SAMPLE_DATA: bool = True

    # Alert thresholds
    LOW_STOCK_THRESHOLD: int = 150
    EXPIRY_ALERT_DAYS: int = 30
    LOW_STOCK_ALERTS: bool = True
    EXPIRY_ALERTS: bool = True

    # Dashboards
    RECENTLY_UPDATED_HOURS: int = 24
    RECENT_ORDERS_LIMIT: int = 10

    # Export
    EXPORT_FILENAME: str = "inventory.db"

    # Frontend
    CORS_ORIGINS: list[str] = [
        "http://127.0.0.1:5173",
        "http://localhost:5173",
    ]

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="forbid",
    )


settings = Settings()
