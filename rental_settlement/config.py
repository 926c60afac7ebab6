"""Configuration management using Pydantic Settings"""

from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "rental-settlement"
    log_level: str = "INFO"

    # Billing
    due_date_offset_days: int = 10  # Due date = cycle end + offset
    money_tolerance: Decimal = Decimal("0.01")

    # No penalty rate here: callers pass the current rate on every evaluation


settings = Settings()
