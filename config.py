"""
Configuration loaded from environment variables and an optional .env file.
"""

from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "frozen": True, "extra": "ignore"}

    # Gas station
    gas_station_url: str = "https://ethgasstation.info/json/ethgasAPI.json"
    # None = no timeout
    gas_station_timeout_sec: float | None = Field(default=None, gt=0)

    # Fee display
    gas_limit: int = Field(default=21000, ge=0)
    currency_code: str = Field(default="usd", min_length=1)
    # 0 hides the fiat column
    conversion_rate: float = Field(default=0.0, ge=0)

    # Wait-time labels
    hour_label: str = "h"
    minute_label: str = "m"
    second_label: str = "s"

    log_level: str = "INFO"


def load_config() -> Config:
    """Load and validate config from environment. Raises on invalid values."""
    return Config()
