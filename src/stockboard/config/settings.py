"""Application settings and configuration."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Quotes younger than this are served from cache without refetching.
QUOTE_FRESHNESS_SECONDS = 5

DEFAULT_QUOTE_SOURCE_URL = "https://mis.twse.com.tw/stock/api/getStockInfo.jsp"


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / "Documents" / "Stockboard Data"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="STOCKBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Stockboard"
    app_version: str = "0.1.0"

    # Data directory (all app data lives here)
    data_dir: Optional[Path] = None

    # Database URL (derived from data_dir if not set explicitly)
    database_url: Optional[str] = None

    log_level: str = "INFO"

    # Upstream quote source
    quote_source_url: str = DEFAULT_QUOTE_SOURCE_URL
    quote_exchange_prefix: str = "tse"
    quote_request_timeout_seconds: float = 10.0

    # Quote cache and update loop
    quote_freshness_seconds: float = QUOTE_FRESHNESS_SECONDS
    update_interval_multiplier: int = 1
    auto_refresh: bool = True

    # Price history
    history_retention_days: int = 3

    # Whether buy-side fees are folded into the weighted average cost
    include_buy_fee_in_avg_cost: bool = True

    @property
    def update_interval_seconds(self) -> float:
        """Interval between scheduled refreshes."""
        return self.quote_freshness_seconds * max(self.update_interval_multiplier, 1)

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "stockboard.db"
        return f"sqlite:///{db_path}"

    def get_log_dir(self) -> Path:
        """Get the log directory."""
        log_dir = self.get_data_dir() / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)
        return log_dir
