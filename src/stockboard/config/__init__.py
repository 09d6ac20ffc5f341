"""Configuration: settings and logging."""

from stockboard.config.settings import Settings, QUOTE_FRESHNESS_SECONDS
from stockboard.config.logging_config import setup_logging

__all__ = ["Settings", "QUOTE_FRESHNESS_SECONDS", "setup_logging"]
