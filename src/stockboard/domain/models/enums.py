"""Enumerations for domain models."""

from enum import Enum


class TradeDirection(str, Enum):
    """Side of a trade."""

    BUY = "BUY"
    SELL = "SELL"
