"""Core utilities and shared functionality."""

from stockboard.core.timezone import (
    now_taipei,
    to_taipei,
    from_epoch_millis,
    parse_datetime_taipei,
    TAIPEI_TZ,
)
from stockboard.core.clock import Clock, SystemClock
from stockboard.core.timer import PeriodicTimer, Timer, TimerFactory
from stockboard.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    InsufficientSharesError,
    SourceUnavailable,
    MalformedResponse,
    StorageError,
)

__all__ = [
    "now_taipei",
    "to_taipei",
    "from_epoch_millis",
    "parse_datetime_taipei",
    "TAIPEI_TZ",
    "Clock",
    "SystemClock",
    "PeriodicTimer",
    "Timer",
    "TimerFactory",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "InsufficientSharesError",
    "SourceUnavailable",
    "MalformedResponse",
    "StorageError",
]
