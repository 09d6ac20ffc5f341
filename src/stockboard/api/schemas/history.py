"""Pydantic schemas for price history API."""

from datetime import date
from typing import Optional

from pydantic import BaseModel


class HistoryRecordOut(BaseModel):
    """One captured price point."""

    model_config = {"from_attributes": True}

    code: str
    date: str
    time: str
    price: float
    volume: int


class PruneRequest(BaseModel):
    """Prune records dated before older_than (default: retention window)."""

    older_than: Optional[date] = None


class PruneResult(BaseModel):
    deleted: int
