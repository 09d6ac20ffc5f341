"""Price history API endpoints."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from stockboard.api.deps import get_history_service
from stockboard.api.schemas import HistoryRecordOut, PruneRequest, PruneResult
from stockboard.core.exceptions import ValidationError
from stockboard.services import PriceHistoryService
from stockboard.services.watchlist_service import normalize_code

router = APIRouter(prefix="/history", tags=["history"])


@router.get("/{code}", response_model=list[HistoryRecordOut])
async def get_history(
    code: str,
    day: Optional[date] = Query(None, alias="date"),
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    history: PriceHistoryService = Depends(get_history_service),
) -> list[HistoryRecordOut]:
    """
    Captured prices for a code.

    - date: a single day (default today)
    - start/end: an inclusive range; both must be given
    """
    code = normalize_code(code)
    if start or end:
        if not (start and end):
            raise ValidationError("start and end must be given together")
        records = history.history_between(code, start, end)
    else:
        records = history.load_history(code, day)
    return [HistoryRecordOut.model_validate(r) for r in records]


@router.post("/prune", response_model=PruneResult)
async def prune_history(
    data: Optional[PruneRequest] = None,
    history: PriceHistoryService = Depends(get_history_service),
) -> PruneResult:
    """Delete records older than the cutoff."""
    deleted = await history.prune(data.older_than if data else None)
    return PruneResult(deleted=deleted)
