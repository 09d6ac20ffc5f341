"""Watchlist API endpoints."""

from fastapi import APIRouter, Depends, Response

from stockboard.api.deps import get_watchlist_service
from stockboard.api.schemas import WatchlistItemCreate, WatchlistItemOut, WatchlistOrder
from stockboard.services import WatchlistService

router = APIRouter(prefix="/watchlist", tags=["watchlist"])


@router.get("", response_model=list[WatchlistItemOut])
async def list_watchlist(
    service: WatchlistService = Depends(get_watchlist_service),
) -> list[WatchlistItemOut]:
    """List watched tickers in display order."""
    return [WatchlistItemOut.model_validate(i) for i in service.items()]


@router.post("", response_model=WatchlistItemOut, status_code=201)
async def add_to_watchlist(
    data: WatchlistItemCreate,
    service: WatchlistService = Depends(get_watchlist_service),
) -> WatchlistItemOut:
    """Append a ticker to the watchlist."""
    item = service.add(data.code, data.name)
    return WatchlistItemOut.model_validate(item)


@router.put("/order", response_model=list[WatchlistItemOut])
async def reorder_watchlist(
    data: WatchlistOrder,
    service: WatchlistService = Depends(get_watchlist_service),
) -> list[WatchlistItemOut]:
    """Rewrite the display order."""
    return [WatchlistItemOut.model_validate(i) for i in service.reorder(data.codes)]


@router.delete("/{code}", status_code=204)
async def remove_from_watchlist(
    code: str,
    service: WatchlistService = Depends(get_watchlist_service),
) -> Response:
    """Remove a ticker from the watchlist."""
    service.remove(code)
    return Response(status_code=204)
