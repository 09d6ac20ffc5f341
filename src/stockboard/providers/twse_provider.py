"""
Quote provider for the TWSE market information system (MIS) snapshot API.

One GET per batch: codes are joined as ``tse_<code>.tw`` with ``|`` into the
``ex_ch`` query parameter. The response carries a ``msgArray`` of records
keyed by single-letter field codes.
"""

import logging
from typing import Any, Optional

import httpx

from stockboard.core.clock import Clock, SystemClock
from stockboard.core.exceptions import MalformedResponse, SourceUnavailable, StorageError
from stockboard.domain.views import QuoteSnapshot, UNAVAILABLE_PRICE
from stockboard.providers.quote_provider import FallbackPriceLookup

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
    "Accept": "application/json, text/plain, */*",
    "Referer": "https://mis.twse.com.tw/",
}


def _parse_float(value: Any) -> Optional[float]:
    """Parse an upstream numeric string; '-', '' and garbage become None."""
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _parse_int(value: Any) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


class TwseQuoteProvider:
    """Fetches batch quote snapshots from the TWSE MIS endpoint."""

    def __init__(
        self,
        base_url: str,
        exchange_prefix: str = "tse",
        timeout_seconds: float = 10.0,
        fallback: Optional[FallbackPriceLookup] = None,
        clock: Optional[Clock] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._base_url = base_url
        self._exchange_prefix = exchange_prefix
        self._fallback = fallback
        self._clock = clock or SystemClock()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout_seconds,
            headers=DEFAULT_HEADERS,
        )

    def build_channel(self, codes: list[str]) -> str:
        """Join codes into the exchange-qualified ``ex_ch`` value."""
        return "|".join(f"{self._exchange_prefix}_{code}.tw" for code in codes)

    async def fetch_quotes(self, codes: list[str]) -> list[QuoteSnapshot]:
        """Fetch snapshots for all codes in one request."""
        if not codes:
            return []

        params = {"ex_ch": self.build_channel(codes)}
        try:
            response = await self._client.get(self._base_url, params=params)
        except httpx.HTTPError as exc:
            logger.warning("Quote request failed for %s: %s", codes, exc)
            raise SourceUnavailable(f"Quote source request failed: {exc}") from exc

        if not response.is_success:
            logger.warning(
                "Quote source answered %s for %s", response.status_code, codes
            )
            raise SourceUnavailable(
                f"Quote source responded with {response.status_code}",
                status=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise MalformedResponse("Quote source returned invalid JSON") from exc

        records = payload.get("msgArray") if isinstance(payload, dict) else None
        if not isinstance(records, list) or not records:
            raise MalformedResponse(f"Quote source returned no results for {codes}")

        return [self.transform(raw) for raw in records if isinstance(raw, dict)]

    def transform(self, raw: dict[str, Any]) -> QuoteSnapshot:
        """Normalize one raw upstream record into a QuoteSnapshot."""
        code = str(raw.get("c") or "").strip()
        yesterday_price = _parse_float(raw.get("y")) or 0.0
        current_price = self._resolve_current_price(code, raw.get("z"), yesterday_price)

        timestamp = _parse_int(raw.get("tlong"))
        if timestamp <= 0:
            timestamp = int(self._clock.now().timestamp() * 1000)

        return QuoteSnapshot(
            code=code,
            name=str(raw.get("n") or code),
            current_price=current_price,
            yesterday_price=yesterday_price,
            open_price=_parse_float(raw.get("o")) or 0.0,
            high_price=_parse_float(raw.get("h")) or 0.0,
            low_price=_parse_float(raw.get("l")) or 0.0,
            volume=_parse_int(raw.get("v")),
            total_volume=_parse_int(raw.get("tv")),
            trading_date=str(raw.get("d") or ""),
            trading_time=str(raw.get("t") or ""),
            timestamp=timestamp,
        )

    def _resolve_current_price(
        self,
        code: str,
        raw_price: Any,
        yesterday_price: float,
    ) -> float:
        """
        Current price, or its fallback when the source has not printed a trade.

        Order: upstream price, last locally recorded price, yesterday's close.
        """
        price = _parse_float(raw_price)
        if price is not None and price > 0:
            return price

        if self._fallback is not None and code:
            try:
                recorded = self._fallback.latest_price(code)
            except StorageError:
                logger.warning("Could not read recorded price for %s", code)
                recorded = None
            if recorded is not None and recorded > 0:
                return recorded

        if yesterday_price > 0:
            return yesterday_price
        return UNAVAILABLE_PRICE

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
