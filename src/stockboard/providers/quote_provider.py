"""Quote provider protocol."""

from typing import Optional, Protocol

from stockboard.domain.views import QuoteSnapshot


class QuoteProvider(Protocol):
    """
    Protocol for upstream quote sources.

    Implementations fetch one batch snapshot per call for the whole code set.
    Raise SourceUnavailable on transport or status failure and
    MalformedResponse when the payload lacks the expected result array.
    """

    async def fetch_quotes(self, codes: list[str]) -> list[QuoteSnapshot]:
        """Fetch snapshots for the given codes in a single request."""
        ...

    async def aclose(self) -> None:
        """Release network resources."""
        ...


class FallbackPriceLookup(Protocol):
    """Source of the last locally recorded price for a ticker."""

    def latest_price(self, code: str) -> Optional[float]:
        ...
