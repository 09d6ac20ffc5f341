"""Quote providers module."""

from stockboard.providers.quote_provider import QuoteProvider, FallbackPriceLookup
from stockboard.providers.twse_provider import TwseQuoteProvider

__all__ = [
    "QuoteProvider",
    "FallbackPriceLookup",
    "TwseQuoteProvider",
]
