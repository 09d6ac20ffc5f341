"""Taiwan-market watchlist, quote cache and trading ledger."""

__version__ = "0.1.0"
