"""Market-data access."""

from optionrank.data.fetcher import AlphaVantageClient

__all__ = ["AlphaVantageClient"]
