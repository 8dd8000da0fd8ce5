# Copyright 2024 OptionRank Contributors
# SPDX-License-Identifier: Apache-2.0

"""
Alpha Vantage market-data client.

Provides:
- Latest underlying close from the intraday or daily time series
- Historical options chain for a trading date

Every failure (transport, HTTP status, unrecognized payload, missing date)
is logged and returned as None so callers can skip the symbol.
"""

from __future__ import annotations

import threading
import time
from datetime import date
from typing import Any, Dict, List, Optional

import httpx
import pandas as pd
from loguru import logger

from optionrank.config.settings import Settings, get_settings
from optionrank.core.errors import ConfigurationError, DataError
from optionrank.options.models import OptionContract, PriceSeries, Quote


# =============================================================================
# CONSTANTS
# =============================================================================

INTRADAY_INTERVAL = "5min"
INTRADAY_SERIES_KEY = f"Time Series ({INTRADAY_INTERVAL})"
DAILY_SERIES_KEY = "Time Series (Daily)"
CLOSE_FIELD = "4. close"

# Keys Alpha Vantage uses for throttling / error payloads
PROVIDER_MESSAGE_KEYS = ("Error Message", "Note", "Information")

# outputsize=compact returns the latest 100 sessions; 130 calendar days stays
# inside that window even across holidays
COMPACT_WINDOW_DAYS = 130


def daily_output_size(as_of: str, today: Optional[date] = None) -> str:
    """Pick the smallest TIME_SERIES_DAILY payload that still contains as_of."""
    today = today or date.today()
    age = (today - pd.Timestamp(as_of).date()).days
    return "compact" if age <= COMPACT_WINDOW_DAYS else "full"


# =============================================================================
# ALPHA VANTAGE CLIENT
# =============================================================================


class AlphaVantageClient:
    """
    Client for the Alpha Vantage query API.

    Usage:
        with AlphaVantageClient() as client:
            quote = client.get_stock_price("AAPL", "2024-05-08", PriceSeries.DAILY)
            chain = client.get_options_chain("AAPL", "2024-05-08")
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        """
        Initialize Alpha Vantage client.

        Args:
            settings: Settings override (uses cached settings if not provided)
            http_client: Preconfigured httpx client (tests pass a MockTransport)
        """
        self.settings = settings or get_settings()
        if not self.settings.alpha_vantage_api_key:
            raise ConfigurationError(
                "Alpha Vantage API key is not configured",
                env_var="ALPHA_VANTAGE_API_KEY",
            )

        self.base_url = self.settings.alpha_vantage_base_url
        self._client = http_client
        self._owns_client = http_client is None
        self._min_interval = self.settings.min_request_interval
        self._last_request_time = 0.0
        self._lock = threading.Lock()

    def __enter__(self) -> "AlphaVantageClient":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self.settings.request_timeout)
        return self._client

    def _rate_limit(self) -> None:
        """Space outbound calls to stay under the per-minute quota."""
        if self._min_interval <= 0:
            return
        with self._lock:
            elapsed = time.monotonic() - self._last_request_time
            if elapsed < self._min_interval:
                time.sleep(self._min_interval - elapsed)
            self._last_request_time = time.monotonic()

    def _request(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Make API request.

        Raises:
            DataError: On transport failure, HTTP error or non-JSON body
        """
        params = {**params, "apikey": self.settings.alpha_vantage_api_key}
        self._rate_limit()

        try:
            response = self._get_client().get(self.base_url, params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as e:
            raise DataError(
                f"Request failed: {e}",
                function=params.get("function"),
                symbol=params.get("symbol"),
            ) from e
        except ValueError as e:
            raise DataError(
                "Response is not valid JSON",
                function=params.get("function"),
                symbol=params.get("symbol"),
            ) from e

        if not isinstance(payload, dict):
            raise DataError(
                "Unexpected response type",
                function=params.get("function"),
                symbol=params.get("symbol"),
                type=type(payload).__name__,
            )
        return payload

    # =========================================================================
    # QUOTES
    # =========================================================================

    def get_stock_price(
        self,
        symbol: str,
        as_of: Optional[str] = None,
        series: PriceSeries = PriceSeries.INTRADAY,
    ) -> Optional[Quote]:
        """
        Get the latest close for a symbol.

        Args:
            symbol: Ticker symbol
            as_of: Session date (YYYY-MM-DD), required for the daily series
            series: INTRADAY reads the newest 5min bar, DAILY the as-of bar

        Returns:
            Quote, or None if unavailable
        """
        symbol = symbol.upper()
        series = PriceSeries(series)
        logger.debug(f"Fetching {series.value} price for {symbol}")

        try:
            if series == PriceSeries.INTRADAY:
                data = self._request(
                    {
                        "function": "TIME_SERIES_INTRADAY",
                        "symbol": symbol,
                        "interval": INTRADAY_INTERVAL,
                    }
                )
                return self._parse_intraday(symbol, data)

            if not as_of:
                raise DataError("Daily price requires an as-of date", symbol=symbol)
            data = self._request(
                {
                    "function": "TIME_SERIES_DAILY",
                    "symbol": symbol,
                    "outputsize": daily_output_size(as_of),
                }
            )
            return self._parse_daily(symbol, data, as_of)
        except DataError as e:
            logger.error(f"Error fetching stock price for {symbol}: {e}")
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Could not parse stock price for {symbol}: {e}")
        return None

    def _parse_intraday(self, symbol: str, data: Dict[str, Any]) -> Optional[Quote]:
        series = data.get(INTRADAY_SERIES_KEY)
        if not series:
            self._log_unexpected(symbol, data)
            return None

        df = pd.DataFrame.from_dict(series, orient="index").sort_index()
        latest = df.index[-1]
        return Quote(symbol=symbol, price=float(df.loc[latest, CLOSE_FIELD]), as_of=latest)

    def _parse_daily(
        self, symbol: str, data: Dict[str, Any], as_of: str
    ) -> Optional[Quote]:
        series = data.get(DAILY_SERIES_KEY)
        if not series:
            self._log_unexpected(symbol, data)
            return None

        bar = series.get(as_of)
        if bar is None:
            logger.warning(f"No daily close for {symbol} on {as_of}")
            return None
        return Quote(symbol=symbol, price=float(bar[CLOSE_FIELD]), as_of=as_of)

    # =========================================================================
    # OPTIONS
    # =========================================================================

    def get_options_chain(
        self, symbol: str, as_of: str
    ) -> Optional[List[OptionContract]]:
        """
        Get the historical options chain for a trading date.

        Args:
            symbol: Underlying ticker
            as_of: Session date (YYYY-MM-DD)

        Returns:
            List of contracts (possibly empty), or None if unavailable
        """
        symbol = symbol.upper()
        logger.debug(f"Fetching options chain for {symbol} on {as_of}")

        try:
            data = self._request(
                {"function": "HISTORICAL_OPTIONS", "symbol": symbol, "date": as_of}
            )
        except DataError as e:
            logger.error(f"Error fetching options data for {symbol}: {e}")
            return None

        records = data.get("option_chain")
        if records is None:
            records = data.get("data")
        if not isinstance(records, list):
            self._log_unexpected(symbol, data)
            return None

        contracts = []
        for record in records:
            try:
                contracts.append(OptionContract.from_dict(record, underlying=symbol))
            except (AttributeError, TypeError, ValueError) as e:
                logger.debug(f"Skipping malformed contract for {symbol}: {e}")

        logger.debug(f"Parsed {len(contracts)}/{len(records)} contracts for {symbol}")
        return contracts

    @staticmethod
    def _log_unexpected(symbol: str, data: Dict[str, Any]) -> None:
        for key in PROVIDER_MESSAGE_KEYS:
            if key in data:
                logger.warning(f"Alpha Vantage message for {symbol}: {data[key]}")
                return
        logger.warning(
            f"Unexpected data structure for {symbol}: keys={sorted(data.keys())}"
        )
