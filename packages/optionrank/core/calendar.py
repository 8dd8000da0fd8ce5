"""
Trading-day helpers for resolving the as-of date of a request.

Historical option chains are published after the close, so requests default
to the most recent completed session before today. Sessions come from the
`exchange_calendars` package, so exchange holidays are skipped as well as
weekends.

Usage:
    from optionrank.core.calendar import previous_trading_day, format_date

    as_of = format_date(previous_trading_day(date(2024, 5, 28)))  # "2024-05-24"
"""

from datetime import date, datetime, timedelta
from functools import lru_cache
from typing import Dict, Optional, Union

import exchange_calendars as xcals
import pandas as pd
from exchange_calendars.errors import DateOutOfBounds

from optionrank.core.errors import CalendarError, ValidationError

DATE_FORMAT = "%Y-%m-%d"

# Exchange name mappings to exchange_calendars codes
EXCHANGE_CODES: Dict[str, str] = {
    "NYSE": "XNYS",
    "NASDAQ": "XNAS",
}


@lru_cache()
def get_exchange_calendar(exchange: str = "NYSE") -> xcals.ExchangeCalendar:
    """
    Get the (cached) exchange calendar for an exchange name.

    Raises:
        CalendarError: If the exchange is not supported
    """
    code = EXCHANGE_CODES.get(exchange.upper())
    if code is None:
        raise CalendarError(
            f"Unsupported exchange: {exchange}", supported=sorted(EXCHANGE_CODES)
        )
    return xcals.get_calendar(code)


def _as_date(value: Union[date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def is_trading_day(dt: Union[date, datetime], exchange: str = "NYSE") -> bool:
    """Check whether a date is a session on the exchange."""
    dt = _as_date(dt)
    try:
        return bool(get_exchange_calendar(exchange).is_session(pd.Timestamp(dt)))
    except DateOutOfBounds as e:
        raise CalendarError(
            "Date outside calendar bounds", date=str(dt), exchange=exchange
        ) from e


def previous_trading_day(
    reference: Optional[Union[date, datetime]] = None,
    exchange: str = "NYSE",
) -> date:
    """
    Get the most recent trading session strictly before a reference date.

    Args:
        reference: Date to step back from (defaults to today)
        exchange: Exchange whose sessions to use

    Returns:
        Previous trading day

    Raises:
        CalendarError: If the reference is outside the calendar bounds
    """
    reference = _as_date(reference or date.today())
    cal = get_exchange_calendar(exchange)

    try:
        session = cal.date_to_session(
            pd.Timestamp(reference - timedelta(days=1)), direction="previous"
        )
    except DateOutOfBounds as e:
        raise CalendarError(
            "Date outside calendar bounds",
            from_date=str(reference),
            exchange=exchange,
        ) from e
    return session.date()


def format_date(dt: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return dt.strftime(DATE_FORMAT)


def parse_date(value: str) -> date:
    """
    Parse a YYYY-MM-DD string.

    Raises:
        ValidationError: If the string is not a valid date
    """
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except (AttributeError, ValueError) as e:
        raise ValidationError(
            "Date must use YYYY-MM-DD format", value=value
        ) from e
