"""
Core infrastructure module for OptionRank.

Contains foundational components:
- calendar: As-of date resolution on exchange sessions
- errors: Exception hierarchy for consistent error handling
- logging: Loguru sink setup
"""

from optionrank.core.errors import (
    OptionRankError,
    DataError,
    ValidationError,
    CalendarError,
    ConfigurationError,
)
from optionrank.core.calendar import (
    format_date,
    get_exchange_calendar,
    is_trading_day,
    parse_date,
    previous_trading_day,
)
from optionrank.core.logging import setup_logging

__all__ = [
    # Errors
    "OptionRankError",
    "DataError",
    "ValidationError",
    "CalendarError",
    "ConfigurationError",
    # Calendar
    "format_date",
    "get_exchange_calendar",
    "is_trading_day",
    "parse_date",
    "previous_trading_day",
    # Logging
    "setup_logging",
]
