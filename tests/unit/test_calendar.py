"""
Tests for trading-day helpers.

Verifies:
1. Weekend skipping when stepping back from a reference date
2. NYSE holiday skipping from the exchange calendar
3. Date formatting and parsing
"""

from datetime import date, datetime

import pytest

from optionrank.core.calendar import (
    format_date,
    get_exchange_calendar,
    is_trading_day,
    parse_date,
    previous_trading_day,
)
from optionrank.core.errors import CalendarError, ValidationError


class TestExchangeCalendar:
    """Test calendar lookup."""

    def test_nyse_maps_to_xnys(self):
        assert get_exchange_calendar("NYSE").name == "XNYS"

    def test_cached(self):
        assert get_exchange_calendar("NYSE") is get_exchange_calendar("NYSE")

    def test_unsupported_exchange(self):
        with pytest.raises(CalendarError) as exc_info:
            get_exchange_calendar("MOON")
        assert exc_info.value.status_code == 400


class TestIsTradingDay:
    """Test trading day detection."""

    def test_weekday_is_trading_day(self):
        """Regular Tuesday is a trading day."""
        assert is_trading_day(date(2024, 3, 5)) is True

    def test_weekend_not_trading_day(self):
        """Saturday and Sunday are not trading days."""
        assert is_trading_day(date(2024, 3, 9)) is False
        assert is_trading_day(date(2024, 3, 10)) is False

    def test_holiday_not_trading_day(self):
        """Independence Day is closed."""
        assert is_trading_day(date(2024, 7, 4)) is False

    def test_accepts_datetime(self):
        assert is_trading_day(datetime(2024, 3, 5, 9, 30)) is True


class TestPreviousTradingDay:
    """Test previous trading day navigation."""

    def test_monday_returns_friday(self):
        """Monday steps back over the weekend."""
        assert previous_trading_day(date(2024, 5, 13)) == date(2024, 5, 10)

    def test_monday_formatted(self):
        """Formatted result uses YYYY-MM-DD."""
        assert format_date(previous_trading_day(date(2024, 5, 13))) == "2024-05-10"

    def test_midweek_returns_previous_day(self):
        """Wednesday returns Tuesday."""
        assert previous_trading_day(date(2024, 5, 8)) == date(2024, 5, 7)

    def test_sunday_returns_friday(self):
        """Sunday returns Friday."""
        assert previous_trading_day(date(2024, 5, 12)) == date(2024, 5, 10)

    def test_accepts_datetime(self):
        """Datetime references use their calendar date."""
        assert previous_trading_day(datetime(2024, 5, 13, 15, 30)) == date(2024, 5, 10)

    def test_skips_memorial_day(self):
        """Tuesday after Memorial Day returns the prior Friday."""
        assert previous_trading_day(date(2024, 5, 28)) == date(2024, 5, 24)

    def test_skips_good_friday(self):
        """Monday after Good Friday returns Thursday."""
        assert previous_trading_day(date(2024, 4, 1)) == date(2024, 3, 28)

    def test_result_is_session(self):
        assert is_trading_day(previous_trading_day(date(2024, 12, 26)))

    def test_defaults_to_today(self):
        """Without a reference, result is strictly before today."""
        result = previous_trading_day()
        assert result < date.today()
        assert is_trading_day(result)

    def test_out_of_bounds(self):
        """Dates before the calendar's first session are rejected."""
        with pytest.raises(CalendarError) as exc_info:
            previous_trading_day(date(1900, 1, 2))
        assert exc_info.value.context["exchange"] == "NYSE"


class TestParseDate:
    """Test date parsing."""

    def test_parse_valid(self):
        assert parse_date("2024-05-08") == date(2024, 5, 8)

    def test_parse_strips_whitespace(self):
        assert parse_date(" 2024-05-08 ") == date(2024, 5, 8)

    @pytest.mark.parametrize("value", ["05/08/2024", "2024-13-01", "", "yesterday"])
    def test_parse_invalid(self, value):
        """Malformed dates raise ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            parse_date(value)
        assert exc_info.value.context["value"] == value
