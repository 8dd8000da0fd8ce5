"""Tests for the OptionRank exception hierarchy."""

import pytest

from optionrank.core.errors import (
    CalendarError,
    ConfigurationError,
    DataError,
    OptionRankError,
    ValidationError,
)


class TestErrorCodes:
    """Each error class carries its own code."""

    @pytest.mark.parametrize(
        "cls,code",
        [
            (OptionRankError, "OR000"),
            (DataError, "OR100"),
            (ValidationError, "OR200"),
            (ConfigurationError, "OR300"),
        ],
    )
    def test_default_codes(self, cls, code):
        assert cls("boom").error_code == code

    def test_subclasses_share_base(self):
        for cls in (DataError, ValidationError, ConfigurationError):
            assert issubclass(cls, OptionRankError)

    def test_code_override(self):
        assert DataError("boom", error_code="OR101").error_code == "OR101"


class TestErrorMessages:
    """Message and context formatting."""

    def test_message_includes_code_and_context(self):
        err = DataError("No data", symbol="AAPL")
        assert str(err) == "[OR100] No data (symbol='AAPL')"

    def test_message_without_context(self):
        assert str(ValidationError("Bad input")) == "[OR200] Bad input"

    def test_to_dict(self):
        err = ValidationError("Unknown strategy", supported=["simple"])
        assert err.to_dict() == {
            "error_type": "ValidationError",
            "error_code": "OR200",
            "message": "Unknown strategy",
            "context": {"supported": ["simple"]},
        }


class TestStatusCodes:
    """Each error class carries the HTTP status it maps to."""

    @pytest.mark.parametrize(
        "cls,status",
        [
            (OptionRankError, 500),
            (DataError, 502),
            (ValidationError, 400),
            (CalendarError, 400),
            (ConfigurationError, 500),
        ],
    )
    def test_status_codes(self, cls, status):
        assert cls("boom").status_code == status

    def test_calendar_error_is_validation_error(self):
        err = CalendarError("Unsupported exchange: MOON")
        assert isinstance(err, ValidationError)
        assert err.error_code == "OR210"
