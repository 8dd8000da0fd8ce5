# Copyright 2024 OptionRank Contributors
# SPDX-License-Identifier: Apache-2.0

"""
Root pytest configuration for OptionRank tests.

Provides:
- Settings that never touch the network quota or a real API key
- Factories for option contracts and Alpha Vantage chain records
"""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict

import pytest


# Ensure packages is in path for imports
packages_path = Path(__file__).parent.parent / "packages"
if str(packages_path) not in sys.path:
    sys.path.insert(0, str(packages_path))


from optionrank.config.settings import Settings, get_settings  # noqa: E402
from optionrank.options.models import OptionContract, OptionType  # noqa: E402


# =============================================================================
# Common Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Drop the cached Settings between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings with throttling disabled and a fake key."""
    return Settings(
        alpha_vantage_api_key="test_key",
        alpha_vantage_rate_limit=0,
        log_file=None,
    )


@pytest.fixture
def make_contract() -> Callable[..., OptionContract]:
    """Factory for OptionContract with sensible defaults."""

    def _make(**overrides: Any) -> OptionContract:
        fields: Dict[str, Any] = {
            "contract_id": "AAPL240607P00095000",
            "underlying": "AAPL",
            "expiration": date(2024, 6, 7),
            "strike": 95.0,
            "option_type": OptionType.PUT,
            "bid": 4.0,
            "ask": 6.0,
            "last": 5.0,
            "delta": -0.4,
        }
        fields.update(overrides)
        if isinstance(fields["option_type"], str):
            fields["option_type"] = OptionType(fields["option_type"])
        return OptionContract(**fields)

    return _make


@pytest.fixture
def chain_record() -> Callable[..., Dict[str, str]]:
    """Factory for a raw HISTORICAL_OPTIONS record (all values are strings)."""

    def _make(**overrides: str) -> Dict[str, str]:
        record = {
            "contractID": "AAPL240607C00190000",
            "symbol": "AAPL",
            "expiration": "2024-06-07",
            "strike": "190.00",
            "type": "call",
            "last": "3.10",
            "mark": "3.15",
            "bid": "3.05",
            "bid_size": "12",
            "ask": "3.25",
            "ask_size": "20",
            "volume": "1534",
            "open_interest": "10234",
            "date": "2024-05-08",
            "implied_volatility": "0.21",
            "delta": "0.41",
            "gamma": "0.04",
            "theta": "-0.09",
            "vega": "0.22",
            "rho": "0.07",
        }
        record.update(overrides)
        return record

    return _make
