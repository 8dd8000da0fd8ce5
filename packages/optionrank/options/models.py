"""
Options domain models.

Core dataclasses for ranking:
- Quote: Underlying close price as of a session
- OptionContract: Single option contract from the provider chain
- ScoredContract: Contract plus derived efficiency metrics
- RankingResult: Ranked output of one request
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional

import pandas as pd


class OptionType(str, Enum):
    """Option type, using the provider's lowercase values."""

    CALL = "call"
    PUT = "put"


class PriceSeries(str, Enum):
    """Time series used to read the underlying price."""

    INTRADAY = "intraday"
    DAILY = "daily"


def _to_float(value: Any, default: float = 0.0) -> float:
    """Parse a provider numeric (usually a string), falling back on blanks."""
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _to_int(value: Any, default: int = 0) -> int:
    return int(_to_float(value, float(default)))


@dataclass
class Quote:
    """Latest close of an underlying."""

    symbol: str
    price: float
    as_of: str  # bar timestamp or session date as returned by the provider


@dataclass
class OptionContract:
    """
    Single option contract.

    Represents one row of a HISTORICAL_OPTIONS chain.
    """

    # Identity
    contract_id: str
    underlying: str
    expiration: date
    strike: float
    option_type: OptionType

    # Market data
    bid: float = 0.0
    ask: float = 0.0
    last: float = 0.0
    mark: float = 0.0
    volume: int = 0
    open_interest: int = 0

    # Greeks
    implied_volatility: float = 0.0
    delta: float = 0.0

    @property
    def midpoint(self) -> float:
        """Bid/ask midpoint."""
        return (self.bid + self.ask) / 2

    @property
    def is_call(self) -> bool:
        """Check if call option."""
        return self.option_type == OptionType.CALL

    @property
    def is_put(self) -> bool:
        """Check if put option."""
        return self.option_type == OptionType.PUT

    @property
    def expiration_str(self) -> str:
        """Expiration as YYYY-MM-DD."""
        return self.expiration.strftime("%Y-%m-%d")

    @classmethod
    def from_dict(cls, data: Dict[str, Any], underlying: str = "") -> "OptionContract":
        """
        Create from an Alpha Vantage chain record.

        Numeric fields arrive as strings; blanks become 0.

        Raises:
            ValueError: If the type or expiration cannot be parsed
        """
        expiration = data.get("expiration")
        if not expiration:
            raise ValueError("Missing expiration")

        return cls(
            contract_id=str(data.get("contractID", "")),
            underlying=str(data.get("symbol") or underlying).upper(),
            expiration=pd.to_datetime(expiration).date(),
            strike=_to_float(data.get("strike")),
            option_type=OptionType(str(data.get("type", "")).lower()),
            bid=_to_float(data.get("bid")),
            ask=_to_float(data.get("ask")),
            last=_to_float(data.get("last")),
            mark=_to_float(data.get("mark")),
            volume=_to_int(data.get("volume")),
            open_interest=_to_int(data.get("open_interest")),
            implied_volatility=_to_float(data.get("implied_volatility")),
            delta=_to_float(data.get("delta")),
        )


@dataclass
class ScoredContract:
    """
    Option contract with derived metrics.

    Fields other than capital_efficiency and probability_of_profit are only
    populated by strategies that compute them.
    """

    contract: OptionContract
    symbol: str
    stock_price: float
    capital_efficiency: float
    probability_of_profit: float
    capital_required: float
    expected_annualized_return: Optional[float] = None
    days_to_expiration: Optional[float] = None
    midpoint: Optional[float] = None
    max_loss: Optional[float] = None
    annualized_return: Optional[float] = None
    risk_adjusted_return: Optional[float] = None

    @property
    def option_type(self) -> OptionType:
        return self.contract.option_type

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the camelCase keys used by the HTTP API."""
        data = {
            "contractID": self.contract.contract_id,
            "symbol": self.symbol,
            "type": self.contract.option_type.value,
            "strike": self.contract.strike,
            "expiration": self.contract.expiration_str,
            "stockPrice": self.stock_price,
            "bid": self.contract.bid,
            "ask": self.contract.ask,
            "last": self.contract.last,
            "delta": self.contract.delta,
            "capitalRequired": self.capital_required,
            "capitalEfficiency": self.capital_efficiency,
            "probOfProfit": self.probability_of_profit,
            "expectedAnnualizedReturn": self.expected_annualized_return,
            "daysToExpiration": self.days_to_expiration,
            "midpoint": self.midpoint,
            "maxLoss": self.max_loss,
            "annualizedReturn": self.annualized_return,
            "riskAdjustedReturn": self.risk_adjusted_return,
        }
        return {k: v for k, v in data.items() if v is not None}


@dataclass
class RankingResult:
    """
    Output of one ranking run.

    Strategies that rank overall fill `top`; strategies that rank calls and
    puts separately fill `calls` and `puts`.
    """

    strategy: str
    as_of: str
    top: List[ScoredContract] = field(default_factory=list)
    calls: List[ScoredContract] = field(default_factory=list)
    puts: List[ScoredContract] = field(default_factory=list)
    grouped: bool = False
    skipped_symbols: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        """Number of contracts returned."""
        return len(self.top) + len(self.calls) + len(self.puts)
