"""
Capital-efficiency scoring strategies.

Each strategy turns (contract, stock price) into a ScoredContract and then
selects the ranked output for a request:

- SimpleEfficiencyStrategy ("simple"): premium per unit of capital per day,
  weighted by a delta probability proxy. Ranked overall.
- RiskAdjustedStrategy ("risk_adjusted"): annualized midpoint return in excess
  of the risk-free rate, scaled by max loss and probability of profit. Calls
  and puts ranked separately by expected annualized return.

Capital required follows the cash-secured convention: 100 shares of the
underlying for calls, 100 x strike for puts.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Callable, Dict, Iterable, List, Optional, Type

import numpy as np
from loguru import logger

from optionrank.core.errors import ValidationError
from optionrank.options.models import (
    OptionContract,
    PriceSeries,
    RankingResult,
    ScoredContract,
)

CONTRACT_MULTIPLIER = 100
DAYS_PER_YEAR = 365
SECONDS_PER_DAY = 24 * 60 * 60


def _divide(numerator: float, denominator: float) -> float:
    """IEEE division: zero denominators give inf/nan instead of raising."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.divide(numerator, denominator))


def capital_required(contract: OptionContract, stock_price: float) -> float:
    """Capital committed per contract."""
    if contract.is_call:
        return CONTRACT_MULTIPLIER * stock_price
    return CONTRACT_MULTIPLIER * contract.strike


def rank_descending(
    scored: Iterable[ScoredContract],
    key: Callable[[ScoredContract], Optional[float]],
    top_n: int,
) -> List[ScoredContract]:
    """
    Stable descending sort on a metric, truncated to top_n.

    Contracts whose metric is missing or non-finite are dropped.
    """
    ranked = []
    dropped = 0
    for item in scored:
        value = key(item)
        if value is None or not np.isfinite(value):
            dropped += 1
            continue
        ranked.append(item)

    if dropped:
        logger.debug(f"Dropped {dropped} contracts with non-finite scores")

    ranked.sort(key=key, reverse=True)
    return ranked[:top_n]


@dataclass
class ScoringContext:
    """Per-request inputs shared by every contract."""

    as_of: date
    now: datetime
    risk_free_rate: float = 0.05

    @property
    def as_of_str(self) -> str:
        return self.as_of.strftime("%Y-%m-%d")


class ScoringStrategy(ABC):
    """Interface for capital-efficiency scoring and selection."""

    name: str = ""
    price_series: PriceSeries = PriceSeries.INTRADAY

    @abstractmethod
    def score(
        self,
        contract: OptionContract,
        stock_price: float,
        context: ScoringContext,
        symbol: str = "",
    ) -> ScoredContract:
        """Score a single contract."""

    @abstractmethod
    def select(
        self,
        scored: List[ScoredContract],
        context: ScoringContext,
        top_n: int,
    ) -> RankingResult:
        """Rank scored contracts into the response shape."""

    def score_chain(
        self,
        contracts: Iterable[OptionContract],
        stock_price: float,
        context: ScoringContext,
        symbol: str = "",
    ) -> List[ScoredContract]:
        return [self.score(c, stock_price, context, symbol) for c in contracts]


class SimpleEfficiencyStrategy(ScoringStrategy):
    """
    Premium yield per day weighted by a delta probability proxy.

    efficiency = (last / capital) * 100 / days * proxy, where proxy is
    (1 - delta) for calls and delta for puts. Days are fractional and measured
    from `context.now` to midnight of the expiration date.
    """

    name = "simple"
    price_series = PriceSeries.INTRADAY

    def score(
        self,
        contract: OptionContract,
        stock_price: float,
        context: ScoringContext,
        symbol: str = "",
    ) -> ScoredContract:
        capital = capital_required(contract, stock_price)
        expires_at = datetime.combine(contract.expiration, time.min)
        days = (expires_at - context.now).total_seconds() / SECONDS_PER_DAY

        if contract.is_call:
            probability = 1 - contract.delta
        else:
            probability = contract.delta

        efficiency = (
            _divide(_divide(contract.last, capital) * 100, days) * probability
        )

        return ScoredContract(
            contract=contract,
            symbol=symbol or contract.underlying,
            stock_price=stock_price,
            capital_efficiency=efficiency,
            probability_of_profit=probability,
            capital_required=capital,
            days_to_expiration=days,
        )

    def select(
        self,
        scored: List[ScoredContract],
        context: ScoringContext,
        top_n: int,
    ) -> RankingResult:
        top = rank_descending(scored, lambda s: s.capital_efficiency, top_n)
        return RankingResult(strategy=self.name, as_of=context.as_of_str, top=top)


class RiskAdjustedStrategy(ScoringStrategy):
    """
    Risk-adjusted annualized return on the bid/ask midpoint.

    Probability of profit is (1 - |delta|) for calls and (1 + delta) for puts,
    taken literally from the provider's delta without sign normalization.
    """

    name = "risk_adjusted"
    price_series = PriceSeries.DAILY

    def score(
        self,
        contract: OptionContract,
        stock_price: float,
        context: ScoringContext,
        symbol: str = "",
    ) -> ScoredContract:
        midpoint = contract.midpoint
        days = max(1, (contract.expiration - context.as_of).days)
        annualized_time = days / DAYS_PER_YEAR
        capital = capital_required(contract, stock_price)

        if contract.is_call:
            max_loss = max(1.0, (stock_price - contract.strike) * CONTRACT_MULTIPLIER)
            probability = 1 - abs(contract.delta)
        else:
            max_loss = max(1.0, contract.strike * CONTRACT_MULTIPLIER)
            probability = 1 + contract.delta

        annualized_return = (
            _divide(midpoint * CONTRACT_MULTIPLIER, capital) / annualized_time
        )
        expected_return = annualized_return * probability * 100
        excess_return = max(0.0, annualized_return - context.risk_free_rate)
        risk_adjusted = _divide(excess_return, _divide(max_loss, capital))
        efficiency = risk_adjusted * probability * float(np.sqrt(annualized_time))

        return ScoredContract(
            contract=contract,
            symbol=symbol or contract.underlying,
            stock_price=stock_price,
            capital_efficiency=efficiency,
            probability_of_profit=probability,
            capital_required=capital,
            expected_annualized_return=expected_return,
            days_to_expiration=days,
            midpoint=midpoint,
            max_loss=max_loss,
            annualized_return=annualized_return,
            risk_adjusted_return=risk_adjusted,
        )

    def select(
        self,
        scored: List[ScoredContract],
        context: ScoringContext,
        top_n: int,
    ) -> RankingResult:
        # Contracts expiring on the as-of session have no time value left
        live = [s for s in scored if s.contract.expiration_str != context.as_of_str]
        if len(live) != len(scored):
            logger.debug(
                f"Excluded {len(scored) - len(live)} contracts expiring {context.as_of_str}"
            )

        key = lambda s: s.expected_annualized_return  # noqa: E731
        calls = rank_descending((s for s in live if s.contract.is_call), key, top_n)
        puts = rank_descending((s for s in live if s.contract.is_put), key, top_n)
        return RankingResult(
            strategy=self.name,
            as_of=context.as_of_str,
            calls=calls,
            puts=puts,
            grouped=True,
        )


STRATEGIES: Dict[str, Type[ScoringStrategy]] = {
    SimpleEfficiencyStrategy.name: SimpleEfficiencyStrategy,
    RiskAdjustedStrategy.name: RiskAdjustedStrategy,
}


def get_strategy(name: str) -> ScoringStrategy:
    """
    Instantiate a strategy by name.

    Raises:
        ValidationError: If the name is not registered
    """
    key = (name or "").strip().lower()
    if key not in STRATEGIES:
        raise ValidationError(
            f"Unknown ranking strategy: {name}", supported=sorted(STRATEGIES)
        )
    return STRATEGIES[key]()
