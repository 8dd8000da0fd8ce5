"""
Options ranking pipeline.

For every requested symbol: fetch the underlying price and the options chain,
skip the symbol if either is unavailable, score every contract with the
selected strategy, then rank the pooled contracts.

Symbols are processed sequentially unless `max_workers > 1`, in which case a
bounded thread pool fans out the per-symbol fetches. Results are always joined
in input order so the stable sort yields the same output either way.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime
from typing import Iterable, List, Optional, Tuple, Union

from loguru import logger

from optionrank.config.settings import Settings, get_settings
from optionrank.core.calendar import previous_trading_day
from optionrank.core.errors import ValidationError
from optionrank.data.fetcher import AlphaVantageClient
from optionrank.options.models import RankingResult, ScoredContract
from optionrank.options.scoring import (
    ScoringContext,
    ScoringStrategy,
    get_strategy,
)


def normalize_symbols(symbols: Union[str, Iterable[str]]) -> List[str]:
    """
    Parse a comma-separated string or iterable into unique upper-case tickers.

    Raises:
        ValidationError: If no usable symbol remains
    """
    raw = symbols.split(",") if isinstance(symbols, str) else list(symbols)

    cleaned: List[str] = []
    for symbol in raw:
        ticker = str(symbol).strip().upper()
        if ticker and ticker not in cleaned:
            cleaned.append(ticker)

    if not cleaned:
        raise ValidationError("At least one symbol is required", symbols=symbols)
    return cleaned


class OptionsRanker:
    """
    Ranks option contracts across symbols by capital efficiency.

    Usage:
        ranker = OptionsRanker(AlphaVantageClient())
        result = ranker.rank(["AAPL", "MSFT"], strategy="risk_adjusted")
    """

    def __init__(
        self,
        client: AlphaVantageClient,
        settings: Optional[Settings] = None,
        max_workers: Optional[int] = None,
    ):
        """
        Initialize ranker.

        Args:
            client: Market-data client
            settings: Settings override
            max_workers: Parallel symbols (defaults to settings.max_concurrent_symbols)
        """
        self.client = client
        self.settings = settings or get_settings()
        self.max_workers = max(1, max_workers or self.settings.max_concurrent_symbols)

    def rank(
        self,
        symbols: Union[str, Iterable[str]],
        strategy: Union[str, ScoringStrategy, None] = None,
        as_of: Optional[date] = None,
        top_n: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> RankingResult:
        """
        Score and rank contracts for a set of symbols.

        Args:
            symbols: Tickers (list or comma-separated string)
            strategy: Strategy instance or registered name
            as_of: Trading date for chains and daily prices
                (defaults to the previous trading day)
            top_n: Contracts per group (defaults to settings.top_n)
            now: Reference time for day counts (defaults to now)

        Returns:
            RankingResult
        """
        tickers = normalize_symbols(symbols)
        if strategy is None:
            strategy = self.settings.default_strategy
        if isinstance(strategy, str):
            strategy = get_strategy(strategy)
        top_n = top_n or self.settings.top_n
        now = now or datetime.now()

        context = ScoringContext(
            as_of=as_of or previous_trading_day(now, self.settings.exchange),
            now=now,
            risk_free_rate=self.settings.risk_free_rate,
        )
        logger.info(
            f"Ranking {len(tickers)} symbols with '{strategy.name}' "
            f"as of {context.as_of_str}"
        )

        if self.max_workers > 1 and len(tickers) > 1:
            workers = min(self.max_workers, len(tickers))
            with ThreadPoolExecutor(max_workers=workers) as pool:
                outcomes = list(
                    pool.map(lambda s: self._process_symbol(s, strategy, context), tickers)
                )
        else:
            outcomes = [self._process_symbol(s, strategy, context) for s in tickers]

        pooled: List[ScoredContract] = []
        skipped: List[str] = []
        for symbol, scored in outcomes:
            if scored is None:
                skipped.append(symbol)
            else:
                pooled.extend(scored)

        result = strategy.select(pooled, context, top_n)
        result.skipped_symbols = skipped
        logger.info(
            f"Scored {len(pooled)} contracts, returning {result.total}"
            + (f" (skipped: {', '.join(skipped)})" if skipped else "")
        )
        return result

    def _process_symbol(
        self,
        symbol: str,
        strategy: ScoringStrategy,
        context: ScoringContext,
    ) -> Tuple[str, Optional[List[ScoredContract]]]:
        """Fetch and score one symbol; None means the symbol was skipped."""
        logger.debug(f"Processing symbol: {symbol}")

        quote = self.client.get_stock_price(
            symbol, context.as_of_str, strategy.price_series
        )
        if quote is None:
            logger.warning(f"No valid stock price for {symbol}. Skipping.")
            return symbol, None

        chain = self.client.get_options_chain(symbol, context.as_of_str)
        if chain is None:
            logger.warning(f"No valid options data for {symbol}. Skipping.")
            return symbol, None

        scored = strategy.score_chain(chain, quote.price, context, symbol)
        logger.debug(f"{symbol}: price={quote.price} contracts={len(scored)}")
        return symbol, scored
