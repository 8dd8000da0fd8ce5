# Copyright 2024 OptionRank Contributors
# SPDX-License-Identifier: Apache-2.0

"""
FastAPI application for option capital-efficiency rankings.

Endpoints:
    GET /api/stock-data    - Top contracts for a comma-separated symbol list
    GET /api/strategies    - Registered ranking strategies
    GET /health            - Liveness check

Usage:
    uvicorn optionrank.api.app:app --reload

    # Or via the console script
    optionrank-server
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterator, List, Optional, Union

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from optionrank.config.settings import get_settings
from optionrank.core.calendar import parse_date
from optionrank.core.errors import OptionRankError
from optionrank.core.logging import setup_logging
from optionrank.data.fetcher import AlphaVantageClient
from optionrank.options.models import RankingResult
from optionrank.options.ranker import OptionsRanker
from optionrank.options.scoring import STRATEGIES


# =============================================================================
# RESPONSE MODELS
# =============================================================================


class ContractScore(BaseModel):
    """Scored option contract."""

    model_config = ConfigDict(populate_by_name=True)

    contract_id: str = Field(..., alias="contractID")
    symbol: str
    type: str
    strike: float
    expiration: str
    stock_price: float = Field(..., alias="stockPrice")
    bid: float
    ask: float
    last: float
    delta: float
    capital_required: float = Field(..., alias="capitalRequired")
    capital_efficiency: float = Field(..., alias="capitalEfficiency")
    prob_of_profit: float = Field(..., alias="probOfProfit")
    expected_annualized_return: Optional[float] = Field(
        None, alias="expectedAnnualizedReturn"
    )
    days_to_expiration: Optional[float] = Field(None, alias="daysToExpiration")
    midpoint: Optional[float] = None
    max_loss: Optional[float] = Field(None, alias="maxLoss")
    annualized_return: Optional[float] = Field(None, alias="annualizedReturn")
    risk_adjusted_return: Optional[float] = Field(None, alias="riskAdjustedReturn")


class GroupedRanking(BaseModel):
    """Calls and puts ranked separately."""

    model_config = ConfigDict(populate_by_name=True)

    top_calls: List[ContractScore] = Field(..., alias="top20Calls")
    top_puts: List[ContractScore] = Field(..., alias="top20Puts")
    data_date: str = Field(..., alias="dataDate")


class StrategyInfo(BaseModel):
    """Registered strategy."""

    name: str
    price_series: str
    description: str


def to_response(result: RankingResult) -> Union[List[ContractScore], GroupedRanking]:
    """Shape a ranking result the way each strategy's clients expect it."""
    if not result.grouped:
        return [ContractScore.model_validate(s.to_dict()) for s in result.top]
    return GroupedRanking(
        top_calls=[ContractScore.model_validate(s.to_dict()) for s in result.calls],
        top_puts=[ContractScore.model_validate(s.to_dict()) for s in result.puts],
        data_date=result.as_of,
    )


# =============================================================================
# API APPLICATION
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging before the first request, however the app is served."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file or None)
    logger.info("OptionRank API starting...")

    yield

    logger.info("OptionRank API stopped")


app = FastAPI(
    title="OptionRank API",
    description="Ranks option contracts by capital efficiency",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(OptionRankError)
async def optionrank_error_handler(request: Request, exc: OptionRankError):
    if exc.status_code < 500:
        logger.warning(f"Rejected {request.url.path}: {exc}")
    else:
        logger.error(f"Request failed: {exc}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def get_ranker() -> Iterator[OptionsRanker]:
    """Per-request ranker with its own HTTP client."""
    settings = get_settings()
    client = AlphaVantageClient(settings)
    try:
        yield OptionsRanker(client, settings)
    finally:
        client.close()


@app.get("/health")
def health():
    """Liveness check."""
    return {"status": "ok"}


@app.get("/api/strategies", response_model=List[StrategyInfo])
def list_strategies():
    """List ranking strategies accepted by /api/stock-data."""
    return [
        StrategyInfo(
            name=name,
            price_series=cls.price_series.value,
            description=(cls.__doc__ or "").strip().splitlines()[0],
        )
        for name, cls in STRATEGIES.items()
    ]


@app.get(
    "/api/stock-data",
    response_model=Union[List[ContractScore], GroupedRanking],
    response_model_exclude_none=True,
)
def stock_data(
    symbols: str = Query(..., description="Comma-separated tickers"),
    strategy: Optional[str] = Query(None, description="Ranking strategy name"),
    as_of: Optional[str] = Query(None, alias="date", description="YYYY-MM-DD"),
    limit: Optional[int] = Query(None, ge=1, le=100, description="Top N per group"),
    ranker: OptionsRanker = Depends(get_ranker),
):
    """
    Rank option contracts for the requested symbols.

    Symbols without a price or chain are skipped rather than failing the
    request.
    """
    logger.info(f"GET /api/stock-data symbols={symbols!r} strategy={strategy!r}")
    result = ranker.rank(
        symbols,
        strategy=strategy,
        as_of=parse_date(as_of) if as_of else None,
        top_n=limit,
    )
    return to_response(result)


# =============================================================================
# MAIN
# =============================================================================


def main() -> None:
    """Run the API under uvicorn."""
    import uvicorn

    settings = get_settings()
    logger.info(f"Starting OptionRank API on {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
