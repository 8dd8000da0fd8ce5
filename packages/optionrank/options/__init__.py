"""
Options module.

- models: Quote, OptionContract, ScoredContract, RankingResult
- scoring: Pluggable capital-efficiency strategies
- ranker: Fetch, score and rank across symbols
"""

from optionrank.options.models import (
    OptionContract,
    OptionType,
    PriceSeries,
    Quote,
    RankingResult,
    ScoredContract,
)
from optionrank.options.scoring import (
    RiskAdjustedStrategy,
    ScoringContext,
    ScoringStrategy,
    SimpleEfficiencyStrategy,
    get_strategy,
)

__all__ = [
    "OptionContract",
    "OptionType",
    "PriceSeries",
    "Quote",
    "RankingResult",
    "ScoredContract",
    "RiskAdjustedStrategy",
    "ScoringContext",
    "ScoringStrategy",
    "SimpleEfficiencyStrategy",
    "get_strategy",
]
