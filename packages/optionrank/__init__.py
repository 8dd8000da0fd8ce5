# Copyright 2024 OptionRank Contributors
# SPDX-License-Identifier: Apache-2.0

"""
OptionRank: capital-efficiency rankings for listed option contracts.

Fetches underlying prices and historical option chains from Alpha Vantage,
scores every contract with a pluggable strategy and returns the top contracts
over HTTP.

Example
-------
>>> from optionrank import AlphaVantageClient, OptionsRanker
>>>
>>> with AlphaVantageClient() as client:
...     result = OptionsRanker(client).rank("AAPL,MSFT", strategy="risk_adjusted")

Modules
-------
api
    FastAPI application and response models.
config
    Environment-driven settings.
core
    Errors, trading-day helpers and logging setup.
data
    Alpha Vantage client.
options
    Contract models, scoring strategies and the ranking pipeline.
"""

from __future__ import annotations


__version__ = "0.1.0"
__license__ = "Apache-2.0"


from optionrank.config.settings import Settings, get_settings
from optionrank.data.fetcher import AlphaVantageClient
from optionrank.options.ranker import OptionsRanker
from optionrank.options.scoring import get_strategy

__all__ = [
    "__version__",
    "AlphaVantageClient",
    "OptionsRanker",
    "Settings",
    "get_settings",
    "get_strategy",
]
