"""Fluent builders for option tickers and API queries."""

from .ticker_builder import OptionsTickerBuilder
from .query_builders import (
    ChainSnapshotQueryBuilder,
    ContractDetailsQueryBuilder,
    DailyOpenCloseQueryBuilder,
    LastTradeQueryBuilder,
    OptionSnapshotQueryBuilder,
    PreviousDayBarQueryBuilder,
)

__all__ = [
    "OptionsTickerBuilder",
    "OptionSnapshotQueryBuilder",
    "ContractDetailsQueryBuilder",
    "ChainSnapshotQueryBuilder",
    "LastTradeQueryBuilder",
    "PreviousDayBarQueryBuilder",
    "DailyOpenCloseQueryBuilder",
]
