"""Data models: the OCC ticker value type and API response DTOs."""

from .option_ticker import OptionTicker, OptionType
from .responses import (
    AggregateInterval,
    OptionBar,
    OptionDailyOpenClose,
    OptionQuote,
    OptionSnapshot,
    OptionsContract,
    OptionTrade,
    OptionTradeV3,
    PolygonResponse,
    SortOrder,
)

__all__ = [
    "OptionTicker",
    "OptionType",
    "AggregateInterval",
    "SortOrder",
    "PolygonResponse",
    "OptionsContract",
    "OptionSnapshot",
    "OptionTrade",
    "OptionTradeV3",
    "OptionQuote",
    "OptionBar",
    "OptionDailyOpenClose",
]
