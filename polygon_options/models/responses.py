"""Response models for the Polygon.io options endpoints.

Each model mirrors the JSON payload field-for-field (snake_case attributes,
wire keys in from_dict). Every field is optional because the API omits keys
freely depending on plan and market hours. Prices are floats in dollars,
timestamps are Unix nanoseconds unless noted.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

T = TypeVar('T')


class AggregateInterval(str, Enum):
    """Timespan unit for aggregate bars."""

    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


class SortOrder(str, Enum):
    """Sort direction for aggregate bars."""

    ASCENDING = "asc"
    DESCENDING = "desc"


@dataclass
class PolygonResponse(Generic[T]):
    """Common envelope around every list/detail payload."""

    status: str = ""
    request_id: str = ""
    results: Optional[T] = None
    ticker: Optional[str] = None
    count: Optional[int] = None
    query_count: Optional[int] = None
    results_count: Optional[int] = None
    adjusted: Optional[bool] = None
    next_url: Optional[str] = None

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        parse_results: Callable[[Any], T],
    ) -> "PolygonResponse[T]":
        """Build an envelope, converting the results payload with parse_results."""
        raw_results = data.get('results')
        return cls(
            status=data.get('status', ""),
            request_id=data.get('request_id', ""),
            results=parse_results(raw_results) if raw_results is not None else None,
            ticker=data.get('ticker'),
            count=data.get('count'),
            query_count=data.get('queryCount'),
            results_count=data.get('resultsCount'),
            adjusted=data.get('adjusted'),
            next_url=data.get('next_url'),
        )


def list_of(parse_item: Callable[[Dict[str, Any]], T]) -> Callable[[Any], List[T]]:
    """Adapt a single-item parser to a results list."""
    def parse(items: Any) -> List[T]:
        return [parse_item(item) for item in items or []]
    return parse


@dataclass
class OptionsContract:
    """Reference data for one options contract."""

    ticker: Optional[str] = None
    underlying_ticker: Optional[str] = None
    contract_type: Optional[str] = None
    exercise_style: Optional[str] = None
    expiration_date: Optional[str] = None
    strike_price: Optional[float] = None
    shares_per_contract: Optional[int] = None
    primary_exchange: Optional[str] = None
    cfi: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OptionsContract":
        return cls(
            ticker=data.get('ticker'),
            underlying_ticker=data.get('underlying_ticker'),
            contract_type=data.get('contract_type'),
            exercise_style=data.get('exercise_style'),
            expiration_date=data.get('expiration_date'),
            strike_price=data.get('strike_price'),
            shares_per_contract=data.get('shares_per_contract'),
            primary_exchange=data.get('primary_exchange'),
            cfi=data.get('cfi'),
        )

    @property
    def option_ticker(self):
        """Decoded OptionTicker for this contract, or None if the ticker is malformed."""
        from ..occ.codec import try_decode
        return try_decode(self.ticker)


@dataclass
class OptionDayData:
    """Session OHLC/volume block of a snapshot."""

    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    close: Optional[float] = None
    volume: Optional[int] = None
    vwap: Optional[float] = None
    change: Optional[float] = None
    change_percent: Optional[float] = None
    previous_close: Optional[float] = None
    last_updated: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OptionDayData":
        return cls(
            open=data.get('open'),
            high=data.get('high'),
            low=data.get('low'),
            close=data.get('close'),
            volume=data.get('volume'),
            vwap=data.get('vwap'),
            change=data.get('change'),
            change_percent=data.get('change_percent'),
            previous_close=data.get('previous_close'),
            last_updated=data.get('last_updated'),
        )


@dataclass
class OptionContractDetails:
    """Contract block of a snapshot."""

    ticker: Optional[str] = None
    contract_type: Optional[str] = None
    exercise_style: Optional[str] = None
    expiration_date: Optional[str] = None
    strike_price: Optional[float] = None
    shares_per_contract: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OptionContractDetails":
        return cls(
            ticker=data.get('ticker'),
            contract_type=data.get('contract_type'),
            exercise_style=data.get('exercise_style'),
            expiration_date=data.get('expiration_date'),
            strike_price=data.get('strike_price'),
            shares_per_contract=data.get('shares_per_contract'),
        )


@dataclass
class OptionGreeks:
    delta: Optional[float] = None
    gamma: Optional[float] = None
    theta: Optional[float] = None
    vega: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OptionGreeks":
        return cls(
            delta=data.get('delta'),
            gamma=data.get('gamma'),
            theta=data.get('theta'),
            vega=data.get('vega'),
        )


@dataclass
class OptionLastQuote:
    bid: Optional[float] = None
    bid_size: Optional[int] = None
    bid_exchange: Optional[int] = None
    ask: Optional[float] = None
    ask_size: Optional[int] = None
    ask_exchange: Optional[int] = None
    midpoint: Optional[float] = None
    last_updated: Optional[int] = None
    timeframe: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OptionLastQuote":
        return cls(
            bid=data.get('bid'),
            bid_size=data.get('bid_size'),
            bid_exchange=data.get('bid_exchange'),
            ask=data.get('ask'),
            ask_size=data.get('ask_size'),
            ask_exchange=data.get('ask_exchange'),
            midpoint=data.get('midpoint'),
            last_updated=data.get('last_updated'),
            timeframe=data.get('timeframe'),
        )


@dataclass
class OptionLastTrade:
    price: Optional[float] = None
    size: Optional[int] = None
    exchange: Optional[int] = None
    conditions: Optional[List[int]] = None
    sip_timestamp: Optional[int] = None
    timeframe: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OptionLastTrade":
        return cls(
            price=data.get('price'),
            size=data.get('size'),
            exchange=data.get('exchange'),
            conditions=data.get('conditions'),
            sip_timestamp=data.get('sip_timestamp'),
            timeframe=data.get('timeframe'),
        )


@dataclass
class OptionUnderlyingAsset:
    ticker: Optional[str] = None
    price: Optional[float] = None
    change_to_break_even: Optional[float] = None
    last_updated: Optional[int] = None
    timeframe: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OptionUnderlyingAsset":
        return cls(
            ticker=data.get('ticker'),
            price=data.get('price'),
            change_to_break_even=data.get('change_to_break_even'),
            last_updated=data.get('last_updated'),
            timeframe=data.get('timeframe'),
        )


def _nested(data: Dict[str, Any], key: str, parse: Callable[[Dict[str, Any]], T]) -> Optional[T]:
    value = data.get(key)
    return parse(value) if value is not None else None


@dataclass
class OptionSnapshot:
    """Point-in-time view of one contract (also the item type of chain snapshots)."""

    break_even_price: Optional[float] = None
    implied_volatility: Optional[float] = None
    open_interest: Optional[int] = None
    day: Optional[OptionDayData] = None
    details: Optional[OptionContractDetails] = None
    greeks: Optional[OptionGreeks] = None
    last_quote: Optional[OptionLastQuote] = None
    last_trade: Optional[OptionLastTrade] = None
    underlying_asset: Optional[OptionUnderlyingAsset] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OptionSnapshot":
        return cls(
            break_even_price=data.get('break_even_price'),
            implied_volatility=data.get('implied_volatility'),
            open_interest=data.get('open_interest'),
            day=_nested(data, 'day', OptionDayData.from_dict),
            details=_nested(data, 'details', OptionContractDetails.from_dict),
            greeks=_nested(data, 'greeks', OptionGreeks.from_dict),
            last_quote=_nested(data, 'last_quote', OptionLastQuote.from_dict),
            last_trade=_nested(data, 'last_trade', OptionLastTrade.from_dict),
            underlying_asset=_nested(data, 'underlying_asset', OptionUnderlyingAsset.from_dict),
        )


@dataclass
class OptionTrade:
    """Last trade for a contract (v2 endpoint, single-letter keys)."""

    ticker: Optional[str] = None
    price: Optional[float] = None
    size: Optional[int] = None
    exchange: Optional[int] = None
    conditions: Optional[List[int]] = None
    id: Optional[str] = None
    sequence: Optional[int] = None
    timestamp: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OptionTrade":
        return cls(
            ticker=data.get('T'),
            price=data.get('p'),
            size=data.get('s'),
            exchange=data.get('x'),
            conditions=data.get('c'),
            id=data.get('i'),
            sequence=data.get('q'),
            timestamp=data.get('t'),
        )


@dataclass
class OptionTradeV3:
    """One trade from the v3 trades endpoint."""

    price: Optional[float] = None
    size: Optional[int] = None
    exchange: Optional[int] = None
    conditions: Optional[List[int]] = None
    id: Optional[str] = None
    sequence_number: Optional[int] = None
    sip_timestamp: Optional[int] = None
    participant_timestamp: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OptionTradeV3":
        return cls(
            price=data.get('price'),
            size=data.get('size'),
            exchange=data.get('exchange'),
            conditions=data.get('conditions'),
            id=data.get('id'),
            sequence_number=data.get('sequence_number'),
            sip_timestamp=data.get('sip_timestamp'),
            participant_timestamp=data.get('participant_timestamp'),
        )


@dataclass
class OptionQuote:
    """One NBBO quote from the v3 quotes endpoint."""

    bid_price: Optional[float] = None
    bid_size: Optional[int] = None
    bid_exchange: Optional[int] = None
    ask_price: Optional[float] = None
    ask_size: Optional[int] = None
    ask_exchange: Optional[int] = None
    sequence_number: Optional[int] = None
    sip_timestamp: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OptionQuote":
        return cls(
            bid_price=data.get('bid_price'),
            bid_size=data.get('bid_size'),
            bid_exchange=data.get('bid_exchange'),
            ask_price=data.get('ask_price'),
            ask_size=data.get('ask_size'),
            ask_exchange=data.get('ask_exchange'),
            sequence_number=data.get('sequence_number'),
            sip_timestamp=data.get('sip_timestamp'),
        )

    @property
    def mid(self) -> Optional[float]:
        """Mid price between bid and ask, or None if either side is missing."""
        if self.bid_price is None or self.ask_price is None:
            return None
        return (self.bid_price + self.ask_price) / 2.0


@dataclass
class OptionBar:
    """Aggregate (OHLC) bar. Timestamp is Unix milliseconds at bar start."""

    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    close: Optional[float] = None
    volume: Optional[float] = None
    vwap: Optional[float] = None
    timestamp: Optional[int] = None
    transactions: Optional[int] = None
    ticker: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OptionBar":
        return cls(
            open=data.get('o'),
            high=data.get('h'),
            low=data.get('l'),
            close=data.get('c'),
            volume=data.get('v'),
            vwap=data.get('vw'),
            timestamp=data.get('t'),
            transactions=data.get('n'),
            ticker=data.get('T'),
        )


@dataclass
class OptionDailyOpenClose:
    """Open/close summary for one contract on one date (not wrapped in an envelope)."""

    status: Optional[str] = None
    symbol: Optional[str] = None
    from_date: Optional[str] = None
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    close: Optional[float] = None
    volume: Optional[int] = None
    after_hours: Optional[float] = None
    pre_market: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OptionDailyOpenClose":
        return cls(
            status=data.get('status'),
            symbol=data.get('symbol'),
            from_date=data.get('from'),
            open=data.get('open'),
            high=data.get('high'),
            low=data.get('low'),
            close=data.get('close'),
            volume=data.get('volume'),
            after_hours=data.get('afterHours'),
            pre_market=data.get('preMarket'),
        )
