"""Request objects for the options endpoints.

Each request carries its path parameters as required fields and its query
parameters as optional ones. query_params() returns the wire-named query
string values; unset values are None and dropped by the HTTP client.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional

from ..models.responses import AggregateInterval, SortOrder


@dataclass
class GetContractDetailsRequest:
    """Reference data for a single options contract."""

    options_ticker: str = ""
    as_of: Optional[str] = None

    def query_params(self) -> Dict[str, Any]:
        return {'as_of': self.as_of}


@dataclass
class GetSnapshotRequest:
    """Snapshot of one contract, addressed by underlying + contract suffix."""

    underlying_asset: str = ""
    option_contract: str = ""

    def query_params(self) -> Dict[str, Any]:
        return {}


@dataclass
class GetChainSnapshotRequest:
    """Snapshot of every contract on an underlying, with optional filters."""

    underlying_asset: str = ""
    strike_price: Optional[Decimal] = None
    contract_type: Optional[str] = None
    expiration_date_gte: Optional[str] = None
    expiration_date_lte: Optional[str] = None
    limit: Optional[int] = None
    order: Optional[str] = None
    sort: Optional[str] = None
    cursor: Optional[str] = None

    def query_params(self) -> Dict[str, Any]:
        return {
            'strike_price': self.strike_price,
            'contract_type': self.contract_type,
            'expiration_date.gte': self.expiration_date_gte,
            'expiration_date.lte': self.expiration_date_lte,
            'limit': self.limit,
            'order': self.order,
            'sort': self.sort,
            'cursor': self.cursor,
        }


@dataclass
class GetLastTradeRequest:
    options_ticker: str = ""

    def query_params(self) -> Dict[str, Any]:
        return {}


@dataclass
class GetQuotesRequest:
    """Historical NBBO quotes for a contract, filterable by timestamp."""

    options_ticker: str = ""
    timestamp: Optional[str] = None
    timestamp_lt: Optional[str] = None
    timestamp_lte: Optional[str] = None
    timestamp_gt: Optional[str] = None
    timestamp_gte: Optional[str] = None
    order: Optional[str] = None
    limit: Optional[int] = None
    sort: Optional[str] = None
    cursor: Optional[str] = None

    def query_params(self) -> Dict[str, Any]:
        return {
            'timestamp': self.timestamp,
            'timestamp.lt': self.timestamp_lt,
            'timestamp.lte': self.timestamp_lte,
            'timestamp.gt': self.timestamp_gt,
            'timestamp.gte': self.timestamp_gte,
            'order': self.order,
            'limit': self.limit,
            'sort': self.sort,
            'cursor': self.cursor,
        }


@dataclass
class GetTradesRequest(GetQuotesRequest):
    """Historical trades for a contract; same filters as quotes."""
    pass


@dataclass
class GetBarsRequest:
    """Aggregate bars over a date range.

    from_date/to_date are YYYY-MM-DD strings (the API also accepts
    millisecond timestamps but this client only sends dates).
    """

    options_ticker: str = ""
    multiplier: int = 1
    timespan: AggregateInterval = AggregateInterval.DAY
    from_date: str = ""
    to_date: str = ""
    adjusted: Optional[bool] = None
    sort: Optional[SortOrder] = None
    limit: Optional[int] = None

    def query_params(self) -> Dict[str, Any]:
        return {
            'adjusted': self.adjusted,
            'sort': self.sort,
            'limit': self.limit,
        }


@dataclass
class GetPreviousDayBarRequest:
    options_ticker: str = ""
    adjusted: Optional[bool] = None

    def query_params(self) -> Dict[str, Any]:
        return {'adjusted': self.adjusted}


@dataclass
class GetDailyOpenCloseRequest:
    options_ticker: str = ""
    date: str = ""

    def query_params(self) -> Dict[str, Any]:
        return {}
