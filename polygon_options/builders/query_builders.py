"""Fluent query builders that assemble request objects for OptionsService.

Each builder collects parameters through chainable setters and sends the
request in execute(). Missing required parameters raise
IncompleteBuilderError before anything reaches the network; everything else
is checked by the service's request validation.
"""

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Union

from ..client.options_requests import (
    GetChainSnapshotRequest,
    GetContractDetailsRequest,
    GetDailyOpenCloseRequest,
    GetLastTradeRequest,
    GetPreviousDayBarRequest,
    GetSnapshotRequest,
)
from ..client.options_service import OptionsService
from ..models.option_ticker import OptionTicker, OptionType, StrikeLike, normalize_strike
from ..models.responses import (
    OptionBar,
    OptionDailyOpenClose,
    OptionsContract,
    OptionSnapshot,
    OptionTrade,
    PolygonResponse,
)
from ..occ.split import best_effort_split
from ..utils.error_handling import IncompleteBuilderError

logger = logging.getLogger("polygon_options.query_builders")

DateLike = Union[date, datetime, str]


def _iso(value: DateLike) -> str:
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat() if isinstance(value, date) else value


class OptionSnapshotQueryBuilder:
    """Builds a single-contract snapshot request.

    Example:
        >>> OptionSnapshotQueryBuilder(service).for_ticker("O:SPY251219C00650000").execute()
        >>> (OptionSnapshotQueryBuilder(service)
        ...     .for_underlying("SPY")
        ...     .with_contract("SPY251219C00650000")
        ...     .execute())
    """

    def __init__(self, service: OptionsService, ticker: Optional[str] = None):
        self.service = service
        self._underlying_asset: Optional[str] = None
        self._option_contract: Optional[str] = None
        if ticker and ticker.strip():
            self.for_ticker(ticker)

    def for_ticker(self, ticker: str) -> "OptionSnapshotQueryBuilder":
        """Split a full symbol into underlying and contract.

        Uses the lenient split: a symbol with no recognizable split point is
        kept whole as the contract and the underlying is left unchanged.
        """
        underlying, contract = best_effort_split(ticker)
        if underlying is None:
            logger.debug("No underlying found in %r, using it as the contract", ticker)
        else:
            self._underlying_asset = underlying
        self._option_contract = contract
        return self

    def for_underlying(self, underlying: str) -> "OptionSnapshotQueryBuilder":
        self._underlying_asset = underlying
        return self

    def with_contract(self, contract: str) -> "OptionSnapshotQueryBuilder":
        self._option_contract = contract
        return self

    def build_request(self) -> GetSnapshotRequest:
        if not self._underlying_asset or not self._underlying_asset.strip():
            raise IncompleteBuilderError(
                "underlying_asset",
                "Underlying asset is required. Use for_underlying() or for_ticker() to specify it."
            )
        if not self._option_contract or not self._option_contract.strip():
            raise IncompleteBuilderError(
                "option_contract",
                "Option contract is required. Use with_contract() or for_ticker() to specify it."
            )
        return GetSnapshotRequest(
            underlying_asset=self._underlying_asset,
            option_contract=self._option_contract,
        )

    def execute(self) -> PolygonResponse[OptionSnapshot]:
        return self.service.get_snapshot(self.build_request())


class ContractDetailsQueryBuilder:
    """Builds a contract reference-data request."""

    def __init__(self, service: OptionsService, ticker: Optional[str] = None):
        self.service = service
        self._options_ticker: Optional[str] = ticker
        self._as_of: Optional[str] = None

    def for_ticker(self, ticker: Union[str, OptionTicker]) -> "ContractDetailsQueryBuilder":
        self._options_ticker = str(ticker)
        return self

    def for_components(
        self,
        underlying: str,
        expiration_date: Union[date, datetime],
        option_type: OptionType,
        strike: StrikeLike,
    ) -> "ContractDetailsQueryBuilder":
        """Encode the contract from its components.

        Raises:
            FormatError: If any component is invalid
        """
        self._options_ticker = OptionTicker.create(underlying, expiration_date, option_type, strike)
        return self

    def as_of(self, on: DateLike) -> "ContractDetailsQueryBuilder":
        """Request the contract as it was listed on a past date."""
        self._as_of = _iso(on)
        return self

    def build_request(self) -> GetContractDetailsRequest:
        if not self._options_ticker or not self._options_ticker.strip():
            raise IncompleteBuilderError(
                "options_ticker",
                "Options ticker is required. Use for_ticker() or for_components() to specify it."
            )
        return GetContractDetailsRequest(options_ticker=self._options_ticker, as_of=self._as_of)

    def execute(self) -> PolygonResponse[OptionsContract]:
        return self.service.get_contract_details(self.build_request())


class ChainSnapshotQueryBuilder:
    """Builds a chain snapshot request with strike, type and expiration filters.

    Example:
        >>> (ChainSnapshotQueryBuilder(service, "SPY")
        ...     .puts_only()
        ...     .expiring_between("2025-12-01", "2025-12-31")
        ...     .limit(250)
        ...     .execute())
    """

    def __init__(self, service: OptionsService, underlying: Optional[str] = None):
        self.service = service
        self._underlying_asset = underlying
        self._strike_price: Optional[Decimal] = None
        self._contract_type: Optional[str] = None
        self._expiration_date_gte: Optional[str] = None
        self._expiration_date_lte: Optional[str] = None
        self._limit: Optional[int] = None
        self._sort: Optional[str] = None
        self._order: Optional[str] = None
        self._cursor: Optional[str] = None

    def for_underlying(self, underlying: str) -> "ChainSnapshotQueryBuilder":
        self._underlying_asset = underlying
        return self

    def at_strike(self, strike: StrikeLike) -> "ChainSnapshotQueryBuilder":
        """Filter to one strike.

        Raises:
            NegativeOrOversizedStrikeError: If the strike is not a usable number
        """
        self._strike_price = normalize_strike(strike)
        return self

    def calls_only(self) -> "ChainSnapshotQueryBuilder":
        self._contract_type = OptionType.CALL.value
        return self

    def puts_only(self) -> "ChainSnapshotQueryBuilder":
        self._contract_type = OptionType.PUT.value
        return self

    def expiring_on_or_after(self, on: DateLike) -> "ChainSnapshotQueryBuilder":
        self._expiration_date_gte = _iso(on)
        return self

    def expiring_on_or_before(self, on: DateLike) -> "ChainSnapshotQueryBuilder":
        self._expiration_date_lte = _iso(on)
        return self

    def expiring_between(self, start: DateLike, end: DateLike) -> "ChainSnapshotQueryBuilder":
        return self.expiring_on_or_after(start).expiring_on_or_before(end)

    def limit(self, limit: int) -> "ChainSnapshotQueryBuilder":
        self._limit = limit
        return self

    def sort_by(self, field: str) -> "ChainSnapshotQueryBuilder":
        self._sort = field
        return self

    def ascending(self) -> "ChainSnapshotQueryBuilder":
        self._order = "asc"
        return self

    def descending(self) -> "ChainSnapshotQueryBuilder":
        self._order = "desc"
        return self

    def with_cursor(self, cursor: str) -> "ChainSnapshotQueryBuilder":
        self._cursor = cursor
        return self

    def build_request(self) -> GetChainSnapshotRequest:
        if not self._underlying_asset or not self._underlying_asset.strip():
            raise IncompleteBuilderError(
                "underlying_asset",
                "Underlying asset is required. Use for_underlying() to specify it."
            )
        return GetChainSnapshotRequest(
            underlying_asset=self._underlying_asset,
            strike_price=self._strike_price,
            contract_type=self._contract_type,
            expiration_date_gte=self._expiration_date_gte,
            expiration_date_lte=self._expiration_date_lte,
            limit=self._limit,
            order=self._order,
            sort=self._sort,
            cursor=self._cursor,
        )

    def execute(self) -> PolygonResponse[List[OptionSnapshot]]:
        return self.service.get_chain_snapshot(self.build_request())


def _require_ticker(ticker: Optional[str]) -> str:
    if not ticker or not ticker.strip():
        raise IncompleteBuilderError(
            "options_ticker",
            "Options ticker is required. Use for_ticker() to specify the options ticker symbol."
        )
    return ticker


class LastTradeQueryBuilder:
    """Builds a most-recent-trade request for one contract."""

    def __init__(self, service: OptionsService, ticker: Optional[str] = None):
        self.service = service
        self._options_ticker: Optional[str] = ticker

    def for_ticker(self, ticker: Union[str, OptionTicker]) -> "LastTradeQueryBuilder":
        self._options_ticker = str(ticker)
        return self

    def build_request(self) -> GetLastTradeRequest:
        return GetLastTradeRequest(options_ticker=_require_ticker(self._options_ticker))

    def execute(self) -> PolygonResponse[OptionTrade]:
        return self.service.get_last_trade(self.build_request())


class PreviousDayBarQueryBuilder:
    """Builds a previous-session bar request.

    Example:
        >>> PreviousDayBarQueryBuilder(service, "O:SPY251219C00650000").adjusted(False).execute()
    """

    def __init__(self, service: OptionsService, ticker: Optional[str] = None):
        self.service = service
        self._options_ticker: Optional[str] = ticker
        self._adjusted: Optional[bool] = None

    def for_ticker(self, ticker: Union[str, OptionTicker]) -> "PreviousDayBarQueryBuilder":
        self._options_ticker = str(ticker)
        return self

    def adjusted(self, adjusted: bool = True) -> "PreviousDayBarQueryBuilder":
        self._adjusted = adjusted
        return self

    def build_request(self) -> GetPreviousDayBarRequest:
        return GetPreviousDayBarRequest(
            options_ticker=_require_ticker(self._options_ticker),
            adjusted=self._adjusted,
        )

    def execute(self) -> PolygonResponse[List[OptionBar]]:
        return self.service.get_previous_day_bar(self.build_request())


class DailyOpenCloseQueryBuilder:
    """Builds an open/close summary request for one contract on one day."""

    def __init__(self, service: OptionsService, ticker: Optional[str] = None):
        self.service = service
        self._options_ticker: Optional[str] = ticker
        self._date: Optional[str] = None

    def for_ticker(self, ticker: Union[str, OptionTicker]) -> "DailyOpenCloseQueryBuilder":
        self._options_ticker = str(ticker)
        return self

    def on_date(self, on: DateLike) -> "DailyOpenCloseQueryBuilder":
        self._date = _iso(on)
        return self

    def build_request(self) -> GetDailyOpenCloseRequest:
        ticker = _require_ticker(self._options_ticker)
        if not self._date or not self._date.strip():
            raise IncompleteBuilderError(
                "date", "Date is required. Use on_date() to specify the date."
            )
        return GetDailyOpenCloseRequest(options_ticker=ticker, date=self._date)

    def execute(self) -> OptionDailyOpenClose:
        return self.service.get_daily_open_close(self.build_request())
