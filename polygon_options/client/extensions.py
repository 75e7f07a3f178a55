"""Convenience calls layered over OptionsService.

Two families:
    *_by_components: take underlying/expiration/type/strike, encode the
        OCC ticker, then call the service.
    *_for: take an already-built OptionTicker.

Plus discovery helpers that scan a chain snapshot for available strikes and
expiration dates.
"""

import logging
from datetime import date, datetime
from typing import List, Optional, Union

from ..models.option_ticker import OptionTicker, OptionType, StrikeLike, normalize_strike
from ..models.responses import (
    AggregateInterval,
    OptionBar,
    OptionDailyOpenClose,
    OptionQuote,
    OptionsContract,
    OptionSnapshot,
    OptionTrade,
    OptionTradeV3,
    PolygonResponse,
    SortOrder,
)
from .options_requests import (
    GetBarsRequest,
    GetChainSnapshotRequest,
    GetContractDetailsRequest,
    GetDailyOpenCloseRequest,
    GetLastTradeRequest,
    GetPreviousDayBarRequest,
    GetQuotesRequest,
    GetSnapshotRequest,
    GetTradesRequest,
)
from .options_service import OptionsService

logger = logging.getLogger("polygon_options.extensions")

DISCOVERY_LIMIT = 1000

DateLike = Union[date, datetime]


def _iso(value: Union[DateLike, str]) -> str:
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return value.isoformat()
    return value


def _contract_type(option_type: Optional[OptionType]) -> Optional[str]:
    return OptionType(option_type).value if option_type is not None else None


# ---------------------------------------------------------------------------
# By components
# ---------------------------------------------------------------------------

def get_contract_by_components(
    service: OptionsService,
    underlying: str,
    expiration_date: DateLike,
    option_type: OptionType,
    strike: StrikeLike,
) -> PolygonResponse[OptionsContract]:
    """Contract details for the contract described by its components.

    Example:
        >>> get_contract_by_components(service, "UBER", date(2022, 1, 21), OptionType.CALL, 50)
        # requests /v3/reference/options/contracts/O:UBER220121C00050000
    """
    ticker = OptionTicker(underlying, expiration_date, option_type, strike)
    return get_contract_details_for(service, ticker)


def get_snapshot_by_components(
    service: OptionsService,
    underlying: str,
    expiration_date: DateLike,
    option_type: OptionType,
    strike: StrikeLike,
) -> PolygonResponse[OptionSnapshot]:
    ticker = OptionTicker(underlying, expiration_date, option_type, strike)
    return get_snapshot_for(service, ticker)


def get_last_trade_by_components(
    service: OptionsService,
    underlying: str,
    expiration_date: DateLike,
    option_type: OptionType,
    strike: StrikeLike,
) -> PolygonResponse[OptionTrade]:
    ticker = OptionTicker(underlying, expiration_date, option_type, strike)
    return get_last_trade_for(service, ticker)


def get_bars_by_components(
    service: OptionsService,
    underlying: str,
    expiration_date: DateLike,
    option_type: OptionType,
    strike: StrikeLike,
    multiplier: int,
    timespan: AggregateInterval,
    from_date: Union[DateLike, str],
    to_date: Union[DateLike, str],
    adjusted: Optional[bool] = None,
    sort: Optional[SortOrder] = None,
    limit: Optional[int] = None,
) -> PolygonResponse[List[OptionBar]]:
    ticker = OptionTicker(underlying, expiration_date, option_type, strike)
    return get_bars_for(
        service, ticker, multiplier, timespan, from_date, to_date,
        adjusted=adjusted, sort=sort, limit=limit,
    )


# ---------------------------------------------------------------------------
# By OptionTicker
# ---------------------------------------------------------------------------

def get_contract_details_for(
    service: OptionsService, ticker: OptionTicker, as_of: Optional[Union[DateLike, str]] = None
) -> PolygonResponse[OptionsContract]:
    return service.get_contract_details(GetContractDetailsRequest(
        options_ticker=str(ticker),
        as_of=_iso(as_of) if as_of is not None else None,
    ))


def get_snapshot_for(service: OptionsService, ticker: OptionTicker) -> PolygonResponse[OptionSnapshot]:
    """Snapshot addressed by the ticker's underlying and its unprefixed contract."""
    return service.get_snapshot(GetSnapshotRequest(
        underlying_asset=ticker.underlying,
        option_contract=ticker.contract,
    ))


def get_last_trade_for(service: OptionsService, ticker: OptionTicker) -> PolygonResponse[OptionTrade]:
    return service.get_last_trade(GetLastTradeRequest(options_ticker=str(ticker)))


def get_quotes_for(
    service: OptionsService,
    ticker: OptionTicker,
    timestamp: Optional[str] = None,
    timestamp_lt: Optional[str] = None,
    timestamp_lte: Optional[str] = None,
    timestamp_gt: Optional[str] = None,
    timestamp_gte: Optional[str] = None,
    order: Optional[str] = None,
    limit: Optional[int] = None,
    sort: Optional[str] = None,
) -> PolygonResponse[List[OptionQuote]]:
    return service.get_quotes(GetQuotesRequest(
        options_ticker=str(ticker),
        timestamp=timestamp,
        timestamp_lt=timestamp_lt,
        timestamp_lte=timestamp_lte,
        timestamp_gt=timestamp_gt,
        timestamp_gte=timestamp_gte,
        order=order,
        limit=limit,
        sort=sort,
    ))


def get_trades_for(
    service: OptionsService,
    ticker: OptionTicker,
    timestamp: Optional[str] = None,
    timestamp_lt: Optional[str] = None,
    timestamp_lte: Optional[str] = None,
    timestamp_gt: Optional[str] = None,
    timestamp_gte: Optional[str] = None,
    order: Optional[str] = None,
    limit: Optional[int] = None,
    sort: Optional[str] = None,
) -> PolygonResponse[List[OptionTradeV3]]:
    return service.get_trades(GetTradesRequest(
        options_ticker=str(ticker),
        timestamp=timestamp,
        timestamp_lt=timestamp_lt,
        timestamp_lte=timestamp_lte,
        timestamp_gt=timestamp_gt,
        timestamp_gte=timestamp_gte,
        order=order,
        limit=limit,
        sort=sort,
    ))


def get_bars_for(
    service: OptionsService,
    ticker: OptionTicker,
    multiplier: int,
    timespan: AggregateInterval,
    from_date: Union[DateLike, str],
    to_date: Union[DateLike, str],
    adjusted: Optional[bool] = None,
    sort: Optional[SortOrder] = None,
    limit: Optional[int] = None,
) -> PolygonResponse[List[OptionBar]]:
    return service.get_bars(GetBarsRequest(
        options_ticker=str(ticker),
        multiplier=multiplier,
        timespan=timespan,
        from_date=_iso(from_date),
        to_date=_iso(to_date),
        adjusted=adjusted,
        sort=sort,
        limit=limit,
    ))


def get_daily_open_close_for(
    service: OptionsService, ticker: OptionTicker, on: Union[DateLike, str]
) -> OptionDailyOpenClose:
    return service.get_daily_open_close(GetDailyOpenCloseRequest(
        options_ticker=str(ticker), date=_iso(on)
    ))


def get_previous_day_bar_for(
    service: OptionsService, ticker: OptionTicker, adjusted: Optional[bool] = None
) -> PolygonResponse[List[OptionBar]]:
    return service.get_previous_day_bar(GetPreviousDayBarRequest(
        options_ticker=str(ticker), adjusted=adjusted
    ))


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------

def get_available_strikes(
    service: OptionsService,
    underlying: str,
    option_type: Optional[OptionType] = None,
    expiration_date_gte: Optional[Union[DateLike, str]] = None,
    expiration_date_lte: Optional[Union[DateLike, str]] = None,
) -> List[float]:
    """Distinct strikes listed for an underlying, ascending.

    Only the first page of the chain snapshot (up to 1000 contracts) is scanned.

    Args:
        service: OptionsService to query
        underlying: Underlying symbol (e.g. "SPY")
        option_type: Restrict to calls or puts
        expiration_date_gte: Earliest expiration to include
        expiration_date_lte: Latest expiration to include

    Returns:
        Sorted list of unique strike prices (empty if nothing matched)
    """
    response = service.get_chain_snapshot(GetChainSnapshotRequest(
        underlying_asset=underlying,
        contract_type=_contract_type(option_type),
        expiration_date_gte=_iso(expiration_date_gte) if expiration_date_gte is not None else None,
        expiration_date_lte=_iso(expiration_date_lte) if expiration_date_lte is not None else None,
        limit=DISCOVERY_LIMIT,
        sort="strike_price",
        order="asc",
    ))

    strikes = {
        snapshot.details.strike_price
        for snapshot in response.results or []
        if snapshot.details is not None and snapshot.details.strike_price is not None
    }
    logger.debug("Found %d strikes for %s", len(strikes), underlying)
    return sorted(strikes)


def get_expiration_dates(
    service: OptionsService,
    underlying: str,
    option_type: Optional[OptionType] = None,
    strike_price: Optional[StrikeLike] = None,
) -> List[date]:
    """Distinct expiration dates listed for an underlying, ascending.

    Only the first page of the chain snapshot (up to 1000 contracts) is scanned.
    """
    response = service.get_chain_snapshot(GetChainSnapshotRequest(
        underlying_asset=underlying,
        strike_price=normalize_strike(strike_price) if strike_price is not None else None,
        contract_type=_contract_type(option_type),
        limit=DISCOVERY_LIMIT,
        sort="expiration_date",
        order="asc",
    ))

    dates = set()
    for snapshot in response.results or []:
        if snapshot.details is None or not snapshot.details.expiration_date:
            continue
        try:
            dates.add(date.fromisoformat(snapshot.details.expiration_date))
        except ValueError:
            logger.warning(
                "Skipping unparseable expiration date %r for %s",
                snapshot.details.expiration_date, snapshot.details.ticker
            )
    return sorted(dates)
