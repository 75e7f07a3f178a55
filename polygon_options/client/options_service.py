"""Typed access to the Polygon.io options endpoints.

Every method validates its request object, issues one GET through
PolygonHttpClient and converts the JSON body into response dataclasses.
"""

import logging
from typing import List

from ..models.responses import (
    OptionBar,
    OptionDailyOpenClose,
    OptionQuote,
    OptionsContract,
    OptionSnapshot,
    OptionTrade,
    OptionTradeV3,
    PolygonResponse,
    list_of,
)
from .http import PolygonHttpClient
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
from .validators import validate_request

logger = logging.getLogger("polygon_options.options_service")


class OptionsService:
    """Options market data: contracts, snapshots, trades, quotes and bars."""

    def __init__(self, http_client: PolygonHttpClient):
        self.http = http_client

    def get_contract_details(
        self, request: GetContractDetailsRequest
    ) -> PolygonResponse[OptionsContract]:
        """Reference data for one contract (type, style, expiration, strike)."""
        validate_request(request)
        data = self.http.get_json(
            f"/v3/reference/options/contracts/{request.options_ticker}",
            request.query_params(),
        )
        return PolygonResponse.from_dict(data, OptionsContract.from_dict)

    def get_snapshot(self, request: GetSnapshotRequest) -> PolygonResponse[OptionSnapshot]:
        """Snapshot of one contract: day bar, greeks, IV, last quote/trade, underlying.

        Args:
            request: underlying_asset (e.g. "SPY") and option_contract, the
                ticker without its 'O:' prefix (e.g. "SPY251219C00650000")
        """
        validate_request(request)
        data = self.http.get_json(
            f"/v3/snapshot/options/{request.underlying_asset}/{request.option_contract}",
            request.query_params(),
        )
        return PolygonResponse.from_dict(data, OptionSnapshot.from_dict)

    def get_chain_snapshot(
        self, request: GetChainSnapshotRequest
    ) -> PolygonResponse[List[OptionSnapshot]]:
        """Snapshots of every contract on an underlying, optionally filtered.

        Use next_url on the response (or request.cursor) to page through large chains.
        """
        validate_request(request)
        data = self.http.get_json(
            f"/v3/snapshot/options/{request.underlying_asset}",
            request.query_params(),
        )
        response = PolygonResponse.from_dict(data, list_of(OptionSnapshot.from_dict))
        logger.info(
            "Fetched %d contracts for %s",
            len(response.results or []), request.underlying_asset
        )
        return response

    def get_last_trade(self, request: GetLastTradeRequest) -> PolygonResponse[OptionTrade]:
        validate_request(request)
        data = self.http.get_json(
            f"/v2/last/trade/{request.options_ticker}", request.query_params()
        )
        return PolygonResponse.from_dict(data, OptionTrade.from_dict)

    def get_quotes(self, request: GetQuotesRequest) -> PolygonResponse[List[OptionQuote]]:
        validate_request(request)
        data = self.http.get_json(
            f"/v3/quotes/{request.options_ticker}", request.query_params()
        )
        return PolygonResponse.from_dict(data, list_of(OptionQuote.from_dict))

    def get_trades(self, request: GetTradesRequest) -> PolygonResponse[List[OptionTradeV3]]:
        validate_request(request)
        data = self.http.get_json(
            f"/v3/trades/{request.options_ticker}", request.query_params()
        )
        return PolygonResponse.from_dict(data, list_of(OptionTradeV3.from_dict))

    def get_bars(self, request: GetBarsRequest) -> PolygonResponse[List[OptionBar]]:
        """Aggregate bars for a contract over [from_date, to_date]."""
        validate_request(request)
        path = (
            f"/v2/aggs/ticker/{request.options_ticker}/range/"
            f"{request.multiplier}/{request.timespan.value}/"
            f"{request.from_date}/{request.to_date}"
        )
        data = self.http.get_json(path, request.query_params())
        return PolygonResponse.from_dict(data, list_of(OptionBar.from_dict))

    def get_previous_day_bar(
        self, request: GetPreviousDayBarRequest
    ) -> PolygonResponse[List[OptionBar]]:
        validate_request(request)
        data = self.http.get_json(
            f"/v2/aggs/ticker/{request.options_ticker}/prev", request.query_params()
        )
        return PolygonResponse.from_dict(data, list_of(OptionBar.from_dict))

    def get_daily_open_close(self, request: GetDailyOpenCloseRequest) -> OptionDailyOpenClose:
        """Open, close, pre-market and after-hours prices for one date.

        This endpoint answers with a flat object rather than the results envelope.
        """
        validate_request(request)
        data = self.http.get_json(
            f"/v1/open-close/{request.options_ticker}/{request.date}",
            request.query_params(),
        )
        return OptionDailyOpenClose.from_dict(data)
