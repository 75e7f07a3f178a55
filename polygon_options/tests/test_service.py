"""Unit tests for OptionsService endpoint wiring."""

import pytest
from decimal import Decimal

from polygon_options.client.options_requests import (
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
from polygon_options.models.responses import (
    AggregateInterval,
    OptionBar,
    OptionDailyOpenClose,
    OptionQuote,
    OptionsContract,
    OptionSnapshot,
    OptionTrade,
    OptionTradeV3,
    SortOrder,
)
from polygon_options.utils.error_handling import PolygonValidationError

TICKER = "O:SPY251219C00650000"
BASE = "https://api.test"


class TestOptionsService:
    """Test suite for each endpoint's path, params and parsing."""

    def test_get_contract_details(self, service, fake_session):
        fake_session.add({'status': 'OK', 'request_id': 'r1',
                          'results': {'ticker': TICKER, 'strike_price': 650}})

        response = service.get_contract_details(GetContractDetailsRequest(TICKER, as_of="2025-01-02"))

        assert fake_session.last_call['url'] == f"{BASE}/v3/reference/options/contracts/{TICKER}"
        assert fake_session.last_call['params'] == {'as_of': '2025-01-02'}
        assert isinstance(response.results, OptionsContract)
        assert response.results.strike_price == 650
        assert response.request_id == 'r1'

    def test_get_snapshot(self, service, fake_session):
        fake_session.add({'status': 'OK', 'results': {'open_interest': 7}})

        response = service.get_snapshot(GetSnapshotRequest("SPY", "SPY251219C00650000"))

        assert fake_session.last_call['url'] == f"{BASE}/v3/snapshot/options/SPY/SPY251219C00650000"
        assert isinstance(response.results, OptionSnapshot)
        assert response.results.open_interest == 7

    def test_get_chain_snapshot(self, service, fake_session):
        fake_session.add({'status': 'OK', 'results': [{'open_interest': 1}, {'open_interest': 2}],
                          'next_url': f"{BASE}/v3/snapshot/options/SPY?cursor=abc"})

        response = service.get_chain_snapshot(GetChainSnapshotRequest(
            "SPY", strike_price=Decimal("650"), contract_type="call",
            expiration_date_gte="2025-12-01", limit=50, order="asc", sort="strike_price",
        ))

        call = fake_session.last_call
        assert call['url'] == f"{BASE}/v3/snapshot/options/SPY"
        assert call['params'] == {
            'strike_price': Decimal("650"),
            'contract_type': 'call',
            'expiration_date.gte': '2025-12-01',
            'limit': 50,
            'order': 'asc',
            'sort': 'strike_price',
        }
        assert [s.open_interest for s in response.results] == [1, 2]
        assert response.next_url.endswith("cursor=abc")

    def test_get_last_trade(self, service, fake_session):
        fake_session.add({'status': 'OK', 'results': {'T': TICKER, 'p': 5.5}})

        response = service.get_last_trade(GetLastTradeRequest(TICKER))

        assert fake_session.last_call['url'] == f"{BASE}/v2/last/trade/{TICKER}"
        assert isinstance(response.results, OptionTrade)
        assert response.results.price == 5.5

    def test_get_quotes(self, service, fake_session):
        fake_session.add({'status': 'OK', 'results': [{'bid_price': 1.0, 'ask_price': 1.2}]})

        response = service.get_quotes(GetQuotesRequest(TICKER, timestamp_gte="2025-01-02", limit=1))

        assert fake_session.last_call['url'] == f"{BASE}/v3/quotes/{TICKER}"
        assert fake_session.last_call['params'] == {'timestamp.gte': '2025-01-02', 'limit': 1}
        assert isinstance(response.results[0], OptionQuote)

    def test_get_trades(self, service, fake_session):
        fake_session.add({'status': 'OK', 'results': [{'price': 2.0, 'size': 3}]})

        response = service.get_trades(GetTradesRequest(TICKER))

        assert fake_session.last_call['url'] == f"{BASE}/v3/trades/{TICKER}"
        assert isinstance(response.results[0], OptionTradeV3)
        assert response.results[0].size == 3

    def test_get_bars(self, service, fake_session):
        fake_session.add({'status': 'OK', 'ticker': TICKER, 'adjusted': True, 'resultsCount': 1,
                          'results': [{'o': 1, 'c': 2, 't': 1700000000000}]})

        response = service.get_bars(GetBarsRequest(
            TICKER, 5, AggregateInterval.MINUTE, "2025-01-01", "2025-01-31",
            adjusted=False, sort=SortOrder.ASCENDING, limit=100,
        ))

        call = fake_session.last_call
        assert call['url'] == f"{BASE}/v2/aggs/ticker/{TICKER}/range/5/minute/2025-01-01/2025-01-31"
        assert call['params'] == {'adjusted': 'false', 'sort': 'asc', 'limit': 100}
        assert isinstance(response.results[0], OptionBar)
        assert response.results_count == 1

    def test_get_previous_day_bar(self, service, fake_session):
        fake_session.add({'status': 'OK', 'results': [{'o': 1, 'c': 2}]})

        response = service.get_previous_day_bar(GetPreviousDayBarRequest(TICKER, adjusted=True))

        assert fake_session.last_call['url'] == f"{BASE}/v2/aggs/ticker/{TICKER}/prev"
        assert fake_session.last_call['params'] == {'adjusted': 'true'}
        assert response.results[0].close == 2

    def test_get_daily_open_close(self, service, fake_session):
        fake_session.add({'status': 'OK', 'symbol': TICKER, 'from': '2025-01-09', 'close': 3.0})

        result = service.get_daily_open_close(GetDailyOpenCloseRequest(TICKER, "2025-01-09"))

        assert fake_session.last_call['url'] == f"{BASE}/v1/open-close/{TICKER}/2025-01-09"
        assert isinstance(result, OptionDailyOpenClose)
        assert result.close == 3.0

    def test_invalid_request_never_sent(self, service, fake_session):
        """Test validation happens before any HTTP call."""
        with pytest.raises(PolygonValidationError):
            service.get_trades(GetTradesRequest("O:NOPE"))
        assert fake_session.calls == []
