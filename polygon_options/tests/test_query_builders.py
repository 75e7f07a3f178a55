"""Unit tests for fluent API query builders."""

import pytest
from datetime import date
from decimal import Decimal

from polygon_options.builders.query_builders import (
    ChainSnapshotQueryBuilder,
    ContractDetailsQueryBuilder,
    DailyOpenCloseQueryBuilder,
    LastTradeQueryBuilder,
    OptionSnapshotQueryBuilder,
    PreviousDayBarQueryBuilder,
)
from polygon_options.models.option_ticker import OptionTicker, OptionType
from polygon_options.utils.error_handling import (
    IncompleteBuilderError,
    NegativeOrOversizedStrikeError,
    PolygonValidationError,
)

BASE = "https://api.test"


class TestOptionSnapshotQueryBuilder:
    """Test suite for the single-contract snapshot builder."""

    def test_for_ticker_splits_symbol(self, service):
        """Test a full symbol is split into underlying and contract."""
        request = OptionSnapshotQueryBuilder(service, "O:SPY251219C00650000").build_request()
        assert request.underlying_asset == "SPY"
        assert request.option_contract == "251219C00650000"

    def test_explicit_parts(self, service, fake_session):
        """Test for_underlying/with_contract and execute."""
        fake_session.add({'status': 'OK', 'results': {'open_interest': 3}})

        response = (OptionSnapshotQueryBuilder(service)
                    .for_underlying("SPY")
                    .with_contract("SPY251219C00650000")
                    .execute())

        assert fake_session.last_call['url'] == f"{BASE}/v3/snapshot/options/SPY/SPY251219C00650000"
        assert response.results.open_interest == 3

    def test_unsplittable_ticker_keeps_contract(self, service):
        """Test the fallback leaves the underlying to be set separately."""
        builder = OptionSnapshotQueryBuilder(service).for_ticker("O:WEIRDCONTRACTID1")

        with pytest.raises(IncompleteBuilderError) as exc_info:
            builder.build_request()
        assert exc_info.value.field == "underlying_asset"

        request = builder.for_underlying("SPY").build_request()
        assert request.option_contract == "WEIRDCONTRACTID1"

    def test_missing_contract(self, service, fake_session):
        """Test execute fails without a contract and sends nothing."""
        with pytest.raises(IncompleteBuilderError) as exc_info:
            OptionSnapshotQueryBuilder(service).for_underlying("SPY").execute()
        assert exc_info.value.field == "option_contract"
        assert fake_session.calls == []


class TestContractDetailsQueryBuilder:
    """Test suite for the contract details builder."""

    def test_for_components(self, service, fake_session):
        fake_session.add({'status': 'OK', 'results': {}})

        (ContractDetailsQueryBuilder(service)
         .for_components("UBER", date(2022, 1, 21), OptionType.CALL, 50)
         .as_of(date(2022, 1, 3))
         .execute())

        call = fake_session.last_call
        assert call['url'] == f"{BASE}/v3/reference/options/contracts/O:UBER220121C00050000"
        assert call['params'] == {'as_of': '2022-01-03'}

    def test_for_ticker(self, service):
        request = ContractDetailsQueryBuilder(service).for_ticker("O:F211119P00014000").build_request()
        assert request.options_ticker == "O:F211119P00014000"
        assert request.as_of is None

    def test_missing_ticker(self, service):
        with pytest.raises(IncompleteBuilderError):
            ContractDetailsQueryBuilder(service).execute()

    def test_invalid_ticker_caught_by_validation(self, service, fake_session):
        """Test malformed tickers are rejected before sending."""
        with pytest.raises(PolygonValidationError):
            ContractDetailsQueryBuilder(service, "SPY").execute()
        assert fake_session.calls == []


class TestChainSnapshotQueryBuilder:
    """Test suite for the chain snapshot builder."""

    def test_filters(self, service, fake_session):
        fake_session.add({'status': 'OK', 'results': []})

        (ChainSnapshotQueryBuilder(service, "SPY")
         .puts_only()
         .at_strike(650)
         .expiring_between(date(2025, 12, 1), "2025-12-31")
         .limit(25)
         .sort_by("strike_price")
         .descending()
         .with_cursor("abc")
         .execute())

        call = fake_session.last_call
        assert call['url'] == f"{BASE}/v3/snapshot/options/SPY"
        assert call['params']['contract_type'] == 'put'
        assert call['params']['expiration_date.gte'] == '2025-12-01'
        assert call['params']['expiration_date.lte'] == '2025-12-31'
        assert call['params']['limit'] == 25
        assert call['params']['order'] == 'desc'
        assert call['params']['cursor'] == 'abc'

    def test_missing_underlying(self, service):
        with pytest.raises(IncompleteBuilderError):
            ChainSnapshotQueryBuilder(service).calls_only().build_request()

    @pytest.mark.parametrize("strike", ["abc", float("nan"), float("inf"), -1])
    def test_unusable_strike_rejected(self, service, fake_session, strike):
        """Test bad strikes raise a format error before any request."""
        with pytest.raises(NegativeOrOversizedStrikeError):
            ChainSnapshotQueryBuilder(service, "SPY").at_strike(strike).execute()
        assert fake_session.calls == []

    def test_strike_normalized(self, service):
        request = ChainSnapshotQueryBuilder(service, "SPY").at_strike("650.5").build_request()
        assert request.strike_price == Decimal("650.500")


class TestSingleContractBuilders:
    """Test suite for last trade, previous-day bar and daily open/close builders."""

    TICKER = "O:SPY251219C00650000"

    def test_last_trade(self, service, fake_session):
        fake_session.add({'status': 'OK', 'results': {'p': 5.5}})

        response = LastTradeQueryBuilder(service).for_ticker(self.TICKER).execute()

        assert fake_session.last_call['url'] == f"{BASE}/v2/last/trade/{self.TICKER}"
        assert response.results.price == 5.5

    def test_previous_day_bar(self, service, fake_session):
        """Test the adjusted flag reaches the query string."""
        fake_session.add({'status': 'OK', 'results': [{'o': 1, 'c': 2}]})

        response = PreviousDayBarQueryBuilder(service, self.TICKER).adjusted(False).execute()

        assert fake_session.last_call['url'] == f"{BASE}/v2/aggs/ticker/{self.TICKER}/prev"
        assert fake_session.last_call['params'] == {'adjusted': 'false'}
        assert response.results[0].close == 2

    def test_daily_open_close(self, service, fake_session):
        """Test an OptionTicker and a date object are accepted."""
        fake_session.add({'status': 'OK', 'symbol': self.TICKER, 'close': 3.0})

        result = (DailyOpenCloseQueryBuilder(service)
                  .for_ticker(OptionTicker.parse(self.TICKER))
                  .on_date(date(2025, 1, 9))
                  .execute())

        assert fake_session.last_call['url'] == f"{BASE}/v1/open-close/{self.TICKER}/2025-01-09"
        assert result.close == 3.0

    def test_daily_open_close_needs_date(self, service, fake_session):
        with pytest.raises(IncompleteBuilderError) as exc_info:
            DailyOpenCloseQueryBuilder(service, self.TICKER).execute()
        assert exc_info.value.field == "date"
        assert fake_session.calls == []

    @pytest.mark.parametrize("builder_class", [
        LastTradeQueryBuilder, PreviousDayBarQueryBuilder, DailyOpenCloseQueryBuilder,
    ])
    def test_ticker_required(self, service, builder_class):
        with pytest.raises(IncompleteBuilderError) as exc_info:
            builder_class(service).build_request()
        assert exc_info.value.field == "options_ticker"
