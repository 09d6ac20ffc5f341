"""
Unit tests for LedgerService.

Tests cover:
- Recording trades with default and user-entered fee/tax
- Validation errors (ticker, price, quantity, direction, oversell)
- Delete, lookup and listing
- Holding quantities
"""

import pytest
from unittest.mock import MagicMock

from stockboard.core.exceptions import (
    InsufficientSharesError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from stockboard.domain.models import TradeDirection
from stockboard.services import LedgerService, TradeCreate

from tests.conftest import taipei_datetime


def buy(ticker="2330", quantity=1000, price=500.0, **kwargs) -> TradeCreate:
    return TradeCreate(ticker=ticker, direction=TradeDirection.BUY, price=price, quantity=quantity, **kwargs)


def sell(ticker="2330", quantity=1000, price=520.0, **kwargs) -> TradeCreate:
    return TradeCreate(ticker=ticker, direction=TradeDirection.SELL, price=price, quantity=quantity, **kwargs)


# =============================================================================
# ADD TRADE TESTS
# =============================================================================


class TestAddTrade:
    """Tests for recording trades."""

    def test_buy_gets_default_fee_and_no_tax(self, ledger_service: LedgerService):
        """
        GIVEN a BUY of 1000 shares at 500 with no fee entered
        WHEN I add the trade
        THEN fee = floor(500000 x 0.1425%) = 712 and tax = 0
        """
        trade = ledger_service.add_trade(buy())

        assert trade.id is not None
        assert trade.fee == 712
        assert trade.tax == 0

    def test_sell_gets_default_fee_and_tax(self, ledger_service: LedgerService):
        ledger_service.add_trade(buy())

        trade = ledger_service.add_trade(sell())

        assert trade.fee == 741
        assert trade.tax == 1560

    def test_user_fee_overrides_default(self, ledger_service: LedgerService):
        trade = ledger_service.add_trade(buy(fee=20, tax=""))

        assert trade.fee == 20
        assert trade.tax == 0

    def test_ticker_is_upper_cased(self, ledger_service: LedgerService):
        trade = ledger_service.add_trade(buy(ticker="00631l"))

        assert trade.ticker == "00631L"

    def test_traded_at_defaults_to_now(self, ledger_service: LedgerService, fixed_now):
        trade = ledger_service.add_trade(buy())

        assert trade.traded_at == fixed_now
        assert trade.created_at == fixed_now
        assert trade.updated_at == fixed_now

    def test_explicit_traded_at_is_kept(self, ledger_service: LedgerService):
        when = taipei_datetime(2024, 1, 10, 9, 30)

        trade = ledger_service.add_trade(buy(traded_at=when))

        assert trade.traded_at == when

    def test_direction_accepts_string(self, ledger_service: LedgerService):
        trade = ledger_service.add_trade(
            TradeCreate(ticker="2330", direction="BUY", price=500, quantity=1)
        )

        assert trade.direction == TradeDirection.BUY


class TestAddTradeValidation:
    """Tests for input validation before any write."""

    @pytest.mark.parametrize("ticker", ["", "23-30", "台積電", "23.30"])
    def test_invalid_ticker_rejected(self, ledger_service: LedgerService, ticker):
        with pytest.raises(ValidationError):
            ledger_service.add_trade(buy(ticker=ticker))

    @pytest.mark.parametrize("price", [0, -1, -0.5])
    def test_non_positive_price_rejected(self, ledger_service: LedgerService, price):
        with pytest.raises(ValidationError):
            ledger_service.add_trade(buy(price=price))

    @pytest.mark.parametrize("price", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_price_rejected(self, ledger_service: LedgerService, price):
        with pytest.raises(ValidationError, match="finite"):
            ledger_service.add_trade(buy(price=price))

    def test_infinite_fee_rejected(self, ledger_service: LedgerService):
        """
        GIVEN a fee entered as "inf"
        WHEN the trade is recorded
        THEN it is rejected and nothing is stored
        """
        with pytest.raises(ValidationError):
            ledger_service.add_trade(buy(fee="inf"))

        assert ledger_service.list_trades() == []

    def test_price_with_three_decimals_rejected(self, ledger_service: LedgerService):
        with pytest.raises(ValidationError, match="two decimal"):
            ledger_service.add_trade(buy(price=10.005))

    def test_price_with_two_decimals_accepted(self, ledger_service: LedgerService):
        trade = ledger_service.add_trade(buy(price=33.35))

        assert trade.price == 33.35

    @pytest.mark.parametrize("quantity", [0, -100, 1.5, True])
    def test_invalid_quantity_rejected(self, ledger_service: LedgerService, quantity):
        with pytest.raises(ValidationError):
            ledger_service.add_trade(buy(quantity=quantity))

    def test_invalid_direction_rejected(self, ledger_service: LedgerService):
        with pytest.raises(ValidationError):
            ledger_service.add_trade(
                TradeCreate(ticker="2330", direction="HOLD", price=500, quantity=1)
            )

    def test_negative_fee_rejected(self, ledger_service: LedgerService):
        with pytest.raises(ValidationError):
            ledger_service.add_trade(buy(fee=-5))

    def test_oversell_rejected(self, ledger_service: LedgerService):
        """
        GIVEN 1000 shares held
        WHEN I try to sell 1500
        THEN InsufficientSharesError is raised and nothing is written
        """
        ledger_service.add_trade(buy())

        with pytest.raises(InsufficientSharesError) as exc_info:
            ledger_service.add_trade(sell(quantity=1500))

        assert exc_info.value.code == "INSUFFICIENT_SHARES"
        assert len(ledger_service.list_trades()) == 1

    def test_sell_without_holding_rejected(self, ledger_service: LedgerService):
        with pytest.raises(InsufficientSharesError):
            ledger_service.add_trade(sell(ticker="2317", quantity=1))

    def test_validation_happens_before_repository_call(self, clock):
        repo = MagicMock()
        service = LedgerService(repo, clock)

        with pytest.raises(ValidationError):
            service.add_trade(buy(price=0))

        repo.create.assert_not_called()

    def test_storage_error_propagates(self, clock):
        repo = MagicMock()
        repo.create.side_effect = StorageError("Failed to record trade")
        service = LedgerService(repo, clock)

        with pytest.raises(StorageError):
            service.add_trade(buy())


# =============================================================================
# QUERY / DELETE TESTS
# =============================================================================


class TestLedgerQueries:
    """Tests for listing, lookup, deletion and holdings."""

    def test_list_trades_ordered_by_traded_at(self, ledger_service: LedgerService):
        ledger_service.add_trade(buy(traded_at=taipei_datetime(2024, 1, 12)))
        ledger_service.add_trade(buy(ticker="2317", price=100, traded_at=taipei_datetime(2024, 1, 10)))
        ledger_service.add_trade(buy(ticker="0050", price=150, traded_at=taipei_datetime(2024, 1, 11)))

        trades = ledger_service.list_trades()

        assert [t.ticker for t in trades] == ["2317", "0050", "2330"]

    def test_list_trades_by_ticker(self, ledger_service: LedgerService):
        ledger_service.add_trade(buy())
        ledger_service.add_trade(buy(ticker="2317", price=100))

        trades = ledger_service.list_trades_by_ticker("2317")

        assert [t.ticker for t in trades] == ["2317"]

    def test_tickers_in_first_trade_order(self, ledger_service: LedgerService):
        ledger_service.add_trade(buy(ticker="2317", price=100, traded_at=taipei_datetime(2024, 1, 10)))
        ledger_service.add_trade(buy(traded_at=taipei_datetime(2024, 1, 11)))
        ledger_service.add_trade(buy(ticker="2317", price=101, traded_at=taipei_datetime(2024, 1, 12)))

        assert ledger_service.tickers() == ["2317", "2330"]

    def test_holding_quantity(self, ledger_service: LedgerService):
        ledger_service.add_trade(buy(quantity=1000))
        ledger_service.add_trade(buy(quantity=500))
        ledger_service.add_trade(sell(quantity=300))

        assert ledger_service.holding_quantity("2330") == 1200

    def test_get_missing_trade_raises(self, ledger_service: LedgerService):
        with pytest.raises(NotFoundError):
            ledger_service.get_trade(999)

    def test_delete_trade(self, ledger_service: LedgerService):
        trade = ledger_service.add_trade(buy())

        ledger_service.delete_trade(trade.id)

        assert ledger_service.list_trades() == []

    def test_delete_missing_trade_raises(self, ledger_service: LedgerService):
        with pytest.raises(NotFoundError):
            ledger_service.delete_trade(42)

    def test_query_by_date_range(self, ledger_service: LedgerService):
        ledger_service.add_trade(buy(traded_at=taipei_datetime(2024, 1, 10)))
        ledger_service.add_trade(buy(traded_at=taipei_datetime(2024, 1, 12)))

        trades = ledger_service.query_trades(
            start_date=taipei_datetime(2024, 1, 11, 0, 0),
            end_date=taipei_datetime(2024, 1, 13, 0, 0),
        )

        assert len(trades) == 1
        assert trades[0].traded_at == taipei_datetime(2024, 1, 12)
