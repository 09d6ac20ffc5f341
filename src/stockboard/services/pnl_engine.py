"""Position and profit/loss engine over the trade ledger."""

from typing import Mapping, Optional

from stockboard.domain.models import TradeDirection, TradeRecord
from stockboard.domain.views import QuoteSnapshot, StockPosition, TotalPnL
from stockboard.services.fees import estimate_sell_costs


class PnlEngine:
    """
    Folds an ordered trade ledger plus current quotes into positions.

    Pure: output depends only on the arguments. Trades are applied in the
    order given because the weighted average cost is path-dependent.
    """

    def __init__(self, include_buy_fee_in_cost: bool = True):
        self._include_buy_fee = include_buy_fee_in_cost

    def compute_positions(
        self,
        trades: list[TradeRecord],
        quotes: Mapping[str, QuoteSnapshot],
    ) -> list[StockPosition]:
        """Per-ticker positions, in order of each ticker's first trade."""
        positions: dict[str, StockPosition] = {}

        for trade in trades:
            position = positions.get(trade.ticker)
            if position is None:
                position = StockPosition(ticker=trade.ticker, stock_name=trade.ticker)
                positions[trade.ticker] = position

            position.total_fees += trade.fee
            position.total_tax += trade.tax

            if trade.direction == TradeDirection.BUY:
                self._apply_buy(position, trade)
            else:
                self._apply_sell(position, trade)

        for position in positions.values():
            self._finalize(position, quotes.get(position.ticker))

        return list(positions.values())

    def compute_total_pnl(self, positions: list[StockPosition]) -> TotalPnL:
        """Field-wise sum over positions."""
        total = TotalPnL()
        for p in positions:
            total.total_realized_pnl += p.realized_pnl
            total.total_unrealized_pnl += p.unrealized_pnl
            total.total_investment += p.total_buy_amount
            total.current_market_value += p.market_value
            total.total_fees += p.total_fees
            total.total_tax += p.total_tax
        total.total_pnl = total.total_realized_pnl + total.total_unrealized_pnl
        return total

    def _apply_buy(self, position: StockPosition, trade: TradeRecord) -> None:
        amount = trade.price * trade.quantity
        cost = amount + trade.fee if self._include_buy_fee else amount

        if position.total_buy_quantity > 0:
            position.avg_buy_price = (
                position.total_buy_quantity * position.avg_buy_price + cost
            ) / (position.total_buy_quantity + trade.quantity)
        else:
            position.avg_buy_price = cost / trade.quantity

        position.total_buy_quantity += trade.quantity
        position.total_buy_amount += amount + trade.fee

    def _apply_sell(self, position: StockPosition, trade: TradeRecord) -> None:
        amount = trade.price * trade.quantity
        position.total_sell_quantity += trade.quantity
        position.total_sell_amount += amount - trade.fee - trade.tax

        sold_cost = position.avg_buy_price * trade.quantity
        position.total_sold_cost += sold_cost
        position.realized_pnl += amount - sold_cost - trade.fee - trade.tax

    @staticmethod
    def _finalize(position: StockPosition, quote: Optional[QuoteSnapshot]) -> None:
        if quote is not None:
            if quote.is_price_available:
                position.current_price = quote.current_price
            if quote.name and quote.name != position.ticker:
                position.stock_name = quote.name

        position.holding_quantity = position.total_buy_quantity - position.total_sell_quantity

        if position.holding_quantity > 0:
            estimate = estimate_sell_costs(position.current_price, position.holding_quantity)
            position.market_value = position.current_price * position.holding_quantity
            cost_value = position.avg_buy_price * position.holding_quantity
            position.unrealized_pnl = (
                position.market_value - cost_value - estimate.fee - estimate.tax
            )
        else:
            position.unrealized_pnl = 0.0
            position.market_value = 0.0
