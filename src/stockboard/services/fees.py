"""
Taiwan brokerage fee and securities transaction tax rules.

All amounts are floored to whole NT dollars. Arithmetic is done in binary
floating point, price x quantity first and then x rate, so results match the
amounts brokers and the trade log already hold.
"""

import math
from typing import Optional, Union

from stockboard.core.exceptions import ValidationError
from stockboard.domain.models import TradeDirection
from stockboard.domain.views import TradingCosts

FEE_RATE = 0.001425  # 0.1425%
TAX_RATE = 0.003  # 0.3%, sell side only
MIN_FEE = 20

UserAmount = Optional[Union[float, int, str]]


def brokerage_fee(price: float, quantity: int, rate: Optional[float] = None) -> int:
    """Brokerage fee for either direction: floor(amount x rate), at least MIN_FEE."""
    amount = price * quantity
    raw_fee = amount * (rate or FEE_RATE)
    return max(math.floor(raw_fee), MIN_FEE)


def transaction_tax(
    price: float,
    quantity: int,
    direction: TradeDirection,
    rate: Optional[float] = None,
) -> int:
    """Securities transaction tax: floor(amount x rate) on SELL, 0 on BUY."""
    if direction != TradeDirection.SELL:
        return 0
    amount = price * quantity
    return math.floor(amount * (rate or TAX_RATE))


def trading_costs(price: float, quantity: int, direction: TradeDirection) -> TradingCosts:
    """Default fee and tax for a trade plus its net cash amount."""
    fee = brokerage_fee(price, quantity)
    tax = transaction_tax(price, quantity, direction)
    return TradingCosts(fee=fee, tax=tax, total=_net_amount(price, quantity, direction, fee, tax))


def estimate_sell_costs(price: float, quantity: int) -> TradingCosts:
    """Fee and tax for liquidating ``quantity`` shares at ``price``."""
    return trading_costs(price, quantity, TradeDirection.SELL)


def resolve_trade_costs(
    price: float,
    quantity: int,
    direction: TradeDirection,
    user_fee: UserAmount = None,
    user_tax: UserAmount = None,
) -> TradingCosts:
    """
    Fee and tax to record for a trade.

    A user-entered value wins when present and non-empty; otherwise the
    computed default is used.
    """
    defaults = trading_costs(price, quantity, direction)
    fee = _parse_override(user_fee, "fee")
    tax = _parse_override(user_tax, "tax")
    fee = defaults.fee if fee is None else fee
    tax = defaults.tax if tax is None else tax
    return TradingCosts(fee=fee, tax=tax, total=_net_amount(price, quantity, direction, fee, tax))


def _net_amount(
    price: float,
    quantity: int,
    direction: TradeDirection,
    fee: float,
    tax: float,
) -> float:
    amount = price * quantity
    if direction == TradeDirection.BUY:
        return amount + fee
    return amount - fee - tax


def _parse_override(value: UserAmount, label: str) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if value == "":
            return None
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {label}: {value!r}")
    if not math.isfinite(parsed):
        raise ValidationError(f"{label.capitalize()} must be a finite number")
    if parsed < 0:
        raise ValidationError(f"{label.capitalize()} cannot be negative")
    return parsed
