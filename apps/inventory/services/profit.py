"""Profit calculator - pure functions over an item snapshot."""

from decimal import Decimal


ZERO = Decimal('0.00')


def net_cost(item) -> Decimal:
    """
    Effective cost basis: purchase price minus point discount.

    A point larger than the purchase price yields a negative cost; it is
    not clamped.
    """
    return item.purchase_price - item.point


def profit(item) -> Decimal:
    """Realized profit, or 0 while no sale price is recorded."""
    if item.sale_price is None:
        return ZERO
    return item.sale_price - net_cost(item)


def point_profit(item) -> Decimal:
    """Profit ignoring the point deduction, or 0 while unsold."""
    if item.sale_price is None:
        return ZERO
    return item.sale_price - item.purchase_price
