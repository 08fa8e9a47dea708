"""
Analytics Module
=================

Profit and sales aggregation for the dashboard.

Classes:
    AnalyticsQueries: Static methods over an in-memory list of items.

Key Features:
    - Profit summary (revenue, net cost, profit, inventory valuation)
    - Monthly sales series bucketed by sale month
    - Month-over-month percentage change

Example:
    Building the dashboard for one channel::

        from apps.analytics.analytics import AnalyticsQueries

        data = AnalyticsQueries.dashboard(owner=user, channel='ebay')
        print(f"Profit: {data['summary']['total_profit']} {data['currency']}")

Note:
    This module is read-only and doesn't modify any data. Apart from
    ``dashboard``, every method is a pure function of the items passed
    in, so it can be re-run on any subset.
"""

from decimal import Decimal

from django.conf import settings

from apps.inventory.models import ItemStatus
from apps.inventory.services import list_items, net_cost, profit, point_profit
from .exceptions import InvalidMonthsError, InvalidDateRangeError


ZERO = Decimal('0.00')


def _percent_change(current, previous):
    """Percentage change, or None when the previous value is exactly zero."""
    if previous == 0:
        return None
    return round(float((current - previous) / abs(previous) * 100), 2)


class AnalyticsQueries:
    """
    Aggregations behind the dashboard.

    Methods:
        profit_summary: Totals across all given items.
        monthly_series: Revenue and profit per sale month.
        month_over_month: Change between the two latest sale months.
        dashboard: Load the owner's items and combine the above.

    Note:
        All methods return plain dictionaries or lists, suitable for JSON
        serialization in API responses.
    """

    @staticmethod
    def profit_summary(items):
        """
        Totals across the given items.

        Args:
            items (list[Item]): Items to aggregate, any status.

        Returns:
            dict: A dictionary containing:
                - total_items (int): Number of items.
                - sold_count (int): Items with status sold.
                - waiting_count (int): Items still pending arrival.
                - inventory_count (int): Items in inventory.
                - total_revenue (Decimal): Sum of sale prices of sold items.
                - total_cost (Decimal): Sum of net cost over ALL items.
                - total_profit (Decimal): Sum of profit over sold items.
                - total_point_profit (Decimal): Sum of point profit over sold items.
                - inventory_value (Decimal): Sum of purchase price (not net
                  cost) over inventory items.
                - profit_margin (float): total_profit / total_revenue * 100,
                  0 when there is no revenue.
        """
        sold = [item for item in items if item.status == ItemStatus.SOLD]
        stocked = [item for item in items if item.status == ItemStatus.INVENTORY]

        total_revenue = sum((item.sale_price or ZERO for item in sold), ZERO)
        total_profit = sum((profit(item) for item in sold), ZERO)

        margin = 0.0
        if total_revenue:
            margin = round(float(total_profit / total_revenue * 100), 2)

        return {
            'total_items': len(items),
            'sold_count': len(sold),
            'waiting_count': sum(1 for item in items if item.status == ItemStatus.PENDING),
            'inventory_count': len(stocked),
            'total_revenue': total_revenue,
            'total_cost': sum((net_cost(item) for item in items), ZERO),
            'total_profit': total_profit,
            'total_point_profit': sum((point_profit(item) for item in sold), ZERO),
            'inventory_value': sum((item.purchase_price for item in stocked), ZERO),
            'profit_margin': margin,
        }

    @staticmethod
    def _sales_by_month(items):
        """Bucket sold items by ``YYYY-MM`` of their sale date, ascending."""
        months = {}

        for item in items:
            if item.status != ItemStatus.SOLD or item.sale_date is None:
                continue

            month_key = item.sale_date.strftime('%Y-%m')
            if month_key not in months:
                months[month_key] = {
                    'revenue': ZERO,
                    'profit': ZERO,
                    'point_profit': ZERO,
                    'sold_count': 0,
                }

            months[month_key]['revenue'] += item.sale_price or ZERO
            months[month_key]['profit'] += profit(item)
            months[month_key]['point_profit'] += point_profit(item)
            months[month_key]['sold_count'] += 1

        return sorted(months.items())

    @staticmethod
    def monthly_series(items, months=6):
        """
        Revenue and profit for the most recent months with sales.

        Only months that actually contain a sale appear; gaps are not
        zero-filled.

        Args:
            items (list[Item]): Items to aggregate; unsold ones are ignored.
            months (int, optional): How many trailing months to keep.
                Defaults to 6.

        Returns:
            list[dict]: Ascending by period, each containing:
                - period (str): Month label, e.g. '2025-01'.
                - revenue (Decimal): Sum of sale prices.
                - profit (Decimal): Sum of profit.
                - point_profit (Decimal): Sum of point profit.
                - sold_count (int): Items sold in the month.

        Raises:
            InvalidMonthsError: If months is less than 1.
        """
        if months < 1:
            raise InvalidMonthsError("months must be at least 1")

        return [
            {'period': month, **data}
            for month, data in AnalyticsQueries._sales_by_month(items)[-months:]
        ]

    @staticmethod
    def month_over_month(items):
        """
        Percentage change between the two latest months with sales.

        Returns:
            dict: A dictionary containing:
                - current_period (str | None): Latest month with sales.
                - previous_period (str | None): The month with sales before it.
                - revenue (float | None): Revenue change in percent.
                - profit (float | None): Profit change in percent.
                - point_profit (float | None): Point profit change in percent.

        Note:
            A change is None (not 0) when fewer than two months have sales
            or when the previous month's value is exactly zero. This lets
            the caller tell "no comparison" apart from "no change".
        """
        buckets = AnalyticsQueries._sales_by_month(items)

        if len(buckets) < 2:
            return {
                'current_period': buckets[-1][0] if buckets else None,
                'previous_period': None,
                'revenue': None,
                'profit': None,
                'point_profit': None,
            }

        (previous_period, previous), (current_period, current) = buckets[-2:]

        return {
            'current_period': current_period,
            'previous_period': previous_period,
            'revenue': _percent_change(current['revenue'], previous['revenue']),
            'profit': _percent_change(current['profit'], previous['profit']),
            'point_profit': _percent_change(current['point_profit'], previous['point_profit']),
        }

    @staticmethod
    def dashboard(owner, channel=None, date_from=None, date_to=None):
        """
        Full dashboard for one owner.

        Items are loaded through the inventory repository (normalized,
        owner scoped), filtered by channel and purchase date range.

        Returns:
            dict: currency, summary, monthly and month_over_month.

        Raises:
            InvalidDateRangeError: If date_from is after date_to.
        """
        if date_from and date_to and date_from > date_to:
            raise InvalidDateRangeError("date_from must not be after date_to")

        items = list_items(
            owner=owner,
            channel=channel,
            date_from=date_from,
            date_to=date_to,
        )

        return {
            'currency': settings.INVENTORY_CURRENCY,
            'summary': AnalyticsQueries.profit_summary(items),
            'monthly': AnalyticsQueries.monthly_series(items, months=settings.DASHBOARD_MONTHS),
            'month_over_month': AnalyticsQueries.month_over_month(items),
        }
