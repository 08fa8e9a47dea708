"""
Serializers for analytics app.

Input Serializers:
    DashboardQuerySerializer - Channel, period and date range parameters
    MonthlyQuerySerializer - Adds the number of trailing months

Response Serializers:
    ProfitSummarySerializer - Totals across items
    MonthlyPointSerializer - One month of the sales series
    MonthOverMonthSerializer - Percentage change between the latest months
    DashboardResponseSerializer - Everything above plus the currency
"""

from rest_framework import serializers
from datetime import date, timedelta

from apps.inventory.models import Channel


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class DashboardQuerySerializer(serializers.Serializer):
    """
    Validate dashboard filter query parameters.

    Query Parameters:
        channel (str): Only items of this channel
        period (str): Purchase month in YYYY-MM format (e.g., '2025-01')
        date_from (date): Purchase date lower bound
        date_to (date): Purchase date upper bound

    Note:
        If 'period' is provided, it takes precedence and is converted
        to date_from and date_to for the full month.
    """

    channel = serializers.ChoiceField(choices=Channel.choices, required=False)
    period = serializers.RegexField(
        regex=r'^\d{4}-(0[1-9]|1[0-2])$',
        required=False,
        allow_blank=True,
        help_text='Month period in YYYY-MM format'
    )
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)

    def validate(self, attrs):
        """Parse period into date range if provided."""
        period = attrs.pop('period', None)

        if period:
            year, month = (int(part) for part in period.split('-'))
            attrs['date_from'] = date(year, month, 1)
            if month == 12:
                attrs['date_to'] = date(year + 1, 1, 1) - timedelta(days=1)
            else:
                attrs['date_to'] = date(year, month + 1, 1) - timedelta(days=1)

        start = attrs.get('date_from')
        end = attrs.get('date_to')
        if start and end and start > end:
            raise serializers.ValidationError({
                'date_to': 'date_to must not be before date_from'
            })

        return attrs


class MonthlyQuerySerializer(DashboardQuerySerializer):
    months = serializers.IntegerField(required=False, min_value=1, max_value=60)


# =============================================================================
# Response Serializers
# =============================================================================

class ProfitSummarySerializer(serializers.Serializer):
    total_items = serializers.IntegerField()
    sold_count = serializers.IntegerField()
    waiting_count = serializers.IntegerField()
    inventory_count = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_cost = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_profit = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_point_profit = serializers.DecimalField(max_digits=14, decimal_places=2)
    inventory_value = serializers.DecimalField(max_digits=14, decimal_places=2)
    profit_margin = serializers.FloatField()


class MonthlyPointSerializer(serializers.Serializer):
    period = serializers.CharField()
    revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    profit = serializers.DecimalField(max_digits=14, decimal_places=2)
    point_profit = serializers.DecimalField(max_digits=14, decimal_places=2)
    sold_count = serializers.IntegerField()


class MonthOverMonthSerializer(serializers.Serializer):
    """Null changes mean there is nothing to compare against."""
    current_period = serializers.CharField(allow_null=True)
    previous_period = serializers.CharField(allow_null=True)
    revenue = serializers.FloatField(allow_null=True)
    profit = serializers.FloatField(allow_null=True)
    point_profit = serializers.FloatField(allow_null=True)


class DashboardResponseSerializer(serializers.Serializer):
    currency = serializers.CharField()
    summary = ProfitSummarySerializer()
    monthly = MonthlyPointSerializer(many=True)
    month_over_month = MonthOverMonthSerializer()


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
