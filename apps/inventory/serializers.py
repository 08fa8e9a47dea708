from rest_framework import serializers

from .models import Item, Channel, ItemStatus
from .services.profit import net_cost, profit, point_profit


class ComputedAmountField(serializers.DecimalField):
    """Read-only currency amount computed from the whole item."""

    def __init__(self, func, **kwargs):
        self.func = func
        kwargs.update(max_digits=12, decimal_places=2, read_only=True, source='*')
        super().__init__(**kwargs)

    def to_representation(self, instance):
        return super().to_representation(self.func(instance))


class ItemSerializer(serializers.ModelSerializer):
    """Item with derived profit figures."""

    net_cost = ComputedAmountField(net_cost)
    profit = ComputedAmountField(profit)
    point_profit = ComputedAmountField(point_profit)

    class Meta:
        model = Item
        fields = [
            'id',
            'channel',
            'jan_code',
            'product_name',
            'quantity_total',
            'quantity_available',
            'purchase_price',
            'point',
            'purchase_date',
            'purchase_location',
            'status',
            'sale_price',
            'sale_location',
            'sale_date',
            'net_cost',
            'profit',
            'point_profit',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ItemCreateSerializer(serializers.Serializer):
    """Input for logging a new purchase."""

    product_name = serializers.CharField(max_length=255)
    jan_code = serializers.CharField(max_length=32, required=False, allow_blank=True, default='')
    channel = serializers.ChoiceField(choices=Channel.choices, required=False, allow_blank=True, default='')
    quantity = serializers.IntegerField(min_value=1, default=1)
    purchase_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    point = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, default=0)
    purchase_date = serializers.DateField()
    purchase_location = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')


class ItemUpdateSerializer(serializers.Serializer):
    """Input for editing an unsold item; every field is optional."""

    product_name = serializers.CharField(max_length=255, required=False)
    jan_code = serializers.CharField(max_length=32, required=False, allow_blank=True)
    channel = serializers.ChoiceField(choices=Channel.choices, required=False, allow_blank=True)
    purchase_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    point = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    purchase_date = serializers.DateField(required=False)
    purchase_location = serializers.CharField(max_length=200, required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=ItemStatus.choices, required=False)


class ItemSaleSerializer(serializers.Serializer):
    """Input for a direct single-item sale."""

    sale_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    sale_location = serializers.CharField(max_length=200)
    sale_date = serializers.DateField(required=False)


class SaleDetailsSerializer(serializers.Serializer):
    """Input for correcting a sold item's sale details."""

    sale_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    sale_location = serializers.CharField(max_length=200, required=False)
    sale_date = serializers.DateField(required=False)


class ItemFilterSerializer(serializers.Serializer):
    """Query parameters accepted by the item list."""

    channel = serializers.ChoiceField(choices=Channel.choices, required=False)
    status = serializers.ChoiceField(choices=ItemStatus.choices, required=False)
    active_only = serializers.BooleanField(required=False, default=False)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)
    search = serializers.CharField(required=False, allow_blank=True)
    ordering = serializers.ChoiceField(
        choices=['purchase_date_desc', 'profit_desc', 'sale_price_desc'],
        required=False,
    )

    def validate(self, attrs):
        if attrs.get('date_from') and attrs.get('date_to') and attrs['date_from'] > attrs['date_to']:
            raise serializers.ValidationError({'date_to': 'date_to must not be before date_from'})
        return attrs
