from rest_framework import serializers

from apps.inventory.models import Channel
from .models import SaleBatch, SaleBatchItem, SaleMethod, BatchStatus


class SaleBatchItemSerializer(serializers.ModelSerializer):
    """Line item with its break-even price suggestion."""

    suggested_final_price = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        read_only=True
    )

    class Meta:
        model = SaleBatchItem
        fields = [
            'id',
            'item',
            'product_name',
            'quantity',
            'purchase_price',
            'point',
            'status',
            'final_price',
            'suggested_final_price',
            'confirmed_at',
        ]
        read_only_fields = fields


class SaleBatchSerializer(serializers.ModelSerializer):
    """Batch header."""

    class Meta:
        model = SaleBatch
        fields = [
            'id',
            'method',
            'buyer',
            'campaign',
            'shipping_cost',
            'status',
            'item_count',
            'created_at',
            'updated_at',
            'confirmed_at',
        ]
        read_only_fields = fields


class SaleBatchDetailSerializer(SaleBatchSerializer):
    """Batch header with all its line items."""

    items = SaleBatchItemSerializer(many=True, read_only=True)

    class Meta(SaleBatchSerializer.Meta):
        fields = SaleBatchSerializer.Meta.fields + ['items']
        read_only_fields = fields


class BatchSelectionSerializer(serializers.Serializer):
    item_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)


class BatchCreateSerializer(serializers.Serializer):
    """Input for a new batch."""

    buyer = serializers.CharField(max_length=200)
    method = serializers.ChoiceField(choices=SaleMethod.choices)
    campaign = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    shipping_cost = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, default=0)
    selections = BatchSelectionSerializer(many=True)

    def validate_selections(self, value):
        item_ids = [selection['item_id'] for selection in value]
        if len(item_ids) != len(set(item_ids)):
            raise serializers.ValidationError('Each item can only be selected once')
        return value


class FinalPriceSerializer(serializers.Serializer):
    line_item_id = serializers.UUIDField()
    final_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)


class BatchConfirmSerializer(serializers.Serializer):
    """Final price for every open line item of the batch."""

    final_prices = FinalPriceSerializer(many=True)

    def validate_final_prices(self, value):
        line_ids = [entry['line_item_id'] for entry in value]
        if len(line_ids) != len(set(line_ids)):
            raise serializers.ValidationError('Each line item can only be priced once')
        return value


class BatchFilterSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=BatchStatus.choices, required=False)


class CandidateFilterSerializer(serializers.Serializer):
    channel = serializers.ChoiceField(choices=Channel.choices, required=False)
