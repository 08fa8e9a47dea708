from django.contrib import admin
from .models import SaleBatch, SaleBatchItem


class SaleBatchItemInline(admin.TabularInline):
    model = SaleBatchItem
    extra = 0
    fields = ['product_name', 'quantity', 'purchase_price', 'point', 'status', 'final_price', 'confirmed_at']
    readonly_fields = fields
    can_delete = False


@admin.register(SaleBatch)
class SaleBatchAdmin(admin.ModelAdmin):
    """Admin interface for Sale Batches."""

    list_display = ['buyer', 'owner', 'method', 'status', 'item_count', 'created_at', 'confirmed_at']
    list_filter = ['status', 'method', 'created_at']
    search_fields = ['buyer', 'campaign', 'owner__email']
    readonly_fields = ['status', 'item_count', 'created_at', 'updated_at', 'confirmed_at']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']
    inlines = [SaleBatchItemInline]

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('owner')
