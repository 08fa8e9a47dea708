from django.contrib import admin
from .models import Item
from .services import normalize_item, profit


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    """Admin interface for Items."""

    list_display = [
        'product_name',
        'owner',
        'channel',
        'status',
        'quantity_available',
        'purchase_price',
        'sale_price',
        'get_profit',
        'purchase_date',
    ]
    list_filter = ['status', 'channel', 'purchase_date']
    search_fields = ['product_name', 'jan_code', 'purchase_location', 'sale_location', 'owner__email']
    readonly_fields = ['schema_version', 'created_at', 'updated_at']
    date_hierarchy = 'purchase_date'
    ordering = ['-purchase_date']

    fieldsets = (
        ('Purchase', {
            'fields': (
                'owner',
                'product_name',
                'jan_code',
                'channel',
                'purchase_price',
                'point',
                'purchase_date',
                'purchase_location',
            )
        }),
        ('Stock', {
            'fields': ('status', 'quantity_total', 'quantity_available')
        }),
        ('Sale', {
            'fields': ('sale_price', 'sale_location', 'sale_date')
        }),
        ('Metadata', {
            'fields': ('schema_version', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_profit(self, obj):
        return profit(obj)
    get_profit.short_description = 'Profit'

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('owner')

    actions = ['normalize_selected']

    def normalize_selected(self, request, queryset):
        """Write legacy-record fixes back for the selected items."""
        fixed = 0
        for item in queryset:
            changed = normalize_item(item)
            if changed:
                item.save(update_fields=[*changed, 'updated_at'])
                fixed += 1
        self.message_user(request, f"Normalized {fixed} items")
    normalize_selected.short_description = "Normalize selected items"
