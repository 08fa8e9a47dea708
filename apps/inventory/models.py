from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


CURRENT_SCHEMA_VERSION = 2


class Channel(models.TextChoices):
    EBAY = 'ebay', 'eBay'
    KAITORI = 'kaitori', 'Kaitori (buyback)'
    OTHER = 'other', 'Other'


class ItemStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    INVENTORY = 'inventory', 'Inventory'
    SOLD = 'sold', 'Sold'
    # Appears in imported data only; never reached through the services.
    CANCELED = 'canceled', 'Canceled'


ACTIVE_STATUSES = (ItemStatus.PENDING, ItemStatus.INVENTORY)
TERMINAL_STATUSES = (ItemStatus.SOLD, ItemStatus.CANCELED)


class Item(models.Model):
    """One purchased unit or lot tracked through the resale pipeline."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    owner = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='items'
    )

    # Product details
    channel = models.CharField(
        max_length=20,
        choices=Channel.choices,
        blank=True
    )
    jan_code = models.CharField(max_length=32, blank=True)
    product_name = models.CharField(max_length=255)

    # Quantity bookkeeping (quantity_available is null only on legacy records)
    quantity_total = models.PositiveIntegerField(default=1)
    quantity_available = models.PositiveIntegerField(null=True, blank=True)

    # Purchase details
    purchase_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    point = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    purchase_date = models.DateField()
    purchase_location = models.CharField(max_length=200, blank=True)

    status = models.CharField(
        max_length=20,
        choices=ItemStatus.choices,
        default=ItemStatus.PENDING
    )

    # Sale details (present iff status == sold)
    sale_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True
    )
    sale_location = models.CharField(max_length=200, blank=True)
    sale_date = models.DateField(null=True, blank=True)

    schema_version = models.PositiveSmallIntegerField(default=CURRENT_SCHEMA_VERSION)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'items'
        indexes = [
            models.Index(fields=['owner', 'status'], name='items_owner_status_idx'),
            models.Index(fields=['owner', 'channel'], name='items_owner_channel_idx'),
            models.Index(fields=['owner', 'purchase_date'], name='items_owner_pdate_idx'),
            models.Index(fields=['owner', 'sale_date'], name='items_owner_sdate_idx'),
        ]
        ordering = ['-purchase_date', '-created_at']

    def __str__(self):
        return f"{self.product_name} ({self.get_status_display()})"

    @property
    def is_sold(self):
        return self.status == ItemStatus.SOLD

    @property
    def is_active(self):
        """Pending or inventory: still in the pipeline."""
        return self.status in ACTIVE_STATUSES
