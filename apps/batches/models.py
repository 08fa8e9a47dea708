from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class SaleMethod(models.TextChoices):
    SHIPPING = 'shipping', 'Shipping'
    IN_STORE = 'in_store', 'In store'


class BatchStatus(models.TextChoices):
    IN_PROGRESS = 'in_progress', 'In progress'
    CONFIRMED = 'confirmed', 'Confirmed'


class SaleBatch(models.Model):
    """
    A grouped sale of one or more items to a single buyer.

    Created ``in_progress`` without touching any item; confirmation is the
    terminal step that locks final prices and updates the linked items.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    owner = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='sale_batches'
    )

    method = models.CharField(max_length=20, choices=SaleMethod.choices)
    buyer = models.CharField(max_length=200)
    campaign = models.CharField(max_length=200, blank=True)
    shipping_cost = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    status = models.CharField(
        max_length=20,
        choices=BatchStatus.choices,
        default=BatchStatus.IN_PROGRESS
    )
    item_count = models.PositiveIntegerField(default=0)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    confirmed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'sale_batches'
        indexes = [
            models.Index(fields=['owner', '-created_at'], name='batches_owner_created_idx'),
            models.Index(fields=['owner', 'status'], name='batches_owner_status_idx'),
        ]
        ordering = ['-created_at']
        verbose_name_plural = 'sale batches'

    def __str__(self):
        return f"{self.buyer} ({self.get_status_display()})"

    @property
    def is_confirmed(self):
        return self.status == BatchStatus.CONFIRMED


class SaleBatchItem(models.Model):
    """
    One item's committed quantity within a sale batch.

    Name, purchase price and point are snapshotted when the batch is
    created. The item reference is cleared if the item is later deleted.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    batch = models.ForeignKey(
        SaleBatch,
        on_delete=models.CASCADE,
        related_name='items'
    )
    owner = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='sale_batch_items'
    )
    item = models.ForeignKey(
        'inventory.Item',
        on_delete=models.SET_NULL,
        null=True,
        related_name='batch_lines'
    )

    # Snapshot at selection time
    product_name = models.CharField(max_length=255)
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    purchase_price = models.DecimalField(max_digits=12, decimal_places=2)
    point = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))

    status = models.CharField(
        max_length=20,
        choices=BatchStatus.choices,
        default=BatchStatus.IN_PROGRESS
    )
    final_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    confirmed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'sale_batch_items'
        indexes = [
            models.Index(fields=['batch', 'status'], name='batch_items_batch_status_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.product_name} x{self.quantity}"

    @property
    def suggested_final_price(self):
        """Break-even default: unit net cost (never negative) times quantity."""
        unit_cost = max(Decimal('0.00'), self.purchase_price - self.point)
        return unit_cost * self.quantity
