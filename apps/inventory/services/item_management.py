"""Item management service - owner-scoped CRUD and status transitions for items."""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional
from uuid import UUID

from django.db import transaction, DatabaseError
from django.db.models import F, Q
from django.utils import timezone

from apps.accounts.models import User
from apps.inventory.models import Item, ItemStatus, Channel, ACTIVE_STATUSES
from .normalization import normalize_item
from .profit import profit
from .exceptions import (
    InventoryValidationError,
    InvalidQuantityError,
    InvalidPriceError,
    InvalidStatusTransitionError,
    ItemNotFoundError,
    PersistenceError,
)

logger = logging.getLogger(__name__)


ORDERINGS = ('purchase_date_desc', 'profit_desc', 'sale_price_desc')

NORMALIZED_FIELDS = [
    'quantity_total',
    'quantity_available',
    'sale_price',
    'sale_location',
    'sale_date',
    'schema_version',
]


def clean_amount(value, label: str) -> Decimal:
    """Coerce a currency amount to Decimal and reject negatives."""
    if value is None:
        raise InvalidPriceError(f"{label} is required")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidPriceError(f"{label} must be a number")
    if not amount.is_finite():
        raise InvalidPriceError(f"{label} must be a number")
    if amount < 0:
        raise InvalidPriceError(f"{label} cannot be negative")
    return amount


def _clean_channel(channel: str) -> str:
    if channel and channel not in Channel.values:
        raise InventoryValidationError(f"Unknown channel: {channel}")
    return channel or ''


def _save(item: Item, fields: list[str]) -> None:
    try:
        item.save(update_fields=[*fields, 'updated_at'])
    except DatabaseError as exc:
        logger.error("Failed to save item %s: %s", item.id, exc)
        raise PersistenceError("Could not save item") from exc


def get_owned_item(owner: User, item_id: UUID, *, lock: bool = False) -> Item:
    """
    Load one of the owner's items, normalized to the current schema.

    Args:
        owner: User who must own the item
        item_id: UUID of the item
        lock: Take a row lock (only meaningful inside a transaction)

    Raises:
        ItemNotFoundError: If the item doesn't exist or is owned by another user
    """
    queryset = Item.objects.filter(owner=owner)
    if lock:
        queryset = queryset.select_for_update()

    try:
        item = queryset.get(id=item_id)
    except Item.DoesNotExist:
        raise ItemNotFoundError("Item not found")

    normalize_item(item)
    return item


def create_item(
    *,
    owner: User,
    product_name: str,
    purchase_price,
    purchase_date: date,
    point=Decimal('0.00'),
    quantity: int = 1,
    channel: str = '',
    purchase_location: str = '',
    jan_code: str = ''
) -> Item:
    """
    Log a newly purchased item.

    New items start as ``pending`` with the whole quantity available.

    Args:
        owner: User who bought the item
        product_name: Product name (required)
        purchase_price: Price paid, non-negative
        purchase_date: Date of purchase
        point: Point/discount amount subtracted from the cost basis
        quantity: Number of units in the lot (>= 1)
        channel: Sales channel (ebay/kaitori/other) or blank
        purchase_location: Where the item was bought
        jan_code: Optional product barcode

    Returns:
        Created Item instance

    Raises:
        InventoryValidationError: If the name is blank or the channel unknown
        InvalidQuantityError: If quantity < 1
        InvalidPriceError: If a price is negative or not a number
        PersistenceError: If the database write fails
    """
    name = (product_name or '').strip()
    if not name:
        raise InventoryValidationError("Product name is required")

    if quantity is None or int(quantity) < 1:
        raise InvalidQuantityError("Quantity must be at least 1")
    quantity = int(quantity)

    purchase_price = clean_amount(purchase_price, "Purchase price")
    point = clean_amount(point, "Point")
    channel = _clean_channel(channel)

    try:
        item = Item.objects.create(
            owner=owner,
            product_name=name,
            jan_code=(jan_code or '').strip(),
            channel=channel,
            quantity_total=quantity,
            quantity_available=quantity,
            purchase_price=purchase_price,
            point=point,
            purchase_date=purchase_date,
            purchase_location=(purchase_location or '').strip(),
            status=ItemStatus.PENDING,
        )
    except DatabaseError as exc:
        logger.error("Failed to create item for user %s: %s", owner.pk, exc)
        raise PersistenceError("Could not create item") from exc

    logger.info("Created item %s (qty %s) for user %s", item.id, quantity, owner.pk)
    return item


def get_item(*, owner: User, item_id: UUID) -> Item:
    """
    Retrieve one of the owner's items.

    Raises:
        ItemNotFoundError: If the item doesn't exist or belongs to someone else
    """
    return get_owned_item(owner, item_id)


def list_items(
    *,
    owner: User,
    channel: Optional[str] = None,
    status: Optional[str] = None,
    active_only: bool = False,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    search: str = '',
    ordering: str = 'purchase_date_desc'
) -> list[Item]:
    """
    List the owner's items with optional filters.

    Args:
        owner: User whose items to list
        channel: Filter by channel; 'other' also matches items with no channel
        status: Filter by exact status
        active_only: Only pending and inventory items
        date_from: Purchase date lower bound (inclusive)
        date_to: Purchase date upper bound (inclusive)
        search: Case-insensitive match on name, locations and channel
        ordering: purchase_date_desc, profit_desc or sale_price_desc

    Returns:
        List of normalized Item instances

    Raises:
        InventoryValidationError: If the ordering or channel is unknown
    """
    if ordering not in ORDERINGS:
        raise InventoryValidationError(f"Unknown ordering: {ordering}")

    queryset = Item.objects.filter(owner=owner)

    if channel:
        _clean_channel(channel)
        if channel == Channel.OTHER:
            queryset = queryset.filter(Q(channel=Channel.OTHER) | Q(channel=''))
        else:
            queryset = queryset.filter(channel=channel)

    if status:
        queryset = queryset.filter(status=status)

    if active_only:
        queryset = queryset.filter(status__in=ACTIVE_STATUSES)

    if date_from:
        queryset = queryset.filter(purchase_date__gte=date_from)
    if date_to:
        queryset = queryset.filter(purchase_date__lte=date_to)

    search = (search or '').strip()
    if search:
        queryset = queryset.filter(
            Q(product_name__icontains=search) |
            Q(purchase_location__icontains=search) |
            Q(sale_location__icontains=search) |
            Q(channel__icontains=search)
        )

    if ordering == 'sale_price_desc':
        queryset = queryset.order_by(F('sale_price').desc(nulls_last=True), '-purchase_date')
    else:
        queryset = queryset.order_by('-purchase_date', '-created_at')

    items = list(queryset)
    for item in items:
        normalize_item(item)

    if ordering == 'profit_desc':
        items.sort(key=profit, reverse=True)

    return items


@transaction.atomic
def update_item(
    *,
    owner: User,
    item_id: UUID,
    product_name: Optional[str] = None,
    channel: Optional[str] = None,
    jan_code: Optional[str] = None,
    purchase_price=None,
    point=None,
    purchase_date: Optional[date] = None,
    purchase_location: Optional[str] = None,
    status: Optional[str] = None
) -> Item:
    """
    Edit an item's core fields.

    Only ``pending -> inventory`` is accepted as a status change here; sales
    go through ``record_sale`` and sold items only accept sale-detail
    corrections.

    Raises:
        ItemNotFoundError: If the item doesn't exist or belongs to someone else
        InvalidStatusTransitionError: If the item is sold/canceled or the
            status change isn't allowed
        InventoryValidationError: If a field value is invalid
    """
    item = get_owned_item(owner, item_id, lock=True)

    if item.status == ItemStatus.SOLD:
        raise InvalidStatusTransitionError(
            "Sold items can only have their sale details corrected"
        )
    if item.status == ItemStatus.CANCELED:
        raise InvalidStatusTransitionError("Canceled items cannot be edited")

    fields = []

    if product_name is not None:
        name = product_name.strip()
        if not name:
            raise InventoryValidationError("Product name is required")
        item.product_name = name
        fields.append('product_name')

    if channel is not None:
        item.channel = _clean_channel(channel)
        fields.append('channel')

    if jan_code is not None:
        item.jan_code = jan_code.strip()
        fields.append('jan_code')

    if purchase_price is not None:
        item.purchase_price = clean_amount(purchase_price, "Purchase price")
        fields.append('purchase_price')

    if point is not None:
        item.point = clean_amount(point, "Point")
        fields.append('point')

    if purchase_date is not None:
        item.purchase_date = purchase_date
        fields.append('purchase_date')

    if purchase_location is not None:
        item.purchase_location = purchase_location.strip()
        fields.append('purchase_location')

    if status is not None and status != item.status:
        if status == ItemStatus.SOLD:
            raise InvalidStatusTransitionError("Use the sale entry to mark an item sold")
        if not (item.status == ItemStatus.PENDING and status == ItemStatus.INVENTORY):
            raise InvalidStatusTransitionError(
                f"Cannot change status from {item.status} to {status}"
            )
        item.status = status
        fields.append('status')

    # Persist any normalization applied on load alongside the edit
    fields.extend(NORMALIZED_FIELDS)
    _save(item, list(dict.fromkeys(fields)))
    return item


@transaction.atomic
def mark_received(*, owner: User, item_id: UUID) -> Item:
    """
    Move a pending item into inventory once it has physically arrived.

    Raises:
        ItemNotFoundError: If the item doesn't exist or belongs to someone else
        InvalidStatusTransitionError: If the item isn't pending
    """
    item = get_owned_item(owner, item_id, lock=True)

    if item.status != ItemStatus.PENDING:
        raise InvalidStatusTransitionError(
            f"Only pending items can be received (item is {item.status})"
        )

    item.status = ItemStatus.INVENTORY
    _save(item, ['status', *NORMALIZED_FIELDS])
    logger.info("Item %s received into inventory", item.id)
    return item


@transaction.atomic
def record_sale(
    *,
    owner: User,
    item_id: UUID,
    sale_price,
    sale_location: str,
    sale_date: Optional[date] = None
) -> Item:
    """
    Record a direct single-item sale.

    The whole remaining quantity is consumed: ``quantity_available`` drops
    to 0 and the item becomes ``sold`` with all three sale fields set.

    Args:
        owner: User who owns the item
        item_id: UUID of the item being sold
        sale_price: Amount received, non-negative
        sale_location: Where/who the item was sold to (required)
        sale_date: Date of sale, defaults to today

    Returns:
        Updated Item instance

    Raises:
        ItemNotFoundError: If the item doesn't exist or belongs to someone else
        InvalidStatusTransitionError: If the item is already sold or canceled
        InvalidPriceError: If the sale price is negative
        InventoryValidationError: If the sale location is blank
    """
    item = get_owned_item(owner, item_id, lock=True)

    if not item.is_active:
        logger.warning("Refused sale of item %s in status %s", item.id, item.status)
        raise InvalidStatusTransitionError(
            f"Only pending or inventory items can be sold (item is {item.status})"
        )

    price = clean_amount(sale_price, "Sale price")
    location = (sale_location or '').strip()
    if not location:
        raise InventoryValidationError("Sale location is required")

    item.status = ItemStatus.SOLD
    item.quantity_available = 0
    item.sale_price = price
    item.sale_location = location
    item.sale_date = sale_date or timezone.localdate()

    _save(item, ['status', *NORMALIZED_FIELDS])
    logger.info("Item %s sold for %s at %s", item.id, price, location)
    return item


@transaction.atomic
def correct_sale_details(
    *,
    owner: User,
    item_id: UUID,
    sale_price=None,
    sale_location: Optional[str] = None,
    sale_date: Optional[date] = None
) -> Item:
    """
    Correct the sale details of a sold item without touching its status.

    Raises:
        ItemNotFoundError: If the item doesn't exist or belongs to someone else
        InvalidStatusTransitionError: If the item isn't sold
        InvalidPriceError: If the sale price is negative
        InventoryValidationError: If the sale location is blank
    """
    item = get_owned_item(owner, item_id, lock=True)

    if item.status != ItemStatus.SOLD:
        raise InvalidStatusTransitionError("Only sold items have sale details to correct")

    fields = []

    if sale_price is not None:
        item.sale_price = clean_amount(sale_price, "Sale price")
        fields.append('sale_price')

    if sale_location is not None:
        location = sale_location.strip()
        if not location:
            raise InventoryValidationError("Sale location is required")
        item.sale_location = location
        fields.append('sale_location')

    if sale_date is not None:
        item.sale_date = sale_date
        fields.append('sale_date')

    if fields:
        _save(item, fields)
    return item


def delete_item(*, owner: User, item_id: UUID) -> None:
    """
    Delete one of the owner's items.

    Deletion is always permitted. Batch line items that referenced the item
    keep their snapshot with an empty item reference.

    Raises:
        ItemNotFoundError: If the item doesn't exist or belongs to someone else
        PersistenceError: If the database delete fails
    """
    item = get_owned_item(owner, item_id)

    try:
        item.delete()
    except DatabaseError as exc:
        logger.error("Failed to delete item %s: %s", item_id, exc)
        raise PersistenceError("Could not delete item") from exc

    logger.info("Deleted item %s for user %s", item_id, owner.pk)
