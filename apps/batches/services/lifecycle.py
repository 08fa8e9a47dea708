"""
Sale batch lifecycle - creation and confirmation.

A batch moves ``in_progress -> confirmed`` exactly once. Creation only
records the selection; confirmation applies every line item to its item
in a single transaction, so a batch is never half confirmed.
"""

import logging
from decimal import Decimal
from typing import Mapping, Optional
from uuid import UUID

from django.db import transaction, DatabaseError
from django.utils import timezone

from apps.accounts.models import User
from apps.inventory.models import Item, ItemStatus
from apps.inventory.services import list_items, available_quantity
from apps.inventory.services.exceptions import InvalidPriceError, ItemNotFoundError
from apps.inventory.services.item_management import (
    NORMALIZED_FIELDS,
    clean_amount,
    get_owned_item,
)
from apps.batches.models import SaleBatch, SaleBatchItem, SaleMethod, BatchStatus
from .exceptions import (
    EmptyBuyerError,
    EmptySelectionError,
    InvalidSelectionError,
    InvalidSaleMethodError,
    InvalidShippingCostError,
    InvalidFinalPriceError,
    BatchAlreadyConfirmedError,
    BatchNotFoundError,
    InsufficientQuantityError,
    BatchPersistenceError,
)

logger = logging.getLogger(__name__)


def list_batch_candidates(*, owner: User, channel: Optional[str] = None) -> list[Item]:
    """
    Items that can be put into a new batch.

    Pending or inventory items with something left to sell, optionally
    limited to one channel.
    """
    items = list_items(owner=owner, channel=channel, active_only=True)
    return [item for item in items if available_quantity(item) > 0]


@transaction.atomic
def create_batch(
    *,
    owner: User,
    buyer: str,
    method: str,
    selections: Mapping[UUID, int],
    campaign: str = '',
    shipping_cost=Decimal('0.00')
) -> SaleBatch:
    """
    Record a new in-progress batch.

    One line item is written per selection, snapshotting the item's name,
    purchase price and point. Items are not modified; their quantity is
    only consumed on confirmation.

    Args:
        owner: User selling the items
        buyer: Who the items are sold to (required)
        method: shipping or in_store
        selections: Mapping of item id to quantity
        campaign: Optional buyer campaign name
        shipping_cost: Non-negative shipping cost

    Returns:
        Created SaleBatch instance

    Raises:
        EmptyBuyerError: If buyer is blank
        EmptySelectionError: If nothing was selected
        InvalidSaleMethodError: If method is unknown
        InvalidShippingCostError: If shipping cost is negative
        ItemNotFoundError: If a selected item doesn't exist or isn't owned
        InvalidSelectionError: If a quantity is out of range or the item
            is already sold
        BatchPersistenceError: If the database write fails
    """
    buyer = (buyer or '').strip()
    if not buyer:
        raise EmptyBuyerError("Buyer is required")

    if not selections:
        raise EmptySelectionError("Select at least one item for the batch")

    if method not in SaleMethod.values:
        raise InvalidSaleMethodError(f"Unknown sale method: {method}")

    try:
        shipping_cost = clean_amount(shipping_cost, "Shipping cost")
    except InvalidPriceError as exc:
        raise InvalidShippingCostError(str(exc)) from exc

    selected = []
    for item_id, quantity in selections.items():
        item = get_owned_item(owner, item_id, lock=True)

        if not item.is_active:
            raise InvalidSelectionError(f"'{item.product_name}' is not available for sale")

        available = available_quantity(item)
        if not isinstance(quantity, int) or quantity < 1 or quantity > available:
            raise InvalidSelectionError(
                f"Quantity for '{item.product_name}' must be between 1 and {available}"
            )

        selected.append((item, quantity))

    try:
        batch = SaleBatch.objects.create(
            owner=owner,
            method=method,
            buyer=buyer,
            campaign=(campaign or '').strip(),
            shipping_cost=shipping_cost,
            status=BatchStatus.IN_PROGRESS,
            item_count=len(selected),
        )

        SaleBatchItem.objects.bulk_create([
            SaleBatchItem(
                batch=batch,
                owner=owner,
                item=item,
                product_name=item.product_name,
                quantity=quantity,
                purchase_price=item.purchase_price,
                point=item.point,
                status=BatchStatus.IN_PROGRESS,
            )
            for item, quantity in selected
        ])
    except DatabaseError as exc:
        logger.error("Failed to create batch for user %s: %s", owner.pk, exc)
        raise BatchPersistenceError("Could not create sale batch") from exc

    logger.info(
        "Created batch %s for buyer %s with %d line(s)",
        batch.id, buyer, len(selected)
    )
    return batch


def _clean_final_prices(lines: list[SaleBatchItem], final_prices: Mapping) -> dict:
    """Match final prices to line items; every open line needs one."""
    prices = {str(line_id): price for line_id, price in final_prices.items()}
    line_ids = {str(line.id) for line in lines}

    unknown = set(prices) - line_ids
    if unknown:
        raise InvalidFinalPriceError("Final price given for a line item outside this batch")

    cleaned = {}
    for line in lines:
        if str(line.id) not in prices:
            raise InvalidFinalPriceError(f"Final price missing for '{line.product_name}'")
        try:
            cleaned[line.id] = clean_amount(
                prices[str(line.id)],
                f"Final price for '{line.product_name}'"
            )
        except InvalidPriceError as exc:
            raise InvalidFinalPriceError(str(exc)) from exc

    return cleaned


def _apply_line(item: Item, line: SaleBatchItem, final_price: Decimal, buyer: str, today) -> None:
    """Consume a confirmed line item's quantity from its item."""
    if not item.is_active:
        raise InsufficientQuantityError(f"'{item.product_name}' is no longer available for sale")

    current = available_quantity(item)
    if line.quantity > current:
        raise InsufficientQuantityError(
            f"Only {current} of '{item.product_name}' left, batch needs {line.quantity}"
        )

    next_available = max(0, current - line.quantity)
    item.quantity_available = next_available

    if next_available == 0:
        # Only the confirmation that empties the item records its sale.
        item.status = ItemStatus.SOLD
        item.sale_price = final_price
        item.sale_location = buyer
        item.sale_date = today
    elif item.status == ItemStatus.PENDING:
        item.status = ItemStatus.INVENTORY

    item.save(update_fields=['status', *NORMALIZED_FIELDS, 'updated_at'])


@transaction.atomic
def confirm_batch(*, owner: User, batch_id: UUID, final_prices: Mapping) -> SaleBatch:
    """
    Lock final prices and apply the batch to its items.

    Every open line item is marked confirmed with its final price, and its
    quantity is taken off the referenced item. An item brought to zero
    becomes sold with the batch buyer as sale location and today as sale
    date; a pending item that still has stock left becomes inventory. All
    writes commit together or not at all.

    Args:
        owner: User who owns the batch
        batch_id: UUID of the batch to confirm
        final_prices: Mapping of line item id to final price

    Returns:
        The confirmed SaleBatch

    Raises:
        BatchNotFoundError: If the batch doesn't exist or isn't owned
        BatchAlreadyConfirmedError: If the batch was confirmed before
        InvalidFinalPriceError: If a final price is missing, negative, or
            names a line outside the batch
        ItemNotFoundError: If a line item's item was deleted
        InsufficientQuantityError: If an item can no longer cover its line
        BatchPersistenceError: If the database write fails
    """
    try:
        batch = SaleBatch.objects.select_for_update().get(id=batch_id, owner=owner)
    except SaleBatch.DoesNotExist:
        raise BatchNotFoundError("Sale batch not found")

    if batch.is_confirmed:
        logger.warning("Refused repeat confirmation of batch %s", batch.id)
        raise BatchAlreadyConfirmedError("Sale batch is already confirmed")

    lines = list(
        batch.items.select_for_update()
        .exclude(status=BatchStatus.CONFIRMED)
        .order_by('created_at')
    )
    prices = _clean_final_prices(lines, final_prices)

    now = timezone.now()
    today = timezone.localdate()
    items = {}
    sold = 0

    try:
        for line in lines:
            final_price = prices[line.id]

            line.status = BatchStatus.CONFIRMED
            line.final_price = final_price
            line.confirmed_at = now
            line.save(update_fields=['status', 'final_price', 'confirmed_at', 'updated_at'])

            if line.item_id is None:
                raise ItemNotFoundError(f"Item for '{line.product_name}' no longer exists")

            item = items.get(line.item_id)
            if item is None:
                item = get_owned_item(owner, line.item_id, lock=True)
                items[line.item_id] = item

            _apply_line(item, line, final_price, batch.buyer, today)
            if item.status == ItemStatus.SOLD:
                sold += 1

        batch.status = BatchStatus.CONFIRMED
        batch.confirmed_at = now
        batch.save(update_fields=['status', 'confirmed_at', 'updated_at'])
    except DatabaseError as exc:
        logger.error("Failed to confirm batch %s, rolled back: %s", batch_id, exc)
        raise BatchPersistenceError("Could not confirm sale batch") from exc

    logger.info(
        "Confirmed batch %s: %d line(s), %d item(s) sold out",
        batch.id, len(lines), sold
    )
    return batch
