"""
Legacy record normalization.

Records written before schema version 2 may lack ``quantity_available``,
carry a zero ``quantity_total``, or keep sale fields on an item that is not
sold. The fallback defaults are applied here, once, whenever the repository
loads an item, so no other code needs to guess at missing quantities.

A pending or inventory record with zero available quantity is left as it
is: it has no sale price to record. Batch candidates skip it and the
``normalize_items`` command reports it.
"""

from apps.inventory.models import Item, ItemStatus, CURRENT_SCHEMA_VERSION


def available_quantity(item: Item) -> int:
    """
    Return the item's normalized available quantity without mutating it.

    Falls back to ``quantity_total`` (then 1) when availability was never
    recorded, and clamps the result into ``[0, quantity_total]``. Sold items
    always have nothing available.
    """
    if item.status == ItemStatus.SOLD:
        return 0

    total = item.quantity_total or 1
    available = item.quantity_available
    if available is None:
        available = total

    return max(0, min(available, total))


def normalize_item(item: Item) -> list[str]:
    """
    Bring a loaded item up to the current schema in place.

    Args:
        item: Item instance, possibly a legacy record

    Returns:
        Names of the fields that changed (empty when already current)
    """
    changed = []

    if not item.quantity_total:
        item.quantity_total = 1
        changed.append('quantity_total')

    available = available_quantity(item)
    if item.quantity_available != available:
        item.quantity_available = available
        changed.append('quantity_available')

    if item.status != ItemStatus.SOLD:
        if item.sale_price is not None:
            item.sale_price = None
            changed.append('sale_price')
        if item.sale_location:
            item.sale_location = ''
            changed.append('sale_location')
        if item.sale_date is not None:
            item.sale_date = None
            changed.append('sale_date')

    if item.schema_version < CURRENT_SCHEMA_VERSION:
        item.schema_version = CURRENT_SCHEMA_VERSION
        changed.append('schema_version')

    return changed
