"""
Inventory services - Business logic layer.

This package contains all business operations for the inventory app:
- Profit calculation
- Legacy record normalization
- Item CRUD and status transitions
"""

# Profit calculation
from .profit import (
    net_cost,
    profit,
    point_profit,
)

# Normalization
from .normalization import (
    available_quantity,
    normalize_item,
)

# Item management
from .item_management import (
    create_item,
    get_item,
    list_items,
    update_item,
    mark_received,
    record_sale,
    correct_sale_details,
    delete_item,
)

# Domain Exceptions
from .exceptions import (
    InventoryServiceError,
    InventoryValidationError,
    InvalidQuantityError,
    InvalidPriceError,
    InvalidStatusTransitionError,
    RecordNotFoundError,
    ItemNotFoundError,
    PersistenceError,
)

__all__ = [
    # Profit
    'net_cost',
    'profit',
    'point_profit',
    # Normalization
    'available_quantity',
    'normalize_item',
    # Item Management Services
    'create_item',
    'get_item',
    'list_items',
    'update_item',
    'mark_received',
    'record_sale',
    'correct_sale_details',
    'delete_item',
    # Exceptions
    'InventoryServiceError',
    'InventoryValidationError',
    'InvalidQuantityError',
    'InvalidPriceError',
    'InvalidStatusTransitionError',
    'RecordNotFoundError',
    'ItemNotFoundError',
    'PersistenceError',
]
