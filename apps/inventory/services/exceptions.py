"""
Domain exceptions for inventory app.

Three kinds of failure reach callers:

    InventoryServiceError (base)
    ├── InventoryValidationError   bad input, no state change
    │   ├── InvalidQuantityError
    │   ├── InvalidPriceError
    │   └── InvalidStatusTransitionError
    ├── RecordNotFoundError        referenced record vanished or is not owned
    │   └── ItemNotFoundError
    └── PersistenceError           database unreachable or write rejected

The batches app extends the same three branches so views can map any
service error to a response by kind.
"""


class InventoryServiceError(Exception):
    """Base exception for all inventory service errors."""
    pass


class InventoryValidationError(InventoryServiceError):
    """Input rejected; the operation made no changes."""
    pass


class InvalidQuantityError(InventoryValidationError):
    """Quantity outside the allowed range."""
    pass


class InvalidPriceError(InventoryValidationError):
    """Currency amount is negative or missing."""
    pass


class InvalidStatusTransitionError(InventoryValidationError):
    """Requested status change is not allowed from the current status."""
    pass


class RecordNotFoundError(InventoryServiceError):
    """Referenced record does not exist or belongs to another user."""
    pass


class ItemNotFoundError(RecordNotFoundError):
    """Item does not exist or belongs to another user."""
    pass


class PersistenceError(InventoryServiceError):
    """Database write or read failed."""
    pass
