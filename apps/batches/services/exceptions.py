"""
Domain exceptions for batches app.

Batch errors extend the inventory hierarchy, so a view can map either
app's failures to a response by kind:

    InventoryValidationError
    └── BatchValidationError
        ├── EmptyBuyerError
        ├── EmptySelectionError
        ├── InvalidSelectionError
        ├── InvalidSaleMethodError
        ├── InvalidShippingCostError
        ├── InvalidFinalPriceError
        ├── BatchAlreadyConfirmedError
        └── InsufficientQuantityError
    RecordNotFoundError
    └── BatchNotFoundError
    PersistenceError
    └── BatchPersistenceError
"""

from apps.inventory.services.exceptions import (
    InventoryValidationError,
    RecordNotFoundError,
    PersistenceError,
)


class BatchValidationError(InventoryValidationError):
    """Batch input rejected; nothing was written."""
    pass


class EmptyBuyerError(BatchValidationError):
    """Buyer is blank after trimming."""
    pass


class EmptySelectionError(BatchValidationError):
    """No items selected for the batch."""
    pass


class InvalidSelectionError(BatchValidationError):
    """Selected quantity out of range or item not eligible."""
    pass


class InvalidSaleMethodError(BatchValidationError):
    """Sale method is not shipping or in_store."""
    pass


class InvalidShippingCostError(BatchValidationError):
    """Shipping cost is negative or not a number."""
    pass


class InvalidFinalPriceError(BatchValidationError):
    """Final price missing, negative, or for a line outside the batch."""
    pass


class BatchAlreadyConfirmedError(BatchValidationError):
    """Batch was confirmed before; confirmation is not repeatable."""
    pass


class InsufficientQuantityError(BatchValidationError):
    """Item can no longer cover the line item's quantity."""
    pass


class BatchNotFoundError(RecordNotFoundError):
    """Batch does not exist or belongs to another user."""
    pass


class BatchPersistenceError(PersistenceError):
    """Batch write failed and was rolled back."""
    pass
