"""
Batches services - Business logic layer.

This package contains all business operations for the batches app:
- Batch reads and deletion
- Batch creation and confirmation
"""

# Batch Management
from .batch_management import (
    list_batches,
    get_batch,
    get_batch_items,
    load_confirmable_items,
    delete_batch,
)

# Lifecycle
from .lifecycle import (
    list_batch_candidates,
    create_batch,
    confirm_batch,
)

# Domain Exceptions
from .exceptions import (
    BatchValidationError,
    EmptyBuyerError,
    EmptySelectionError,
    InvalidSelectionError,
    InvalidSaleMethodError,
    InvalidShippingCostError,
    InvalidFinalPriceError,
    BatchAlreadyConfirmedError,
    InsufficientQuantityError,
    BatchNotFoundError,
    BatchPersistenceError,
)

__all__ = [
    # Batch Management Services
    'list_batches',
    'get_batch',
    'get_batch_items',
    'load_confirmable_items',
    'delete_batch',
    # Lifecycle Services
    'list_batch_candidates',
    'create_batch',
    'confirm_batch',
    # Exceptions
    'BatchValidationError',
    'EmptyBuyerError',
    'EmptySelectionError',
    'InvalidSelectionError',
    'InvalidSaleMethodError',
    'InvalidShippingCostError',
    'InvalidFinalPriceError',
    'BatchAlreadyConfirmedError',
    'InsufficientQuantityError',
    'BatchNotFoundError',
    'BatchPersistenceError',
]
