"""Batch management service - owner-scoped reads and deletion of sale batches."""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction, DatabaseError

from apps.accounts.models import User
from apps.batches.models import SaleBatch, SaleBatchItem, BatchStatus
from .exceptions import (
    BatchNotFoundError,
    BatchAlreadyConfirmedError,
    BatchValidationError,
    BatchPersistenceError,
)

logger = logging.getLogger(__name__)


def list_batches(*, owner: User, status: Optional[str] = None) -> list[SaleBatch]:
    """
    List the owner's batches, newest first.

    Args:
        owner: User whose batches to list
        status: Optional filter (in_progress or confirmed)

    Raises:
        BatchValidationError: If status is not a batch status
    """
    queryset = SaleBatch.objects.filter(owner=owner)

    if status:
        if status not in BatchStatus.values:
            raise BatchValidationError(f"Unknown batch status: {status}")
        queryset = queryset.filter(status=status)

    return list(queryset.order_by('-created_at'))


def get_batch(*, owner: User, batch_id: UUID) -> SaleBatch:
    """
    Retrieve one of the owner's batches.

    Raises:
        BatchNotFoundError: If the batch doesn't exist or belongs to someone else
    """
    try:
        return SaleBatch.objects.get(id=batch_id, owner=owner)
    except SaleBatch.DoesNotExist:
        raise BatchNotFoundError("Sale batch not found")


def get_batch_items(*, owner: User, batch_id: UUID) -> list[SaleBatchItem]:
    """All line items of a batch, confirmed or not."""
    batch = get_batch(owner=owner, batch_id=batch_id)
    return list(batch.items.order_by('created_at'))


def load_confirmable_items(*, owner: User, batch_id: UUID) -> list[SaleBatchItem]:
    """
    Line items still awaiting a final price.

    Each returned line exposes ``suggested_final_price`` as the default the
    caller may override.

    Raises:
        BatchNotFoundError: If the batch doesn't exist or belongs to someone else
    """
    batch = get_batch(owner=owner, batch_id=batch_id)
    return list(
        batch.items.exclude(status=BatchStatus.CONFIRMED).order_by('created_at')
    )


@transaction.atomic
def delete_batch(*, owner: User, batch_id: UUID) -> None:
    """
    Discard an unconfirmed batch and its line items.

    Creating a batch never modifies items, so nothing else changes.

    Raises:
        BatchNotFoundError: If the batch doesn't exist or belongs to someone else
        BatchAlreadyConfirmedError: If the batch was already confirmed
        BatchPersistenceError: If the database delete fails
    """
    try:
        batch = SaleBatch.objects.select_for_update().get(id=batch_id, owner=owner)
    except SaleBatch.DoesNotExist:
        raise BatchNotFoundError("Sale batch not found")

    if batch.is_confirmed:
        logger.warning("Refused deletion of confirmed batch %s", batch.id)
        raise BatchAlreadyConfirmedError("Confirmed batches cannot be deleted")

    try:
        batch.delete()
    except DatabaseError as exc:
        logger.error("Failed to delete batch %s: %s", batch_id, exc)
        raise BatchPersistenceError("Could not delete sale batch") from exc

    logger.info("Deleted batch %s for user %s", batch_id, owner.pk)
