"""
Management command to bring legacy item records up to the current schema.

Items imported from older data may lack an available quantity, carry a zero
total quantity, or keep sale fields while not sold. Reads already normalize
in memory; this command writes the fixes back.

Usage:
    python manage.py normalize_items [--dry-run]
"""

from django.core.management.base import BaseCommand
from django.db import transaction
from django.db.models import Q

from apps.inventory.models import Item, ItemStatus, ACTIVE_STATUSES, CURRENT_SCHEMA_VERSION
from apps.inventory.services import normalize_item


class Command(BaseCommand):
    help = 'Normalize legacy item records to the current schema version'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be updated without making changes',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']

        candidates = Item.objects.filter(
            Q(schema_version__lt=CURRENT_SCHEMA_VERSION) |
            Q(quantity_available__isnull=True) |
            Q(quantity_total=0) |
            (
                ~Q(status=ItemStatus.SOLD) &
                (Q(sale_price__isnull=False) | Q(sale_date__isnull=False) | ~Q(sale_location=''))
            )
        )

        fixes = []
        for item in candidates:
            changed = normalize_item(item)
            if changed:
                fixes.append((item, changed))

        self._report_exhausted()

        if not fixes:
            self.stdout.write(
                self.style.SUCCESS('No items need normalizing. All good!')
            )
            return

        self.stdout.write(f'\nFound {len(fixes)} item(s) to normalize:\n')

        for item, changed in fixes:
            self.stdout.write(f'  - {item.product_name} ({item.id}): {", ".join(changed)}')

        if dry_run:
            self.stdout.write(
                self.style.WARNING('\n--dry-run mode: No changes made.')
            )
            return

        with transaction.atomic():
            for item, changed in fixes:
                item.save(update_fields=[*changed, 'updated_at'])

        self.stdout.write(
            self.style.SUCCESS(f'\nSuccessfully normalized {len(fixes)} item(s)!')
        )

    def _report_exhausted(self):
        """
        List active items with nothing left to sell.

        These cannot be fixed automatically: marking them sold needs a sale
        price, so they are only reported. Batch candidates already skip them.
        """
        exhausted = Item.objects.filter(status__in=ACTIVE_STATUSES, quantity_available=0)
        if not exhausted:
            return

        self.stdout.write(
            self.style.WARNING(
                f'\n{len(exhausted)} active item(s) have no quantity left; record their sale:'
            )
        )
        for item in exhausted:
            self.stdout.write(f'  - {item.product_name} ({item.id}): {item.status}')
