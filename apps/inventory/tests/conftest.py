import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.inventory.models import Item, ItemStatus, Channel


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def inventory_user(db):
    """Create and return the owner of the test items."""
    return User.objects.create_user(
        email='reseller@example.com',
        password='TestPass123!',
        display_name='Reseller',
    )


@pytest.fixture
def inventory_other_user(db):
    """Create and return an unrelated user."""
    return User.objects.create_user(
        email='other_reseller@example.com',
        password='TestPass123!',
        display_name='Other Reseller',
    )


@pytest.fixture
def inventory_auth_client(inventory_user):
    """Return API client authenticated as the item owner."""
    client = APIClient()
    refresh = RefreshToken.for_user(inventory_user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def inventory_other_client(inventory_other_user):
    """Return API client authenticated as the unrelated user."""
    client = APIClient()
    refresh = RefreshToken.for_user(inventory_other_user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def pending_item(db, inventory_user):
    """Single-unit item bought but not yet received."""
    return Item.objects.create(
        owner=inventory_user,
        product_name='Handheld Console',
        channel=Channel.EBAY,
        quantity_total=1,
        quantity_available=1,
        purchase_price=Decimal('1000.00'),
        point=Decimal('100.00'),
        purchase_date=date(2025, 1, 5),
        purchase_location='Electronics Store',
        status=ItemStatus.PENDING,
    )


@pytest.fixture
def stocked_item(db, inventory_user):
    """Three-unit lot already in inventory."""
    return Item.objects.create(
        owner=inventory_user,
        product_name='Wireless Earbuds',
        channel=Channel.KAITORI,
        quantity_total=3,
        quantity_available=3,
        purchase_price=Decimal('3000.00'),
        point=Decimal('300.00'),
        purchase_date=date(2025, 1, 10),
        purchase_location='Online Shop',
        status=ItemStatus.INVENTORY,
    )


@pytest.fixture
def sold_item(db, inventory_user):
    """Item sold in February 2025."""
    return Item.objects.create(
        owner=inventory_user,
        product_name='Camera Lens',
        channel=Channel.EBAY,
        quantity_total=1,
        quantity_available=0,
        purchase_price=Decimal('2000.00'),
        point=Decimal('100.00'),
        purchase_date=date(2025, 1, 20),
        status=ItemStatus.SOLD,
        sale_price=Decimal('2500.00'),
        sale_location='Buyer Co',
        sale_date=date(2025, 2, 14),
    )


@pytest.fixture
def legacy_item(db, inventory_user):
    """Schema version 1 record without an available quantity."""
    return Item.objects.create(
        owner=inventory_user,
        product_name='Board Game',
        quantity_total=0,
        quantity_available=None,
        purchase_price=Decimal('500.00'),
        point=Decimal('0.00'),
        purchase_date=date(2024, 12, 1),
        status=ItemStatus.INVENTORY,
        sale_location='Stale Location',
        schema_version=1,
    )
