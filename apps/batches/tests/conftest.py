import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.inventory.models import Item, ItemStatus, Channel
from apps.batches.models import SaleMethod
from apps.batches.services import create_batch


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def seller(db):
    """Create and return the seller who owns the batches."""
    return User.objects.create_user(
        email='seller@example.com',
        password='TestPass123!',
        display_name='Seller',
    )


@pytest.fixture
def other_seller(db):
    """Create and return an unrelated seller."""
    return User.objects.create_user(
        email='other_seller@example.com',
        password='TestPass123!',
        display_name='Other Seller',
    )


@pytest.fixture
def seller_client(seller):
    """Return API client authenticated as the seller."""
    client = APIClient()
    refresh = RefreshToken.for_user(seller)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def other_seller_client(other_seller):
    """Return API client authenticated as the unrelated seller."""
    client = APIClient()
    refresh = RefreshToken.for_user(other_seller)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def item_a(db, seller):
    """Five units in inventory at 1000 with 100 point."""
    return Item.objects.create(
        owner=seller,
        product_name='Item A',
        channel=Channel.KAITORI,
        quantity_total=5,
        quantity_available=5,
        purchase_price=Decimal('1000.00'),
        point=Decimal('100.00'),
        purchase_date=date(2025, 1, 10),
        status=ItemStatus.INVENTORY,
    )


@pytest.fixture
def pending_lot(db, seller):
    """Two units bought but not yet received."""
    return Item.objects.create(
        owner=seller,
        product_name='Pending Lot',
        channel=Channel.EBAY,
        quantity_total=2,
        quantity_available=2,
        purchase_price=Decimal('500.00'),
        point=Decimal('0.00'),
        purchase_date=date(2025, 1, 12),
        status=ItemStatus.PENDING,
    )


@pytest.fixture
def sold_single(db, seller):
    """Already sold single item."""
    return Item.objects.create(
        owner=seller,
        product_name='Sold Single',
        quantity_total=1,
        quantity_available=0,
        purchase_price=Decimal('300.00'),
        purchase_date=date(2025, 1, 2),
        status=ItemStatus.SOLD,
        sale_price=Decimal('400.00'),
        sale_location='Earlier Buyer',
        sale_date=date(2025, 1, 20),
    )


@pytest.fixture
def batch_x(db, seller, item_a):
    """In-progress batch selling 3 of Item A to BuyerX."""
    return create_batch(
        owner=seller,
        buyer='BuyerX',
        method=SaleMethod.SHIPPING,
        selections={item_a.id: 3},
        campaign='Spring campaign',
        shipping_cost=Decimal('800'),
    )


@pytest.fixture
def mixed_batch(db, seller, item_a, pending_lot):
    """In-progress batch with a partial Item A line and a full pending lot line."""
    return create_batch(
        owner=seller,
        buyer='BuyerZ',
        method=SaleMethod.IN_STORE,
        selections={item_a.id: 1, pending_lot.id: 2},
    )
