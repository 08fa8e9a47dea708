import pytest
from decimal import Decimal
from datetime import date
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.inventory.models import Item, ItemStatus, Channel


def make_item(owner=None, *, purchase_price, point='0', status=ItemStatus.INVENTORY,
              sale_price=None, sale_date=None, channel='', purchase_date=date(2025, 1, 1)):
    """Build an item; saved when an owner is given."""
    sold = status == ItemStatus.SOLD
    item = Item(
        product_name='Analytics Item',
        channel=channel,
        quantity_total=1,
        quantity_available=0 if sold else 1,
        purchase_price=Decimal(purchase_price),
        point=Decimal(point),
        purchase_date=purchase_date,
        status=status,
        sale_price=Decimal(sale_price) if sale_price is not None else None,
        sale_location='Buyer' if sold else '',
        sale_date=sale_date,
    )
    if owner is not None:
        item.owner = owner
        item.save()
    return item


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def analytics_user(db):
    """Create the main analytics test user."""
    return User.objects.create_user(
        email='analytics_user@example.com',
        password='TestPass123!',
        display_name='Analytics User',
    )


@pytest.fixture
def analytics_outsider(db):
    """Create a user with no items."""
    return User.objects.create_user(
        email='analytics_outsider@example.com',
        password='TestPass123!',
        display_name='Analytics Outsider',
    )


@pytest.fixture
def analytics_user_client(analytics_user):
    """Return API client authenticated as analytics user."""
    client = APIClient()
    refresh = RefreshToken.for_user(analytics_user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def analytics_outsider_client(analytics_outsider):
    """Return API client authenticated as the outsider."""
    client = APIClient()
    refresh = RefreshToken.for_user(analytics_outsider)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def portfolio(analytics_user):
    """
    Two January sales and one February sale at 1000 each, plus one pending
    and one inventory item.
    """
    return [
        make_item(analytics_user, purchase_price='600', point='100', status=ItemStatus.SOLD,
                  sale_price='1000', sale_date=date(2025, 1, 10), channel=Channel.EBAY),
        make_item(analytics_user, purchase_price='700', status=ItemStatus.SOLD,
                  sale_price='1000', sale_date=date(2025, 1, 25), channel=Channel.EBAY),
        make_item(analytics_user, purchase_price='800', status=ItemStatus.SOLD,
                  sale_price='1000', sale_date=date(2025, 2, 3), channel=Channel.KAITORI,
                  purchase_date=date(2025, 2, 1)),
        make_item(analytics_user, purchase_price='400', point='50', status=ItemStatus.PENDING,
                  channel=Channel.KAITORI, purchase_date=date(2025, 2, 1)),
        make_item(analytics_user, purchase_price='300', status=ItemStatus.INVENTORY,
                  channel=Channel.EBAY),
    ]


@pytest.fixture
def build_item():
    """Return the item builder."""
    return make_item
