import pytest
from decimal import Decimal
from django.urls import reverse
from rest_framework import status
from apps.inventory.models import ItemStatus
from apps.batches.models import SaleBatch, BatchStatus


# =============================================================================
# Batch List / Create
# =============================================================================

@pytest.mark.django_db
class TestBatchList:
    """Tests for GET /api/batches/"""

    def test_requires_authentication(self, api_client):
        response = api_client.get(reverse('batches:batch-list'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_list_batches(self, seller_client, batch_x):
        response = seller_client.get(reverse('batches:batch-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['buyer'] == 'BuyerX'
        assert response.data['results'][0]['status'] == BatchStatus.IN_PROGRESS

    def test_list_owner_scoped(self, other_seller_client, batch_x):
        response = other_seller_client.get(reverse('batches:batch-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 0


@pytest.mark.django_db
class TestBatchCreate:
    """Tests for POST /api/batches/"""

    def test_create_batch(self, seller_client, item_a, pending_lot):
        data = {
            'buyer': 'BuyerX',
            'method': 'shipping',
            'campaign': 'Bonus week',
            'shipping_cost': '600',
            'selections': [
                {'item_id': str(item_a.id), 'quantity': 3},
                {'item_id': str(pending_lot.id), 'quantity': 1},
            ],
        }
        response = seller_client.post(reverse('batches:batch-list'), data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['item_count'] == 2
        assert len(response.data['items']) == 2
        assert SaleBatch.objects.filter(buyer='BuyerX').exists()

        item_a.refresh_from_db()
        assert item_a.quantity_available == 5

    def test_create_batch_blank_buyer(self, seller_client, item_a):
        data = {
            'buyer': '  ',
            'method': 'shipping',
            'selections': [{'item_id': str(item_a.id), 'quantity': 1}],
        }
        response = seller_client.post(reverse('batches:batch-list'), data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_batch_no_selection(self, seller_client):
        data = {'buyer': 'BuyerX', 'method': 'shipping', 'selections': []}
        response = seller_client.post(reverse('batches:batch-list'), data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_create_batch_quantity_too_large(self, seller_client, item_a):
        data = {
            'buyer': 'BuyerX',
            'method': 'in_store',
            'selections': [{'item_id': str(item_a.id), 'quantity': 9}],
        }
        response = seller_client.post(reverse('batches:batch-list'), data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not SaleBatch.objects.exists()

    def test_create_batch_duplicate_selection(self, seller_client, item_a):
        data = {
            'buyer': 'BuyerX',
            'method': 'in_store',
            'selections': [
                {'item_id': str(item_a.id), 'quantity': 1},
                {'item_id': str(item_a.id), 'quantity': 2},
            ],
        }
        response = seller_client.post(reverse('batches:batch-list'), data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_batch_foreign_item(self, other_seller_client, item_a):
        data = {
            'buyer': 'BuyerX',
            'method': 'in_store',
            'selections': [{'item_id': str(item_a.id), 'quantity': 1}],
        }
        response = other_seller_client.post(reverse('batches:batch-list'), data, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Batch Detail / Candidates / Confirmation
# =============================================================================

@pytest.mark.django_db
class TestBatchDetail:
    """Tests for /api/batches/{id}/ and candidates."""

    def test_retrieve(self, seller_client, batch_x):
        response = seller_client.get(reverse('batches:batch-detail', args=[batch_x.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['items'][0]['product_name'] == 'Item A'

    def test_retrieve_other_owner(self, other_seller_client, batch_x):
        response = other_seller_client.get(reverse('batches:batch-detail', args=[batch_x.id]))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_retrieve_malformed_id(self, seller_client, batch_x):
        malformed = '-' * 36
        response = seller_client.get(f'/api/batches/{malformed}/')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_actions_malformed_id(self, seller_client, batch_x):
        malformed = '-' * 36

        confirm = seller_client.post(
            f'/api/batches/{malformed}/confirm/', {'final_prices': []}, format='json'
        )
        confirmable = seller_client.get(f'/api/batches/{malformed}/confirmable/')
        destroy = seller_client.delete(f'/api/batches/{malformed}/')

        assert confirm.status_code == status.HTTP_404_NOT_FOUND
        assert confirmable.status_code == status.HTTP_404_NOT_FOUND
        assert destroy.status_code == status.HTTP_404_NOT_FOUND
        assert SaleBatch.objects.filter(id=batch_x.id).exists()

    def test_candidates(self, seller_client, item_a, pending_lot, sold_single):
        response = seller_client.get(reverse('batches:batch-candidates'))

        assert response.status_code == status.HTTP_200_OK
        assert {row['id'] for row in response.data} == {str(item_a.id), str(pending_lot.id)}

    def test_candidates_channel_filter(self, seller_client, item_a, pending_lot):
        response = seller_client.get(reverse('batches:batch-candidates'), {'channel': 'kaitori'})

        assert response.status_code == status.HTTP_200_OK
        assert [row['id'] for row in response.data] == [str(item_a.id)]

    def test_delete_in_progress(self, seller_client, batch_x):
        response = seller_client.delete(reverse('batches:batch-detail', args=[batch_x.id]))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not SaleBatch.objects.filter(id=batch_x.id).exists()


@pytest.mark.django_db
class TestBatchConfirm:
    """Tests for confirmable/ and confirm/."""

    def test_confirmable_suggests_prices(self, seller_client, batch_x):
        response = seller_client.get(reverse('batches:batch-confirmable', args=[batch_x.id]))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert Decimal(response.data[0]['suggested_final_price']) == Decimal('2700.00')

    def test_confirm(self, seller_client, batch_x, item_a):
        line = batch_x.items.get()
        data = {'final_prices': [{'line_item_id': str(line.id), 'final_price': '2400'}]}
        response = seller_client.post(
            reverse('batches:batch-confirm', args=[batch_x.id]), data, format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == BatchStatus.CONFIRMED
        assert Decimal(response.data['items'][0]['final_price']) == Decimal('2400.00')

        item_a.refresh_from_db()
        assert item_a.quantity_available == 2
        assert item_a.status == ItemStatus.INVENTORY

    def test_confirm_twice_rejected(self, seller_client, batch_x, item_a):
        line = batch_x.items.get()
        data = {'final_prices': [{'line_item_id': str(line.id), 'final_price': '2400'}]}
        url = reverse('batches:batch-confirm', args=[batch_x.id])

        first = seller_client.post(url, data, format='json')
        second = seller_client.post(url, data, format='json')

        assert first.status_code == status.HTTP_200_OK
        assert second.status_code == status.HTTP_400_BAD_REQUEST
        assert 'already confirmed' in second.data['error']
        item_a.refresh_from_db()
        assert item_a.quantity_available == 2

    def test_confirm_missing_price(self, seller_client, batch_x):
        response = seller_client.post(
            reverse('batches:batch-confirm', args=[batch_x.id]),
            {'final_prices': []},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_confirm_negative_price(self, seller_client, batch_x):
        line = batch_x.items.get()
        data = {'final_prices': [{'line_item_id': str(line.id), 'final_price': '-5'}]}
        response = seller_client.post(
            reverse('batches:batch-confirm', args=[batch_x.id]), data, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_confirm_duplicate_line_rejected(self, seller_client, batch_x, item_a):
        line = batch_x.items.get()
        data = {'final_prices': [
            {'line_item_id': str(line.id), 'final_price': '2400'},
            {'line_item_id': str(line.id), 'final_price': '100'},
        ]}
        response = seller_client.post(
            reverse('batches:batch-confirm', args=[batch_x.id]), data, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'final_prices' in response.data
        batch_x.refresh_from_db()
        assert batch_x.status == BatchStatus.IN_PROGRESS
        item_a.refresh_from_db()
        assert item_a.quantity_available == 5

    def test_delete_confirmed_rejected(self, seller_client, batch_x):
        line = batch_x.items.get()
        data = {'final_prices': [{'line_item_id': str(line.id), 'final_price': '2400'}]}
        seller_client.post(reverse('batches:batch-confirm', args=[batch_x.id]), data, format='json')

        response = seller_client.delete(reverse('batches:batch-detail', args=[batch_x.id]))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert SaleBatch.objects.filter(id=batch_x.id).exists()
