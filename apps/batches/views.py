from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from config.views import raise_api_error
from apps.inventory.serializers import ItemSerializer
from apps.inventory.services import InventoryServiceError
from .models import SaleBatch
from .serializers import (
    SaleBatchSerializer,
    SaleBatchDetailSerializer,
    SaleBatchItemSerializer,
    BatchCreateSerializer,
    BatchConfirmSerializer,
    BatchFilterSerializer,
    CandidateFilterSerializer,
)
from .services import (
    list_batches,
    get_batch,
    load_confirmable_items,
    delete_batch,
    list_batch_candidates,
    create_batch,
    confirm_batch,
)


class BatchPagination(PageNumberPagination):
    """Pagination for the batch list."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class SaleBatchViewSet(viewsets.GenericViewSet):
    """
    ViewSet for the current user's sale batches.

    list: Batches, newest first
    create: Record an in-progress batch from selected items
    retrieve: Batch with all line items
    destroy: Discard an unconfirmed batch
    candidates: Items eligible for a new batch
    confirmable: Open line items with suggested final prices
    confirm: Lock final prices and update the items
    """

    queryset = SaleBatch.objects.none()
    serializer_class = SaleBatchSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = BatchPagination
    lookup_value_regex = '[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}'

    @extend_schema(parameters=[BatchFilterSerializer], tags=['batches'])
    def list(self, request):
        filters = BatchFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        try:
            batches = list_batches(owner=request.user, **filters.validated_data)
        except InventoryServiceError as e:
            raise_api_error(e)

        page = self.paginate_queryset(batches)
        if page is not None:
            serializer = self.get_serializer(page, many=True)
            return self.get_paginated_response(serializer.data)

        serializer = self.get_serializer(batches, many=True)
        return Response(serializer.data)

    @extend_schema(request=BatchCreateSerializer, responses={201: SaleBatchDetailSerializer}, tags=['batches'])
    def create(self, request):
        serializer = BatchCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        selections = {
            selection['item_id']: selection['quantity']
            for selection in data['selections']
        }

        try:
            batch = create_batch(
                owner=request.user,
                buyer=data['buyer'],
                method=data['method'],
                selections=selections,
                campaign=data.get('campaign', ''),
                shipping_cost=data.get('shipping_cost', 0),
            )
        except InventoryServiceError as e:
            raise_api_error(e)

        return Response(SaleBatchDetailSerializer(batch).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: SaleBatchDetailSerializer}, tags=['batches'])
    def retrieve(self, request, pk=None):
        try:
            batch = get_batch(owner=request.user, batch_id=pk)
        except InventoryServiceError as e:
            raise_api_error(e)

        return Response(SaleBatchDetailSerializer(batch).data)

    @extend_schema(responses={204: None}, tags=['batches'])
    def destroy(self, request, pk=None):
        try:
            delete_batch(owner=request.user, batch_id=pk)
        except InventoryServiceError as e:
            raise_api_error(e)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        parameters=[CandidateFilterSerializer],
        responses={200: ItemSerializer(many=True)},
        tags=['batches'],
    )
    @action(detail=False, methods=['get'])
    def candidates(self, request):
        """Pending or inventory items with quantity left to sell."""
        filters = CandidateFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        try:
            items = list_batch_candidates(owner=request.user, **filters.validated_data)
        except InventoryServiceError as e:
            raise_api_error(e)

        return Response(ItemSerializer(items, many=True).data)

    @extend_schema(responses={200: SaleBatchItemSerializer(many=True)}, tags=['batches'])
    @action(detail=True, methods=['get'])
    def confirmable(self, request, pk=None):
        """Line items still awaiting a final price."""
        try:
            lines = load_confirmable_items(owner=request.user, batch_id=pk)
        except InventoryServiceError as e:
            raise_api_error(e)

        return Response(SaleBatchItemSerializer(lines, many=True).data)

    @extend_schema(request=BatchConfirmSerializer, responses={200: SaleBatchDetailSerializer}, tags=['batches'])
    @action(detail=True, methods=['post'])
    def confirm(self, request, pk=None):
        """Confirm the batch with a final price per open line item."""
        serializer = BatchConfirmSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        final_prices = {
            entry['line_item_id']: entry['final_price']
            for entry in serializer.validated_data['final_prices']
        }

        try:
            batch = confirm_batch(owner=request.user, batch_id=pk, final_prices=final_prices)
        except InventoryServiceError as e:
            raise_api_error(e)

        return Response(SaleBatchDetailSerializer(batch).data)
