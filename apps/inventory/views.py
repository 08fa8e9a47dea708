from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from config.views import raise_api_error
from .models import Item
from .serializers import (
    ItemSerializer,
    ItemCreateSerializer,
    ItemUpdateSerializer,
    ItemSaleSerializer,
    SaleDetailsSerializer,
    ItemFilterSerializer,
)
from .services import (
    create_item,
    get_item,
    list_items,
    update_item,
    mark_received,
    record_sale,
    correct_sale_details,
    delete_item,
    InventoryServiceError,
)


class ItemPagination(PageNumberPagination):
    """Pagination for the item list."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class ItemViewSet(viewsets.GenericViewSet):
    """
    ViewSet for the current user's items.

    list: Filtered, ordered item list
    create: Log a new purchase (starts as pending)
    retrieve: Get one item
    update/partial_update: Edit an unsold item
    destroy: Delete an item
    receive: Move a pending item into inventory
    sell: Record a direct sale
    sale_details: Correct a sold item's sale details
    """

    queryset = Item.objects.none()
    serializer_class = ItemSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = ItemPagination
    lookup_value_regex = '[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}'

    @extend_schema(parameters=[ItemFilterSerializer], tags=['inventory'])
    def list(self, request):
        filters = ItemFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        try:
            items = list_items(owner=request.user, **filters.validated_data)
        except InventoryServiceError as e:
            raise_api_error(e)

        page = self.paginate_queryset(items)
        if page is not None:
            serializer = self.get_serializer(page, many=True)
            return self.get_paginated_response(serializer.data)

        serializer = self.get_serializer(items, many=True)
        return Response(serializer.data)

    @extend_schema(request=ItemCreateSerializer, responses={201: ItemSerializer}, tags=['inventory'])
    def create(self, request):
        serializer = ItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            item = create_item(owner=request.user, **serializer.validated_data)
        except InventoryServiceError as e:
            raise_api_error(e)

        return Response(ItemSerializer(item).data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=['inventory'])
    def retrieve(self, request, pk=None):
        try:
            item = get_item(owner=request.user, item_id=pk)
        except InventoryServiceError as e:
            raise_api_error(e)

        return Response(ItemSerializer(item).data)

    @extend_schema(request=ItemUpdateSerializer, responses={200: ItemSerializer}, tags=['inventory'])
    def update(self, request, pk=None, partial=False):
        serializer = ItemUpdateSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            item = update_item(owner=request.user, item_id=pk, **serializer.validated_data)
        except InventoryServiceError as e:
            raise_api_error(e)

        return Response(ItemSerializer(item).data)

    @extend_schema(request=ItemUpdateSerializer, responses={200: ItemSerializer}, tags=['inventory'])
    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk, partial=True)

    @extend_schema(responses={204: None}, tags=['inventory'])
    def destroy(self, request, pk=None):
        try:
            delete_item(owner=request.user, item_id=pk)
        except InventoryServiceError as e:
            raise_api_error(e)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=None, responses={200: ItemSerializer}, tags=['inventory'])
    @action(detail=True, methods=['post'])
    def receive(self, request, pk=None):
        """Mark a pending item as received into inventory."""
        try:
            item = mark_received(owner=request.user, item_id=pk)
        except InventoryServiceError as e:
            raise_api_error(e)

        return Response(ItemSerializer(item).data)

    @extend_schema(request=ItemSaleSerializer, responses={200: ItemSerializer}, tags=['inventory'])
    @action(detail=True, methods=['post'])
    def sell(self, request, pk=None):
        """Record a direct sale of the whole remaining quantity."""
        serializer = ItemSaleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            item = record_sale(owner=request.user, item_id=pk, **serializer.validated_data)
        except InventoryServiceError as e:
            raise_api_error(e)

        return Response(ItemSerializer(item).data)

    @extend_schema(request=SaleDetailsSerializer, responses={200: ItemSerializer}, tags=['inventory'])
    @action(detail=True, methods=['patch'], url_path='sale-details')
    def sale_details(self, request, pk=None):
        """Correct the sale price, location or date of a sold item."""
        serializer = SaleDetailsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            item = correct_sale_details(owner=request.user, item_id=pk, **serializer.validated_data)
        except InventoryServiceError as e:
            raise_api_error(e)

        return Response(ItemSerializer(item).data)
