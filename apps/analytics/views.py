from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status
from django.conf import settings
from drf_spectacular.utils import extend_schema

from config.views import raise_api_error
from apps.inventory.services import list_items, InventoryServiceError
from .analytics import AnalyticsQueries
from .serializers import (
    # Input serializers
    DashboardQuerySerializer,
    MonthlyQuerySerializer,
    # Response serializers
    ProfitSummarySerializer,
    MonthlyPointSerializer,
    DashboardResponseSerializer,
    ErrorSerializer,
)
from .exceptions import AnalyticsServiceError


def _load_items(user, params):
    """Owner's items narrowed by the validated dashboard filters."""
    try:
        return list_items(
            owner=user,
            channel=params.get('channel'),
            date_from=params.get('date_from'),
            date_to=params.get('date_to'),
        )
    except InventoryServiceError as e:
        raise_api_error(e)


@extend_schema(
    parameters=[DashboardQuerySerializer],
    responses={
        200: ProfitSummarySerializer,
        400: ErrorSerializer,
    },
    description="Profit totals for the current user's items.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def profit_summary(request):
    """Profit totals - thin HTTP handler."""
    query_serializer = DashboardQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    items = _load_items(request.user, query_serializer.validated_data)
    data = AnalyticsQueries.profit_summary(items)

    return Response(ProfitSummarySerializer(data).data)


@extend_schema(
    parameters=[MonthlyQuerySerializer],
    responses={
        200: MonthlyPointSerializer(many=True),
        400: ErrorSerializer,
    },
    description="Revenue and profit per sale month for the trailing months with sales.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def monthly_series(request):
    """Monthly sales series - thin HTTP handler."""
    query_serializer = MonthlyQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    items = _load_items(request.user, params)

    try:
        data = AnalyticsQueries.monthly_series(
            items,
            months=params.get('months', settings.DASHBOARD_MONTHS)
        )
    except AnalyticsServiceError as e:
        return Response(
            {'error': str(e)},
            status=status.HTTP_400_BAD_REQUEST
        )

    return Response(MonthlyPointSerializer(data, many=True).data)


@extend_schema(
    parameters=[DashboardQuerySerializer],
    responses={
        200: DashboardResponseSerializer,
        400: ErrorSerializer,
    },
    description="Summary, monthly series and month-over-month change in one response.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard(request):
    """Dashboard - thin HTTP handler."""
    query_serializer = DashboardQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    try:
        data = AnalyticsQueries.dashboard(
            owner=request.user,
            channel=params.get('channel'),
            date_from=params.get('date_from'),
            date_to=params.get('date_to'),
        )
    except AnalyticsServiceError as e:
        return Response(
            {'error': str(e)},
            status=status.HTTP_400_BAD_REQUEST
        )
    except InventoryServiceError as e:
        raise_api_error(e)

    return Response(DashboardResponseSerializer(data).data)
