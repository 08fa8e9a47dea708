import logging

from django.db import connection, DatabaseError
from django.http import JsonResponse
from rest_framework.exceptions import APIException

from apps.inventory.services.exceptions import (
    InventoryValidationError,
    RecordNotFoundError,
    PersistenceError,
)

logger = logging.getLogger(__name__)


class ServiceAPIError(APIException):
    """Domain error rendered as ``{'error': message}`` with a mapped status."""
    status_code = 400
    default_detail = 'Request could not be processed.'
    default_code = 'service_error'

    def __init__(self, message, status_code=None):
        if status_code is not None:
            self.status_code = status_code
        super().__init__(detail={'error': message})


def raise_api_error(exc):
    """
    Re-raise a service exception as an API error.

    Validation errors map to 400, missing records to 404 and persistence
    failures to 503. Anything else is an unexpected error and propagates.
    """
    if isinstance(exc, InventoryValidationError):
        raise ServiceAPIError(str(exc), 400) from exc
    if isinstance(exc, RecordNotFoundError):
        raise ServiceAPIError(str(exc), 404) from exc
    if isinstance(exc, PersistenceError):
        logger.error("Persistence failure: %s", exc)
        raise ServiceAPIError(str(exc), 503) from exc
    raise exc


def health_check(request):
    """Liveness probe that also verifies the database connection."""
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
    except DatabaseError as exc:
        logger.error("Health check database failure: %s", exc)
        return JsonResponse({'status': 'unavailable'}, status=503)

    return JsonResponse({'status': 'ok'})


def error_404(request, exception):
    """Custom 404 handler."""
    return JsonResponse({
        'error': 'Not found',
        'status': 404
    }, status=404)


def error_500(request):
    """Custom 500 handler."""
    return JsonResponse({
        'error': 'Internal server error',
        'status': 500
    }, status=500)
