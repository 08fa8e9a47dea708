"""
Domain exceptions for analytics app.

Exception Hierarchy:
    AnalyticsServiceError (base)
    ├── InvalidMonthsError
    └── InvalidDateRangeError

Usage:
    from apps.analytics.exceptions import InvalidMonthsError

    if months < 1:
        raise InvalidMonthsError("months must be at least 1")
"""


class AnalyticsServiceError(Exception):
    """
    Base exception for all analytics service errors.

    Views catch it and answer with a 400:

        try:
            data = AnalyticsQueries.monthly_series(items, months=0)
        except AnalyticsServiceError as e:
            return Response({'error': str(e)}, status=400)
    """

    pass


class InvalidMonthsError(AnalyticsServiceError):
    """
    Raised when the number of trailing months is not positive.

    Example:
        raise InvalidMonthsError("months must be at least 1")
    """

    pass


class InvalidDateRangeError(AnalyticsServiceError):
    """
    Raised when date range is invalid.

    Typically when date_from is after date_to.
    """

    pass
