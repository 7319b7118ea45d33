"""
Response envelope shared by the API views.

Successful engine calls answer ``{"ok": true, "data": ...}``; every service
exception is turned into ``{"ok": false, "error": ..., "code": ...}`` so
callers branch on ``ok`` instead of parsing status codes.
"""
from rest_framework import status as http_status
from rest_framework.response import Response


def success(data, status=http_status.HTTP_200_OK):
    """Wrap a payload in the success envelope."""
    return Response({'ok': True, 'data': data}, status=status)


def failure(exc, status=http_status.HTTP_400_BAD_REQUEST):
    """Render a service exception as the failure envelope."""
    return Response(
        {
            'ok': False,
            'error': str(exc),
            'code': getattr(exc, 'code', 'error'),
        },
        status=status,
    )


def failure_for(exc, status_map, default=http_status.HTTP_400_BAD_REQUEST):
    """Pick the HTTP status for ``exc`` from the first matching class in ``status_map``."""
    for exc_class, status in status_map:
        if isinstance(exc, exc_class):
            return failure(exc, status)
    return failure(exc, default)
