"""Project-level views: health probe and JSON error handlers."""

from django.db import connection, DatabaseError
from django.http import JsonResponse


def health_check(request):
    """Liveness probe that also touches the database."""
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
    except DatabaseError:
        return JsonResponse({'status': 'unhealthy', 'database': 'unreachable'}, status=503)
    return JsonResponse({'status': 'ok'})


def _envelope(message, code, status):
    # Same shape as config.api.failure so clients parse one format
    return JsonResponse({'ok': False, 'error': message, 'code': code}, status=status)


def error_404(request, exception):
    return _envelope('Not found', 'not_found', 404)


def error_500(request):
    return _envelope('Internal server error', 'server_error', 500)
