import math

from django.conf import settings
from django.db.models import Count


def _positive_int(raw, default):
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


def paginate(queryset, request, default_limit=None):
    """
    Slice ``queryset`` using the ``page`` and ``limit`` query parameters.

    Returns the page of objects and the pagination block
    ``{page, limit, total, pages}`` included in list payloads.
    """
    default_limit = default_limit or settings.DEFAULT_PAGE_LIMIT
    page = _positive_int(request.query_params.get('page'), 1)
    limit = min(_positive_int(request.query_params.get('limit'), default_limit), settings.MAX_PAGE_LIMIT)

    total = queryset.count()
    offset = (page - 1) * limit
    items = list(queryset[offset:offset + limit])
    return items, {
        'page': page,
        'limit': limit,
        'total': total,
        'pages': math.ceil(total / limit) if total else 0,
    }


def breakdown(queryset, field):
    """Count rows per value of ``field`` as a plain dict."""
    rows = queryset.order_by().values(field).annotate(count=Count('id'))
    return {row[field]: row['count'] for row in rows}
