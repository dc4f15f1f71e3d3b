import logging

from django.db import DatabaseError, connection
from drf_yasg.utils import swagger_auto_schema
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny

from logistics_core import __version__
from logistics_core.responses import envelope

logger = logging.getLogger(__name__)


@swagger_auto_schema(method='get', tags=['Health'])
@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def health_check(request):
    """
    Report whether the service and its database are reachable.
    """
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
        database = 'connected'
    except DatabaseError as e:
        logger.error(f"Health check database probe failed: {e}")
        database = 'unavailable'

    healthy = database == 'connected'
    return envelope(
        {'status': 'healthy' if healthy else 'degraded', 'database': database, 'version': __version__},
        'Service is healthy' if healthy else 'Database unavailable',
        status.HTTP_200_OK if healthy else status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
