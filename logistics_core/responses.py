from django.utils import timezone
from rest_framework import status as http_status
from rest_framework.response import Response


def envelope(data=None, message='', status_code=http_status.HTTP_200_OK):
    """Wrap a payload in the envelope every endpoint answers with."""
    return Response(
        {
            'success': http_status.is_success(status_code),
            'statusCode': status_code,
            'message': message,
            'data': data,
            'timestamp': timezone.now().isoformat(),
        },
        status=status_code,
    )


def created(data, message):
    return envelope(data, message, http_status.HTTP_201_CREATED)
