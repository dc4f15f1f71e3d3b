"""
The DRF exception handler that renders every exception raised by a view as
the uniform envelope.

``logistics_core.exceptions`` must not import this module: models load the
error types during app loading, and ``rest_framework.views`` resolves the
default permission classes, which import those same error types.
"""
import logging

from django.core.exceptions import PermissionDenied, ObjectDoesNotExist
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.views import exception_handler

from logistics_core.responses import envelope

logger = logging.getLogger(__name__)


def _first_error(detail):
    if isinstance(detail, dict):
        for field, value in detail.items():
            message = _first_error(value)
            if field == 'non_field_errors':
                return message
            return f"{field}: {message}"
    if isinstance(detail, (list, tuple)) and detail:
        return _first_error(detail[0])
    return str(detail)


def envelope_exception_handler(exc, context):
    """
    Render ``exc`` as the envelope.

    Unexpected exceptions are logged with their traceback and answered with a
    generic 500 so that no internal detail reaches the caller.
    """
    if isinstance(exc, ObjectDoesNotExist):
        exc = Http404(str(exc))

    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception(f"Unhandled error in {view.__class__.__name__ if view else 'view'}: {exc}")
        return envelope(None, 'Internal server error', status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, exceptions.NotAuthenticated):
        # Session auth sends no WWW-Authenticate header, so DRF downgrades this to 403.
        return envelope(None, 'Authentication required', status.HTTP_401_UNAUTHORIZED)

    if isinstance(exc, exceptions.ValidationError):
        return envelope(
            {'errors': exc.detail},
            _first_error(exc.detail),
            status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, Http404):
        message = 'Not found'
    elif isinstance(exc, PermissionDenied):
        message = 'Access denied'
    elif isinstance(exc, exceptions.APIException):
        message = _first_error(exc.detail)
    else:
        message = str(exc)

    return envelope(None, message, response.status_code)
