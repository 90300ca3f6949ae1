"""
API error handling.

Every error leaving the API has the shape ``{"error": <message>, "details": <optional>}``
so the client can surface ``error`` directly in a toast.
"""
import logging

from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger('bizos.core')


def _first_message(detail):
    """Pull a human readable message out of a DRF error detail structure"""
    if isinstance(detail, dict):
        if 'detail' in detail:
            return _first_message(detail['detail'])
        for value in detail.values():
            return _first_message(value)
        return ''
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ''
    return str(detail)


def api_exception_handler(exc, context):
    """
    DRF exception handler.

    Http404 and PermissionDenied are converted by DRF before they get here.
    Validation errors keep their field errors under ``details``; anything DRF
    does not know about is logged and answered with a 500.
    """
    response = exception_handler(exc, context)

    if response is None:
        request = context.get('request')
        path = request.path if request is not None else 'unknown'
        logger.error(f"Unhandled exception on {path}: {str(exc)}", exc_info=exc)
        return Response({'error': 'Internal server error'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, exceptions.ValidationError):
        response.data = {'error': 'Invalid request data', 'details': response.data}
    else:
        response.data = {'error': _first_message(response.data)}
    return response
