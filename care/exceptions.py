"""
Unified API error envelope.

Every error leaves the API as ``{"error": "<message>"}``.  Validation
errors also carry the per-field messages under ``fields``.  401 and 403
never say why, so a caller cannot tell a bad token from a missing one.
"""
import logging

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger('care')

GENERIC_MESSAGES = {
    status.HTTP_401_UNAUTHORIZED: 'Unauthorized',
    status.HTTP_403_FORBIDDEN: 'Forbidden',
}


def _first_message(detail) -> str:
    if isinstance(detail, dict):
        for field, value in detail.items():
            msg = _first_message(value)
            return msg if field == 'non_field_errors' else f'{field}: {msg}'
        return 'Invalid request'
    if isinstance(detail, list):
        return _first_message(detail[0]) if detail else 'Invalid request'
    return str(detail)


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        view = context.get('view')
        logger.exception('Unhandled error in %s', view.__class__.__name__ if view else 'view', exc_info=exc)
        return Response({'error': 'Internal server error'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if resp.status_code in GENERIC_MESSAGES:
        resp.data = {'error': GENERIC_MESSAGES[resp.status_code]}
    elif isinstance(exc, ValidationError):
        resp.data = {'error': _first_message(exc.detail), 'fields': exc.detail}
    elif isinstance(resp.data, dict) and 'detail' in resp.data:
        resp.data = {'error': str(resp.data['detail'])}
    else:
        resp.data = {'error': _first_message(resp.data)}
    return resp
