"""
Error responses for the Stockroom API.

Every error body has the same shape:
    {"error": "Insufficient stock", "code": "INSUFFICIENT_STOCK", "data": {...}}

Set as REST_FRAMEWORK['EXCEPTION_HANDLER'].
"""

import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from stockroom.exceptions import BaseError

logger = logging.getLogger('stockroom')


def error_response(exc: BaseError) -> Response:
    return Response(exc.as_dict(), status=exc.status_code)


def _first_message(detail) -> str:
    if isinstance(detail, dict):
        for key, value in detail.items():
            message = _first_message(value)
            return message if key == 'non_field_errors' else f"{key}: {message}"
    if isinstance(detail, list) and detail:
        return _first_message(detail[0])
    return str(detail)


def exception_handler(exc, context):
    """Domain errors, DRF errors and storage failures as JSON."""
    if isinstance(exc, BaseError):
        return error_response(exc)

    if isinstance(exc, DatabaseError):
        logger.exception(
            "api.storage_error",
            extra={"view": type(context.get('view')).__name__},
        )
        return Response(
            {'error': 'Storage failure', 'code': 'STORAGE_ERROR', 'data': {}},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    response = drf_exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, ValidationError):
        response.data = {
            'error': _first_message(exc.detail),
            'code': 'INVALID_INPUT',
            'data': response.data,
        }
    else:
        code = exc.get_codes() if hasattr(exc, 'get_codes') else 'error'
        response.data = {
            'error': _first_message(getattr(exc, 'detail', str(exc))),
            'code': str(code).upper(),
            'data': {},
        }
    return response
