"""
DRF exception handler for the domain error taxonomy.

Domain errors are rendered as ``{"detail": ..., "code": ...}`` with the
status carried by the error class. DRF's own exceptions keep the stock
rendering. Anything else is an unexpected failure: it is logged with a
traceback and reported as a generic internal error.
"""

import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from shared.domain.exceptions import DomainError

logger = logging.getLogger(__name__)


def domain_exception_handler(exc, context):
    if isinstance(exc, DomainError):
        view = context.get('view')
        logger.info(
            f"{exc.__class__.__name__} in {view.__class__.__name__ if view else 'unknown view'}: {exc.message}"
        )
        return Response({'detail': exc.message, 'code': exc.code}, status=exc.status_code)

    response = exception_handler(exc, context)
    if response is not None:
        return response

    if isinstance(exc, DatabaseError):
        logger.error(f"Storage failure: {exc}", exc_info=True)
    else:
        logger.error(f"Unhandled error: {exc}", exc_info=True)
    return Response(
        {'detail': 'Internal server error.', 'code': 'internal_error'},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
