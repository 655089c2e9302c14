"""
Error taxonomy and the DRF exception handler that shapes error bodies.

Error bodies always look like ``{"message": str, "details": ...}``; the
envelope renderer wraps them under ``error``.
"""
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError
from rest_framework import status
from rest_framework.exceptions import APIException, Throttled, ValidationError
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

THROTTLED_MESSAGE = 'You have exceeded the allowed request rate. Please try again later.'


class UpstreamServiceError(APIException):
    """An external collaborator (object storage, identity provider) failed."""
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = 'An upstream service failed to complete the request.'
    default_code = 'upstream_error'


def first_message(detail):
    """Return the first human readable string inside a DRF error detail."""
    if isinstance(detail, dict):
        for value in detail.values():
            message = first_message(value)
            if message:
                return message
        return None
    if isinstance(detail, (list, tuple)):
        for value in detail:
            message = first_message(value)
            if message:
                return message
        return None
    return str(detail) if detail is not None else None


def envelope_exception_handler(exc, context):
    if isinstance(exc, IntegrityError):
        logger.warning(f"Integrity error in {context.get('view').__class__.__name__}: {exc}")
        exc = ValidationError({'non_field_errors': ['Unique constraint failed: a record with this value already exists']})
    elif isinstance(exc, DjangoValidationError):
        exc = ValidationError(exc.message_dict if hasattr(exc, 'error_dict') else exc.messages)

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, Throttled):
        message = THROTTLED_MESSAGE
    else:
        message = first_message(response.data) or 'Request failed'

    response.data = {
        'message': message,
        'details': response.data,
    }
    return response
