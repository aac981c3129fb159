"""
Error kinds raised by the product and wishlist services, and the DRF
exception handler that turns them into responses.

Every kind is an ``APIException`` so views can let them propagate untouched:

    InvalidArgument   400  malformed or out-of-range input (size, cursor, ids)
    InvalidCursor     400  a ``last`` value that does not fit the sort order
    NotFound          404  referenced entity is absent
    Forbidden         403  actor is not the owner
    AlreadyExists     403  duplicate wish
    ValidationFailed  422  product content rejected, with per-field detail
    StoreUnavailable  503  the database failed underneath us
"""
import logging

from django.db import DatabaseError
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger("rest_framework")


class InvalidArgument(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid argument."
    default_code = "invalid_argument"


class InvalidCursor(InvalidArgument):
    default_detail = "Invalid cursor."
    default_code = "invalid_cursor"


class NotFound(exceptions.NotFound):
    pass


class Forbidden(exceptions.PermissionDenied):
    default_detail = "You do not own this resource."
    default_code = "forbidden"


class AlreadyExists(exceptions.APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Resource already exists."
    default_code = "already_exists"


class ValidationFailed(exceptions.ValidationError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_code = "validation_failed"


class StoreUnavailable(exceptions.APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "The data store is unavailable."
    default_code = "store_unavailable"


def api_exception_handler(exc, context):
    """
    Extends DRF's handler so nothing escapes as a bare 500 page.

    Database errors become ``StoreUnavailable``; anything else DRF does not
    know about becomes a generic failure that still carries the message.
    """
    if isinstance(exc, DatabaseError):
        logger.exception("Store failure in %s: %s", _view_name(context), exc)
        exc = StoreUnavailable(detail=str(exc))

    response = exception_handler(exc, context)
    if response is not None:
        if response.status_code >= 400:
            logger.debug("%s -> %s: %s", _view_name(context), response.status_code, exc)
        return response

    logger.exception("Unhandled error in %s: %s", _view_name(context), exc)
    return Response(
        {"detail": str(exc) or exc.__class__.__name__},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _view_name(context):
    view = context.get("view") if context else None
    return view.__class__.__name__ if view is not None else "unknown view"
