import logging
from contextlib import contextmanager
from typing import Optional

from django.db import InterfaceError, OperationalError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class HotelServiceError(Exception):
    """Base class for every error raised by the booking and payment core."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "error"
    default_message = "Request could not be processed."
    retryable = False

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class StorageUnavailable(HotelServiceError):
    """The database could not be reached. Callers may retry."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_code = "storage_unavailable"
    default_message = "Storage is temporarily unavailable."
    retryable = True


class ConcurrencyConflict(HotelServiceError):
    """Lost a race against a concurrent write. Retry with fresh data."""

    status_code = status.HTTP_409_CONFLICT
    default_code = "concurrency_conflict"
    default_message = "Room was just booked by someone else. Please try again."
    retryable = True


class InsufficientRole(HotelServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_code = "insufficient_role"
    default_message = "Insufficient permissions."


@contextmanager
def storage_errors():
    """Re-raise connection level database failures as StorageUnavailable."""
    try:
        yield
    except (OperationalError, InterfaceError) as exc:
        logger.error("Storage failure: %s", exc)
        raise StorageUnavailable() from exc


def hotel_exception_handler(exc, context):
    if isinstance(exc, HotelServiceError):
        return Response(
            {
                "detail": exc.message,
                "code": exc.default_code,
                "retryable": exc.retryable,
            },
            status=exc.status_code,
        )
    return exception_handler(exc, context)
