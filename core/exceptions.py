from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.exceptions import APIException, NotFound
from rest_framework.response import Response
from rest_framework import status
import logging

logger = logging.getLogger("sap")


# ---- Domain errors ----------------------------------------------------


class ActivityNotFound(NotFound):
    default_detail = "Activity not found"
    default_code = "activity_not_found"


class CertificateNotFound(NotFound):
    """
    Public verification miss.

    Raised for unknown ids and for activities that exist but are not
    verified, with the same detail, so callers cannot tell them apart.
    """
    default_detail = (
        "This activity certificate does not exist or the activity "
        "has not been verified yet."
    )
    default_code = "certificate_not_found"


class InvalidStatus(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid status"
    default_code = "invalid_status"


class IssuanceError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Failed to generate certificate QR code"
    default_code = "certificate_issuance_failed"


# ---- Handler ----------------------------------------------------------


# Set by DRF on 401 and 429 responses
PASSTHROUGH_HEADERS = ("WWW-Authenticate", "Retry-After")


def _envelope(status_code, errors, source=None):
    response = Response(
        {
            "success": False,
            "status_code": status_code,
            "errors": errors,
        },
        status=status_code,
    )
    if source is not None:
        for header in PASSTHROUGH_HEADERS:
            if source.has_header(header):
                response[header] = source[header]
    return response


def custom_exception_handler(exc, context):
    """
    Every API error leaves as {"success": false, "status_code", "errors"}.

    Client errors pass through quietly; anything that ends up as a 5xx is
    logged with the view that raised it.
    """
    view = context.get("view")
    view_name = type(view).__name__ if view is not None else "unknown"

    response = drf_exception_handler(exc, context)

    if response is not None:
        if response.status_code >= 500:
            logger.error(f"{view_name} failed with {response.status_code}: {exc}")
        return _envelope(response.status_code, response.data, source=response)

    logger.exception(f"Unhandled API exception in {view_name}", exc_info=exc)
    return _envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        {"detail": "Internal server error."},
    )
