import logging

from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ReferenceInvalid(exceptions.APIException):
    """
    A referenced row (status, product type, user) does not exist under the tenant.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid reference"
    default_code = "INVALID_REFERENCE"


class RateLimited(exceptions.Throttled):
    default_detail = "Too many requests"


_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    415: "UNSUPPORTED_MEDIA_TYPE",
    429: "RATE_LIMITED",
}

_FORWARDED_HEADERS = ("WWW-Authenticate", "Retry-After", "Allow")


def error_response(message: str, code: str, http_status: int, details=None, headers=None) -> Response:
    body = {"error": message, "code": code}
    if details is not None:
        body["details"] = details
    return Response(body, status=http_status, headers=headers)


def api_exception_handler(exc, context):
    """
    Every failure leaves as {"error": "...", "code": "...", "details"?: ...}.
    Unknown exceptions are logged and reported as a generic 500.
    """
    if isinstance(exc, Http404):
        exc = exceptions.NotFound()

    if isinstance(exc, exceptions.ValidationError):
        return error_response("Validation error", "VALIDATION_ERROR", status.HTTP_400_BAD_REQUEST, details=exc.detail)

    response = exception_handler(exc, context)
    if response is None:
        view = context.get("view")
        logger.exception("Unhandled API error in %s", type(view).__name__ if view else "unknown view")
        return error_response("Internal server error", "INTERNAL_ERROR", status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, ReferenceInvalid):
        code = ReferenceInvalid.default_code
    else:
        code = _CODES.get(response.status_code, "ERROR")

    detail = getattr(exc, "detail", None)
    message = str(detail) if detail else "Request failed"

    headers = {k: response[k] for k in _FORWARDED_HEADERS if response.has_header(k)}
    return error_response(message, code, response.status_code, headers=headers)
