from collections.abc import Mapping
from typing import Any, Dict, Optional

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.serializers import as_serializer_error

DEFAULT_ERROR_STATUS = status.HTTP_400_BAD_REQUEST

ERROR_STATUS_MAP = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "METHOD_NOT_ALLOWED": status.HTTP_405_METHOD_NOT_ALLOWED,
    "UNSUPPORTED_MEDIA_TYPE": status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    "EMPTY_CART": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "SERVER_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "ORDER_FAILED": status.HTTP_502_BAD_GATEWAY,
    "SERVICE_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_for(code: str) -> int:
    return ERROR_STATUS_MAP.get(code.upper(), DEFAULT_ERROR_STATUS)


def _normalize_details(details: Any) -> Any:
    if isinstance(details, ValidationError):
        return as_serializer_error(details)
    if isinstance(details, Mapping):
        return dict(details)
    if isinstance(details, Exception):
        return {"type": details.__class__.__name__}
    return details


def error_response(
    code: str,
    message: str,
    details: Optional[Any] = None,
    http_status: Optional[int] = None,
    *,
    hint: Optional[str] = None,
    extra: Optional[Mapping[str, Any]] = None,
) -> Response:
    """
    Build the error envelope returned by every cart and checkout endpoint.

    ``{"error": {"code", "message", "status", "details"?, "hint"?, "extra"?}}``.
    The HTTP status comes from ``ERROR_STATUS_MAP`` unless ``http_status`` is given.
    """
    if not isinstance(code, str) or not code.strip():
        raise ValueError("error_response requires a non-empty code")
    if not isinstance(message, str) or not message.strip():
        raise ValueError("error_response requires a non-empty message")
    normalized_code = code.strip().upper()
    status_code = int(http_status) if http_status is not None else status_for(normalized_code)
    if not 100 <= status_code <= 599:
        raise ValueError("error_response status must be a valid HTTP status code")

    body: Dict[str, Any] = {
        "code": normalized_code,
        "message": message.strip(),
        "status": status_code,
    }
    if details is not None:
        body["details"] = _normalize_details(details)
    if hint is not None:
        body["hint"] = hint
    if extra:
        body["extra"] = dict(extra)
    return Response({"error": body}, status=status_code)
