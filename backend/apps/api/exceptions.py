from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple

from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    MethodNotAllowed,
    NotFound,
    ParseError,
    UnsupportedMediaType,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from apps.api.utils import error_response
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="exception")


class ApplicationError(Exception):
    """Domain error carrying a machine-readable code for the error envelope."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
        hint: Optional[str] = None,
        extra: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        self.hint = hint
        self.extra = extra

    def to_response(self) -> Response:
        return error_response(
            self.code,
            self.message,
            self.details,
            http_status=self.status_code,
            hint=self.hint,
            extra=self.extra,
        )


def global_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """DRF ``EXCEPTION_HANDLER``: every failure leaves as the structured envelope."""
    log = _bind_logger(context)

    if isinstance(exc, ApplicationError):
        log.info("Handled application error", code=exc.code, status=exc.status_code)
        return exc.to_response()

    if isinstance(exc, DjangoValidationError):
        exc = ValidationError(
            exc.message_dict if hasattr(exc, "message_dict") else list(exc.messages)
        )

    response = drf_exception_handler(exc, context)
    if response is None:
        log.exception("Unhandled exception bubbled to global handler")
        return error_response(
            "SERVER_ERROR",
            "Something went wrong",
            http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    code, message, details = _classify(exc, response)
    if response.status_code >= 500:
        log.error("Converted server error", code=code, status=response.status_code)
    else:
        log.info("Converted API exception", code=code, status=response.status_code)
    return error_response(code, message, details, http_status=response.status_code)


def _bind_logger(context: Dict[str, Any]):
    log = logger
    view = context.get("view")
    request = context.get("request")
    if view is not None:
        log = log.bind(view=type(view).__name__)
    if request is not None:
        log = log.bind(
            method=getattr(request, "method", None),
            path=getattr(request, "path", None),
        )
    return log


def _classify(exc: Exception, response: Response) -> Tuple[str, str, Optional[Any]]:
    payload = response.data
    if isinstance(exc, ValidationError):
        return "VALIDATION_ERROR", "Validation failed", payload
    if isinstance(exc, ParseError):
        return "VALIDATION_ERROR", _detail(payload, "Malformed request"), None
    if isinstance(exc, (NotFound, Http404)):
        return "NOT_FOUND", _detail(payload, "Resource not found"), None
    if isinstance(exc, MethodNotAllowed):
        return "METHOD_NOT_ALLOWED", _detail(payload, "Method not allowed"), None
    if isinstance(exc, UnsupportedMediaType):
        return "UNSUPPORTED_MEDIA_TYPE", _detail(payload, "Unsupported media type"), None
    if response.status_code >= 500:
        return "SERVER_ERROR", "Something went wrong", None
    return "UNKNOWN_ERROR", _detail(payload, "Request failed"), None


def _detail(payload: Any, default: str) -> str:
    if isinstance(payload, dict):
        detail = payload.get("detail")
        if detail:
            return str(detail)
    return default
