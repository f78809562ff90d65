"""Boundary translation of catalog failures into HTTP responses."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from catalog.errors import CatalogError, CatalogValidationError, ProductNotFoundError, StorageError

logger = logging.getLogger(__name__)

_STATUS_BY_KIND = {
    ProductNotFoundError: status.HTTP_404_NOT_FOUND,
    CatalogValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ErrorHandler:
    """
    Classifies an exception, logs it once, and builds the client payload.

    Client errors log at WARNING; server faults log at ERROR with traceback.
    Unclassified failures never expose their message to the client.
    """

    def classify(self, exc: Exception) -> Tuple[int, Dict[str, Any]]:
        if isinstance(exc, CatalogError):
            status_code = next(
                (code for kind, code in _STATUS_BY_KIND.items() if isinstance(exc, kind)),
                status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
            detail: Dict[str, Any] = {"error": exc.error_code, "message": exc.message}
            if isinstance(exc, CatalogValidationError):
                detail["field_errors"] = exc.field_errors
            if isinstance(exc, StorageError):
                detail["message"] = "Storage failure"
            return status_code, {"detail": detail}

        if isinstance(exc, RequestValidationError):
            field_errors = {
                ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")) or "request": err.get("msg", "")
                for err in exc.errors()
            }
            return status.HTTP_422_UNPROCESSABLE_ENTITY, {
                "detail": {"error": "validation_error", "message": "Validation failed", "field_errors": field_errors}
            }

        return status.HTTP_500_INTERNAL_SERVER_ERROR, {
            "detail": {"error": "internal_error", "message": "Internal server error"}
        }

    def handle_exception(self, exc: Exception, operation: Optional[str] = None) -> Tuple[int, Dict[str, Any]]:
        status_code, payload = self.classify(exc)
        operation = getattr(exc, "operation", None) or operation or "unknown"
        error_code = payload["detail"]["error"]

        if status_code >= 500:
            cause = getattr(exc, "cause", None) or exc
            logger.error(
                "status :: %s, errorType :: %s, operation :: %s, errorCause :: %s",
                status_code, error_code, operation, cause,
                exc_info=exc,
            )
        else:
            logger.warning(
                "status :: %s, errorType :: %s, operation :: %s, errorCause :: %s",
                status_code, error_code, operation, exc,
            )
        return status_code, payload


def register_exception_handlers(app: FastAPI, handler: Optional[ErrorHandler] = None) -> ErrorHandler:
    """Install `handler` as the single translator for every failure kind."""
    handler = handler or ErrorHandler()

    async def _respond(request: Request, exc: Exception) -> JSONResponse:
        operation = f"{request.method} {request.url.path}"
        status_code, payload = handler.handle_exception(exc, operation=operation)
        return JSONResponse(status_code=status_code, content=payload)

    app.add_exception_handler(CatalogError, _respond)
    app.add_exception_handler(RequestValidationError, _respond)
    app.add_exception_handler(Exception, _respond)
    return handler
