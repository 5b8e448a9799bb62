"""Exception handlers rendering every failure as one JSON error body."""

from typing import Any

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from odontoapp.core.exceptions import AppException, AuthProviderException, RemoteCallException

logger = structlog.get_logger(__name__)


def _error_body(request: Request, error: str, message: Any, **extra: Any) -> dict[str, Any]:
    return {"error": error, "message": message, "path": str(request.url), **extra}


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    Render application exceptions with the message shown to the patient.

    Provider rejections carry the provider ``code`` and remote failures the
    failed ``operation``.
    """
    extra: dict[str, Any] = {}
    if isinstance(exc, AuthProviderException) and exc.code:
        extra["code"] = exc.code
    elif isinstance(exc, RemoteCallException) and exc.operation:
        extra["operation"] = exc.operation

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, exc.__class__.__name__, exc.message, **extra),
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, "HTTPException", exc.detail),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Render request body and parameter errors.

    Args:
        request: Request object
        exc: Validation exception

    Returns:
        422 response listing the offending fields
    """
    details = [
        {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_body(request, "ValidationError", "Dados inválidos", details=details),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_exception", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(request, "InternalServerError", "Ocorreu um erro inesperado"),
    )
