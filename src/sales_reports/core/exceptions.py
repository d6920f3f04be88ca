"""Errors rendered as the ``{"error": message}`` envelope."""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AccessDenied(ServiceError):
    """Caller is authenticated but is not allowed to see the resource."""

    status_code = status.HTTP_403_FORBIDDEN


class ReportGenerationError(ServiceError):
    """A report could not be computed. The cause is logged, never returned."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})
