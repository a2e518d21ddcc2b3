import logging
from typing import Callable
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from sqlalchemy.exc import SQLAlchemyError

from matchmaker.constants.error_constant import ERROR_DB_TRANSACTION_FAILED, ERROR_INTERNAL_UNEXPECTED
from matchmaker.core.exception import AppException

logger = logging.getLogger(__name__)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Turns exceptions escaping a route into JSON error bodies"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)

        except AppException as exc:
            logger.warning(
                f"Application error: {exc.error_code}",
                extra={
                    "error_code": exc.error_code,
                    "path": request.url.path,
                    "method": request.method,
                    "details": exc.details,
                },
            )
            return JSONResponse(status_code=exc.status_code, content=exc.detail)

        except SQLAlchemyError as exc:
            logger.error(
                "Database error occurred",
                exc_info=True,
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "error_type": type(exc).__name__,
                },
            )
            return JSONResponse(
                status_code=500,
                content={
                    "error_code": ERROR_DB_TRANSACTION_FAILED,
                    "message": "Database error occurred",
                    "details": {"error_type": type(exc).__name__},
                },
            )

        except Exception as exc:
            logger.error(
                "Unhandled exception occurred",
                exc_info=True,
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "error_type": type(exc).__name__,
                },
            )
            return JSONResponse(
                status_code=500,
                content={
                    "error_code": ERROR_INTERNAL_UNEXPECTED,
                    "message": "An unexpected error occurred",
                    "details": {"error_type": type(exc).__name__},
                },
            )
