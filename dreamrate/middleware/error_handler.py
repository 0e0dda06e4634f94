"""Global exception handler middleware."""

from typing import Any, Dict

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from dreamrate.utils.exceptions import DreamRateException
from dreamrate.utils.logger import get_logger

logger = get_logger(__name__)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Turns DreamRate exceptions into JSON error bodies."""

    def __init__(self, app: Any, debug: bool = False) -> None:
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next: Any) -> JSONResponse:
        """
        Handle exceptions and return proper JSON responses.

        Args:
            request: HTTP request.
            call_next: Next middleware/route handler.

        Returns:
            JSON response with error details.
        """
        if request.method == "OPTIONS":
            return await call_next(request)

        try:
            return await call_next(request)
        except DreamRateException as e:
            log = logger.error if e.status_code >= 500 else logger.warning
            log(
                f"{request.method} {request.url.path}: {e.error_code} - {e.message}",
                extra={"extra_data": {"error_code": e.error_code, "details": e.details}},
            )
            details = e.details if e.status_code < 500 or self.debug else {}
            return self._create_error_response(
                status_code=e.status_code,
                error_code=e.error_code,
                message=e.message,
                details=details,
            )
        except Exception as e:
            logger.error(
                f"Unhandled exception: {str(e)}",
                extra={"extra_data": {"exception_type": type(e).__name__}},
                exc_info=True,
            )
            return self._create_error_response(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                error_code="INTERNAL_SERVER_ERROR",
                message="An unexpected error occurred",
                details={"error": str(e)} if self.debug else {},
            )

    @staticmethod
    def _create_error_response(
        status_code: int,
        error_code: str,
        message: str,
        details: Dict[str, Any],
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status_code,
            content={
                "success": False,
                "error": {
                    "code": error_code,
                    "message": message,
                    "details": details,
                },
            },
        )
