"""Global error handlers: every failure renders as ``{"success": false, "message": ...}``."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from fitplan.errors import FitPlanError, StoreError

logger = structlog.get_logger()

STORE_RETRY_MESSAGE = "The service is temporarily unavailable. Please try again shortly."


def _error(status_code: int, message: str, **extra: object) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message, **extra})


def setup_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        response = _error(exc.status_code, str(exc.detail))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(422, "Validation error", errors=jsonable_errors(exc))

    @app.exception_handler(FitPlanError)
    async def domain_exception_handler(request: Request, exc: FitPlanError) -> JSONResponse:
        if isinstance(exc, StoreError) and exc.status_code == 503:
            logger.warning("store_unavailable", path=request.url.path, error=exc.message)
            return _error(503, STORE_RETRY_MESSAGE)
        if exc.status_code >= 500:
            logger.warning("domain_error", path=request.url.path, error=exc.message, type=type(exc).__name__)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unhandled exceptions; always return JSON."""
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        return _error(500, "Internal server error")


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, object]]:
    """Validation errors without the raw input and context objects, which may not serialise."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
