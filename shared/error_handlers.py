"""
Exception handlers producing the uniform ``{success, error, message}`` envelope.
"""
import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from shared.config import settings
from shared.exceptions import ShopBotError

logger = structlog.get_logger(__name__)

# Location prefixes that carry no meaning for the client
_LOCATION_SOURCES = {"body", "query", "path", "header", "cookie"}


def error_envelope(error: str, message: str, **extra) -> dict:
    return {"success": False, "error": error, "message": message, **extra}


def _field_name(loc) -> str:
    parts = [str(p) for p in loc if p not in _LOCATION_SOURCES]
    return ".".join(parts) or "body"


async def shopbot_error_handler(request: Request, exc: ShopBotError):
    logger.warning("request_failed", path=request.url.path, error=exc.error, message=exc.message, **exc.details)
    return JSONResponse(status_code=exc.status_code, content=error_envelope(exc.error, exc.message))


async def validation_error_handler(request: Request, exc: RequestValidationError):
    fields = [f"{_field_name(err['loc'])}: {err['msg']}" for err in exc.errors()]
    logger.warning("request_validation_failed", path=request.url.path, fields=fields)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_envelope("Validation failed", "; ".join(fields), fields=fields),
    )


async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("storage_error", path=request.url.path, error=str(exc), exc_info=exc)
    message = str(exc) if settings.EXPOSE_ERROR_DETAIL else "Internal storage error"
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_envelope("Server error", message),
    )


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(ShopBotError, shopbot_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)
