# storefront/api/errors.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _describe(error: dict) -> str:
    #("body", "userId") -> "userId", ("query", "userId") -> "userId"
    loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(loc) or "request"
    if error.get("type") == "missing":
        return f"{field} is required"
    return f"{field}: {error.get('msg')}"


async def validation_error_handler(request: Request, exc: RequestValidationError):
    message = "; ".join(_describe(e) for e in exc.errors())
    logger.info(f"{request.method} {request.url.path} rejected: {message}")
    return JSONResponse(status_code=400, content={"detail": message})


async def persistence_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"{request.method} {request.url.path} error: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, persistence_error_handler)
