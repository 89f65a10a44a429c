# storefront/api/errors.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from storefront.domain.errors import StoreError, InvalidArgument, Conflict, Internal
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def error_response(error: StoreError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content={"error": error.message, "code": error.code},
    )


async def store_error_handler(request: Request, exc: StoreError):
    return error_response(exc)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = f"{field}: {first.get('msg')}" if field else "Invalid request"
    return error_response(InvalidArgument(message))


async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning(f"{request.method} {request.url.path} rejected by a constraint: {exc.orig}")
    return error_response(Conflict("Conflicting change, retry"))


async def collaborator_error_handler(request: Request, exc: Exception):
    logger.exception(f"{request.method} {request.url.path} failed: {exc}")
    return error_response(Internal())


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"{request.method} {request.url.path} crashed: {exc!r}")
    return error_response(Internal())


def register_error_handlers(app: FastAPI):
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(SQLAlchemyError, collaborator_error_handler)
    app.add_exception_handler(RedisError, collaborator_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
