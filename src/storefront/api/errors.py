"""Mapping of domain failures to HTTP responses."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers as register_protean_handlers
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.errors import (
    Forbidden,
    InternalError,
    InvalidTransition,
    NotFoundError,
    OrderNotFound,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def error_response(status_code: int, message: str, errors=None) -> JSONResponse:
    """The error body every storefront endpoint returns."""
    return JSONResponse(
        status_code=status_code,
        content={"message": message, "errors": errors, "status": status_code},
    )


async def _validation_error(request: Request, exc: ValidationError):
    return error_response(400, "Invalid request", getattr(exc, "messages", str(exc)))


async def _request_validation_error(request: Request, exc: RequestValidationError):
    errors = {".".join(str(p) for p in err["loc"][1:]) or "body": [err["msg"]] for err in exc.errors()}
    return error_response(400, "Invalid request", errors)


async def _http_error(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


async def _not_found(request: Request, exc: NotFoundError):
    # A missing order is 404; a missing user or product in the request is the caller's error
    status_code = 404 if isinstance(exc, OrderNotFound) else 400
    return error_response(status_code, exc.message)


async def _object_not_found(request: Request, exc: ObjectNotFoundError):
    return error_response(404, "Not found")


async def _forbidden(request: Request, exc: Forbidden):
    return error_response(403, exc.message)


async def _invalid_transition(request: Request, exc: InvalidTransition):
    return error_response(400, exc.message)


async def _internal_error(request: Request, exc: InternalError):
    logger.error(
        "internal_error",
        path=request.url.path,
        error=exc.message,
        cause=repr(exc.__cause__) if exc.__cause__ else None,
        **exc.context,
    )
    return error_response(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Install Protean's handlers, then the storefront mappings that take precedence over them."""
    register_protean_handlers(app)
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(NotFoundError, _not_found)
    app.add_exception_handler(ObjectNotFoundError, _object_not_found)
    app.add_exception_handler(Forbidden, _forbidden)
    app.add_exception_handler(InvalidTransition, _invalid_transition)
    app.add_exception_handler(InternalError, _internal_error)
