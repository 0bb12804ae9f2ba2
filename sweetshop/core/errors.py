"""Domain errors and the handlers that turn them into JSON responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

VALIDATION_FAILED_MESSAGE = 'Validation failed'


class SweetShopError(Exception):
    """Base class for errors that map onto a client-facing response."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = 'Server error'

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationFailed(SweetShopError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = VALIDATION_FAILED_MESSAGE

    def __init__(self, errors: list[dict[str, str]]) -> None:
        super().__init__()
        self.errors = errors


class DuplicateEmail(SweetShopError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = 'User already exists with this email'


class DuplicateSweetName(SweetShopError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = 'Sweet already exists with this name'


class InvalidQuantity(SweetShopError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = 'Please provide a valid quantity'


class InsufficientStock(SweetShopError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = 'Insufficient stock'


class InvalidCredentials(SweetShopError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = 'Invalid credentials'


class NotAuthenticated(SweetShopError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = 'Not authorized to access this route'


class InvalidCredential(SweetShopError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = 'Invalid token'


class AdminRequired(SweetShopError):
    status_code = status.HTTP_403_FORBIDDEN
    message = 'Admin access required'


class NotFound(SweetShopError):
    status_code = status.HTTP_404_NOT_FOUND
    message = 'Not found'


class DatabaseUnavailable(SweetShopError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    message = 'Database unavailable. Verify DATABASE_URL and database credentials.'


def _error_body(message: str, **extra) -> dict:
    return {'success': False, 'message': message, **extra}


def _field_name(location: tuple) -> str:
    # ('body', 'price') -> 'price'; a whole-body error keeps its source name.
    parts = [str(part) for part in location[1:]] or [str(part) for part in location]
    return '.'.join(parts)


def format_validation_errors(errors) -> list[dict[str, str]]:
    formatted = []
    for error in errors:
        message = str(error.get('msg', 'Invalid value'))
        if message.startswith('Value error, '):
            message = message[len('Value error, '):]
        formatted.append({'field': _field_name(tuple(error.get('loc', ()))), 'message': message})
    return formatted


async def handle_sweetshop_error(request: Request, exc: SweetShopError) -> JSONResponse:
    if isinstance(exc, ValidationFailed):
        body = _error_body(exc.message, errors=exc.errors)
    else:
        body = _error_body(exc.message)
    return JSONResponse(status_code=exc.status_code, content=body)


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(VALIDATION_FAILED_MESSAGE, errors=format_validation_errors(exc.errors())),
    )


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == 'Not Found':
        message = 'Route not found'
    else:
        message = str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content=_error_body(message), headers=exc.headers)


async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception('Database error while handling %s %s', request.method, request.url.path)
    return JSONResponse(
        status_code=DatabaseUnavailable.status_code,
        content=_error_body(DatabaseUnavailable.message),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception('Unhandled error while handling %s %s', request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body('Server error'),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SweetShopError, handle_sweetshop_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(SQLAlchemyError, handle_database_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
