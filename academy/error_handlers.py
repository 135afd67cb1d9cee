"""Global exception handlers.

Every error body is ``{"message": ..., "field"?: ...}``. Unexpected failures
collapse to a generic 500 and are only described in the logs.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = 'Internal server error'


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={'message': message},
            headers=getattr(exc, 'headers', None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning('Validation error on %s: %s', request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=build_validation_error_response(exc.errors()),
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception('Database error on %s', request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={'message': INTERNAL_ERROR_MESSAGE},
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error('Unhandled exception on %s: %s', request.url.path, exc, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={'message': INTERNAL_ERROR_MESSAGE},
        )


def build_validation_error_response(errors) -> dict:
    """Describe the first failing field; ``body``/``query`` prefixes are dropped."""
    if not errors:
        return {'message': 'Invalid input'}

    first = errors[0]
    location = [str(part) for part in first.get('loc', ()) if part not in ('body', 'query', 'path')]
    message = first.get('msg', 'Invalid input')
    # pydantic prefixes messages raised from validators.
    message = message.removeprefix('Value error, ')

    response = {'message': message}
    if location:
        response['field'] = '.'.join(location)
    return response
