import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from wedding_api.utils.response import UTF8JSONResponse, add_cors_headers, error_response

logger = logging.getLogger(__name__)


class AppException(Exception):
    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BadRequest(AppException):
    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class Unauthorized(AppException):
    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, status_code=401)


class NotFound(AppException):
    def __init__(self, message: str = "Not found"):
        super().__init__(message, status_code=404)


class ServiceUnavailable(AppException):
    def __init__(self, message: str):
        super().__init__(message, status_code=503)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        return UTF8JSONResponse(
            status_code=exc.status_code,
            content=error_response(exc.message),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        # raised past the CORS middleware, so the headers are added here
        return add_cors_headers(UTF8JSONResponse(
            status_code=500,
            content=error_response("Internal server error"),
        ))
