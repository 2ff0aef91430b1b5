"""
Application error taxonomy and the handlers that turn it into JSON responses.

Application errors, request validation failures, unknown routes and database
errors leave the API as ``{"error": "<message>"}`` with a status code chosen by
the error class, so the frontend can read ``error``.

Anything else reaches Starlette's ServerErrorMiddleware: the client still gets
a JSON 500, but the exception is re-raised to the server afterwards and the
request-logging middleware never sees a response for it.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("english_station.errors")


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Something went wrong"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InvalidInput(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class InvalidQuiz(AppError):
    status_code = 422
    default_message = "Quiz has no questions and cannot be scored"


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class UpstreamFailure(AppError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Database unavailable"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _format_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = err.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request body"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if isinstance(exc, UpstreamFailure):
            logger.error("Upstream failure at %s: %s", request.url.path, exc.message)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return _error(InvalidInput.status_code, _format_validation_error(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        if exc.status_code == status.HTTP_404_NOT_FOUND and message == "Not Found":
            message = f"API endpoint {request.url.path} not found"
        return _error(exc.status_code, message)

    @app.exception_handler(SQLAlchemyError)
    async def db_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Database error at %s", request.url.path)
        if isinstance(exc, OperationalError):
            return _error(status.HTTP_503_SERVICE_UNAVAILABLE, "Database connection failed")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Database error")

    # runs inside ServerErrorMiddleware, which re-raises once this response is sent
    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error at %s", request.url.path)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Something went wrong!")
